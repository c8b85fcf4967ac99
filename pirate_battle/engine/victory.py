"""Victory condition checking.

This module handles, in evaluation order:
1. Territory control: >= 60% of the map's claimable tiles
2. Fleet dominance: >= 80% of living attack + defense
3. Resource dominance: weighted resource value >= 15,000
4. Last standing: exactly one active player left

The first condition any player meets decides the game. Within one
condition, the lower player index (earlier joiner) wins.
"""

from dataclasses import dataclass

from ..models.game import GameState
from ..models.player import Player
from ..utils.constants import (
    FLEET_VICTORY_SHARE,
    RESOURCE_VICTORY_VALUE,
    TERRITORY_VICTORY_SHARE,
)

TERRITORY = "territory"
FLEET = "fleet"
RESOURCES = "resources"
LAST_STANDING = "last_standing"


@dataclass(frozen=True)
class Victory:
    winner: str  # Winning player id
    condition: str  # Which condition decided it


def territory_share(player: Player, state: GameState) -> float:
    """Fraction of the map's claimable tiles the player controls."""
    claimable = {t.coordinate for t in state.game_map.claimable_tiles()}
    if not claimable:
        return 0.0
    return len(player.controlled_territories & claimable) / len(claimable)


def fleet_power(player: Player) -> int:
    return sum(s.attack + s.defense for s in player.living_ships())


def fleet_share(player: Player, state: GameState) -> float:
    """Fraction of total living attack + defense held by the player."""
    total = sum(fleet_power(p) for p in state.players)
    if total == 0:
        return 0.0
    return fleet_power(player) / total


def check_victory(state: GameState) -> Victory | None:
    """Evaluate every win condition against the state.

    Args:
        state: Game state after an applied intent

    Returns:
        Victory for the first satisfied condition, or None if play continues
    """
    contenders = state.active_players()

    for player in contenders:
        if territory_share(player, state) >= TERRITORY_VICTORY_SHARE:
            return Victory(player.id, TERRITORY)

    if len(state.players) > 1:
        for player in contenders:
            if player.living_ships() and fleet_share(player, state) >= FLEET_VICTORY_SHARE:
                return Victory(player.id, FLEET)

    for player in contenders:
        if player.resources.value() >= RESOURCE_VICTORY_VALUE:
            return Victory(player.id, RESOURCES)

    active = state.active_players()
    if len(state.players) > 1 and len(active) == 1:
        return Victory(active[0].id, LAST_STANDING)

    return None
