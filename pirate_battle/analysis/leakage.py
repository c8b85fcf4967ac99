"""Information-leakage report: what a public ledger reveals about a player.

An omniscient-but-passive observer sees every committed state. The report
lists what it can read off for one player and scores the exposure:
- Ship positions: 15 per ship, up to 40 (hidden in fog)
- Resource tiles near the fleet: 5 per tile, up to 20
- Controlled territories: 5 per tile, up to 20
- Actions in the log: 3 per action, up to 20

A player with the ghost fleet up scores 0 and shows nothing.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..engine.territory import yield_of
from ..models.game import GameEvent, GameState
from ..models.player import Player
from ..utils.constants import VISIBLE_RESOURCE_RADIUS
from ..utils.distance import Coordinate, manhattan_distance
from .patterns import Pattern, detect_patterns, visible_actions

logger = logging.getLogger(__name__)

SHIP_WEIGHT, SHIP_CAP = 15, 40
RESOURCE_WEIGHT, RESOURCE_CAP = 5, 20
TERRITORY_WEIGHT, TERRITORY_CAP = 5, 20
ACTION_WEIGHT, ACTION_CAP = 3, 20
MAX_SCORE = 100


@dataclass(frozen=True)
class VisibleResource:
    coordinate: Coordinate
    kind: str
    yields: dict[str, int]


@dataclass(frozen=True)
class LeakageReport:
    """What an observer can infer about one player right now.

    Attributes:
        player_id: Player analyzed
        score: 0-100; 0 while shielded
        visible_ship_positions: Ship id -> position
        visible_resources: Yielding tiles around the player's fleet
        visible_territories: Controlled tile coordinates
        detected_patterns: Behavioral patterns in the visible history
        shielded: True if the ghost fleet is up
    """

    player_id: str
    score: int
    visible_ship_positions: dict[str, Coordinate] = field(default_factory=dict)
    visible_resources: list[VisibleResource] = field(default_factory=list)
    visible_territories: list[Coordinate] = field(default_factory=list)
    detected_patterns: list[Pattern] = field(default_factory=list)
    shielded: bool = False


def _visible_resources(player: Player, state: GameState) -> list[VisibleResource]:
    ships = player.living_ships()
    result = []
    for tile in state.game_map.iter_tiles():
        yields = yield_of(tile.kind)
        if yields.is_empty():
            continue
        if any(
            manhattan_distance(s.position, tile.coordinate) <= VISIBLE_RESOURCE_RADIUS for s in ships
        ):
            result.append(
                VisibleResource(
                    coordinate=tile.coordinate,
                    kind=tile.kind.value,
                    yields={k: v for k, v in yields.as_dict().items() if v},
                )
            )
    return result


def compute_report(player: Player, state: GameState, history: Sequence[GameEvent]) -> LeakageReport:
    """Build the leakage report for one player.

    Args:
        player: Player to analyze
        state: Current snapshot (read-only)
        history: Event log to mine for actions and patterns

    Returns:
        LeakageReport
    """
    if player.shielded:
        return LeakageReport(player_id=player.id, score=0, shielded=True)

    if state.weather.visibility_reduced:
        ships = {}
    else:
        ships = {s.id: s.position for s in player.living_ships()}
    resources = _visible_resources(player, state)
    territories = sorted(player.controlled_territories)
    actions = visible_actions(history, player.id)
    patterns = detect_patterns(history, player.id)

    score = (
        min(len(ships) * SHIP_WEIGHT, SHIP_CAP)
        + min(len(resources) * RESOURCE_WEIGHT, RESOURCE_CAP)
        + min(len(territories) * TERRITORY_WEIGHT, TERRITORY_CAP)
        + min(len(actions) * ACTION_WEIGHT, ACTION_CAP)
    )
    return LeakageReport(
        player_id=player.id,
        score=min(score, MAX_SCORE),
        visible_ship_positions=ships,
        visible_resources=resources,
        visible_territories=territories,
        detected_patterns=patterns,
    )


def leakage_report(
    state: GameState, player_id: str, history: Sequence[GameEvent] | None = None
) -> LeakageReport:
    """Observational entry point for the leakage report.

    Args:
        state: Current snapshot
        player_id: Player to analyze
        history: Event log; defaults to the state's own log

    Returns:
        LeakageReport

    Raises:
        ValueError: If the player is not in the game
    """
    player = state.player(player_id)
    if player is None:
        raise ValueError(f"Player {player_id} not found in game")
    report = compute_report(player, state, state.events if history is None else history)
    logger.debug(f"Leakage for {player_id}: {report.score}")
    return report
