"""Territory ownership, resource yields and tiered territory bonuses.

This module handles:
1. Per-tile resource yields
2. Claim legality and contested ownership transfer
3. Tiered bonuses earned by holding several tiles of a kind
4. Collection totals and ship costs after bonuses
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from ..models.player import Player
from ..models.resources import Resources
from ..models.ship import Ship, ShipType
from ..models.tile import GameMap, TerrainKind
from ..utils import GameRNG
from ..utils.constants import (
    BONUS_TIER_ORDER,
    LOCATION_EVENTS,
    MAX_SHIP_COST_REDUCTION,
    RESOURCE_NAMES,
    SHIP_COSTS,
    TERRITORY_BONUSES,
    TERRITORY_YIELDS,
)
from ..utils.distance import Coordinate, chebyshev_distance
from .errors import EngineError, ErrorType, Result

logger = logging.getLogger(__name__)


class BonusTier(Enum):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    LEGENDARY = "legendary"

    @property
    def rank(self) -> int:
        return BONUS_TIER_ORDER.index(self.value)


@dataclass(frozen=True)
class Bonus:
    """A territory bonus definition.

    Attributes:
        key: Stable identifier ("trade_network")
        name: Display name ("Trade Network")
        tier: Bronze to legendary
        requirements: Terrain kind -> tiles required
        multipliers: Resource name -> collection multiplier
        cost_reduction: Fractional ship cost reduction
        extra_action: Whether the bonus grants an extra action per turn
        trickle: Gold and supplies added at the end of each of the owner's turns
    """

    key: str
    name: str
    tier: BonusTier
    requirements: dict[str, int]
    multipliers: dict[str, float] = field(default_factory=dict)
    cost_reduction: float = 0.0
    extra_action: bool = False
    trickle: int = 0

    def __hash__(self):
        return hash(self.key)


@dataclass(frozen=True)
class BonusProgress:
    """Progress towards the closest unearned bonus."""

    bonus: Bonus
    fraction: float  # 0.0-1.0, share of required tiles already held
    remaining: dict[str, int]  # Terrain kind -> tiles still needed

    @property
    def remaining_text(self) -> str:
        return ", ".join(f"{n} {kind}" for kind, n in self.remaining.items() if n > 0)


@dataclass(frozen=True)
class BonusEffects:
    """Combined effect of all active bonuses for one player."""

    multipliers: dict[str, float]
    cost_reduction: float
    extra_action: bool
    trickle: int


BONUSES: tuple[Bonus, ...] = tuple(
    Bonus(
        key=key,
        name=name,
        tier=BonusTier(tier),
        requirements=dict(requirements),
        multipliers=dict(multipliers),
        cost_reduction=reduction,
        extra_action=extra,
        trickle=trickle,
    )
    for key, (name, tier, requirements, multipliers, reduction, extra, trickle) in (
        TERRITORY_BONUSES.items()
    )
)


def yield_of(kind: TerrainKind) -> Resources:
    """Resources produced by one tile of the given kind per collection.

    Args:
        kind: Terrain kind

    Returns:
        Yield for the kind; empty Resources for water and hazards

    Examples:
        >>> yield_of(TerrainKind.PORT)
        Resources(gold=5, crew=2, cannons=0, supplies=0, wood=0, rum=0)
    """
    return Resources.from_dict(TERRITORY_YIELDS.get(kind.value, {}))


@dataclass(frozen=True)
class LocationEvent:
    """Something that happens to a ship entering a tile."""

    name: str  # "floating_supplies", "maelstrom", ...
    gained: Resources  # Added to the owner's ledger
    lost: Resources  # Taken from the owner's ledger when affordable
    damage: int  # Hull damage to the entering ship


def roll_location_event(kind: TerrainKind, rng: GameRNG) -> LocationEvent | None:
    """Roll the location event for a ship entering a tile.

    Exactly one roll is drawn per call, whatever the terrain, so the game
    RNG advances the same way for every move.

    Args:
        kind: Terrain of the entered tile
        rng: Game RNG (advanced by this call)

    Returns:
        The event for the roll, or None if nothing happens
    """
    roll = rng.random()
    for name, threshold, change, damage in LOCATION_EVENTS.get(kind.value, ()):
        if roll < threshold:
            return LocationEvent(
                name=name,
                gained=Resources.from_dict({k: v for k, v in change.items() if v > 0}),
                lost=Resources.from_dict({k: -v for k, v in change.items() if v < 0}),
                damage=damage,
            )
    return None


def claim(game_map: GameMap, coordinate: Coordinate, ship: Ship, player_id: str) -> Result[GameMap]:
    """Claim a tile for a player using one of their ships.

    The ship must sit on the tile or on one of its eight neighbours. A tile
    already owned by another player changes hands; ownership is never locked.

    Args:
        game_map: Current map (not modified)
        coordinate: Tile to claim
        ship: Claiming ship
        player_id: Claiming player

    Returns:
        Result holding the updated map, or the violated rule
    """
    coordinate = tuple(coordinate)
    if not game_map.in_bounds(coordinate):
        return Result.failure(
            EngineError(
                ErrorType.INVALID_COORDINATE,
                f"Coordinate {coordinate} is off the map",
                coordinate=list(coordinate),
            )
        )

    tile = game_map.tile_at(coordinate)
    if not tile.kind.claimable:
        return Result.failure(
            EngineError(
                ErrorType.NOT_CLAIMABLE,
                f"{tile.kind.value.title()} at {coordinate} cannot be claimed",
                coordinate=list(coordinate),
                kind=tile.kind.value,
            )
        )

    distance = chebyshev_distance(ship.position, coordinate)
    if distance > 1:
        return Result.failure(
            EngineError(
                ErrorType.OUT_OF_RANGE,
                f"Ship {ship.id} must be on or next to {coordinate} to claim it",
                ship_id=ship.id,
                distance=distance,
                max_distance=1,
            )
        )

    if tile.owner is not None and tile.owner != player_id:
        logger.debug(f"Contested claim: {player_id} takes {coordinate} from {tile.owner}")
    return Result.success(game_map.with_owner(coordinate, player_id))


def territory_counts(player: Player, game_map: GameMap) -> Counter:
    """Count the player's controlled tiles by terrain kind."""
    counts = Counter()
    for coordinate in player.controlled_territories:
        if game_map.in_bounds(coordinate):
            counts[game_map.tile_at(coordinate).kind.value] += 1
    return counts


def _qualifies(bonus: Bonus, counts: Counter) -> bool:
    return all(counts[kind] >= need for kind, need in bonus.requirements.items())


def active_bonuses(player: Player, game_map: GameMap) -> list[Bonus]:
    """List every bonus the player currently qualifies for, legendary first.

    Reaching a requirement exactly qualifies, so a player sitting on a
    threshold is awarded the higher tier.
    """
    counts = territory_counts(player, game_map)
    earned = [b for b in BONUSES if _qualifies(b, counts)]
    return sorted(earned, key=lambda b: -b.tier.rank)


def combined_effects(bonuses: list[Bonus]) -> BonusEffects:
    """Fold a list of bonuses into one set of effects.

    Multipliers compound, trickles add, and the ship cost reduction is
    capped at MAX_SHIP_COST_REDUCTION.
    """
    multipliers = {name: 1.0 for name in RESOURCE_NAMES}
    reduction = 0.0
    trickle = 0
    extra_action = False
    for bonus in bonuses:
        for name, factor in bonus.multipliers.items():
            multipliers[name] *= factor
        reduction += bonus.cost_reduction
        trickle += bonus.trickle
        extra_action = extra_action or bonus.extra_action
    return BonusEffects(
        multipliers=multipliers,
        cost_reduction=min(reduction, MAX_SHIP_COST_REDUCTION),
        extra_action=extra_action,
        trickle=trickle,
    )


def next_bonus_progress(player: Player, game_map: GameMap) -> BonusProgress | None:
    """Find the unearned bonus the player is closest to.

    Ties on progress go to the lower tier. Read-only.

    Returns:
        BonusProgress, or None when every bonus is already earned
    """
    counts = territory_counts(player, game_map)
    best: BonusProgress | None = None
    for bonus in sorted(BONUSES, key=lambda b: b.tier.rank):
        if _qualifies(bonus, counts):
            continue
        needed = sum(bonus.requirements.values())
        have = sum(min(counts[kind], need) for kind, need in bonus.requirements.items())
        fraction = have / needed
        if best is None or fraction > best.fraction:
            remaining = {
                kind: max(0, need - counts[kind]) for kind, need in bonus.requirements.items()
            }
            best = BonusProgress(bonus=bonus, fraction=fraction, remaining=remaining)
    return best


def collection_yield(player: Player, game_map: GameMap, resource_modifier: float = 1.0) -> Resources:
    """Total resources one CollectResources intent gathers.

    Args:
        player: Collecting player
        game_map: Current map
        resource_modifier: Weather multiplier applied on top of bonuses

    Returns:
        Floored yield over all controlled tiles
    """
    base = Resources()
    for coordinate in sorted(player.controlled_territories):
        if game_map.in_bounds(coordinate):
            base = base.plus(yield_of(game_map.tile_at(coordinate).kind))

    effects = combined_effects(active_bonuses(player, game_map))
    multipliers = {name: factor * resource_modifier for name, factor in effects.multipliers.items()}
    return base.scaled(multipliers)


def ship_cost(ship_type: ShipType, player: Player, game_map: GameMap) -> Resources:
    """Cost of building a ship after the player's territory discounts."""
    reduction = combined_effects(active_bonuses(player, game_map)).cost_reduction
    base = Resources.from_dict(SHIP_COSTS[ship_type.value])
    return base.scaled({name: 1.0 - reduction for name in RESOURCE_NAMES})
