"""Option scoring for the AI decision engine.

An option's score is a weighted sum of:
1. Territorial value of the tile it claims or approaches
2. Look-ahead territorial value (territory within reach next turn)
3. Expected damage dealt, with a bonus for sinking a ship
4. Expected counter-exposure from visible enemies (subtracted)
5. Resource efficiency (yield gained against cost spent)
6. Jitter in [0, (1 - aggressiveness) x JITTER_SCALE]

Everything except the jitter is a pure function of the state, the option
and the profile.
"""

from dataclasses import dataclass

from ..engine.ships import compute_damage, effective_stats, use_ability
from ..engine.territory import collection_yield, ship_cost, yield_of
from ..models.game import GameState
from ..models.ship import AbilityCategory, Ship
from ..models.tile import TerrainKind
from ..utils import GameRNG
from ..utils.constants import (
    CLAIM_VALUES,
    CONTESTED_CLAIM_BONUS,
    FORTRESS_DEFENSE_BUFF,
    HAZARD_PENALTY,
    JITTER_SCALE,
    KILL_BONUS,
    RANGE_DIAGONAL_ALLOWANCE,
    SHIP_STATS,
)
from ..utils.distance import Coordinate, chebyshev_distance, euclidean_distance
from .difficulty import DifficultyProfile
from .options import Option, OptionKind

# Cost value is divided by this before being weighed against gains
COST_SCALE = 50.0


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-factor contributions to an option's score, already weighted."""

    territorial: float = 0.0
    horizon: float = 0.0
    damage: float = 0.0
    exposure: float = 0.0
    resource: float = 0.0
    jitter: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.territorial + self.horizon + self.damage - self.exposure + self.resource + self.jitter
        )


def tile_value(kind: TerrainKind) -> float:
    return float(CLAIM_VALUES.get(kind.value, 0))


def _threat_reach(enemy: Ship, lookahead: int) -> float:
    reach = enemy.attack_range * RANGE_DIAGONAL_ALLOWANCE
    if lookahead >= 3:
        reach += enemy.speed
    return reach


def exposure_at(state: GameState, ship: Ship, position: Coordinate, lookahead: int) -> float:
    """Damage visible enemies could deal to a ship standing at a position.

    Ships of shielded players are invisible and contribute nothing.
    """
    total = 0.0
    for enemy in state.living_ships():
        if enemy.owner == ship.owner:
            continue
        owner = state.player(enemy.owner)
        if owner is not None and owner.shielded:
            continue
        if euclidean_distance(enemy.position, position) <= _threat_reach(enemy, lookahead) + 1e-9:
            total += min(compute_damage(enemy, ship), ship.health)
    return total


def _best_territory_within(
    state: GameState, player_id: str, position: Coordinate, radius: int
) -> float:
    """Highest distance-discounted value of unowned claimable tiles near a position."""
    best = 0.0
    for tile in state.game_map.claimable_tiles():
        if tile.owner == player_id:
            continue
        distance = chebyshev_distance(position, tile.coordinate)
        if distance <= radius:
            best = max(best, tile_value(tile.kind) / (1 + distance))
    return best


def _territorial(option: Option, state: GameState, player_id: str) -> float:
    if option.kind == OptionKind.CLAIM:
        tile = state.game_map.tile_at(option.coordinate)
        value = tile_value(tile.kind)
        if tile.owner is not None and tile.owner != player_id:
            value += CONTESTED_CLAIM_BONUS
        return value
    if option.kind == OptionKind.MOVE:
        tile = state.game_map.tile_at(option.coordinate)
        if tile.kind.hazardous:
            return -HAZARD_PENALTY
        if tile.kind.claimable and tile.owner != player_id:
            return tile_value(tile.kind) * 0.5
    return 0.0


def _horizon(option: Option, state: GameState, player_id: str, profile: DifficultyProfile) -> float:
    if option.kind != OptionKind.MOVE or profile.lookahead < 2:
        return 0.0
    ship = state.find_ship(option.ship_id)
    radius = 2 if profile.lookahead >= 4 else 1
    after = _best_territory_within(state, player_id, option.coordinate, radius)
    before = _best_territory_within(state, player_id, ship.position, radius)
    return after - before


def _damage(option: Option, state: GameState) -> float:
    if option.kind not in (OptionKind.ATTACK, OptionKind.ABILITY):
        return 0.0
    ship = state.find_ship(option.ship_id)
    if option.kind == OptionKind.ATTACK:
        target = state.find_ship(option.target_id)
        hits = [(target, compute_damage(ship, target, state.weather.damage_modifier))]
    else:
        if ship.ability.category != AbilityCategory.OFFENSIVE:
            return 0.0
        outcome = use_ability(ship, state, option.target_id)
        if outcome.error is not None:
            return 0.0
        hits = [(state.find_ship(h.target_id), h.damage) for h in outcome.hits]

    total = 0.0
    for target, damage in hits:
        total += min(damage, target.health)
        if damage >= target.health:
            total += KILL_BONUS
    return total


def _utility_value(option: Option, state: GameState, player_id: str) -> float:
    """Scouting value of a reveal and protective value of a defensive stance."""
    ship = state.find_ship(option.ship_id)
    if ship.ability.category == AbilityCategory.UTILITY:
        player = state.player(player_id)
        outcome = use_ability(ship, state, None)
        fresh = [c for c in outcome.revealed if c not in player.revealed_tiles]
        value = 0.0
        for coordinate in fresh:
            tile = state.game_map.tile_at(coordinate)
            if tile.kind.claimable and tile.owner is None:
                value += 5.0
        spotted = sum(
            1 for s in state.living_ships() if s.owner != player_id and s.position in set(fresh)
        )
        return value + 10.0 * spotted
    return 0.0


def _exposure(option: Option, state: GameState, profile: DifficultyProfile) -> float:
    """Change in counter-exposure caused by the option (positive = more danger)."""
    if profile.lookahead < 2 or option.ship_id is None:
        return 0.0
    ship = state.find_ship(option.ship_id)
    current = exposure_at(state, ship, ship.position, profile.lookahead)
    if option.kind == OptionKind.MOVE:
        return exposure_at(state, ship, option.coordinate, profile.lookahead) - current
    if option.kind == OptionKind.ABILITY and ship.ability.category == AbilityCategory.DEFENSIVE:
        # Incoming damage drops by roughly the extra defense per enemy in reach
        if current <= 0:
            return 0.0
        return -min(current, effective_stats(ship).defense * FORTRESS_DEFENSE_BUFF)
    return 0.0


def _resource(option: Option, state: GameState, player_id: str) -> float:
    player = state.player(player_id)
    if option.kind == OptionKind.COLLECT:
        gained = collection_yield(player, state.game_map, state.weather.resource_modifier)
        return float(gained.value())
    if option.kind == OptionKind.CLAIM:
        return float(yield_of(state.game_map.tile_at(option.coordinate).kind).value())
    if option.kind == OptionKind.BUILD:
        ship_type = option.intent.ship_type
        _, attack, defense, _, _ = SHIP_STATS[ship_type.value]
        cost = ship_cost(ship_type, player, state.game_map)
        return attack + defense - cost.value() / COST_SCALE
    if option.kind == OptionKind.ABILITY:
        ship = state.find_ship(option.ship_id)
        return -ship.ability.cost.value() / 10.0
    return 0.0


def score_breakdown(
    option: Option,
    state: GameState,
    player_id: str,
    profile: DifficultyProfile,
    rng: GameRNG | None = None,
) -> ScoreBreakdown:
    """Score an option factor by factor.

    Args:
        option: Candidate option
        state: Read-only snapshot
        player_id: Player the option belongs to
        profile: Difficulty preset
        rng: Source of jitter; None disables jitter

    Returns:
        Weighted per-factor contributions
    """
    if option.kind == OptionKind.PASS:
        territorial = damage = resource = horizon = exposure = 0.0
    else:
        territorial = _territorial(option, state, player_id)
        if option.kind == OptionKind.ABILITY:
            territorial += _utility_value(option, state, player_id)
        horizon = _horizon(option, state, player_id, profile)
        damage = _damage(option, state)
        exposure = _exposure(option, state, profile)
        resource = _resource(option, state, player_id)

    jitter = 0.0
    if rng is not None:
        jitter = rng.uniform(0.0, (1.0 - profile.aggressiveness) * JITTER_SCALE)

    return ScoreBreakdown(
        territorial=territorial * profile.territory_weight,
        horizon=horizon * profile.horizon_weight,
        damage=damage * profile.damage_weight * (0.5 + profile.aggressiveness),
        exposure=exposure * profile.exposure_weight,
        resource=resource * profile.resource_weight,
        jitter=jitter,
    )


def score(
    option: Option,
    state: GameState,
    player_id: str,
    profile: DifficultyProfile,
    rng: GameRNG | None = None,
) -> float:
    """Score an option; higher is better. See ``score_breakdown``."""
    return score_breakdown(option, state, player_id, profile, rng).total
