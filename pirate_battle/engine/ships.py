"""Ship creation, movement legality, abilities, cooldowns and effects.

All functions here are pure: they take ships (and a read-only state where
targets are needed) and return new values. The turn resolver decides what
to commit.
"""

import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ..models.resources import Resources
from ..models.ship import Ability, AbilityCategory, Effect, EffectKind, Ship, ShipType
from ..utils.constants import (
    ABILITIES,
    FORTRESS_DEFENSE_BUFF,
    FORTRESS_DURATION,
    RANGE_DIAGONAL_ALLOWANCE,
    SHIP_STATS,
    VOLLEY_DAMAGE_MULTIPLIER,
)
from ..utils.distance import Coordinate, euclidean_distance
from .errors import EngineError, ErrorType, Result, insufficient

if TYPE_CHECKING:
    from ..models.game import GameState


@dataclass(frozen=True)
class EffectiveStats:
    attack: int
    defense: int
    can_move: bool


@dataclass(frozen=True)
class Hit:
    """Damage dealt to one ship by an attack or ability."""

    target_id: str
    damage: int
    distance: float


@dataclass(frozen=True)
class AbilityOutcome:
    """Result of attempting an ability.

    Attributes:
        ship: The using ship, always at full cooldown
        effects: Effects attached to the using ship
        message: Short description of what happened
        hits: Damage to apply to other ships
        revealed: Coordinates uncovered for the owner
        error: Set when the ability could not resolve (single-target checks)
    """

    ship: Ship
    effects: tuple[Effect, ...] = ()
    message: str = ""
    hits: tuple[Hit, ...] = ()
    revealed: tuple[Coordinate, ...] = ()
    error: EngineError | None = None


def build_ability(ship_type: ShipType) -> Ability:
    """Create a fresh, ready ability instance for a ship type."""
    entry = ABILITIES[ship_type.value]
    return Ability(
        name=entry["name"],
        category=AbilityCategory(entry["category"]),
        cooldown=entry["cooldown"],
        cost=Resources.from_dict(entry["cost"]),
        range=entry["range"],
        max_targets=entry["max_targets"],
    )


def create_ship(owner: str, ship_type: ShipType, position: Coordinate, serial: int) -> Ship:
    """Create a ship with base stats for its type.

    Args:
        owner: Owning player id
        ship_type: Hull class
        position: Starting tile
        serial: Per-player counter used in the id

    Returns:
        New Ship at full health with a ready ability

    Examples:
        >>> create_ship("alice", ShipType.SLOOP, (0, 0), 1).id
        'alice_sloop_1'
    """
    health, attack, defense, speed, attack_range = SHIP_STATS[ship_type.value]
    return Ship(
        id=f"{owner}_{ship_type.value}_{serial}",
        owner=owner,
        ship_type=ship_type,
        max_health=health,
        health=health,
        attack=attack,
        defense=defense,
        speed=speed,
        attack_range=attack_range,
        position=tuple(position),
        ability=build_ability(ship_type),
    )


def effective_stats(ship: Ship) -> EffectiveStats:
    """Fold active effects over the ship's base stats.

    Attack and defense buffs multiply by (1 + magnitude) and stack
    multiplicatively. Any immobile effect blocks movement.
    """
    attack = float(ship.attack)
    defense = float(ship.defense)
    can_move = True
    for effect in ship.effects:
        if effect.kind == EffectKind.ATTACK_BUFF:
            attack *= 1 + effect.magnitude
        elif effect.kind == EffectKind.DEFENSE_BUFF:
            defense *= 1 + effect.magnitude
        elif effect.kind == EffectKind.IMMOBILE:
            can_move = False
    return EffectiveStats(attack=round(attack), defense=round(defense), can_move=can_move)


def can_move(ship: Ship, destination: Coordinate, movement_modifier: float = 1.0) -> bool:
    """Check whether a ship can reach a tile this action.

    Args:
        ship: Ship to move
        destination: Target tile
        movement_modifier: Weather multiplier on speed

    Returns:
        True iff the ship is alive, not immobile, and the Euclidean distance
        is within speed x modifier
    """
    if not ship.alive or not effective_stats(ship).can_move:
        return False
    return euclidean_distance(ship.position, destination) <= ship.speed * movement_modifier + 1e-9


def can_use_ability(ship: Ship, payer_resources: Resources) -> Result[None]:
    """Check whether a ship's ability can be activated now.

    Returns:
        Success, or Destroyed / OnCooldown / InsufficientResources
    """
    if not ship.alive:
        return Result.failure(
            EngineError(ErrorType.DESTROYED, f"Ship {ship.id} is destroyed", ship_id=ship.id)
        )
    if not ship.ability.ready:
        return Result.failure(
            EngineError(
                ErrorType.ON_COOLDOWN,
                f"{ship.ability.name} is on cooldown for {ship.ability.remaining_cooldown} more turn(s)",
                ship_id=ship.id,
                remaining_cooldown=ship.ability.remaining_cooldown,
            )
        )
    short = payer_resources.shortfall(ship.ability.cost)
    if short is not None:
        return Result.failure(insufficient(*short))
    return Result.success(None)


def compute_damage(attacker: Ship, defender: Ship, damage_modifier: float = 1.0) -> int:
    """Damage one hit from attacker deals to defender.

    Never less than 1, even when the defender's effective defense exceeds
    the attacker's effective attack.
    """
    raw = effective_stats(attacker).attack - effective_stats(defender).defense
    return max(1, math.floor(raw * damage_modifier))


def apply_damage(ship: Ship, damage: int) -> Ship:
    """Reduce health, floored at 0. A destroyed ship drops its effects and cooldown."""
    health = max(0, ship.health - damage)
    if health > 0:
        return replace(ship, health=health)
    return replace(
        ship,
        health=0,
        effects=(),
        ability=replace(ship.ability, remaining_cooldown=0, ready=True),
    )


def tick_cooldown(ship: Ship) -> Ship:
    """Advance the ability cooldown by one turn."""
    remaining = max(0, ship.ability.remaining_cooldown - 1)
    return replace(ship, ability=replace(ship.ability, remaining_cooldown=remaining, ready=remaining == 0))


def tick_effects(ship: Ship) -> Ship:
    """Decrement every effect and drop the ones that have run out."""
    effects = tuple(
        replace(e, duration=e.duration - 1) for e in ship.effects if e.duration - 1 > 0
    )
    return replace(ship, effects=effects)


def start_cooldown(ship: Ship) -> Ship:
    """Put the ship's ability on full cooldown."""
    cooldown = ship.ability.cooldown
    return replace(ship, ability=replace(ship.ability, remaining_cooldown=cooldown, ready=cooldown == 0))


def enemies_of(ship: Ship, state: "GameState") -> list[Ship]:
    return [s for s in state.living_ships() if s.owner != ship.owner]


def use_ability(ship: Ship, state: "GameState", target_id: str | None = None) -> AbilityOutcome:
    """Attempt a ship's ability against the given state.

    The returned ship is always on full cooldown, whether or not the ability
    found anything to act on. Usability (readiness, cost) is checked
    separately by ``can_use_ability``.

    Args:
        ship: Using ship
        state: Read-only game state used to find targets
        target_id: Target ship id, required by single-target abilities

    Returns:
        AbilityOutcome describing effects, hits and reveals
    """
    used = start_cooldown(ship)
    ability = ship.ability
    damage_modifier = state.weather.damage_modifier

    if ability.category == AbilityCategory.UTILITY:
        radius = ability.range
        revealed = (ship.position, *state.game_map.neighbours(ship.position, radius))
        side = 2 * radius + 1
        return AbilityOutcome(
            ship=used,
            message=f"{ability.name} revealed a {side}x{side} area around {ship.position}",
            revealed=revealed,
        )

    if ability.category == AbilityCategory.DEFENSIVE:
        buffs = (
            Effect(EffectKind.DEFENSE_BUFF, FORTRESS_DEFENSE_BUFF, FORTRESS_DURATION, ship.id),
            Effect(EffectKind.IMMOBILE, 1.0, FORTRESS_DURATION, ship.id),
        )
        return AbilityOutcome(
            ship=replace(used, effects=ship.effects + buffs),
            effects=buffs,
            message=f"{ability.name}: defense up and anchored for {FORTRESS_DURATION} turns",
        )

    if ability.multi_target:
        in_range = []
        for enemy in enemies_of(ship, state):
            distance = euclidean_distance(ship.position, enemy.position)
            if distance <= ability.range + 1e-9:
                in_range.append((distance, enemy.health, enemy.id, enemy))
        in_range.sort(key=lambda t: (t[0], t[1], t[2]))
        hits = tuple(
            Hit(enemy.id, compute_damage(ship, enemy, damage_modifier), distance)
            for distance, _, _, enemy in in_range[: ability.max_targets]
        )
        if not hits:
            message = f"{ability.name} fired with no enemies in range"
        else:
            message = f"{ability.name} hit {len(hits)} ship(s)"
        return AbilityOutcome(ship=used, hits=hits, message=message)

    # Single-target offensive
    if target_id is None:
        return AbilityOutcome(
            ship=used,
            message=f"{ability.name} needs a target",
            error=EngineError(ErrorType.NO_TARGET, f"{ability.name} requires a target", ship_id=ship.id),
        )
    target = next((s for s in enemies_of(ship, state) if s.id == target_id), None)
    if target is None:
        return AbilityOutcome(
            ship=used,
            message=f"{ability.name} found no target {target_id}",
            error=EngineError(
                ErrorType.TARGET_NOT_FOUND,
                f"Target {target_id} is not a living enemy ship",
                target_id=target_id,
            ),
        )
    distance = euclidean_distance(ship.position, target.position)
    max_distance = ability.range * RANGE_DIAGONAL_ALLOWANCE
    if distance > max_distance + 1e-9:
        return AbilityOutcome(
            ship=used,
            message=f"{ability.name} target out of range",
            error=EngineError(
                ErrorType.TARGET_OUT_OF_RANGE,
                f"Target {target_id} is {distance:.1f} away (max {max_distance:.1f})",
                target_id=target_id,
                distance=round(distance, 2),
                max_distance=max_distance,
            ),
        )
    damage = VOLLEY_DAMAGE_MULTIPLIER * compute_damage(ship, target, damage_modifier)
    return AbilityOutcome(
        ship=used,
        hits=(Hit(target.id, damage, distance),),
        message=f"{ability.name} dealt {damage} damage to {target.id}",
    )
