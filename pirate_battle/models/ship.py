"""Ship, ability and effect data models."""

from dataclasses import dataclass, field
from enum import Enum

from ..utils.distance import Coordinate
from .resources import Resources


class ShipType(Enum):
    """Hull classes. Each one carries exactly one ability."""

    SLOOP = "sloop"
    FRIGATE = "frigate"
    GALLEON = "galleon"
    FLAGSHIP = "flagship"


class AbilityCategory(Enum):
    OFFENSIVE = "offensive"
    DEFENSIVE = "defensive"
    UTILITY = "utility"


class EffectKind(Enum):
    """Timed modifiers attached to a ship."""

    ATTACK_BUFF = "attack_buff"
    DEFENSE_BUFF = "defense_buff"
    IMMOBILE = "immobile"


@dataclass(frozen=True)
class Effect:
    """Transient modifier on a ship, removed when its duration runs out."""

    kind: EffectKind  # What the effect changes
    magnitude: float  # Fractional buff (0.5 = +50%); 1.0 for immobile
    duration: int  # Remaining turns
    source_ship_id: str  # Ship that produced the effect

    def __post_init__(self):
        """Validate effect data after initialization."""
        if self.magnitude < 0:
            raise ValueError(f"Invalid magnitude: {self.magnitude} (must be >= 0)")


@dataclass(frozen=True)
class Ability:
    """Ship-type ability with a cooldown and a resource cost."""

    name: str  # Display name ("Broadside")
    category: AbilityCategory  # Offensive, defensive or utility
    cooldown: int  # Full cooldown length in turns
    cost: Resources  # Paid by the owning player on activation
    range: int  # Declared range in tiles
    max_targets: int = 0  # 0 = no targets, 1 = single target, >1 = multi-target
    remaining_cooldown: int = 0  # Turns until ready again
    ready: bool = True  # True exactly when remaining_cooldown is 0

    def __post_init__(self):
        """Validate ability data after initialization."""
        if self.cooldown < 0:
            raise ValueError(f"Invalid cooldown: {self.cooldown} (must be >= 0)")
        if not (0 <= self.remaining_cooldown <= self.cooldown):
            raise ValueError(
                f"Invalid remaining_cooldown: {self.remaining_cooldown} (must be 0-{self.cooldown})"
            )
        if self.ready != (self.remaining_cooldown == 0):
            raise ValueError(
                f"Invalid ready flag: {self.ready} with remaining_cooldown {self.remaining_cooldown}"
            )

    @property
    def single_target(self) -> bool:
        return self.category == AbilityCategory.OFFENSIVE and self.max_targets == 1

    @property
    def multi_target(self) -> bool:
        return self.category == AbilityCategory.OFFENSIVE and self.max_targets > 1


@dataclass(frozen=True)
class Ship:
    """A ship owned by one player.

    Ships are immutable values; the engine swaps in updated copies. A ship at
    zero health is destroyed and stays in its owner's list only as a record.
    """

    id: str  # Player-scoped id, e.g. "alice_frigate_1"
    owner: str  # Owning player id
    ship_type: ShipType  # Hull class
    max_health: int  # Health at creation
    health: int  # Current health (0 = destroyed)
    attack: int  # Base attack
    defense: int  # Base defense
    speed: int  # Max Euclidean move distance per action
    attack_range: int  # Declared range for plain attacks
    position: Coordinate  # Current tile
    ability: Ability  # Ability bound to the ship type
    effects: tuple[Effect, ...] = field(default_factory=tuple)  # Active timed effects
    last_action_turn: int | None = None  # Turn of the last move/attack/ability

    def __post_init__(self):
        """Validate ship data after initialization."""
        if self.max_health <= 0:
            raise ValueError(f"Invalid max_health: {self.max_health} (must be > 0)")
        if not (0 <= self.health <= self.max_health):
            raise ValueError(f"Invalid health: {self.health} (must be 0-{self.max_health})")
        if self.attack < 0 or self.defense < 0 or self.speed < 0:
            raise ValueError(f"Invalid stats for {self.id}: stats must be >= 0")

    @property
    def alive(self) -> bool:
        return self.health > 0

    @property
    def health_ratio(self) -> float:
        return self.health / self.max_health

    def has_effect(self, kind: EffectKind) -> bool:
        return any(e.kind == kind for e in self.effects)
