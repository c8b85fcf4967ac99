"""Player intents accepted by the turn resolver.

Each intent is a frozen dataclass. Every intent accepts an optional
``decision_time_ms`` keyword, the caller-measured time the player spent
deciding, which feeds the speed bonus.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from ..utils.distance import Coordinate
from .ship import ShipType


class IntentKind(Enum):
    MOVE = "move"
    ATTACK = "attack"
    CLAIM_TERRITORY = "claim_territory"
    COLLECT_RESOURCES = "collect_resources"
    BUILD_SHIP = "build_ship"
    USE_ABILITY = "use_ability"
    SCAN_COORDINATE = "scan_coordinate"
    END_TURN = "end_turn"
    ACTIVATE_SHIELD = "activate_shield"
    RESIGN = "resign"


# Intents that spend one unit of the per-turn action budget
ACTION_INTENTS = frozenset(
    {
        IntentKind.MOVE,
        IntentKind.ATTACK,
        IntentKind.CLAIM_TERRITORY,
        IntentKind.COLLECT_RESOURCES,
        IntentKind.BUILD_SHIP,
        IntentKind.USE_ABILITY,
    }
)


def _coordinate(value) -> Coordinate:
    x, y = value
    return (int(x), int(y))


@dataclass(frozen=True)
class Intent:
    """Base class for all intents."""

    kind: ClassVar[IntentKind]

    decision_time_ms: int | None = field(default=None, kw_only=True)

    @property
    def consumes_action(self) -> bool:
        return self.kind in ACTION_INTENTS


@dataclass(frozen=True)
class Move(Intent):
    kind: ClassVar[IntentKind] = IntentKind.MOVE

    ship_id: str
    destination: Coordinate

    def __post_init__(self):
        object.__setattr__(self, "destination", _coordinate(self.destination))


@dataclass(frozen=True)
class Attack(Intent):
    kind: ClassVar[IntentKind] = IntentKind.ATTACK

    ship_id: str
    target_id: str


@dataclass(frozen=True)
class ClaimTerritory(Intent):
    kind: ClassVar[IntentKind] = IntentKind.CLAIM_TERRITORY

    ship_id: str
    coordinate: Coordinate

    def __post_init__(self):
        object.__setattr__(self, "coordinate", _coordinate(self.coordinate))


@dataclass(frozen=True)
class CollectResources(Intent):
    kind: ClassVar[IntentKind] = IntentKind.COLLECT_RESOURCES


@dataclass(frozen=True)
class BuildShip(Intent):
    kind: ClassVar[IntentKind] = IntentKind.BUILD_SHIP

    ship_type: ShipType
    coordinate: Coordinate

    def __post_init__(self):
        object.__setattr__(self, "ship_type", ShipType(self.ship_type))
        object.__setattr__(self, "coordinate", _coordinate(self.coordinate))


@dataclass(frozen=True)
class UseAbility(Intent):
    kind: ClassVar[IntentKind] = IntentKind.USE_ABILITY

    ship_id: str
    target_id: str | None = None


@dataclass(frozen=True)
class ScanCoordinate(Intent):
    kind: ClassVar[IntentKind] = IntentKind.SCAN_COORDINATE

    coordinate: Coordinate

    def __post_init__(self):
        object.__setattr__(self, "coordinate", _coordinate(self.coordinate))


@dataclass(frozen=True)
class EndTurn(Intent):
    kind: ClassVar[IntentKind] = IntentKind.END_TURN


@dataclass(frozen=True)
class ActivateShield(Intent):
    kind: ClassVar[IntentKind] = IntentKind.ACTIVATE_SHIELD


@dataclass(frozen=True)
class Resign(Intent):
    kind: ClassVar[IntentKind] = IntentKind.RESIGN


INTENT_TYPES: dict[IntentKind, type[Intent]] = {
    IntentKind.MOVE: Move,
    IntentKind.ATTACK: Attack,
    IntentKind.CLAIM_TERRITORY: ClaimTerritory,
    IntentKind.COLLECT_RESOURCES: CollectResources,
    IntentKind.BUILD_SHIP: BuildShip,
    IntentKind.USE_ABILITY: UseAbility,
    IntentKind.SCAN_COORDINATE: ScanCoordinate,
    IntentKind.END_TURN: EndTurn,
    IntentKind.ACTIVATE_SHIELD: ActivateShield,
    IntentKind.RESIGN: Resign,
}
