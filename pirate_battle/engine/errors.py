"""Rule-violation taxonomy and the Result wrapper returned by engine operations.

Validators raise EngineError internally; every public engine operation
catches it at its boundary and hands back ``Result.failure(error)``. Callers
therefore never see an exception for an expected rule violation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ErrorType(Enum):
    """Classification of rule violations.

    Each value names exactly one violated precondition.
    """

    NOT_YOUR_TURN = "NotYourTurn"
    GAME_ALREADY_COMPLETED = "GameAlreadyCompleted"
    GAME_NOT_ACTIVE = "GameNotActive"
    GAME_FULL = "GameFull"
    ALREADY_JOINED = "AlreadyJoined"
    OUT_OF_RANGE = "OutOfRange"
    NOT_CLAIMABLE = "NotClaimable"
    ON_COOLDOWN = "OnCooldown"
    DESTROYED = "Destroyed"
    INSUFFICIENT_RESOURCES = "InsufficientResources"
    NO_TARGET = "NoTarget"
    TARGET_OUT_OF_RANGE = "TargetOutOfRange"
    TARGET_NOT_FOUND = "TargetNotFound"
    NO_CONTROLLED_PORT = "NoControlledPort"
    NO_SCAN_CHARGES_REMAINING = "NoScanChargesRemaining"
    INVALID_COORDINATE = "InvalidCoordinate"
    SHIP_NOT_FOUND = "ShipNotFound"
    POSITION_OCCUPIED = "PositionOccupied"
    SHIP_IMMOBILE = "ShipImmobile"
    FLEET_SIZE_LIMIT = "FleetSizeLimit"
    NO_ACTIONS_REMAINING = "NoActionsRemaining"
    COORDINATE_ALREADY_SCANNED = "CoordinateAlreadyScanned"
    NO_SHIELD_CHARGES_REMAINING = "NoShieldChargesRemaining"
    SHIELD_ALREADY_ACTIVE = "ShieldAlreadyActive"
    RESOURCES_ALREADY_COLLECTED = "ResourcesAlreadyCollected"


class EngineError(Exception):
    """Raised by validators when a rule is violated.

    Attributes:
        error_type: Which precondition failed
        message: Human-readable description
        details: Structured data for rendering without string parsing
    """

    def __init__(self, error_type: ErrorType, message: str, **details: Any):
        self.error_type = error_type
        self.message = message
        self.details = details
        super().__init__(message)

    def __eq__(self, other):
        if not isinstance(other, EngineError):
            return NotImplemented
        return (
            self.error_type == other.error_type
            and self.message == other.message
            and self.details == other.details
        )

    def __hash__(self):
        return hash((self.error_type, self.message))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type.value, "message": self.message, "details": self.details}


def insufficient(resource: str, required: int, available: int) -> EngineError:
    """Build the InsufficientResources error for one unmet cost line."""
    return EngineError(
        ErrorType.INSUFFICIENT_RESOURCES,
        f"Insufficient {resource}: need {required}, have {available}",
        resource=resource,
        required=required,
        available=available,
        needed=required - available,
    )


@dataclass
class Result(Generic[T]):
    """Outcome of an engine operation.

    Attributes:
        ok: True on success
        value: The new value (state, map, ...) on success
        error: The violated rule on failure
        events: Events produced by a successful intent
    """

    ok: bool
    value: T | None = None
    error: EngineError | None = None
    events: list = field(default_factory=list)

    @classmethod
    def success(cls, value: T = None, events: list | None = None) -> "Result[T]":
        return cls(ok=True, value=value, events=list(events or []))

    @classmethod
    def failure(cls, error: EngineError) -> "Result[T]":
        return cls(ok=False, error=error)

    @property
    def error_type(self) -> ErrorType | None:
        return self.error.error_type if self.error else None
