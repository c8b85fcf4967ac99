"""Pydantic request schemas for API endpoints."""

from pydantic import BaseModel, Field

from ...models.intent import INTENT_TYPES, Intent, IntentKind


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")
    maxPlayers: int = Field(  # noqa: N815
        default=2, ge=2, le=4, description="Seats available (2-4)"
    )


class JoinGameRequest(BaseModel):
    """Request to take a seat in a game."""

    playerId: str = Field(min_length=1, description="Opaque player identity")  # noqa: N815


class IntentRequest(BaseModel):
    """A single player intent.

    Only the fields the intent kind needs are read.
    """

    playerId: str = Field(min_length=1, description="Acting player")  # noqa: N815
    kind: IntentKind = Field(description="Intent kind, e.g. 'move' or 'end_turn'")
    shipId: str | None = Field(default=None, description="Acting ship")  # noqa: N815
    targetId: str | None = Field(default=None, description="Target ship")  # noqa: N815
    destination: tuple[int, int] | None = Field(default=None, description="Move destination")
    coordinate: tuple[int, int] | None = Field(
        default=None, description="Claim, build or scan coordinate"
    )
    shipType: str | None = Field(default=None, description="Hull class for build_ship")  # noqa: N815
    decisionTimeMs: int | None = Field(  # noqa: N815
        default=None, ge=0, description="Time the player spent deciding"
    )

    def to_intent(self) -> Intent:
        """Build the engine intent.

        Raises:
            ValueError: If a field the intent kind needs is missing or invalid
        """
        required = {
            IntentKind.MOVE: ("shipId", "destination"),
            IntentKind.ATTACK: ("shipId", "targetId"),
            IntentKind.CLAIM_TERRITORY: ("shipId", "coordinate"),
            IntentKind.BUILD_SHIP: ("shipType", "coordinate"),
            IntentKind.USE_ABILITY: ("shipId",),
            IntentKind.SCAN_COORDINATE: ("coordinate",),
        }.get(self.kind, ())
        missing = [name for name in required if getattr(self, name) is None]
        if missing:
            raise ValueError(f"{self.kind.value} requires: {', '.join(missing)}")

        kwargs = {
            "ship_id": self.shipId,
            "target_id": self.targetId,
            "destination": self.destination,
            "coordinate": self.coordinate,
            "ship_type": self.shipType,
        }
        intent_type = INTENT_TYPES[self.kind]
        fields = intent_type.__dataclass_fields__
        accepted = {k: v for k, v in kwargs.items() if k in fields}
        return intent_type(**accepted, decision_time_ms=self.decisionTimeMs)
