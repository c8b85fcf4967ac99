"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel, Field


class GameStateResponse(BaseModel):
    """Response containing current game state."""

    gameId: str  # noqa: N815
    status: str
    turn: int
    currentPlayer: str | None  # noqa: N815
    winner: str | None
    state: dict


class CreateGameResponse(BaseModel):
    """Response after creating a new game."""

    gameId: str  # noqa: N815
    seed: int
    maxPlayers: int  # noqa: N815
    state: dict


class EngineErrorResponse(BaseModel):
    """Structured rule violation."""

    type: str
    message: str
    details: dict = Field(default_factory=dict)


class IntentResponse(BaseModel):
    """Response after joining or submitting an intent."""

    accepted: bool
    error: EngineErrorResponse | None = None
    events: list[dict] = Field(default_factory=list)
    turn: int | None = None
    currentPlayer: str | None = None  # noqa: N815
    winner: str | None = None


class DecisionResponse(BaseModel):
    """AI decision with its ranked options and explanation."""

    playerId: str  # noqa: N815
    difficulty: str
    intent: dict
    score: float
    ranked: list[dict]
    justification: str
    details: list[str] = Field(default_factory=list)
