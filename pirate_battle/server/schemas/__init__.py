"""Request and response schemas for the HTTP API."""

from .requests import CreateGameRequest, IntentRequest, JoinGameRequest
from .responses import (
    CreateGameResponse,
    DecisionResponse,
    EngineErrorResponse,
    GameStateResponse,
    IntentResponse,
)

__all__ = [
    "CreateGameRequest",
    "CreateGameResponse",
    "DecisionResponse",
    "EngineErrorResponse",
    "GameStateResponse",
    "IntentRequest",
    "IntentResponse",
    "JoinGameRequest",
]
