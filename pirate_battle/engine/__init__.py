"""Game engine: rules, intent resolution and victory assessment."""

from .errors import EngineError, ErrorType, Result
from .game_setup import initialize, join
from .turn_resolver import TurnResolver, apply_intent, speed_bonus
from .victory import Victory, check_victory

__all__ = [
    "EngineError",
    "ErrorType",
    "Result",
    "TurnResolver",
    "Victory",
    "apply_intent",
    "check_victory",
    "initialize",
    "join",
    "speed_bonus",
]
