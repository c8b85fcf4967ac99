"""AI decision engine for computer-controlled captains."""

from .decision_engine import AIDecisionEngine, Decision, Explanation, ScoredOption, decide
from .difficulty import ADMIRAL, CAPTAIN, NOVICE, PIRATE, PROFILES, DifficultyProfile, get_profile
from .options import Option, OptionKind, enumerate_options
from .scoring import ScoreBreakdown, score, score_breakdown

__all__ = [
    "ADMIRAL",
    "AIDecisionEngine",
    "CAPTAIN",
    "Decision",
    "DifficultyProfile",
    "Explanation",
    "NOVICE",
    "Option",
    "OptionKind",
    "PIRATE",
    "PROFILES",
    "ScoreBreakdown",
    "ScoredOption",
    "decide",
    "enumerate_options",
    "get_profile",
    "score",
    "score_breakdown",
]
