"""Pirate Battle: deterministic naval strategy simulation.

Entry points:
- initialize / join: create a game and seat players
- apply_intent: the single mutation entry point
- decide: AI intent for a computer-controlled player
- leakage_report / dossier: observational analysis
"""

from .ai import decide
from .analysis import dossier, leakage_report
from .engine import apply_intent, initialize, join

__version__ = "1.0.0"

__all__ = [
    "apply_intent",
    "decide",
    "dossier",
    "initialize",
    "join",
    "leakage_report",
]
