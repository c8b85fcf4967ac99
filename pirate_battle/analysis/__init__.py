"""Information-leakage analysis of a player's public footprint."""

from .dossier import Dossier, PlayStyle, build_dossier, dossier, predict_next_move
from .leakage import LeakageReport, VisibleResource, compute_report, leakage_report
from .patterns import Pattern, categorize, detect_patterns

__all__ = [
    "Dossier",
    "LeakageReport",
    "Pattern",
    "PlayStyle",
    "VisibleResource",
    "build_dossier",
    "categorize",
    "compute_report",
    "detect_patterns",
    "dossier",
    "leakage_report",
    "predict_next_move",
]
