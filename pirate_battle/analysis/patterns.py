"""Behavioral pattern detection over a player's event history.

This module provides the shared building blocks of the leakage report and
the dossier:
- Classification of events into action categories
- Ratio patterns over the most recent actions (aggressive, territorial, ...)
- Sequence patterns (attacks after scanning, repeated pairs)
- Health and timing habits
"""

import statistics
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from ..models.game import GameEvent
from ..models.intent import IntentKind
from ..utils.constants import PATTERN_RATIO_THRESHOLD, PATTERN_WINDOW

AGGRESSIVE = "aggressive"
DEFENSIVE = "defensive"
RESOURCE = "resource"
TERRITORIAL = "territorial"
SCOUTING = "scouting"
MOVEMENT = "movement"

CATEGORIES = (AGGRESSIVE, DEFENSIVE, RESOURCE, TERRITORIAL, SCOUTING, MOVEMENT)

LOW_HEALTH_RATIO = 0.3


@dataclass(frozen=True)
class Pattern:
    """A named behavior an observer could pick up.

    Attributes:
        key: Stable identifier ("attacks_after_scanning")
        description: Human-readable summary
        confidence: Strength of the evidence, 0.0-1.0
    """

    key: str
    description: str
    confidence: float


def categorize(event: GameEvent) -> str | None:
    """Map an event to an action category, or None if it is not a player action."""
    kind = event.kind
    if kind == IntentKind.ATTACK.value:
        return AGGRESSIVE
    if kind == IntentKind.USE_ABILITY.value:
        return {
            "offensive": AGGRESSIVE,
            "defensive": DEFENSIVE,
            "utility": SCOUTING,
        }.get(event.data.get("category"))
    if kind == IntentKind.SCAN_COORDINATE.value:
        return SCOUTING
    if kind in (IntentKind.COLLECT_RESOURCES.value, IntentKind.BUILD_SHIP.value):
        return RESOURCE
    if kind == IntentKind.CLAIM_TERRITORY.value:
        return TERRITORIAL
    if kind == IntentKind.MOVE.value:
        return MOVEMENT
    return None


def visible_events(history: Iterable[GameEvent], player_id: str | None = None) -> list[GameEvent]:
    """Events an observer can see: unshielded, optionally for one player."""
    return [
        e
        for e in history
        if not e.shielded and (player_id is None or e.player_id == player_id)
    ]


def visible_actions(history: Iterable[GameEvent], player_id: str | None = None) -> list[GameEvent]:
    return [e for e in visible_events(history, player_id) if categorize(e) is not None]


def detect_patterns(history: Iterable[GameEvent], player_id: str | None = None) -> list[Pattern]:
    """Detect every named pattern in a player's visible history.

    Args:
        history: Event log (any order-preserving iterable)
        player_id: Restrict to one player's events; None means history is
            already one player's

    Returns:
        Detected patterns, in detection order
    """
    events = visible_events(history, player_id)
    actions = [e for e in events if categorize(e) is not None]

    patterns = []
    patterns.extend(_ratio_patterns(actions[-PATTERN_WINDOW:]))
    patterns.extend(_scan_then_attack(actions))
    patterns.extend(_never_retreats(actions))
    patterns.extend(_repeated_sequence(actions))
    patterns.extend(_consistent_timing(events))
    return patterns


_RATIO_PATTERNS = (
    (AGGRESSIVE, "aggressive_attacker", "Prefers attacking over other actions"),
    (DEFENSIVE, "defensive_posture", "Favors defensive abilities"),
    (RESOURCE, "resource_focused", "Focuses on collecting and building"),
    (TERRITORIAL, "territorial_expansion", "Prioritizes claiming territory"),
)


def _ratio_patterns(recent: list[GameEvent]) -> list[Pattern]:
    if len(recent) < 3:
        return []
    counts = Counter(categorize(e) for e in recent)
    patterns = []
    for category, key, description in _RATIO_PATTERNS:
        ratio = counts[category] / len(recent)
        if ratio > PATTERN_RATIO_THRESHOLD:
            patterns.append(Pattern(key, description, round(ratio, 2)))
    return patterns


def _scan_then_attack(actions: list[GameEvent]) -> list[Pattern]:
    followups = [
        categorize(actions[i + 1])
        for i in range(len(actions) - 1)
        if categorize(actions[i]) == SCOUTING
    ]
    if len(followups) >= 2 and all(c == AGGRESSIVE for c in followups):
        return [
            Pattern(
                "attacks_after_scanning",
                "Always attacks right after scanning",
                min(1.0, len(followups) / 4),
            )
        ]
    return []


def _never_retreats(actions: list[GameEvent]) -> list[Pattern]:
    damaged_moves = [
        e
        for e in actions
        if e.kind == IntentKind.MOVE.value and e.data.get("health_ratio", 1.0) < LOW_HEALTH_RATIO
    ]
    if len(damaged_moves) >= 2 and not any(e.data.get("retreat") for e in damaged_moves):
        return [
            Pattern(
                "never_retreats_when_damaged",
                f"Never retreats below {int(LOW_HEALTH_RATIO * 100)}% health",
                min(1.0, len(damaged_moves) / 4),
            )
        ]
    return []


def _repeated_sequence(actions: list[GameEvent]) -> list[Pattern]:
    categories = [categorize(e) for e in actions]
    pairs = Counter(zip(categories, categories[1:]))
    if not pairs:
        return []
    (first, second), count = pairs.most_common(1)[0]
    if count >= 3:
        return [
            Pattern(
                "repeated_sequence",
                f"Repeats {first} then {second}",
                round(count / (len(categories) - 1), 2),
            )
        ]
    return []


def _consistent_timing(events: list[GameEvent]) -> list[Pattern]:
    times = [e.data["decision_time_ms"] for e in events if "decision_time_ms" in e.data]
    if len(times) >= 3 and statistics.pstdev(times) < 1000:
        return [
            Pattern(
                "consistent_timing",
                f"Decides in a steady ~{statistics.mean(times) / 1000:.1f}s",
                min(1.0, len(times) / 10),
            )
        ]
    return []
