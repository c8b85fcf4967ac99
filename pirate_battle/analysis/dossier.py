"""Opponent dossier: play style, predictability and next-move guess."""

import math
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from ..models.game import GameEvent
from .patterns import (
    AGGRESSIVE,
    CATEGORIES,
    DEFENSIVE,
    RESOURCE,
    TERRITORIAL,
    categorize,
    detect_patterns,
    visible_actions,
)

# A dominant category needs at least this share to define the style
STYLE_SHARE = 0.4
# Below this predictability (with enough actions) the player is unpredictable
UNPREDICTABLE_BELOW = 15
MIN_ACTIONS_FOR_UNPREDICTABLE = 5


class PlayStyle(Enum):
    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"
    RESOURCE_FOCUSED = "resource_focused"
    TERRITORIAL = "territorial"
    BALANCED = "balanced"
    UNPREDICTABLE = "unpredictable"


_STYLE_BY_CATEGORY = {
    AGGRESSIVE: PlayStyle.AGGRESSIVE,
    DEFENSIVE: PlayStyle.DEFENSIVE,
    RESOURCE: PlayStyle.RESOURCE_FOCUSED,
    TERRITORIAL: PlayStyle.TERRITORIAL,
}


@dataclass(frozen=True)
class Dossier:
    """Profile of a player assembled from their visible history.

    Attributes:
        typical_play_style: One of the PlayStyle taxonomy
        predictability_score: 0-100, 100 = always does the same kind of thing
        patterns_identified: Descriptions of detected patterns
        action_counts: Category -> visible action count
    """

    typical_play_style: PlayStyle
    predictability_score: int
    patterns_identified: list[str] = field(default_factory=list)
    action_counts: dict[str, int] = field(default_factory=dict)


def predictability(counts: Counter) -> int:
    """Entropy-based predictability of an action distribution.

    Returns ``round((1 - H / log2(k)) * 100)`` over the k action categories;
    fewer than two actions is fully predictable.
    """
    total = sum(counts.values())
    if total < 2:
        return 100
    entropy = -sum((n / total) * math.log2(n / total) for n in counts.values() if n)
    return round((1 - entropy / math.log2(len(CATEGORIES))) * 100)


def classify_style(counts: Counter, predictability_score: int) -> PlayStyle:
    total = sum(counts.values())
    if total == 0:
        return PlayStyle.BALANCED
    if total >= MIN_ACTIONS_FOR_UNPREDICTABLE and predictability_score < UNPREDICTABLE_BELOW:
        return PlayStyle.UNPREDICTABLE
    category, count = max(
        ((c, counts[c]) for c in _STYLE_BY_CATEGORY),
        key=lambda item: item[1],
    )
    if count / total >= STYLE_SHARE:
        return _STYLE_BY_CATEGORY[category]
    return PlayStyle.BALANCED


def build_dossier(history: Sequence[GameEvent], player_id: str | None = None) -> Dossier:
    """Profile a player from their visible history.

    Args:
        history: Event log; if player_id is None it should hold one player's events
        player_id: Restrict to this player's events

    Returns:
        Dossier
    """
    actions = visible_actions(history, player_id)
    counts = Counter(categorize(e) for e in actions)
    score = predictability(counts)
    return Dossier(
        typical_play_style=classify_style(counts, score),
        predictability_score=score,
        patterns_identified=[p.description for p in detect_patterns(history, player_id)],
        action_counts={c: counts[c] for c in CATEGORIES if counts[c]},
    )


def dossier(history: Sequence[GameEvent], player_id: str | None = None) -> Dossier:
    """Observational entry point; see ``build_dossier``."""
    return build_dossier(history, player_id)


def predict_next_move(history: Sequence[GameEvent], player_id: str | None = None) -> tuple[str | None, float]:
    """Guess the category of the player's next action.

    Uses what followed the last action category in the past, falling back
    to the overall most common category.

    Returns:
        (category, confidence 0.0-1.0); (None, 0.0) with no history
    """
    categories = [categorize(e) for e in visible_actions(history, player_id)]
    if not categories:
        return None, 0.0

    last = categories[-1]
    followups = Counter(b for a, b in zip(categories, categories[1:]) if a == last)
    pool = followups if followups else Counter(categories)
    category, count = pool.most_common(1)[0]
    return category, round(count / sum(pool.values()), 2)
