"""AI decision engine: enumerate, score, select, explain.

The decision (chosen option and ranked scores) and the explanation
(justification strings) are returned separately, so scoring can be tested
without asserting on display text.
"""

import logging
from dataclasses import dataclass

from ..models.game import GameState
from ..models.intent import Intent
from ..utils import GameRNG
from .difficulty import DifficultyProfile
from .options import Option, OptionKind, enumerate_options
from .scoring import ScoreBreakdown, score_breakdown

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredOption:
    option: Option
    score: float
    breakdown: ScoreBreakdown


@dataclass(frozen=True)
class Decision:
    """What the AI chose.

    Attributes:
        chosen: Winning option
        intent: Intent to submit
        ranked: Every option, best first (ties keep enumeration order)
    """

    chosen: Option
    intent: Intent
    ranked: tuple[ScoredOption, ...]

    @property
    def score(self) -> float:
        return self.ranked[0].score


@dataclass(frozen=True)
class Explanation:
    """Display-only reasoning for a decision."""

    summary: str
    details: tuple[str, ...] = ()


_FACTOR_LABELS = {
    "territorial": "territory value",
    "horizon": "territory within reach",
    "damage": "expected damage",
    "exposure": "exposure to enemy fire",
    "resource": "resource efficiency",
}


def _justify(scored: ScoredOption) -> str:
    """One-line reason built from the largest contributing factor."""
    option = scored.option
    if option.kind == OptionKind.PASS:
        return "Nothing beats ending the turn"
    breakdown = scored.breakdown
    factors = {
        "territorial": breakdown.territorial,
        "horizon": breakdown.horizon,
        "damage": breakdown.damage,
        "exposure": -breakdown.exposure,
        "resource": breakdown.resource,
    }
    name, value = max(factors.items(), key=lambda kv: abs(kv[1]))
    direction = "gains" if value >= 0 else "costs"
    return f"{option.describe()}: {direction} {abs(value):.1f} from {_FACTOR_LABELS[name]}"


class AIDecisionEngine:
    """Picks one intent per call for a computer-controlled player.

    Read-only with respect to the state. Jitter is drawn from an RNG derived
    from the snapshot, so the same state and profile always give the same
    decision.
    """

    def __init__(self, explain_top: int = 3):
        """Initialize the engine.

        Args:
            explain_top: How many ranked options to describe in the explanation
        """
        self.explain_top = explain_top

    def jitter_rng(self, state: GameState, player_id: str) -> GameRNG:
        return GameRNG.derived(state.seed, state.turn, player_id, len(state.events))

    def rank(
        self, state: GameState, player_id: str, profile: DifficultyProfile
    ) -> list[ScoredOption]:
        """Score every legal option, best first.

        Sorting is stable, so equal scores keep enumeration order.
        """
        rng = self.jitter_rng(state, player_id)
        scored = []
        for option in enumerate_options(state, player_id):
            breakdown = score_breakdown(option, state, player_id, profile, rng)
            scored.append(ScoredOption(option=option, score=breakdown.total, breakdown=breakdown))
        return sorted(scored, key=lambda s: -s.score)

    def evaluate(
        self, state: GameState, player_id: str, profile: DifficultyProfile
    ) -> tuple[Decision, Explanation]:
        """Choose an option and describe why.

        Returns:
            (decision, explanation)
        """
        ranked = self.rank(state, player_id, profile)
        best = ranked[0]
        decision = Decision(chosen=best.option, intent=best.option.intent, ranked=tuple(ranked))

        details = tuple(
            f"{i + 1}. {_justify(s)} (score {s.score:.1f})" for i, s in enumerate(ranked[: self.explain_top])
        )
        explanation = Explanation(
            summary=f"[{profile.name}] {_justify(best)}",
            details=details,
        )
        logger.debug(
            f"{player_id} ({profile.name}) chose {best.option.describe()} "
            f"score={best.score:.1f} from {len(ranked)} options"
        )
        return decision, explanation


def decide(state: GameState, player_id: str, profile: DifficultyProfile) -> Intent:
    """AI entry point: the intent a computer player submits next.

    Args:
        state: Read-only snapshot
        player_id: Controlled player
        profile: Difficulty preset

    Returns:
        Intent to pass to ``apply_intent``
    """
    decision, _ = AIDecisionEngine().evaluate(state, player_id, profile)
    return decision.intent
