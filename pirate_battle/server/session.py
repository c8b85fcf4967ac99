"""Game session management for hosted games.

The host owns the single current snapshot per game and threads it through
the engine. Each session serializes its writes with an asyncio lock, so at
most one intent is in flight per game.
"""

import asyncio
import logging
import random
import uuid
from dataclasses import dataclass, field

from ..ai import AIDecisionEngine, Decision, DifficultyProfile, Explanation
from ..engine import Result, apply_intent, initialize, join
from ..models.game import GameState
from ..models.intent import Intent

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """One hosted game and its current snapshot."""

    id: str
    state: GameState
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    applied: int = 0  # Successful intents so far
    rejected: int = 0  # Failed intents so far


class GameSessionManager:
    """Registry of active game sessions."""

    def __init__(self):
        self.sessions: dict[str, GameSession] = {}
        self.ai = AIDecisionEngine()

    def create_session(self, seed: int | None = None, max_players: int = 2) -> GameSession:
        """Create a new game session.

        Args:
            seed: RNG seed; random if omitted
            max_players: Seats available (2-4)

        Returns:
            New session in waiting status
        """
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        game_id = f"game-{uuid.uuid4().hex[:8]}"
        session = GameSession(id=game_id, state=initialize(seed, max_players))
        self.sessions[game_id] = session
        logger.info(f"Created session {game_id} (seed={seed}, max_players={max_players})")
        return session

    def get(self, game_id: str) -> GameSession | None:
        return self.sessions.get(game_id)

    async def join(self, session: GameSession, player_id: str) -> Result[GameState]:
        async with session.lock:
            result = join(session.state, player_id)
            if result.ok:
                session.state = result.value
            return result

    async def apply(self, session: GameSession, player_id: str, intent: Intent) -> Result[GameState]:
        """Apply an intent and commit the new snapshot on success."""
        async with session.lock:
            result = apply_intent(session.state, player_id, intent)
            if result.ok:
                session.state = result.value
                session.applied += 1
            else:
                session.rejected += 1
            return result

    def decide(
        self, session: GameSession, player_id: str, profile: DifficultyProfile
    ) -> tuple[Decision, Explanation]:
        """Compute an AI decision from the current snapshot (read-only)."""
        return self.ai.evaluate(session.state, player_id, profile)

    async def cleanup_all(self) -> None:
        count = len(self.sessions)
        self.sessions.clear()
        logger.info(f"Cleaned up {count} session(s)")
