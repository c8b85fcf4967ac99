"""FastAPI server for Pirate Battle.

Exposes the engine's external interface over HTTP: game creation, joining,
intent submission, AI decisions and leakage analysis.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..ai import get_profile
from ..analysis import build_dossier, leakage_report, predict_next_move
from ..engine import Result
from ..utils.serialization import serialize_event, serialize_state, to_jsonable
from .schemas.requests import CreateGameRequest, IntentRequest, JoinGameRequest
from .schemas.responses import (
    CreateGameResponse,
    DecisionResponse,
    EngineErrorResponse,
    GameStateResponse,
    IntentResponse,
)
from .session import GameSession, GameSessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = GameSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Pirate Battle server starting...")
    yield
    logger.info("Pirate Battle server shutting down...")
    await sessions.cleanup_all()


app = FastAPI(
    title="Pirate Battle API",
    description="Web API for the pirate battle simulation engine",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _session_or_404(game_id: str) -> GameSession:
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")
    return session


def _intent_response(session: GameSession, result: Result) -> IntentResponse:
    state = session.state
    current = state.current_player
    return IntentResponse(
        accepted=result.ok,
        error=EngineErrorResponse(**result.error.to_dict()) if result.error else None,
        events=[serialize_event(e) for e in result.events],
        turn=state.turn,
        currentPlayer=current.id if current else None,
        winner=state.winner,
    )


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Pirate Battle",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest):
    """Create a new game waiting for players.

    Example:
        POST /api/games
        {"seed": 42, "maxPlayers": 2}
    """
    session = sessions.create_session(seed=request.seed, max_players=request.maxPlayers)
    return CreateGameResponse(
        gameId=session.id,
        seed=session.state.seed,
        maxPlayers=session.state.max_players,
        state=serialize_state(session.state),
    )


@app.post("/api/games/{game_id}/join", response_model=IntentResponse)
async def join_game(game_id: str, request: JoinGameRequest):
    """Seat a player. Rule failures (GameFull, AlreadyJoined) come back with accepted=false."""
    session = _session_or_404(game_id)
    result = await sessions.join(session, request.playerId)
    return _intent_response(session, result)


@app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
async def get_game_state(game_id: str, viewer: str | None = None):
    """Get current game state.

    Args:
        game_id: Game session ID
        viewer: Player whose private knowledge (scans) should be included
    """
    session = _session_or_404(game_id)
    state = session.state
    current = state.current_player
    return GameStateResponse(
        gameId=session.id,
        status=state.status.value,
        turn=state.turn,
        currentPlayer=current.id if current else None,
        winner=state.winner,
        state=serialize_state(state, viewer=viewer),
    )


@app.post("/api/games/{game_id}/intents", response_model=IntentResponse)
async def submit_intent(game_id: str, request: IntentRequest):
    """Submit one intent for a player.

    Example:
        POST /api/games/game-abc123/intents
        {"playerId": "alice", "kind": "move", "shipId": "alice_sloop_1", "destination": [2, 1]}
    """
    session = _session_or_404(game_id)
    try:
        intent = request.to_intent()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = await sessions.apply(session, request.playerId, intent)
    if not result.ok:
        logger.debug(f"{game_id}: {request.playerId} {request.kind.value} rejected ({result.error_type.value})")
    return _intent_response(session, result)


@app.get("/api/games/{game_id}/decision", response_model=DecisionResponse)
async def get_ai_decision(game_id: str, playerId: str, difficulty: str = "pirate"):  # noqa: N803
    """Compute the AI's next intent for a player without applying it."""
    session = _session_or_404(game_id)
    if session.state.player(playerId) is None:
        raise HTTPException(status_code=404, detail=f"Player {playerId} not found")
    try:
        profile = get_profile(difficulty)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    decision, explanation = sessions.decide(session, playerId, profile)
    intent = decision.intent
    return DecisionResponse(
        playerId=playerId,
        difficulty=profile.name,
        intent={"kind": intent.kind.value, **to_jsonable(intent)},
        score=round(decision.score, 2),
        ranked=[
            {"option": s.option.describe(), "kind": s.option.kind.value, "score": round(s.score, 2)}
            for s in decision.ranked
        ],
        justification=explanation.summary,
        details=list(explanation.details),
    )


@app.get("/api/games/{game_id}/leakage/{player_id}")
async def get_leakage_report(game_id: str, player_id: str):
    """Leakage report for one player from the game's event log."""
    session = _session_or_404(game_id)
    try:
        report = leakage_report(session.state, player_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return to_jsonable(report)


@app.get("/api/games/{game_id}/dossier/{player_id}")
async def get_dossier(game_id: str, player_id: str):
    """Dossier and next-move prediction for one player."""
    session = _session_or_404(game_id)
    if session.state.player(player_id) is None:
        raise HTTPException(status_code=404, detail=f"Player {player_id} not found")
    history = session.state.events
    category, confidence = predict_next_move(history, player_id)
    return {
        **to_jsonable(build_dossier(history, player_id)),
        "predictedNextMove": category,
        "predictionConfidence": confidence,
    }
