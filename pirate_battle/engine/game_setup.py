"""Game creation and player joining."""

import copy
import logging

from ..models.game import GameEvent, GameState, GameStatus
from ..models.player import Player
from ..models.resources import Resources
from ..models.ship import ShipType
from ..utils import MAP_SIZE, MAX_PLAYERS, MIN_PLAYERS, GameRNG
from ..utils.constants import STARTING_RESOURCES
from .errors import EngineError, ErrorType, Result
from .map_generator import generate_map, start_positions
from .ships import create_ship

logger = logging.getLogger(__name__)


def initialize(seed: int, max_players: int = MIN_PLAYERS, size: int = MAP_SIZE) -> GameState:
    """Create a new game waiting for players.

    Args:
        seed: RNG seed; the same seed always produces the same map and rolls
        max_players: Seats available (2-4)
        size: Map width/height

    Returns:
        GameState in ``waiting`` status with calm weather

    Raises:
        ValueError: If max_players is outside 2-4
    """
    if not (MIN_PLAYERS <= max_players <= MAX_PLAYERS):
        raise ValueError(f"Invalid max_players: {max_players} (must be {MIN_PLAYERS}-{MAX_PLAYERS})")

    rng = GameRNG(seed)
    game_map = generate_map(seed, size=size, rng=rng)
    state = GameState(seed=seed, game_map=game_map, max_players=max_players, rng=rng)
    logger.info(f"Initialized game: seed={seed}, max_players={max_players}")
    return state


def join(state: GameState, player_id: str) -> Result[GameState]:
    """Seat a player and hand out their starting fleet.

    The joining player gets the starting resources, a sloop and a frigate in
    their corner. The game turns active once MIN_PLAYERS have joined.

    Args:
        state: Current state (not modified)
        player_id: Opaque identity from the host

    Returns:
        Result holding the new state, or GameAlreadyCompleted / AlreadyJoined / GameFull
    """
    if state.status == GameStatus.COMPLETED:
        return Result.failure(
            EngineError(ErrorType.GAME_ALREADY_COMPLETED, "Game is already completed", winner=state.winner)
        )
    if state.player(player_id) is not None:
        return Result.failure(
            EngineError(ErrorType.ALREADY_JOINED, f"{player_id} has already joined", player_id=player_id)
        )
    if len(state.players) >= state.max_players:
        return Result.failure(
            EngineError(
                ErrorType.GAME_FULL,
                f"Game is full ({state.max_players} players)",
                max_players=state.max_players,
            )
        )

    new_state = copy.deepcopy(state)
    seat = len(new_state.players)
    sloop_pos, frigate_pos = start_positions(seat, new_state.game_map.size)
    player = Player(
        id=player_id,
        resources=Resources.from_dict(STARTING_RESOURCES),
        ships=[
            create_ship(player_id, ShipType.SLOOP, sloop_pos, 1),
            create_ship(player_id, ShipType.FRIGATE, frigate_pos, 1),
        ],
        ships_built=1,
    )
    new_state.players.append(player)

    event = GameEvent(turn=new_state.turn, player_id=player_id, kind="join", data={"seat": seat})
    new_state.events.append(event)
    events = [event]

    if new_state.status == GameStatus.WAITING and len(new_state.players) >= MIN_PLAYERS:
        new_state.status = GameStatus.ACTIVE
        started = GameEvent(
            turn=new_state.turn,
            player_id=None,
            kind="game_started",
            data={"players": [p.id for p in new_state.players]},
        )
        new_state.events.append(started)
        events.append(started)
        logger.info(f"Game active with players {[p.id for p in new_state.players]}")

    logger.info(f"{player_id} joined at seat {seat}")
    return Result.success(new_state, events)
