"""Game state container."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..utils import GameRNG
from ..utils.constants import INITIAL_WEATHER, MAX_PLAYERS, MIN_PLAYERS, WEATHER_TABLE
from ..utils.distance import Coordinate
from .player import Player
from .ship import Ship
from .tile import GameMap


class GameStatus(Enum):
    WAITING = "waiting"
    ACTIVE = "active"
    COMPLETED = "completed"


class WeatherKind(Enum):
    CALM = "calm"
    TRADE_WINDS = "trade_winds"
    STORM = "storm"
    FOG = "fog"


@dataclass(frozen=True)
class Weather:
    """Current weather and its remaining duration.

    Modifiers are looked up from the weather table, never stored.
    """

    kind: WeatherKind = WeatherKind(INITIAL_WEATHER)
    turns_remaining: int = WEATHER_TABLE[INITIAL_WEATHER][0]

    @property
    def movement_modifier(self) -> float:
        return WEATHER_TABLE[self.kind.value][1]

    @property
    def damage_modifier(self) -> float:
        return WEATHER_TABLE[self.kind.value][2]

    @property
    def resource_modifier(self) -> float:
        return WEATHER_TABLE[self.kind.value][3]

    @property
    def visibility_reduced(self) -> bool:
        return WEATHER_TABLE[self.kind.value][4]


@dataclass(frozen=True)
class GameEvent:
    """Entry in the append-only event log.

    Attributes:
        turn: Turn number the event happened on
        player_id: Acting player, or None for world events (weather)
        kind: Intent kind ("move", "attack", ...) or world event ("weather", "victory")
        data: Structured payload, JSON-friendly values only
        shielded: True if the acting player had the ghost fleet up
    """

    turn: int
    player_id: str | None
    kind: str
    data: dict[str, Any] = field(default_factory=dict)
    shielded: bool = False


@dataclass
class GameState:
    """Main game state container.

    The GameState holds the map, players, turn bookkeeping, weather and the
    RNG for deterministic play. It is the single snapshot threaded between
    the resolver, the AI and the leakage simulator; only the resolver writes
    to it, and it does so on a private copy.
    """

    seed: int  # RNG seed
    game_map: GameMap  # Tile grid with ownership
    max_players: int = MIN_PLAYERS  # Seats available (2-4)
    players: list[Player] = field(default_factory=list)  # In join order
    current_player_index: int = 0  # Index into players
    status: GameStatus = GameStatus.WAITING  # Lifecycle stage
    turn: int = 1  # Incremented on every EndTurn
    weather: Weather = field(default_factory=Weather)  # Current weather
    winner: str | None = None  # Player id, set only on completion
    victory_condition: str | None = None  # "territory", "fleet", "resources" or "last_standing"
    events: list[GameEvent] = field(default_factory=list)  # Append-only log
    rng: GameRNG | None = None  # Seeded RNG instance

    def __post_init__(self):
        """Initialize RNG if not provided."""
        if self.rng is None:
            self.rng = GameRNG(self.seed)
        if not (MIN_PLAYERS <= self.max_players <= MAX_PLAYERS):
            raise ValueError(
                f"Invalid max_players: {self.max_players} (must be {MIN_PLAYERS}-{MAX_PLAYERS})"
            )
        if self.turn < 1:
            raise ValueError(f"Invalid turn: {self.turn} (must be >= 1)")

    @property
    def current_player(self) -> Player | None:
        if not self.players:
            return None
        return self.players[self.current_player_index]

    def player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def find_ship(self, ship_id: str) -> Ship | None:
        for p in self.players:
            ship = p.find_ship(ship_id)
            if ship is not None:
                return ship
        return None

    def living_ships(self) -> list[Ship]:
        return [s for p in self.players for s in p.living_ships()]

    def ship_at(self, coordinate: Coordinate) -> Ship | None:
        """Return the living ship on a tile, if any."""
        for ship in self.living_ships():
            if ship.position == tuple(coordinate):
                return ship
        return None

    def active_players(self) -> list[Player]:
        return [p for p in self.players if p.active]
