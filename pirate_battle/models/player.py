"""Player data model."""

from dataclasses import dataclass, field

from ..utils.constants import ACTIONS_PER_TURN, INITIAL_SCAN_CHARGES, INITIAL_SHIELD_CHARGES
from ..utils.distance import Coordinate
from .resources import Resources
from .ship import Ship
from .tile import TerrainKind


@dataclass
class Player:
    """Player state: ledger, fleet, territory and per-player pools.

    Players are never removed from a game. Elimination or resignation leaves
    the record in place with ``active`` set to False.
    """

    id: str  # Opaque identity supplied by the host
    resources: Resources = field(default_factory=Resources)  # Current ledger
    ships: list[Ship] = field(default_factory=list)  # All ships ever owned, destroyed included
    controlled_territories: set[Coordinate] = field(default_factory=set)  # Owned tile coordinates
    score: int = 0  # Cumulative score (speed bonuses)
    active: bool = True  # False once eliminated or resigned
    scan_charges: int = INITIAL_SCAN_CHARGES  # Never replenished
    scanned_tiles: dict[Coordinate, TerrainKind] = field(
        default_factory=dict
    )  # Coordinate -> true terrain learned by scanning
    revealed_tiles: set[Coordinate] = field(default_factory=set)  # Uncovered by Spy Glass
    shield_charges: int = INITIAL_SHIELD_CHARGES  # Ghost fleet activations left
    shield_turns_remaining: int = 0  # > 0 while the ghost fleet is up
    actions_remaining: int = ACTIONS_PER_TURN  # Action budget for the current turn
    collected_this_turn: bool = False  # CollectResources used since the turn began
    ships_built: int = 0  # Serial counter for ship ids
    speed_bonus_accumulated: int = 0  # Score earned from fast decisions
    timed_decisions: int = 0  # Decisions that reported a duration
    average_decision_time_ms: float = 0.0  # Running mean over timed decisions

    def __post_init__(self):
        """Validate player data after initialization."""
        if not self.id:
            raise ValueError("Player id cannot be empty")
        if self.scan_charges < 0:
            raise ValueError(f"Invalid scan_charges: {self.scan_charges} (must be >= 0)")
        if self.shield_charges < 0:
            raise ValueError(f"Invalid shield_charges: {self.shield_charges} (must be >= 0)")
        if self.actions_remaining < 0:
            raise ValueError(f"Invalid actions_remaining: {self.actions_remaining} (must be >= 0)")

    @property
    def shielded(self) -> bool:
        return self.shield_turns_remaining > 0

    def living_ships(self) -> list[Ship]:
        return [s for s in self.ships if s.alive]

    def find_ship(self, ship_id: str) -> Ship | None:
        for ship in self.ships:
            if ship.id == ship_id:
                return ship
        return None

    def replace_ship(self, ship: Ship) -> None:
        """Swap in an updated copy of one of this player's ships."""
        for i, existing in enumerate(self.ships):
            if existing.id == ship.id:
                self.ships[i] = ship
                return
        raise KeyError(f"Ship {ship.id} not owned by {self.id}")
