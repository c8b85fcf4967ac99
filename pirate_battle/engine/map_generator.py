"""Sea map generation with concentric value zones.

The map is laid out in three rings around the centre:
1. Core: treasure and ports, the contested prizes
2. Middle: islands, ports and open water
3. Outer: mostly water with scattered storms, reefs and whirlpools

Start corners are always forced to open water.
"""

import math

from ..models.tile import GameMap, TerrainKind, Tile
from ..utils import MAP_SIZE, GameRNG
from ..utils.distance import Coordinate

# Ring radii are scaled from a 5x5 baseline
CORE_RADIUS = 1.5
MIDDLE_RADIUS = 2.5

# (upper bound of a d100 roll, kind) per ring, checked in order
CORE_TABLE = ((40, TerrainKind.TREASURE), (70, TerrainKind.PORT))
MIDDLE_TABLE = ((20, TerrainKind.ISLAND), (35, TerrainKind.PORT))
OUTER_TABLE = (
    (8, TerrainKind.STORM),
    (13, TerrainKind.REEF),
    (15, TerrainKind.WHIRLPOOL),
    (22, TerrainKind.ISLAND),
)


def start_positions(seat: int, size: int = MAP_SIZE) -> tuple[Coordinate, Coordinate]:
    """Sloop and frigate starting tiles for a join index.

    Args:
        seat: Join order index (0-3)
        size: Map width/height

    Returns:
        (sloop position, frigate position)
    """
    last = size - 1
    corners = (
        ((0, 0), (1, 0)),
        ((last, last), (last - 1, last)),
        ((last, 0), (last, 1)),
        ((0, last), (0, last - 1)),
    )
    return corners[seat]


def _roll_kind(table, roll: int) -> TerrainKind:
    for bound, kind in table:
        if roll < bound:
            return kind
    return TerrainKind.WATER


def generate_map(seed: int, size: int = MAP_SIZE, rng: GameRNG | None = None) -> GameMap:
    """Generate a deterministic map from a seed.

    Args:
        seed: RNG seed, used when no rng is given
        size: Map width/height
        rng: Optional RNG to draw from (advances its state)

    Returns:
        GameMap with no owners

    Examples:
        >>> generate_map(42) == generate_map(42)
        True
    """
    if rng is None:
        rng = GameRNG(seed)

    centre = (size - 1) / 2
    scale = size / 5
    reserved = {pos for seat in range(4) for pos in start_positions(seat, size)}

    tiles = {}
    for y in range(size):
        for x in range(size):
            roll = rng.randint(0, 99)
            if (x, y) in reserved:
                kind = TerrainKind.WATER
            else:
                distance = math.hypot(x - centre, y - centre)
                if distance < CORE_RADIUS * scale:
                    kind = _roll_kind(CORE_TABLE, roll)
                elif distance < MIDDLE_RADIUS * scale:
                    kind = _roll_kind(MIDDLE_TABLE, roll)
                else:
                    kind = _roll_kind(OUTER_TABLE, roll)
            tiles[(x, y)] = Tile(x, y, kind)

    return GameMap(size=size, tiles=tiles)
