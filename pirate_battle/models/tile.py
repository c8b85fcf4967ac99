"""Map tile and grid data models."""

from dataclasses import dataclass, field, replace
from enum import Enum

from ..utils.constants import CLAIMABLE_KINDS, HAZARD_KINDS, MAP_SIZE
from ..utils.distance import Coordinate


class TerrainKind(Enum):
    """Terrain of a single tile."""

    WATER = "water"
    ISLAND = "island"
    PORT = "port"
    TREASURE = "treasure"
    STORM = "storm"
    REEF = "reef"
    WHIRLPOOL = "whirlpool"

    @property
    def claimable(self) -> bool:
        return self.value in CLAIMABLE_KINDS

    @property
    def hazardous(self) -> bool:
        return self.value in HAZARD_KINDS


@dataclass(frozen=True)
class Tile:
    """One square of the map.

    Only island, port and treasure tiles can carry an owner.
    """

    x: int  # Column (0..size-1)
    y: int  # Row (0..size-1)
    kind: TerrainKind  # Terrain, fixed at generation
    owner: str | None = None  # Owning player id, claimable kinds only

    def __post_init__(self):
        """Validate tile data after initialization."""
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Invalid coordinate: ({self.x}, {self.y}) (must be >= 0)")
        if self.owner is not None and not self.kind.claimable:
            raise ValueError(f"Invalid owner on {self.kind.value} tile: {self.owner} (not claimable)")

    @property
    def coordinate(self) -> Coordinate:
        return (self.x, self.y)


@dataclass(frozen=True)
class GameMap:
    """Fixed-size square grid of tiles.

    Topology never changes after generation. Ownership changes go through
    ``with_owner``, which returns a new map and leaves this one untouched.
    """

    size: int = MAP_SIZE  # Width and height
    tiles: dict[Coordinate, Tile] = field(default_factory=dict)  # (x, y) -> Tile

    def __post_init__(self):
        """Validate grid completeness after initialization."""
        if self.size <= 0:
            raise ValueError(f"Invalid size: {self.size} (must be > 0)")
        if len(self.tiles) != self.size * self.size:
            raise ValueError(
                f"Invalid tile count: {len(self.tiles)} (must be {self.size * self.size})"
            )

    @classmethod
    def filled(cls, kind: TerrainKind = TerrainKind.WATER, size: int = MAP_SIZE) -> "GameMap":
        """Create a map where every tile has the same terrain."""
        tiles = {(x, y): Tile(x, y, kind) for x in range(size) for y in range(size)}
        return cls(size=size, tiles=tiles)

    def in_bounds(self, coordinate: Coordinate) -> bool:
        x, y = coordinate
        return 0 <= x < self.size and 0 <= y < self.size

    def tile_at(self, coordinate: Coordinate) -> Tile:
        """Look up a tile.

        Raises:
            KeyError: If the coordinate is off the map
        """
        return self.tiles[tuple(coordinate)]

    def with_owner(self, coordinate: Coordinate, owner: str | None) -> "GameMap":
        """Return a copy of the map with one tile's owner replaced."""
        tiles = dict(self.tiles)
        tiles[coordinate] = replace(tiles[coordinate], owner=owner)
        return GameMap(size=self.size, tiles=tiles)

    def with_kind(self, coordinate: Coordinate, kind: TerrainKind) -> "GameMap":
        """Return a copy of the map with one tile's terrain replaced.

        Only used while generating a map or building fixtures.
        """
        tiles = dict(self.tiles)
        tiles[coordinate] = Tile(coordinate[0], coordinate[1], kind)
        return GameMap(size=self.size, tiles=tiles)

    def claimable_tiles(self) -> list[Tile]:
        return [t for t in self.iter_tiles() if t.kind.claimable]

    def iter_tiles(self):
        """Yield tiles in row-major order (y, then x)."""
        for y in range(self.size):
            for x in range(self.size):
                yield self.tiles[(x, y)]

    def neighbours(self, coordinate: Coordinate, radius: int = 1) -> list[Coordinate]:
        """In-bounds coordinates within Chebyshev ``radius``, excluding the centre."""
        cx, cy = coordinate
        result = []
        for y in range(cy - radius, cy + radius + 1):
            for x in range(cx - radius, cx + radius + 1):
                if (x, y) != (cx, cy) and self.in_bounds((x, y)):
                    result.append((x, y))
        return result
