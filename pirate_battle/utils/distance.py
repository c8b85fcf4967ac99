"""Distance calculations for the game map.

Three metrics are in play: Euclidean for movement and weapon range,
Chebyshev for adjacency (claims, ports, spy glass area) and Manhattan
for what an observer can see around a fleet.
"""

import math

Coordinate = tuple[int, int]


def euclidean_distance(a: Coordinate, b: Coordinate) -> float:
    """Calculate straight-line distance between two tiles.

    Args:
        a: First coordinate (x, y)
        b: Second coordinate (x, y)

    Returns:
        Euclidean distance between the two tiles

    Examples:
        >>> euclidean_distance((0, 0), (2, 1))
        2.236...
        >>> euclidean_distance((5, 5), (7, 7))
        2.828...
    """
    return math.hypot(b[0] - a[0], b[1] - a[1])


def chebyshev_distance(a: Coordinate, b: Coordinate) -> int:
    """Calculate Chebyshev distance between two tiles.

    Diagonal steps cost the same as orthogonal ones, so a distance of 1
    covers all eight neighbours.

    Args:
        a: First coordinate (x, y)
        b: Second coordinate (x, y)

    Returns:
        Chebyshev distance between the two tiles

    Examples:
        >>> chebyshev_distance((0, 0), (3, 3))
        3
    """
    return max(abs(b[0] - a[0]), abs(b[1] - a[1]))


def manhattan_distance(a: Coordinate, b: Coordinate) -> int:
    """Calculate Manhattan distance between two tiles."""
    return abs(b[0] - a[0]) + abs(b[1] - a[1])
