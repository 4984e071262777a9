"""
cloudvm Grid Management

Fixed 30x30x30 integer coordinate space shared by the grid evaluator and
the cloud counter.

Provides:
- Point type with bounds-checked addition
- Dense boolean grid allocation (numpy)
- Deterministic iteration over every coordinate
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple
import numpy as np

GRID_EXTENT = 30
GRID_SHAPE: Tuple[int, int, int] = (GRID_EXTENT, GRID_EXTENT, GRID_EXTENT)
NUM_POINTS = GRID_EXTENT ** 3


@dataclass(frozen=True)
class Point:
    """Integer coordinate triple. Only in-bounds points may index a grid."""
    x: int
    y: int
    z: int

    def __add__(self, other: 'Point') -> Optional['Point']:
        return combine(self, other)

    @property
    def index(self) -> Tuple[int, int, int]:
        """numpy index tuple for this point."""
        return (self.x, self.y, self.z)


CARDINALS: Tuple[Point, ...] = (
    Point(1, 0, 0),
    Point(-1, 0, 0),
    Point(0, 1, 0),
    Point(0, -1, 0),
    Point(0, 0, 1),
    Point(0, 0, -1),
)


def in_bounds(point: Point) -> bool:
    """True if every component lies in [0, GRID_EXTENT)."""
    return (0 <= point.x < GRID_EXTENT
            and 0 <= point.y < GRID_EXTENT
            and 0 <= point.z < GRID_EXTENT)


def combine(a: Point, b: Point) -> Optional[Point]:
    """
    Componentwise sum of two points, or None if it leaves the grid.

    Out-of-range is the normal outcome for neighbours of boundary cells,
    so it is reported as a value rather than an exception.
    """
    result = Point(a.x + b.x, a.y + b.y, a.z + b.z)
    if not in_bounds(result):
        return None
    return result


def new_grid() -> np.ndarray:
    """Allocate a GRID_SHAPE boolean grid initialised to False."""
    return np.zeros(GRID_SHAPE, dtype=bool)


def check_grid(grid: np.ndarray, name: str = "grid") -> None:
    """Raise ValueError unless grid is a GRID_SHAPE array."""
    if not isinstance(grid, np.ndarray) or grid.shape != GRID_SHAPE:
        shape = getattr(grid, 'shape', None)
        raise ValueError(f"{name} must be an array of shape {GRID_SHAPE}, got {shape}")


def iter_points() -> Iterator[Point]:
    """Every coordinate exactly once, x-major then y then z."""
    for x in range(GRID_EXTENT):
        for y in range(GRID_EXTENT):
            for z in range(GRID_EXTENT):
                yield Point(x, y, z)
