# gridplot/grid.py
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, runtime_checkable
import numpy as np

from gridplot.types import Path2D


@runtime_checkable
class Occupiable(Protocol):
    def dimensions(self) -> Tuple[int, ...]: ...

    def is_occupied(self, x: int, y: int) -> bool: ...

    def occupancy(self, x: int, y: int) -> float: ...


@runtime_checkable
class ValueBearing(Protocol):
    def dimensions(self) -> Tuple[int, ...]: ...

    def value(self, x: int, y: int) -> float: ...

    def max_value(self) -> float: ...


@runtime_checkable
class Grid(Occupiable, ValueBearing, Protocol):
    """
    Read-only view of a 2D grid as consumed by the renderers.

    Cells are addressed in grid space: x grows with the column, y grows
    upwards, (0, 0) is the bottom-left cell.

    occupancy() is the free-ness of a cell in [0, 1] (1 = traversable);
    is_occupied() tells whether the cell blocks traversal.
    """


def grid_rank(grid) -> int:
    ndims = getattr(grid, "ndims", None)
    if ndims is None:
        ndims = len(grid.dimensions())
    return int(ndims)


@dataclass
class ArrayGrid:
    obstacle_map: np.ndarray    # (H, W) in [0,1], 1 = obstacle, row 0 is y=0
    values: np.ndarray          # (H, W) scalar field, inf where unvisited
    occupied_threshold: float = 0.5

    def __post_init__(self) -> None:
        self.obstacle_map = np.asarray(self.obstacle_map, dtype=float)
        self.values = np.asarray(self.values, dtype=float)
        if self.obstacle_map.shape != self.values.shape:
            raise ValueError(
                f"obstacles and values must share a shape, got "
                f"{self.obstacle_map.shape} and {self.values.shape}"
            )

    @classmethod
    def from_obstacles(cls, obstacle_map: np.ndarray, **kwargs) -> "ArrayGrid":
        occ = np.asarray(obstacle_map, dtype=float)
        return cls(obstacle_map=occ, values=np.full(occ.shape, np.inf), **kwargs)

    @property
    def ndims(self) -> int:
        return self.obstacle_map.ndim

    def dimensions(self) -> Tuple[int, ...]:
        # (width, height) for the 2D case
        return tuple(reversed(self.obstacle_map.shape))

    def occupancy(self, x: int, y: int) -> float:
        """Free-ness of the cell: 1.0 fully traversable, 0.0 solid obstacle."""
        return 1.0 - float(self.obstacle_map[y, x])

    def is_occupied(self, x: int, y: int) -> bool:
        return float(self.obstacle_map[y, x]) > self.occupied_threshold

    def value(self, x: int, y: int) -> float:
        return float(self.values[y, x])

    def max_value(self) -> float:
        finite = self.values[np.isfinite(self.values)]
        if finite.size == 0:
            return 0.0
        return float(finite.max())


def make_demo_grid(*, size: int = 64, source: Optional[Tuple[int, int]] = None) -> Tuple[ArrayGrid, Path2D]:
    """
    Bordered demo map with two walls, a Euclidean distance field from
    `source` standing in for arrival times, and a hand-made path.

    Cells inside obstacles keep an infinite value, as an unreached cell would.
    """
    H = W = size
    occ = np.zeros((H, W), dtype=float)

    # Borders
    occ[0, :] = 1.0
    occ[-1, :] = 1.0
    occ[:, 0] = 1.0
    occ[:, -1] = 1.0

    # Two walls, each with a gap
    occ[H // 3, 1 : W // 2] = 1.0
    occ[2 * H // 3, W // 2 : W - 1] = 1.0

    if source is None:
        source = (W // 2, H // 6)
    sx, sy = source
    ys, xs = np.mgrid[0:H, 0:W]
    values = np.hypot(xs - sx, ys - sy)
    values[occ > 0.5] = np.inf

    # Through the gap in the lower wall, back across the middle, up the left side
    x_left = 3
    points = [(float(sx), float(y)) for y in range(sy, H // 3 - 1)]
    points += [(float(x), float(H // 3 - 2)) for x in range(sx, W // 2 + 2)]
    points += [(float(W // 2 + 1), float(y)) for y in range(H // 3 - 2, H // 2)]
    points += [(float(x), float(H // 2)) for x in range(W // 2 + 1, x_left - 1, -1)]
    points += [(float(x_left), float(y)) for y in range(H // 2, H - 3)]
    path = Path2D(points=[p for i, p in enumerate(points) if i == 0 or p != points[i - 1]])
    return ArrayGrid(obstacle_map=occ, values=values), path
