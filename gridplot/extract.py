from __future__ import annotations

import math
from typing import Callable

from gridplot.errors import EmptyValueRangeError

# (grid, x, y) -> pixel value
Extractor = Callable[[object, int, int], float]


def binary_free(grid, x: int, y: int) -> float:
    """1.0 for free cells, 0.0 for occupied ones (free space renders bright)."""
    return 0.0 if grid.is_occupied(x, y) else 1.0


def continuous_occupancy(grid, x: int, y: int) -> float:
    return grid.occupancy(x, y) * 255.0


def scalar_field(max_value: float) -> Extractor:
    """
    Build an extractor normalizing grid values to [0, 255] against max_value.

    Unvisited cells (inf) come out as inf; the colormap paints them black.
    """
    if not math.isfinite(max_value) or max_value <= 0:
        raise EmptyValueRangeError(max_value)

    def extract(grid, x: int, y: int) -> float:
        return grid.value(x, y) / max_value * 255.0

    return extract
