from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from gridplot.errors import PathOutOfBoundsError
from gridplot.types import Cell, Point2D

log = logging.getLogger(__name__)

BOUNDS_POLICIES = ("raise", "clip", "skip")


def to_raster(x: int, y: int, height: int) -> Cell:
    """
    Map grid cell (x, y) to raster (col, row).

    Convention:
      - grid space has (0,0) at the bottom-left, y grows upwards
      - raster space has (0,0) at the top-left, row grows downwards
    No bounds checks are done here.
    """
    return (x, height - y - 1)


def to_grid(col: int, row: int, height: int) -> Tuple[int, int]:
    """
    Inverse of to_raster.
    """
    return (col, height - row - 1)


def _cell_index(v: float, size: int) -> Optional[int]:
    # int() truncates toward zero, so -0.5 still lands on cell 0
    if math.isnan(v):
        return None
    if math.isinf(v):
        return size if v > 0 else -1
    return int(v)


def path_to_raster(
    points: Sequence[Point2D],
    width: int,
    height: int,
    *,
    bounds: str = "raise",
    path_index: int = 0,
) -> np.ndarray:
    """
    Truncate path vertices to cells and map them to raster space.

    Returns an (N, 2) int array of (col, row). Vertices outside the grid are
    handled by `bounds`:
      - "raise": PathOutOfBoundsError on the first offending vertex
      - "clip":  clamp into the grid (NaN vertices are dropped)
      - "skip":  drop the vertex
    """
    if bounds not in BOUNDS_POLICIES:
        raise ValueError(f"bounds must be one of {BOUNDS_POLICIES}, got {bounds!r}")

    out = np.empty((len(points), 2), dtype=np.int64)
    n = 0
    n_outside = 0
    for i, p in enumerate(points):
        x, y = _cell_index(p[0], width), _cell_index(p[1], height)
        inside = x is not None and y is not None and (0 <= x < width) and (0 <= y < height)
        if not inside:
            n_outside += 1
            if bounds == "raise":
                raise PathOutOfBoundsError(path_index, i, (p[0], p[1]), (width, height))
            if bounds == "skip" or x is None or y is None:
                continue
            x = min(max(x, 0), width - 1)
            y = min(max(y, 0), height - 1)
        out[n] = to_raster(x, y, height)
        n += 1

    if n_outside:
        log.warning(
            "path %d: %d of %d vertices outside %dx%d grid (%s)",
            path_index, n_outside, len(points), width, height,
            "clipped" if bounds == "clip" else "skipped",
        )
    return out[:n]
