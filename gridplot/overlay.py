from __future__ import annotations

from typing import List

import numpy as np

from gridplot.coords import path_to_raster
from gridplot.errors import CapacityExceededError, InvalidBufferError
from gridplot.types import PathLike, PathSet, path_points

# Paths drawn by keeping a single channel lit: path 0 red, path 1 green.
# A third path would need a richer palette than channel exclusion gives.
MAX_PATHS = 2


def highlight_channel(path_index: int) -> int:
    return path_index


def _rgb_buffer(buffer: np.ndarray) -> np.ndarray:
    buffer = np.asarray(buffer)
    if buffer.ndim != 3 or buffer.shape[2] != 3:
        raise InvalidBufferError(f"path overlay needs an (H, W, 3) buffer, got shape {buffer.shape}")
    return buffer


def paths_to_raster(paths: PathSet, width: int, height: int, *, bounds: str = "raise") -> List[np.ndarray]:
    """
    Validate capacity and every vertex before anything gets drawn.
    """
    paths = list(paths)
    if len(paths) > MAX_PATHS:
        raise CapacityExceededError(len(paths), MAX_PATHS)
    return [
        path_to_raster(path_points(p), width, height, bounds=bounds, path_index=j)
        for j, p in enumerate(paths)
    ]


def overlay_paths(buffer: np.ndarray, paths: PathSet, *, bounds: str = "raise") -> np.ndarray:
    """
    Composite up to MAX_PATHS paths onto a copy of an RGB buffer.

    At every vertex of path j all channels except highlight_channel(j) are
    zeroed, so the trace keeps the base brightness in one color. Pixels off
    the paths are left as they were. The input buffer is not modified.
    """
    base = _rgb_buffer(buffer)
    height, width = base.shape[:2]
    cells = paths_to_raster(paths, width, height, bounds=bounds)

    out = base.copy()
    for j, rc in enumerate(cells):
        if rc.size == 0:
            continue
        keep = highlight_channel(j)
        cols, rows = rc[:, 0], rc[:, 1]
        for c in range(out.shape[2]):
            if c != keep:
                out[rows, cols, c] = 0
    return out


def overlay_path(buffer: np.ndarray, path: PathLike, *, bounds: str = "raise") -> np.ndarray:
    return overlay_paths(buffer, [path], bounds=bounds)


def mark_path(intensity: np.ndarray, path: PathLike, *, value: float = 255.0, bounds: str = "raise") -> np.ndarray:
    """
    Copy of a 1-channel intensity buffer with path vertices set to `value`,
    for drawing a path before a colormap is applied.
    """
    intensity = np.asarray(intensity)
    if intensity.ndim != 2:
        raise InvalidBufferError(f"mark_path needs an (H, W) buffer, got shape {intensity.shape}")
    height, width = intensity.shape
    rc = path_to_raster(path_points(path), width, height, bounds=bounds)

    out = intensity.copy()
    out[rc[:, 1], rc[:, 0]] = value
    return out
