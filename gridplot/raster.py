from __future__ import annotations

import logging
from enum import Enum

import numpy as np

from gridplot.colormap import apply_colormap, get_lut
from gridplot.coords import to_raster
from gridplot.errors import InvalidDimensionError
from gridplot.extract import Extractor, binary_free, continuous_occupancy, scalar_field
from gridplot.grid import grid_rank

log = logging.getLogger(__name__)


class RenderMode(Enum):
    MAP = "map"                     # binary free space, bool (H, W)
    OCCUPANCY_MAP = "occupancy"     # continuous occupancy, float (H, W)
    ARRIVAL_TIMES = "values"        # normalized values through a colormap, uint8 (H, W, 3)


def check_grid(grid):
    """Return (width, height) of a 2D grid, or raise InvalidDimensionError."""
    ndims = grid_rank(grid)
    if ndims != 2:
        raise InvalidDimensionError(ndims)
    width, height = grid.dimensions()
    return int(width), int(height)


def rasterize_channel(grid, extractor: Extractor, dtype=float) -> np.ndarray:
    """
    Fill an (H, W) buffer with extractor(grid, x, y) for every cell, with the
    y axis flipped so the top row of the image is the top of the map.
    """
    width, height = check_grid(grid)
    img = np.zeros((height, width), dtype=dtype)
    for y in range(height):
        for x in range(width):
            col, row = to_raster(x, y, height)
            img[row, col] = extractor(grid, x, y)
    return img


def value_intensity(grid) -> np.ndarray:
    """Scalar field normalized to [0, 255] against grid.max_value()."""
    # rank check has to run before max_value() is asked for
    check_grid(grid)
    return rasterize_channel(grid, scalar_field(grid.max_value()))


def rasterize(grid, mode: RenderMode, *, colormap: str = "jet") -> np.ndarray:
    mode = RenderMode(mode)
    if mode is RenderMode.MAP:
        img = rasterize_channel(grid, binary_free, dtype=bool)
    elif mode is RenderMode.OCCUPANCY_MAP:
        img = rasterize_channel(grid, continuous_occupancy)
    else:
        img = apply_colormap(value_intensity(grid), get_lut(colormap))

    log.debug("rasterized grid as %s -> %s %s", mode.name, img.shape, img.dtype)
    return img


def rasterize_base(grid, source: str = "map") -> np.ndarray:
    """
    Three-channel float base layer for path overlays.

    source="map":       free cells 255 on every channel, obstacles 0
    source="occupancy": occupancy * 255 on every channel
    """
    if source == "map":
        channel = rasterize_channel(grid, binary_free) * 255.0
    elif source == "occupancy":
        channel = rasterize_channel(grid, continuous_occupancy)
    else:
        raise ValueError(f"source must be 'map' or 'occupancy', got {source!r}")
    return np.repeat(channel[:, :, np.newaxis], 3, axis=2)
