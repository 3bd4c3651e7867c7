from __future__ import annotations

from typing import Dict

import matplotlib
import numpy as np

from gridplot.errors import InvalidBufferError

LUT_SIZE = 256


def _sample_lut(name: str) -> np.ndarray:
    cmap = matplotlib.colormaps[name]
    rgba = cmap(np.linspace(0.0, 1.0, LUT_SIZE))
    lut = np.round(rgba[:, :3] * 255.0).astype(np.uint8)
    lut.flags.writeable = False
    return lut


# Blue -> cyan -> green -> yellow -> red. Built once, never written afterwards.
JET_LUT256 = _sample_lut("jet")

_LUTS: Dict[str, np.ndarray] = {"jet": JET_LUT256}


def get_lut(name: str = "jet") -> np.ndarray:
    """
    256-entry RGB table for a matplotlib colormap name.

    "jet" always returns the shared JET_LUT256; other tables are sampled on
    first use and cached.
    """
    lut = _LUTS.get(name)
    if lut is None:
        try:
            lut = _sample_lut(name)
        except KeyError:
            raise ValueError(f"unknown colormap {name!r}") from None
        _LUTS[name] = lut
    return lut


def identity(buffer: np.ndarray) -> np.ndarray:
    return buffer


def apply_colormap(buffer: np.ndarray, lut: np.ndarray = JET_LUT256) -> np.ndarray:
    """
    Expand a 1-channel intensity buffer into (H, W, 3) uint8 through `lut`.

    Each pixel indexes the table with its truncated value. Pixels that are
    not finite or fall outside [0, 256) map to black.
    """
    buffer = np.asarray(buffer)
    if buffer.ndim != 2:
        raise InvalidBufferError(f"colormap needs a 1-channel (H, W) buffer, got shape {buffer.shape}")
    if lut.shape != (LUT_SIZE, 3):
        raise ValueError(f"lut must have shape ({LUT_SIZE}, 3), got {lut.shape}")

    vals = buffer.astype(float)
    valid = np.isfinite(vals) & (vals >= 0.0) & (vals < LUT_SIZE)

    out = np.zeros(buffer.shape + (3,), dtype=np.uint8)
    out[valid] = lut[vals[valid].astype(np.int64)]
    return out
