import os
import re
from typing import Dict, Protocol

import matplotlib.pyplot as plt
import numpy as np


class DisplaySink(Protocol):
    def show(self, buffer: np.ndarray, title: str) -> None: ...


def draw_buffer(ax: plt.Axes, buffer: np.ndarray, title: str = "") -> None:
    """
    Draw a raster buffer pixel for pixel.
    (H, W) buffers are shown in grayscale over [0, 255] (bool as 0/1),
    (H, W, 3) buffers as RGB.
    """
    if buffer.ndim == 2:
        vmax = 1 if buffer.dtype == bool else 255
        ax.imshow(buffer, cmap="gray", vmin=0, vmax=vmax, interpolation="nearest")
    else:
        ax.imshow(to_rgb8(buffer), interpolation="nearest")

    ax.set_aspect("equal")
    ax.set_axis_off()
    ax.set_title(title)


def to_rgb8(buffer: np.ndarray) -> np.ndarray:
    """Buffer as uint8 image data; bool maps to 0/255, floats are clipped to [0, 255]."""
    if buffer.dtype == bool:
        return buffer.astype(np.uint8) * 255
    if buffer.dtype == np.uint8:
        return buffer
    return np.clip(np.nan_to_num(buffer, nan=0.0, posinf=255.0, neginf=0.0), 0, 255).astype(np.uint8)


class MatplotlibSink:
    """Opens one figure per render; non-blocking unless block=True."""

    def __init__(self, block: bool = False):
        self.block = block

    def show(self, buffer: np.ndarray, title: str) -> None:
        fig, ax = plt.subplots()
        draw_buffer(ax, buffer, title)
        if fig.canvas.manager is not None:
            fig.canvas.manager.set_window_title(title)
        plt.show(block=self.block)


def _slug(title: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", title).strip("_").lower()
    return slug or "render"


class SavingSink:
    """
    Writes each render to <directory>/<title slug>.png instead of showing it.
    A title seen before by this sink gets a counter: <slug>_1.png, <slug>_2.png.
    """

    def __init__(self, directory: str):
        self.directory = directory
        self._seen: Dict[str, int] = {}

    def path_for(self, title: str) -> str:
        slug = _slug(title)
        n = self._seen.get(slug, 0)
        name = slug if n == 0 else f"{slug}_{n}"
        return os.path.join(self.directory, name + ".png")

    def show(self, buffer: np.ndarray, title: str) -> None:
        os.makedirs(self.directory, exist_ok=True)
        img = to_rgb8(buffer)
        path = self.path_for(title)
        if img.ndim == 2:
            plt.imsave(path, img, cmap="gray", vmin=0, vmax=255)
        else:
            plt.imsave(path, img)
        slug = _slug(title)
        self._seen[slug] = self._seen.get(slug, 0) + 1
