from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from gridplot.colormap import apply_colormap, get_lut
from gridplot.config import PlotConfig
from gridplot.logging.csv_logger import CsvLogger, RenderRecord
from gridplot.overlay import mark_path, overlay_path, overlay_paths
from gridplot.raster import RenderMode, rasterize, rasterize_base, value_intensity
from gridplot.types import PathLike, PathSet
from gridplot.viz.display import DisplaySink, MatplotlibSink

log = logging.getLogger(__name__)

# Appended to the caller's name; downstream tooling matches on these.
MAP_SUFFIX = " Map"
OCCUPANCY_MAP_SUFFIX = " Occupancy Map"
VALUES_SUFFIX = " Grid values"
MAP_PATH_SUFFIX = " Map and Path"
MAP_PATHS_SUFFIX = " Map and Paths"
VALUES_PATH_SUFFIX = " Values and Path"


def _emit(
    buffer: np.ndarray,
    title: str,
    mode: str,
    paths: Sequence[PathLike],
    sink: Optional[DisplaySink],
    config: PlotConfig,
    logger: Optional[CsvLogger],
) -> np.ndarray:
    if sink is None:
        sink = MatplotlibSink(block=config.block)
    log.debug("showing %r (%s, shape=%s, paths=%d)", title, mode, buffer.shape, len(paths))
    sink.show(buffer, title)
    if logger is not None:
        logger.log(RenderRecord.from_buffer(buffer, title=title, mode=mode, paths=paths))
    return buffer


def plot_map(grid, name: str = "", *, sink=None, config: PlotConfig = PlotConfig(), logger=None) -> np.ndarray:
    """
    Binary map: free cells bright, occupied cells dark. (H, W) bool.
    """
    img = rasterize(grid, RenderMode.MAP)
    return _emit(img, name + MAP_SUFFIX, "map", [], sink, config, logger)


def plot_occupancy_map(grid, name: str = "", *, sink=None, config: PlotConfig = PlotConfig(), logger=None) -> np.ndarray:
    img = rasterize(grid, RenderMode.OCCUPANCY_MAP)
    return _emit(img, name + OCCUPANCY_MAP_SUFFIX, "occupancy", [], sink, config, logger)


def plot_arrival_times(grid, name: str = "", *, sink=None, config: PlotConfig = PlotConfig(), logger=None) -> np.ndarray:
    """
    Grid values normalized by grid.max_value() and mapped through the
    configured colormap (jet by default). Unvisited cells show black.
    """
    img = rasterize(grid, RenderMode.ARRIVAL_TIMES, colormap=config.colormap)
    return _emit(img, name + VALUES_SUFFIX, "values", [], sink, config, logger)


def plot_map_path(grid, path: PathLike, name: str = "", *, sink=None, config: PlotConfig = PlotConfig(), logger=None) -> np.ndarray:
    """
    Binary map as white-on-black RGB with the path drawn in red.
    """
    img = overlay_path(rasterize_base(grid, "map"), path, bounds=config.bounds)
    return _emit(img, name + MAP_PATH_SUFFIX, "map+path", [path], sink, config, logger)


def plot_occupancy_path(grid, path: PathLike, name: str = "", *, sink=None, config: PlotConfig = PlotConfig(), logger=None) -> np.ndarray:
    """
    Continuous occupancy as RGB with the path drawn in red. Shares its
    title suffix with plot_map_path.
    """
    img = overlay_path(rasterize_base(grid, "occupancy"), path, bounds=config.bounds)
    return _emit(img, name + MAP_PATH_SUFFIX, "occupancy+path", [path], sink, config, logger)


def plot_map_paths(grid, paths: PathSet, name: str = "", *, sink=None, config: PlotConfig = PlotConfig(), logger=None) -> np.ndarray:
    """
    Binary map with up to two paths, the first in red and the second in green.
    Cells shared by both paths end up black.
    """
    paths = list(paths)
    img = overlay_paths(rasterize_base(grid, "map"), paths, bounds=config.bounds)
    return _emit(img, name + MAP_PATHS_SUFFIX, "map+paths", paths, sink, config, logger)


def plot_arrival_times_path(grid, path: PathLike, name: str = "", *, sink=None, config: PlotConfig = PlotConfig(), logger=None) -> np.ndarray:
    """
    Grid values with the path written at full intensity before the colormap,
    so on jet the path shows in the hottest color.
    """
    intensity = mark_path(value_intensity(grid), path, bounds=config.bounds)
    img = apply_colormap(intensity, get_lut(config.colormap))
    return _emit(img, name + VALUES_PATH_SUFFIX, "values+path", [path], sink, config, logger)


class GridPlotter:
    """
    Holds a sink, a PlotConfig and, when config.log_csv is set, the CSV
    render log shared by every plot made through it.

        with GridPlotter(sink=SavingSink("out")) as plotter:
            plotter.plot_map(grid, "demo")
    """

    def __init__(self, sink: Optional[DisplaySink] = None, config: PlotConfig = PlotConfig()):
        self.config = config
        self.sink = sink if sink is not None else MatplotlibSink(block=config.block)
        self.logger: Optional[CsvLogger] = None
        if config.log_csv is not None:
            self.logger = CsvLogger(config.log_csv, flush_every=config.log_flush_every)

    def _kw(self):
        return dict(sink=self.sink, config=self.config, logger=self.logger)

    def plot_map(self, grid, name: str = "") -> np.ndarray:
        return plot_map(grid, name, **self._kw())

    def plot_occupancy_map(self, grid, name: str = "") -> np.ndarray:
        return plot_occupancy_map(grid, name, **self._kw())

    def plot_arrival_times(self, grid, name: str = "") -> np.ndarray:
        return plot_arrival_times(grid, name, **self._kw())

    def plot_map_path(self, grid, path: PathLike, name: str = "") -> np.ndarray:
        return plot_map_path(grid, path, name, **self._kw())

    def plot_occupancy_path(self, grid, path: PathLike, name: str = "") -> np.ndarray:
        return plot_occupancy_path(grid, path, name, **self._kw())

    def plot_map_paths(self, grid, paths: PathSet, name: str = "") -> np.ndarray:
        return plot_map_paths(grid, paths, name, **self._kw())

    def plot_arrival_times_path(self, grid, path: PathLike, name: str = "") -> np.ndarray:
        return plot_arrival_times_path(grid, path, name, **self._kw())

    def close(self) -> None:
        if self.logger is not None:
            self.logger.close()

    def __enter__(self) -> "GridPlotter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
