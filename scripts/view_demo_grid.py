# scripts/view_demo_grid.py
from __future__ import annotations

import argparse
import logging

import matplotlib.pyplot as plt

from gridplot.config import PlotConfig
from gridplot.grid import make_demo_grid
from gridplot.plotter import GridPlotter
from gridplot.types import Path2D
from gridplot.viz.display import MatplotlibSink, SavingSink

MODES = ("map", "occupancy", "values", "map-path", "occupancy-path", "map-paths", "values-path")


def parse_args():
    p = argparse.ArgumentParser(description="Render the demo grid in one or all modes.")
    p.add_argument("--mode", choices=MODES + ("all",), default="all")
    p.add_argument("--size", type=int, default=64)
    p.add_argument("--name", default="Demo")
    p.add_argument("--colormap", default="jet")
    p.add_argument("--bounds", choices=("raise", "clip", "skip"), default="raise")
    p.add_argument("--save-dir", default=None, help="write PNGs here instead of opening windows")
    p.add_argument("--log-csv", default=None)
    p.add_argument("--block", action="store_true", help="wait for each window to be closed")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    grid, path = make_demo_grid(size=args.size)
    # second path for the two-path view: the first one mirrored left-right
    mirrored = Path2D(points=[(args.size - 1 - x, y) for x, y in path.points])

    config = PlotConfig(colormap=args.colormap, bounds=args.bounds, block=args.block, log_csv=args.log_csv)
    sink = SavingSink(args.save_dir) if args.save_dir else MatplotlibSink(block=args.block)

    renders = {
        "map": lambda p: p.plot_map(grid, args.name),
        "occupancy": lambda p: p.plot_occupancy_map(grid, args.name),
        "values": lambda p: p.plot_arrival_times(grid, args.name),
        "map-path": lambda p: p.plot_map_path(grid, path, args.name),
        "occupancy-path": lambda p: p.plot_occupancy_path(grid, path, args.name),
        "map-paths": lambda p: p.plot_map_paths(grid, [path, mirrored], args.name),
        "values-path": lambda p: p.plot_arrival_times_path(grid, path, args.name),
    }
    selected = MODES if args.mode == "all" else (args.mode,)

    with GridPlotter(sink=sink, config=config) as plotter:
        for mode in selected:
            renders[mode](plotter)

    if not args.save_dir and not args.block:
        plt.show()


if __name__ == "__main__":
    main()
