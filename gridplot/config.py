from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gridplot.coords import BOUNDS_POLICIES


@dataclass(frozen=True)
class PlotConfig:
    colormap: str = "jet"       # matplotlib colormap name for value plots
    bounds: str = "raise"       # path vertices off the grid: "raise", "clip" or "skip"
    block: bool = False         # default sink blocks until the window is closed

    # per-render CSV log, off when None
    log_csv: Optional[str] = None
    log_flush_every: int = 50

    def __post_init__(self) -> None:
        if self.bounds not in BOUNDS_POLICIES:
            raise ValueError(f"bounds must be one of {BOUNDS_POLICIES}, got {self.bounds!r}")
        if self.log_flush_every < 1:
            raise ValueError(f"log_flush_every must be >= 1, got {self.log_flush_every}")
