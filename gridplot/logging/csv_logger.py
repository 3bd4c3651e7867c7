# gridplot/logging/csv_logger.py
from __future__ import annotations

import csv
import os
from dataclasses import asdict, dataclass, field, fields
from typing import Any, List, Optional

import numpy as np


@dataclass
class RenderRecord:
    title: str
    mode: str
    width: int
    height: int
    channels: int
    n_paths: int = 0
    n_vertices: int = 0
    min_px: float = 0.0
    max_px: float = 0.0

    @classmethod
    def from_buffer(cls, buffer: np.ndarray, *, title: str, mode: str, paths=()) -> "RenderRecord":
        paths = list(paths)
        finite = buffer[np.isfinite(buffer)] if buffer.dtype.kind == "f" else buffer
        return cls(
            title=title,
            mode=mode,
            width=int(buffer.shape[1]),
            height=int(buffer.shape[0]),
            channels=1 if buffer.ndim == 2 else int(buffer.shape[2]),
            n_paths=len(paths),
            n_vertices=sum(len(p) for p in paths),
            min_px=float(finite.min()) if finite.size else 0.0,
            max_px=float(finite.max()) if finite.size else 0.0,
        )


FIELDNAMES = [f.name for f in fields(RenderRecord)]


@dataclass
class CsvLogger:
    """
    Buffered CSV log with one row per displayed render.

    - Call `log(record)` after each render.
    - Rows are kept in memory and written every `flush_every` records,
      on `flush()`, or when the logger is closed / leaves a `with` block.
    - The header is written once when the file is first opened.
    """
    path: str
    flush_every: int = 50

    _buffer: List[RenderRecord] = field(default_factory=list, init=False)
    _writer: Optional[csv.DictWriter] = field(default=None, init=False)
    _file: Any = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.flush_every < 1:
            raise ValueError(f"flush_every must be >= 1, got {self.flush_every}")

    def log(self, record: RenderRecord) -> None:
        if not isinstance(record, RenderRecord):
            raise TypeError(f"CsvLogger expects a RenderRecord, got {type(record).__name__}")
        self._buffer.append(record)
        if len(self._buffer) >= self.flush_every:
            self.flush()

    def flush(self) -> None:
        if not self._buffer:
            return

        if self._writer is None:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            self._file = open(self.path, "w", newline="")
            self._writer = csv.DictWriter(self._file, fieldnames=FIELDNAMES)
            self._writer.writeheader()

        self._writer.writerows(asdict(r) for r in self._buffer)
        self._buffer.clear()
        self._file.flush()

    def close(self) -> None:
        self.flush()
        if self._file is not None:
            self._file.close()
        self._file = None
        self._writer = None

    def __enter__(self) -> "CsvLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
