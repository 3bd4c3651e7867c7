from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

Point2D = Tuple[float, float]  # (x, y) grid space, origin bottom-left
Cell = Tuple[int, int]  # (col, row) raster space, origin top-left


@dataclass
class Path2D:
	points: List[Point2D] # [(x0, y0), (x1, y1), ...] in grid cells, may be fractional

	def __len__(self) -> int:
		return len(self.points)


PathLike = Union[Path2D, Sequence[Point2D]]
PathSet = Sequence[PathLike]


def path_points(path: PathLike) -> List[Point2D]:
	"""Vertices of a Path2D or of a bare sequence of (x, y) pairs."""
	if isinstance(path, Path2D):
		return list(path.points)
	return [(p[0], p[1]) for p in path]
