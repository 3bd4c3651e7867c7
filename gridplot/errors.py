from __future__ import annotations


class GridPlotError(ValueError):
    """Base class for everything a render call can refuse to do."""


class PreconditionViolation(GridPlotError):
    pass


class InvalidDimensionError(PreconditionViolation):
    def __init__(self, ndims: int):
        super().__init__(f"only 2D grids can be rendered, got {ndims} dimensions")
        self.ndims = ndims


class EmptyValueRangeError(PreconditionViolation, ZeroDivisionError):
    def __init__(self, max_value: float):
        super().__init__(
            f"value field has no usable range (max_value={max_value}); "
            "at least one finite positive value is required"
        )
        self.max_value = max_value


class PathOutOfBoundsError(PreconditionViolation, IndexError):
    def __init__(self, path_index: int, vertex_index: int, point, size):
        super().__init__(
            f"path {path_index} vertex {vertex_index} at {point} lies outside "
            f"the {size[0]}x{size[1]} grid"
        )
        self.path_index = path_index
        self.vertex_index = vertex_index
        self.point = point


class CapacityExceededError(GridPlotError):
    def __init__(self, n_paths: int, capacity: int):
        super().__init__(
            f"{n_paths} paths supplied but only {capacity} can be drawn in distinguishable colors"
        )
        self.n_paths = n_paths
        self.capacity = capacity


class InvalidBufferError(GridPlotError):
    pass
