import numpy as np
import pytest

from gridplot.grid import ArrayGrid, Grid, grid_rank, make_demo_grid


def test_array_grid_dimensions_are_width_height():
    g = ArrayGrid.from_obstacles(np.zeros((3, 5)))
    assert g.dimensions() == (5, 3)
    assert g.ndims == 2
    assert isinstance(g, Grid)


def test_array_grid_is_indexed_x_then_y():
    occ = np.zeros((4, 4))
    occ[1, 3] = 1.0  # row = y, col = x
    g = ArrayGrid.from_obstacles(occ)
    assert g.is_occupied(3, 1)
    assert not g.is_occupied(1, 3)
    # occupancy reports free-ness
    assert g.occupancy(3, 1) == 0.0
    assert g.occupancy(1, 3) == 1.0


def test_array_grid_threshold():
    g = ArrayGrid.from_obstacles(np.array([[0.3, 0.7]]), occupied_threshold=0.5)
    assert not g.is_occupied(0, 0)
    assert g.is_occupied(1, 0)


def test_max_value_ignores_unvisited_cells():
    vals = np.array([[1.0, np.inf], [4.0, 2.0]])
    g = ArrayGrid(obstacle_map=np.zeros((2, 2)), values=vals)
    assert g.max_value() == 4.0


def test_max_value_is_zero_when_nothing_was_reached():
    g = ArrayGrid.from_obstacles(np.zeros((2, 2)))
    assert g.max_value() == 0.0


def test_shape_mismatch_rejected():
    with pytest.raises(ValueError):
        ArrayGrid(obstacle_map=np.zeros((2, 2)), values=np.zeros((2, 3)))


def test_grid_rank_falls_back_to_dimensions():
    class Cube:
        def dimensions(self):
            return (2, 2, 2)

    assert grid_rank(Cube()) == 3


def test_demo_path_stays_on_free_cells():
    grid, path = make_demo_grid(size=64)
    W, H = grid.dimensions()
    assert len(path.points) > 0
    for x, y in path.points:
        assert 0 <= x < W and 0 <= y < H
        assert not grid.is_occupied(int(x), int(y))
    # obstacles are never reached
    assert np.isinf(grid.value(0, 0))
    assert grid.max_value() > 0.0
