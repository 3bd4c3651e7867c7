import numpy as np
import pytest

from gridplot.errors import CapacityExceededError, InvalidBufferError, PathOutOfBoundsError
from gridplot.grid import ArrayGrid
from gridplot.overlay import MAX_PATHS, mark_path, overlay_path, overlay_paths
from gridplot.raster import rasterize_base
from gridplot.types import Path2D

RED = [255.0, 0.0, 0.0]
GREEN = [0.0, 255.0, 0.0]
WHITE = [255.0, 255.0, 255.0]


def _free_base(W=3, H=3):
    return rasterize_base(ArrayGrid.from_obstacles(np.zeros((H, W))))


def _changed(a, b):
    return np.argwhere((a != b).any(axis=2))


def test_diagonal_lands_on_anti_diagonal():
    base = _free_base()
    out = overlay_path(base, Path2D(points=[(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)]))
    changed = sorted(map(tuple, _changed(base, out).tolist()))
    # (row, col): bottom-left to top-right of the image
    assert changed == [(0, 2), (1, 1), (2, 0)]
    for row, col in changed:
        assert out[row, col].tolist() == RED


def test_base_is_not_modified():
    base = _free_base()
    before = base.copy()
    overlay_path(base, [(0.0, 0.0)])
    assert np.array_equal(base, before)


def test_pixels_off_the_path_are_unchanged():
    occ = np.zeros((4, 5))
    occ[2, 3] = 1.0
    base = rasterize_base(ArrayGrid.from_obstacles(occ))
    path = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (1.0, 2.0)]
    out = overlay_path(base, path)
    mask = np.zeros((4, 5), dtype=bool)
    for x, y in path:
        mask[4 - int(y) - 1, int(x)] = True
    assert np.array_equal(out[~mask], base[~mask])


def test_path_over_obstacle_stays_dark():
    occ = np.zeros((3, 3))
    occ[0, 0] = 1.0
    base = rasterize_base(ArrayGrid.from_obstacles(occ))
    out = overlay_path(base, [(0.0, 0.0)])
    assert out[2, 0].tolist() == [0.0, 0.0, 0.0]


def test_two_paths_get_two_colors():
    base = _free_base()
    out = overlay_paths(base, [[(0.0, 0.0)], [(2.0, 0.0)]])
    assert out[2, 0].tolist() == RED
    assert out[2, 2].tolist() == GREEN
    assert out[1, 1].tolist() == WHITE


def test_shared_cell_goes_black():
    base = _free_base()
    out = overlay_paths(base, [[(1.0, 1.0)], [(1.0, 1.0)]])
    assert out[1, 1].tolist() == [0.0, 0.0, 0.0]


def test_single_path_matches_first_of_many():
    base = _free_base()
    path = [(0.0, 2.0), (1.0, 2.0)]
    assert np.array_equal(overlay_path(base, path), overlay_paths(base, [path]))


def test_third_path_is_rejected():
    base = _free_base()
    paths = [[(0.0, 0.0)]] * (MAX_PATHS + 1)
    with pytest.raises(CapacityExceededError) as err:
        overlay_paths(base, paths)
    assert err.value.n_paths == 3
    assert err.value.capacity == 2


def test_out_of_bounds_vertex_rejected_before_drawing():
    base = _free_base()
    with pytest.raises(PathOutOfBoundsError):
        overlay_paths(base, [[(0.0, 0.0)], [(1.0, 1.0), (3.0, 0.0)]])


def test_out_of_bounds_vertex_clip_and_skip():
    base = _free_base()
    clipped = overlay_path(base, [(7.0, 0.0)], bounds="clip")
    assert clipped[2, 2].tolist() == RED
    skipped = overlay_path(base, [(7.0, 0.0)], bounds="skip")
    assert np.array_equal(skipped, base)


def test_fractional_vertex_truncates():
    base = _free_base()
    out = overlay_path(base, [(1.9, 0.6)])
    assert out[2, 1].tolist() == RED


def test_overlay_needs_rgb_buffer():
    with pytest.raises(InvalidBufferError):
        overlay_path(np.zeros((3, 3)), [(0.0, 0.0)])


def test_empty_path_set_returns_copy():
    base = _free_base()
    out = overlay_paths(base, [])
    assert out is not base
    assert np.array_equal(out, base)


def test_mark_path_sets_full_intensity():
    inten = np.zeros((3, 3))
    out = mark_path(inten, Path2D(points=[(0.0, 0.0), (2.0, 2.0)]))
    assert out[2, 0] == 255.0
    assert out[0, 2] == 255.0
    assert out.sum() == 510.0
    assert inten.sum() == 0.0
    with pytest.raises(InvalidBufferError):
        mark_path(np.zeros((3, 3, 3)), [(0.0, 0.0)])
