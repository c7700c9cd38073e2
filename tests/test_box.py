import logging
import numpy as np
from palettecut.quantization.box import Box, R_AXIS, G_AXIS
from palettecut.quantization.colors import rgba, rgba_components
from palettecut.quantization.histogram import Histogram

def _hist(shape, cells):
    counts = np.zeros(shape, dtype=np.int64)
    for (i, j, k), c in cells.items():
        counts[i, j, k] = c
    return Histogram(counts)

def test_volume_from_bounds():
    assert Box(0, 0, 0, 3, 1, 0).volume == 8
    assert Box(2, 2, 2, 2, 2, 2).volume == 1

def test_shrink_tightens_to_occupied_cells():
    h = _hist((8, 8, 8), {(2, 3, 4): 1, (5, 3, 6): 2})
    box = Box.covering(h)
    box.shrink(h)
    assert box.bounds() == (2, 3, 4, 5, 3, 6)
    assert box.points == 3
    assert box.volume == 4 * 1 * 3

def test_shrink_is_idempotent():
    rng = np.random.default_rng(0)
    counts = (rng.random((8, 8, 8)) > 0.97).astype(np.int64) * rng.integers(1, 5, (8, 8, 8))
    h = Histogram(counts)
    box = Box.covering(h)
    box.shrink(h)
    first = (box.bounds(), box.points, box.volume)
    box.shrink(h)
    assert (box.bounds(), box.points, box.volume) == first

def test_shrink_empty_histogram_never_inverts():
    h = Histogram.empty(4, 4, 4)
    box = Box.covering(h)
    box.shrink(h)
    assert box.bounds() == (3, 3, 3, 3, 3, 3)
    assert box.points == 0
    assert box.volume == 1

def test_split_at_first_majority_plane():
    h = _hist((8, 8, 8), {(0, 0, 0): 3, (7, 0, 0): 1})
    box = Box.covering(h)
    box.shrink(h)
    low, high = box.split(h)
    assert low.axis_range(R_AXIS) == (0, 0) and low.points == 3
    assert high.axis_range(R_AXIS) == (1, 7) and high.points == 1

def test_split_backs_off_when_median_is_last_plane():
    h = _hist((8, 8, 8), {(0, 0, 0): 1, (7, 0, 0): 3})
    box = Box.covering(h)
    box.shrink(h)
    low, high = box.split(h)
    assert low.axis_range(R_AXIS) == (0, 6) and low.points == 1
    assert high.axis_range(R_AXIS) == (7, 7) and high.points == 3

def test_split_uses_largest_axis():
    h = _hist((8, 8, 8), {(0, 0, 0): 1, (0, 5, 0): 1})
    box = Box.covering(h)
    box.shrink(h)
    low, high = box.split(h)
    assert low.axis_range(G_AXIS) == (0, 4)
    assert high.axis_range(G_AXIS) == (5, 5)
    assert low.axis_range(R_AXIS) == high.axis_range(R_AXIS) == (0, 0)

def test_split_prefers_red_on_ties():
    h = _hist((8, 8, 8), {(1, 1, 1): 2, (3, 3, 3): 1})
    box = Box.covering(h)
    box.shrink(h)
    low, high = box.split(h)
    assert low.axis_range(R_AXIS) == (1, 1)
    assert high.axis_range(R_AXIS) == (2, 3)
    assert low.axis_range(G_AXIS) == high.axis_range(G_AXIS) == (1, 3)

def test_single_cell_cannot_split():
    h = _hist((8, 8, 8), {(4, 4, 4): 10})
    box = Box.covering(h)
    box.shrink(h)
    assert box.split(h) is None

def test_split_conserves_points_and_partitions_axis():
    rng = np.random.default_rng(42)
    counts = rng.integers(0, 4, (16, 16, 16)) * (rng.random((16, 16, 16)) > 0.9)
    h = Histogram(counts)
    box = Box.covering(h)
    box.shrink(h)
    low, high = box.split(h)
    assert low.points + high.points == box.points == h.total()
    assert low.count_points(h) == low.points
    assert high.count_points(h) == high.points

    moved = [a for a in range(3) if low.axis_range(a) != high.axis_range(a)]
    assert len(moved) == 1
    axis = moved[0]
    lo, hi = box.axis_range(axis)
    assert low.axis_range(axis)[0] == lo
    assert high.axis_range(axis)[1] == hi
    assert low.axis_range(axis)[1] + 1 == high.axis_range(axis)[0]
    assert low.volume + high.volume == box.volume

def test_mean_color_scales_before_dividing():
    h = _hist((4, 4, 4), {(1, 2, 3): 2})
    assert rgba_components(Box.covering(h).mean_color(h)) == (85, 170, 255, 255)

    # (255 * 2 // 3) // 3 == 56, dividing first would give 0
    h = _hist((4, 4, 4), {(0, 0, 0): 1, (1, 0, 0): 2})
    assert rgba_components(Box.covering(h).mean_color(h))[0] == 56

def test_mean_color_of_empty_box_is_black(caplog):
    h = Histogram.empty(4, 4, 4)
    with caplog.at_level(logging.WARNING):
        color = Box.covering(h).mean_color(h)
    assert color == rgba(0, 0, 0, 255)
    assert "empty box" in caplog.text
