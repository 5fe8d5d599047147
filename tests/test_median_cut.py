"""Tests for median-cut splitting."""

import numpy as np
import pytest

from colour_thief.histogram import build_histogram
from colour_thief.median_cut import (
    axis_partial_sums,
    choose_split_axis,
    find_cut,
    median_cut_apply,
)
from colour_thief.vbox import VBox

GREYS = [[50, 50, 50], [100, 100, 100], [150, 150, 150], [200, 200, 200], [250, 250, 250]]


def root_box(rows):
    histo, lo, hi = build_histogram(np.array(rows, dtype=np.uint8))
    return VBox.from_histogram(lo, hi, histo), histo


class TestChooseSplitAxis:
    """Tests for choose_split_axis."""

    def test_widest_axis(self) -> None:
        """Test the widest axis is chosen."""
        box = VBox(lo=(0, 0, 0), hi=(3, 9, 5), volume=240, count=2, avg=(0, 0, 0))
        assert choose_split_axis(box) == 1

    def test_ties_prefer_red_then_green(self) -> None:
        """Test r wins a three-way tie and g beats b."""
        cube = VBox(lo=(0, 0, 0), hi=(4, 4, 4), volume=125, count=2, avg=(0, 0, 0))
        assert choose_split_axis(cube) == 0
        gb = VBox(lo=(0, 0, 0), hi=(1, 4, 4), volume=50, count=2, avg=(0, 0, 0))
        assert choose_split_axis(gb) == 1


class TestPartialSums:
    """Tests for axis_partial_sums."""

    def test_cumulative_and_lookahead(self) -> None:
        """Test partial sums along r for the grey ramp."""
        box, histo = root_box(GREYS)
        partial, lookahead, total = axis_partial_sums(box, histo, 0)
        assert total == 5
        assert partial.shape == (26,)  # r in 6..31
        assert partial[0] == 1  # r = 6
        assert partial[12 - 6] == 2
        assert partial[24 - 6] == 3
        assert partial[-1] == 5
        assert (lookahead == total - partial).all()


class TestFindCut:
    """Tests for find_cut."""

    def test_biases_toward_larger_remainder(self) -> None:
        """Test the cut moves right of a left-leaning pivot."""
        box, histo = root_box(GREYS)
        partial, lookahead, total = axis_partial_sums(box, histo, 0)
        assert find_cut(6, 31, partial, lookahead, total) == 24

    def test_advances_off_empty_prefix(self) -> None:
        """Test the cut moves up while nothing lies at or below it."""
        partial = np.array([0, 0, 0, 4])
        lookahead = 4 - partial
        assert find_cut(0, 3, partial, lookahead, 4) == 2

    def test_retreats_off_empty_suffix(self) -> None:
        """Test the cut moves down while nothing lies beyond it."""
        partial = np.array([0, 1, 2, 2, 2, 2])
        lookahead = 2 - partial
        # pivot 2, right remainder 3 -> cut 3, then back to 1
        assert find_cut(0, 5, partial, lookahead, 2) == 1

    def test_stays_within_range(self) -> None:
        """Test the cut never reaches the upper bound."""
        partial = np.full(19, 2)
        lookahead = np.zeros(19, dtype=np.int64)
        cut = find_cut(0, 18, partial, lookahead, 2)
        assert 0 <= cut <= 17

    def test_no_pivot(self) -> None:
        """Test an empty population has no cut."""
        partial = np.zeros(4, dtype=np.int64)
        with pytest.raises(RuntimeError, match="no cut point found"):
            find_cut(0, 3, partial, partial.copy(), 0)

    def test_single_coordinate(self) -> None:
        """Test a one-wide range cannot be cut."""
        with pytest.raises(RuntimeError, match="single-coordinate"):
            find_cut(4, 4, np.array([2]), np.array([0]), 2)


class TestMedianCutApply:
    """Tests for median_cut_apply."""

    def test_grey_ramp_split(self) -> None:
        """Test the first split of the grey ramp."""
        box, histo = root_box(GREYS)
        first, second = median_cut_apply(box, histo)
        assert (first.lo, first.hi) == ((6, 6, 6), (24, 31, 31))
        assert (second.lo, second.hi) == ((25, 6, 6), (31, 31, 31))
        assert first.count == 3
        assert second.count == 2
        assert first.avg == (100, 100, 100)
        assert second.avg == (228, 228, 228)

    def test_children_tile_parent(self) -> None:
        """Test children partition the parent along one axis."""
        rng = np.random.default_rng(7)
        rows = rng.integers(0, 256, size=(300, 3)).tolist()
        box, histo = root_box(rows)
        first, second = median_cut_apply(box, histo)
        axis = choose_split_axis(box)
        for a in range(3):
            if a == axis:
                assert first.lo[a] == box.lo[a]
                assert first.hi[a] + 1 == second.lo[a]
                assert second.hi[a] == box.hi[a]
            else:
                assert first.lo[a] == second.lo[a] == box.lo[a]
                assert first.hi[a] == second.hi[a] == box.hi[a]
        assert first.count + second.count == box.count
        assert first.volume + second.volume == box.volume
        assert first.count > 0 and second.count > 0

    def test_parent_unchanged(self) -> None:
        """Test splitting leaves the parent box as it was."""
        box, histo = root_box(GREYS)
        before = (box.lo, box.hi, box.volume, box.count, box.avg)
        median_cut_apply(box, histo)
        assert (box.lo, box.hi, box.volume, box.count, box.avg) == before

    def test_rejects_small_population(self) -> None:
        """Test boxes with fewer than 2 pixels cannot be split."""
        box, histo = root_box([[10, 20, 30]])
        with pytest.raises(RuntimeError, match="at least 2 pixels"):
            median_cut_apply(box, histo)

    def test_rejects_single_cell(self) -> None:
        """Test a populous single-cell box cannot be split."""
        box, histo = root_box([[0, 0, 0], [1, 1, 1], [2, 2, 2]])
        assert box.volume == 1
        with pytest.raises(RuntimeError, match="single cell"):
            median_cut_apply(box, histo)
