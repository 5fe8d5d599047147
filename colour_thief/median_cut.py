# colour_thief/median_cut.py
from __future__ import annotations

"""
Median-cut splitting of a VBox.

Exports:
  choose_split_axis(vbox) -> int
  axis_partial_sums(vbox, histo, axis) -> (partial, lookahead, total)
  find_cut(lo, hi, partial, lookahead, total) -> int
  median_cut_apply(vbox, histo) -> (VBox, VBox)

Notes:
  The cut is population balanced rather than a strict median, and is nudged
  so both halves hold pixels whenever the population allows it.
"""

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from .histogram import Histogram, histogram_view
from .vbox import VBox


def choose_split_axis(vbox: VBox) -> int:
    """Widest axis; ties go to the first of r, g, b."""
    widths = vbox.extents()
    return widths.index(max(widths))


def axis_partial_sums(
    vbox: VBox, histo: Histogram, axis: int
) -> Tuple[NDArray[np.int64], NDArray[np.int64], int]:
    """
    Cumulative population along `axis` over the box's orthogonal slab.

    Returns:
      partial[j]: pixels at coordinates lo[axis] .. lo[axis] + j
      lookahead[j]: pixels strictly beyond lo[axis] + j
      total: pixels in the box
    """
    lo, hi = vbox.lo, vbox.hi
    region = histogram_view(histo)[
        lo[0] : hi[0] + 1, lo[1] : hi[1] + 1, lo[2] : hi[2] + 1
    ]
    others = tuple(a for a in range(3) if a != axis)
    per_coord = region.sum(axis=others).astype(np.int64, copy=False)
    partial = np.cumsum(per_coord)
    total = int(partial[-1])
    lookahead = total - partial
    return partial, lookahead, total


def find_cut(
    lo: int,
    hi: int,
    partial: NDArray[np.int64],
    lookahead: NDArray[np.int64],
    total: int,
) -> int:
    """
    Last coordinate of the lower half when cutting [lo, hi].

    The pivot is the first coordinate whose cumulative population exceeds
    half the total. The cut then moves toward the larger remainder by half
    of it, and finally slides off coordinates that would leave a half empty.
    Result is always in [lo, hi - 1].
    """
    if hi <= lo:
        raise RuntimeError(f"cannot cut a single-coordinate range [{lo}, {hi}]")

    half = total // 2
    above = np.nonzero(partial > half)[0]
    if above.size == 0:
        raise RuntimeError("no cut point found")
    pivot = lo + int(above[0])

    left = pivot - lo
    right = hi - pivot
    if left <= right:
        cut = min(hi - 1, int(pivot + right / 2))
    else:
        cut = max(lo, int(pivot - 1 - left / 2))

    # nothing at or below the cut yet: move up
    while cut < hi - 1 and partial[cut - lo] == 0:
        cut += 1
    # nothing beyond the cut: move down while the lower half stays populated
    while lookahead[cut - lo] == 0 and cut > lo and partial[cut - 1 - lo] > 0:
        cut -= 1
    return cut


def median_cut_apply(vbox: VBox, histo: Histogram) -> Tuple[VBox, VBox]:
    """
    Split a box in two along its widest axis.

    Raises:
      RuntimeError: the box holds fewer than 2 pixels or is a single cell.
    """
    if vbox.count < 2:
        raise RuntimeError(f"vbox must hold at least 2 pixels, has {vbox.count}")
    if vbox.volume == 1:
        raise RuntimeError("vbox is a single cell and cannot be split")

    axis = choose_split_axis(vbox)
    partial, lookahead, total = axis_partial_sums(vbox, histo, axis)
    cut = find_cut(vbox.lo[axis], vbox.hi[axis], partial, lookahead, total)

    hi1 = list(vbox.hi)
    hi1[axis] = cut
    lo2 = list(vbox.lo)
    lo2[axis] = cut + 1

    first = VBox.from_histogram(vbox.lo, (hi1[0], hi1[1], hi1[2]), histo)
    second = VBox.from_histogram((lo2[0], lo2[1], lo2[2]), vbox.hi, histo)
    return first, second


__all__ = [
    "choose_split_axis",
    "axis_partial_sums",
    "find_cut",
    "median_cut_apply",
]
