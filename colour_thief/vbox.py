# colour_thief/vbox.py
from __future__ import annotations

"""
Volume boxes over the quantized colour cube.

A VBox is an inclusive axis-aligned region [lo, hi] of quantized coordinates
plus statistics derived from the histogram when it is built. Boxes are never
mutated; splitting produces new boxes.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .constants import RSHIFT
from .core_types import RGBTuple
from .histogram import Histogram, histogram_view

MULT = 1 << RSHIFT


def _region(histo: Histogram, lo: RGBTuple, hi: RGBTuple) -> np.ndarray:
    cube = histogram_view(histo)
    return cube[lo[0] : hi[0] + 1, lo[1] : hi[1] + 1, lo[2] : hi[2] + 1]


def box_volume(lo: RGBTuple, hi: RGBTuple) -> int:
    """Number of quantized cells in [lo, hi]."""
    return (hi[0] - lo[0] + 1) * (hi[1] - lo[1] + 1) * (hi[2] - lo[2] + 1)


def box_average(lo: RGBTuple, hi: RGBTuple, region: np.ndarray) -> RGBTuple:
    """
    Population-weighted centroid of a region, in full 8-bit precision.

    Cell centres sit at (coord + 0.5) * MULT. A single-cell box maps to its
    cell corner; an empty box maps to the midpoint of its extent.
    """
    if lo == hi:
        return (lo[0] * MULT, lo[1] * MULT, lo[2] * MULT)

    ntot = int(region.sum())
    if ntot == 0:
        return (
            MULT * (lo[0] + hi[0] + 1) // 2,
            MULT * (lo[1] + hi[1] + 1) // 2,
            MULT * (lo[2] + hi[2] + 1) // 2,
        )

    out = []
    for axis in range(3):
        others = tuple(a for a in range(3) if a != axis)
        per_coord = region.sum(axis=others)
        centres = np.arange(lo[axis], hi[axis] + 1, dtype=np.int64) * MULT + MULT // 2
        out.append(int(per_coord @ centres) // ntot)
    return (out[0], out[1], out[2])


@dataclass(frozen=True)
class VBox:
    """Inclusive quantized region with volume, population and average colour."""

    lo: RGBTuple
    hi: RGBTuple
    volume: int
    count: int
    avg: RGBTuple

    @classmethod
    def from_histogram(cls, lo: RGBTuple, hi: RGBTuple, histo: Histogram) -> "VBox":
        if any(lo[i] > hi[i] for i in range(3)):
            raise ValueError(f"invalid box bounds lo={lo} hi={hi}")
        lo = (int(lo[0]), int(lo[1]), int(lo[2]))
        hi = (int(hi[0]), int(hi[1]), int(hi[2]))
        region = _region(histo, lo, hi)
        return cls(
            lo=lo,
            hi=hi,
            volume=box_volume(lo, hi),
            count=int(region.sum()),
            avg=box_average(lo, hi, region),
        )

    def extents(self) -> Tuple[int, int, int]:
        """Inclusive width per axis (r, g, b)."""
        return (
            self.hi[0] - self.lo[0] + 1,
            self.hi[1] - self.lo[1] + 1,
            self.hi[2] - self.lo[2] + 1,
        )

    def contains(self, pixel: Sequence[int]) -> bool:
        """True if the pixel's quantized coordinate lies inside this box."""
        r = int(pixel[0]) >> RSHIFT
        g = int(pixel[1]) >> RSHIFT
        b = int(pixel[2]) >> RSHIFT
        return (
            self.lo[0] <= r <= self.hi[0]
            and self.lo[1] <= g <= self.hi[1]
            and self.lo[2] <= b <= self.hi[2]
        )


# Comparators (descending, for PriorityQueue)


def _descending(a: int, b: int) -> int:
    return (b > a) - (b < a)


def compare_by_count(a: VBox, b: VBox) -> int:
    """Most populous box first."""
    return _descending(a.count, b.count)


def compare_by_count_volume(a: VBox, b: VBox) -> int:
    """Largest population x volume first."""
    return _descending(a.count * a.volume, b.count * b.volume)


__all__ = [
    "MULT",
    "VBox",
    "box_volume",
    "box_average",
    "compare_by_count",
    "compare_by_count_volume",
]
