# colour_thief/histogram.py
from __future__ import annotations

"""
Reduced-precision colour histogram.

Exports:
  get_color_index(r, g, b) -> int
  quantize_channels(pixels) -> int64 [N,3]
  build_histogram(pixels) -> (histo, lo, hi)
  histogram_view(histo) -> int64 [32,32,32] (r, g, b)
  unique_colours(pixels) -> list[RGBTuple]  # by descending count

Notes:
  Cells hold population counts of full-precision pixels whose channels,
  shifted right by RSHIFT, land on that cell.
"""

from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray

from .constants import HISTO_SIDE, HISTO_SIZE, RSHIFT, SIGBITS
from .core_types import RGBTuple, U8Pixels

Histogram = NDArray[np.int64]  # flat, HISTO_SIZE


def get_color_index(r: int, g: int, b: int) -> int:
    """Flat histogram index of a quantized (r, g, b) cell. Works on int arrays too."""
    return (r << (2 * SIGBITS)) | (g << SIGBITS) | b


def quantize_channels(pixels: U8Pixels) -> NDArray[np.int64]:
    """Quantized r/g/b coordinates for (N,3|4) pixels. Alpha is ignored."""
    return pixels[:, :3].astype(np.int64) >> RSHIFT


def build_histogram(pixels: U8Pixels) -> Tuple[Histogram, RGBTuple, RGBTuple]:
    """
    Count pixels per quantized cell and track the bounding region.

    Returns:
      histo: int64 [HISTO_SIZE]
      lo: minimal quantized (r, g, b) over all pixels
      hi: maximal quantized (r, g, b) over all pixels
    """
    if pixels.shape[0] == 0:
        raise ValueError("pixels are required to build a histogram")
    q = quantize_channels(pixels)
    idx = get_color_index(q[:, 0], q[:, 1], q[:, 2])
    histo = np.bincount(idx, minlength=HISTO_SIZE).astype(np.int64, copy=False)
    q_min = q.min(axis=0)
    q_max = q.max(axis=0)
    lo: RGBTuple = (int(q_min[0]), int(q_min[1]), int(q_min[2]))
    hi: RGBTuple = (int(q_max[0]), int(q_max[1]), int(q_max[2]))
    return histo, lo, hi


def histogram_view(histo: Histogram) -> NDArray[np.int64]:
    """Reshape a flat histogram to [r, g, b] cube indexing (no copy)."""
    return histo.reshape(HISTO_SIDE, HISTO_SIDE, HISTO_SIDE)


def unique_colours(pixels: U8Pixels) -> List[RGBTuple]:
    """Distinct full-precision RGB triples, most frequent first (ties by value)."""
    if pixels.shape[0] == 0:
        return []
    uniq, counts = np.unique(pixels[:, :3], axis=0, return_counts=True)
    items = [
        ((int(r), int(g), int(b)), int(n))
        for (r, g, b), n in zip(uniq.tolist(), counts.tolist())
    ]
    items.sort(key=lambda kv: (-kv[1], kv[0]))
    return [rgb for rgb, _n in items]


__all__ = [
    "Histogram",
    "get_color_index",
    "quantize_channels",
    "build_histogram",
    "histogram_view",
    "unique_colours",
]
