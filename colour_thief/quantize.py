# colour_thief/quantize.py
from __future__ import annotations

"""
Modified median-cut quantization (MMCQ).

Exports:
  quantize(pixels, max_colors, *, debug=False) -> ColourPalette
  iterate(queue, target, histo, *, debug=False) -> int
  is_splittable(vbox) -> bool

Flow:
  pixels -> histogram + bounding box -> phase A (split by population until
  FRACT_BY_POPULATION * max_colors boxes) -> phase B (split by
  population x volume until max_colors boxes) -> VBoxColourMap.

  When the input has no more distinct colours than max_colors, the distinct
  colours are returned as-is in a SimpleColourMap.
"""

import numpy as np

from .constants import (
    FRACT_BY_POPULATION,
    MAX_ITERATIONS,
    MAX_MAX_COLORS,
    MIN_MAX_COLORS,
)
from .core_types import PixelsLike, as_pixel_array
from .histogram import Histogram, build_histogram, unique_colours
from .median_cut import median_cut_apply
from .palette import ColourPalette, SimpleColourMap, VBoxColourMap
from .pqueue import PriorityQueue
from .utils import debug_log, key_value_pairs_to_string
from .vbox import VBox, compare_by_count, compare_by_count_volume


def is_splittable(vbox: VBox) -> bool:
    """Boxes with fewer than 2 pixels, or a single cell, are settled."""
    return vbox.count >= 2 and vbox.volume > 1


def iterate(
    queue: PriorityQueue[VBox],
    target: float,
    histo: Histogram,
    *,
    debug: bool = False,
) -> int:
    """
    Pop the leading box, split it and push both halves until the queue holds
    `target` boxes. Settled boxes are pushed back unchanged. Bounded by
    MAX_ITERATIONS; running out of iterations is not an error.

    Returns the number of splits performed.
    """
    splits = 0
    for _ in range(MAX_ITERATIONS):
        if len(queue) >= target or len(queue) == 0:
            break
        vbox = queue.pop()
        if not is_splittable(vbox):
            queue.push(vbox)
            continue
        first, second = median_cut_apply(vbox, histo)
        queue.push(first)
        queue.push(second)
        splits += 1
    else:
        if debug:
            debug_log(
                f"iteration cap {MAX_ITERATIONS} reached with {len(queue)} boxes"
            )
    return splits


def quantize(
    pixels: PixelsLike, max_colors: int, *, debug: bool = False
) -> ColourPalette:
    """
    Reduce `pixels` to a palette of at most `max_colors` colours.

    Args:
      pixels    : (N,3|4) uint8 array or sequence of RGB(A) tuples. Alpha is ignored.
      max_colors: palette size cap in [1, 256]
      debug     : print per-phase stats

    Raises:
      ValueError: max_colors out of range, or no pixels.
    """
    if isinstance(max_colors, bool) or not isinstance(max_colors, (int, np.integer)):
        raise ValueError(
            f"max_colors must be an int, got {type(max_colors).__name__}"
        )
    max_colors = int(max_colors)
    if not MIN_MAX_COLORS <= max_colors <= MAX_MAX_COLORS:
        raise ValueError(
            f"max_colors must be between {MIN_MAX_COLORS} and {MAX_MAX_COLORS}, "
            f"got {max_colors}"
        )
    if pixels is None:
        raise ValueError("pixels are required")
    arr = as_pixel_array(pixels)
    if arr.shape[0] == 0:
        raise ValueError("pixels are required")

    uniques = unique_colours(arr)
    if len(uniques) <= max_colors:
        if debug:
            debug_log(
                key_value_pairs_to_string(
                    [("Pixels", int(arr.shape[0])), ("Distinct colours", len(uniques))]
                )
            )
        return SimpleColourMap(uniques)

    histo, lo, hi = build_histogram(arr)
    root = VBox.from_histogram(lo, hi, histo)

    queue: PriorityQueue[VBox] = PriorityQueue(compare_by_count)
    queue.push(root)
    splits_a = iterate(queue, FRACT_BY_POPULATION * max_colors, histo, debug=debug)

    queue_b: PriorityQueue[VBox] = PriorityQueue(compare_by_count_volume)
    for vbox in queue.drain():
        queue_b.push(vbox)
    splits_b = iterate(queue_b, max_colors, histo, debug=debug)

    # empty boxes carry a midpoint colour no input pixel produced
    vboxes = [v for v in queue_b.drain() if v.count > 0]
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Pixels", int(arr.shape[0])),
                    ("Distinct colours", len(uniques)),
                    ("Phase A splits", splits_a),
                    ("Phase B splits", splits_b),
                    ("Boxes", len(vboxes)),
                ]
            )
        )
    return VBoxColourMap(vboxes)


__all__ = ["quantize", "iterate", "is_splittable"]
