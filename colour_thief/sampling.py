# colour_thief/sampling.py
from __future__ import annotations

"""
Pixel sampling and the palette facade.

Exports:
  SamplingOptions(quality=10, min_alpha=125, max_red=250, max_green=250, max_blue=250)
  validate_options(color_count, options)
  create_pixel_array(pixels, options) -> uint8 [M,3]
  get_palette(pixels, color_count=10, options=None, *, debug=False) -> list[RGBTuple]
  get_color(pixels, options=None, *, debug=False) -> RGBTuple

Notes:
  Every `quality`-th pixel is considered. Pixels below `min_alpha` and
  near-white pixels (all three channels above their max_* threshold) are
  dropped before quantization. RGB input is treated as fully opaque.
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .constants import (
    DEFAULT_COLOR_COUNT,
    DEFAULT_MAX_BLUE,
    DEFAULT_MAX_GREEN,
    DEFAULT_MAX_RED,
    DEFAULT_MIN_ALPHA,
    DEFAULT_QUALITY,
    DOMINANT_COLOR_COUNT,
    MAX_COLOR_COUNT,
    MIN_COLOR_COUNT,
)
from .core_types import PixelsLike, RGBTuple, U8Pixels, as_pixel_array
from .quantize import quantize


@dataclass(frozen=True)
class SamplingOptions:
    """Pixel prefilter settings applied before quantization."""

    quality: int = DEFAULT_QUALITY  # sample stride, 1 = every pixel
    min_alpha: int = DEFAULT_MIN_ALPHA
    max_red: int = DEFAULT_MAX_RED
    max_green: int = DEFAULT_MAX_GREEN
    max_blue: int = DEFAULT_MAX_BLUE


def validate_options(color_count: int, options: SamplingOptions) -> None:
    """Raise ValueError for an out-of-range colour count or option."""
    if not MIN_COLOR_COUNT <= color_count <= MAX_COLOR_COUNT:
        raise ValueError(
            f"color_count should be between {MIN_COLOR_COUNT} and {MAX_COLOR_COUNT}, "
            f"got {color_count}"
        )
    if options.quality < 1:
        raise ValueError(f"quality should be greater than 0, got {options.quality}")
    for name in ("min_alpha", "max_red", "max_green", "max_blue"):
        value = getattr(options, name)
        if not 0 <= value <= 255:
            raise ValueError(f"{name} must be in 0..255, got {value}")


def create_pixel_array(pixels: PixelsLike, options: SamplingOptions) -> U8Pixels:
    """Strided, alpha-filtered, near-white-filtered RGB pixels."""
    arr = as_pixel_array(pixels)
    sampled = arr[:: options.quality]
    if sampled.shape[0] == 0:
        return np.zeros((0, 3), dtype=np.uint8)

    rgb = sampled[:, :3]
    if sampled.shape[1] == 4:
        keep = sampled[:, 3] >= options.min_alpha
    else:
        keep = np.ones(sampled.shape[0], dtype=bool)
    near_white = (
        (rgb[:, 0] > options.max_red)
        & (rgb[:, 1] > options.max_green)
        & (rgb[:, 2] > options.max_blue)
    )
    keep &= ~near_white
    return np.ascontiguousarray(rgb[keep])


def get_palette(
    pixels: PixelsLike,
    color_count: int = DEFAULT_COLOR_COUNT,
    options: Optional[SamplingOptions] = None,
    *,
    debug: bool = False,
) -> List[RGBTuple]:
    """
    Representative colours of an RGBA pixel stream.

    Raises:
      ValueError: invalid options, or no pixel survives sampling.
    """
    opts = options if options is not None else SamplingOptions()
    validate_options(color_count, opts)
    rgb = create_pixel_array(pixels, opts)
    return quantize(rgb, color_count, debug=debug).colours


def get_color(
    pixels: PixelsLike,
    options: Optional[SamplingOptions] = None,
    *,
    debug: bool = False,
) -> RGBTuple:
    """Single dominant colour: the leading entry of a small palette."""
    return get_palette(pixels, DOMINANT_COLOR_COUNT, options, debug=debug)[0]


__all__ = [
    "SamplingOptions",
    "validate_options",
    "create_pixel_array",
    "get_palette",
    "get_color",
]
