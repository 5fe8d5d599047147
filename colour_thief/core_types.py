# colour_thief/core_types.py
from __future__ import annotations

"""
Core type aliases and lightweight pixel helpers.
"""

from typing import Iterable, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]

U8Pixels = NDArray[np.uint8]  # (N, 3) or (N, 4)
U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Mask = NDArray[np.uint8]  # (H, W)

PixelsLike = Union[Iterable[Sequence[int]], NDArray[np.generic]]


# Small helpers


def rgb_to_hex(rgb: Sequence[int]) -> str:
    """RGB triple to lowercase hex string '#rrggbb'."""
    return f"#{int(rgb[0]):02x}{int(rgb[1]):02x}{int(rgb[2]):02x}"


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3+ length sequence or array row to an (int, int, int) RGB tuple.
    Extra channels (alpha) are dropped.
    """
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise ValueError("array too small for RGB")
        flat = value.reshape(-1)
        return (int(flat[0]), int(flat[1]), int(flat[2]))
    if len(value) < 3:
        raise ValueError("sequence too small for RGB")
    return (int(value[0]), int(value[1]), int(value[2]))


def as_pixel_array(pixels: PixelsLike) -> U8Pixels:
    """
    Validate a pixel sequence or array and return it as an (N, C) uint8 array.

    Accepts lists of tuples or NumPy arrays with 3 (RGB) or 4 (RGBA) channels.
    Channel values must already lie in 0..255. An empty input yields an
    array of shape (0, 3).
    """
    if isinstance(pixels, np.ndarray):
        arr = pixels
    else:
        rows = list(pixels)
        if not rows:
            return np.zeros((0, 3), dtype=np.uint8)
        arr = np.asarray(rows)

    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.uint8)
    if arr.ndim != 2 or arr.shape[1] not in (3, 4):
        raise ValueError(f"expected (N,3) or (N,4) pixels, got shape {arr.shape}")
    if arr.dtype == np.uint8:
        return arr
    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"pixel channels must be integers, got {arr.dtype}")
    if int(arr.min()) < 0 or int(arr.max()) > 255:
        raise ValueError("pixel channels must be in 0..255")
    return arr.astype(np.uint8)


__all__ = [
    # aliases / types
    "RGBTuple",
    "U8Pixels",
    "U8Image",
    "U8Mask",
    "PixelsLike",
    # helpers
    "rgb_to_hex",
    "coerce_to_rgb_tuple",
    "as_pixel_array",
]
