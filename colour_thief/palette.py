# colour_thief/palette.py
from __future__ import annotations

"""
Palettes produced by quantization and their pixel mapping.

Exports:
  nearest_colour(colours, pixel) -> RGBTuple
  find_containing_box(vboxes, pixel) -> VBox | None
  ColourPalette          : base class (iteration, len, map, map_pixels)
  SimpleColourMap        : exact distinct-colour palette, nearest-neighbour map
  VBoxColourMap          : median-cut palette, containment map with nearest fallback
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence

import numpy as np

from .core_types import RGBTuple, U8Image, coerce_to_rgb_tuple
from .vbox import VBox


def nearest_colour(colours: Sequence[RGBTuple], pixel: Sequence[int]) -> RGBTuple:
    """Closest colour by Euclidean RGB distance; ties go to the earliest entry."""
    if len(colours) == 0:
        raise ValueError("cannot search an empty palette")
    pal = np.asarray(colours, dtype=np.int64).reshape(-1, 3)
    src = np.asarray(coerce_to_rgb_tuple(pixel), dtype=np.int64)
    diff = pal - src
    dist2 = np.sum(diff * diff, axis=1)
    return colours[int(np.argmin(dist2))]


def find_containing_box(vboxes: Sequence[VBox], pixel: Sequence[int]) -> Optional[VBox]:
    """First box, in palette order, whose region holds the pixel."""
    for vbox in vboxes:
        if vbox.contains(pixel):
            return vbox
    return None


class ColourPalette(ABC):
    """Representative colours plus a pixel -> colour mapping."""

    def __init__(self, colours: Sequence[RGBTuple]) -> None:
        self._colours: List[RGBTuple] = [coerce_to_rgb_tuple(c) for c in colours]

    @property
    def colours(self) -> List[RGBTuple]:
        return list(self._colours)

    def __len__(self) -> int:
        return len(self._colours)

    def __iter__(self) -> Iterator[RGBTuple]:
        return iter(self._colours)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._colours!r})"

    @abstractmethod
    def map(self, pixel: Sequence[int]) -> RGBTuple:
        """Palette colour standing in for `pixel`."""

    def map_pixels(self, pixels: np.ndarray) -> U8Image:
        """
        Map an (N,3|4) or (H,W,3|4) uint8 array through map().
        Each distinct colour is looked up once. Output has 3 channels.
        """
        arr = np.asarray(pixels)
        if arr.ndim < 2 or arr.shape[-1] not in (3, 4):
            raise ValueError(f"expected (...,3) or (...,4) pixels, got {arr.shape}")
        lead_shape = arr.shape[:-1]
        flat = arr[..., :3].reshape(-1, 3)
        if flat.shape[0] == 0:
            return np.zeros(lead_shape + (3,), dtype=np.uint8)
        uniq, inverse = np.unique(flat, axis=0, return_inverse=True)
        mapped = np.array(
            [self.map(row) for row in uniq.tolist()], dtype=np.uint8
        ).reshape(-1, 3)
        return mapped[inverse.reshape(-1)].reshape(lead_shape + (3,))


class SimpleColourMap(ColourPalette):
    """Palette made of the input's exact distinct colours."""

    def map(self, pixel: Sequence[int]) -> RGBTuple:
        return nearest_colour(self._colours, pixel)


class VBoxColourMap(ColourPalette):
    """Palette of box averages from median-cut quantization."""

    def __init__(self, vboxes: Sequence[VBox]) -> None:
        self._vboxes: List[VBox] = list(vboxes)
        super().__init__([vbox.avg for vbox in self._vboxes])

    @property
    def vboxes(self) -> List[VBox]:
        return list(self._vboxes)

    def map(self, pixel: Sequence[int]) -> RGBTuple:
        """
        Average colour of the first box containing the pixel's quantized
        coordinate, else the nearest box average.
        """
        vbox = find_containing_box(self._vboxes, pixel)
        if vbox is not None:
            return vbox.avg
        return nearest_colour(self._colours, pixel)


__all__ = [
    "nearest_colour",
    "find_containing_box",
    "ColourPalette",
    "SimpleColourMap",
    "VBoxColourMap",
]
