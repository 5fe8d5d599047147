# colour_thief/image_io.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import RGBTuple, U8Image, U8Mask, U8Pixels

"""
Image I/O helpers (RGBA in sRGB), pixel flattening and palette swatches.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def load_image_rgba(path: Path) -> Tuple[U8Image, U8Mask]:
    """Load any Pillow-readable image as sRGB; alpha keeps its full range."""
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgba(im0)
    arr = np.array(im, dtype=np.uint8)
    return arr[..., :3], arr[..., 3]


def image_to_pixels(rgb: U8Image, alpha: U8Mask) -> U8Pixels:
    """Flatten (H,W,3) + (H,W) into row-major (H*W, 4) RGBA pixels."""
    if rgb.shape[:2] != alpha.shape[:2]:
        raise ValueError(f"rgb {rgb.shape} and alpha {alpha.shape} differ in size")
    out = np.empty((rgb.shape[0] * rgb.shape[1], 4), dtype=np.uint8)
    out[:, :3] = rgb.reshape(-1, 3)
    out[:, 3] = alpha.reshape(-1)
    return out


def save_image_rgba(path: Path, rgb: U8Image, alpha: U8Mask) -> Path:
    """Save RGB + alpha as PNG. Non-.png suffixes are replaced."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    H, W, _ = rgb.shape
    out = np.zeros((H, W, 4), dtype=np.uint8)
    out[..., :3] = rgb
    out[..., 3] = alpha
    Image.fromarray(out).save(path)
    return path


def save_palette_swatch(
    path: Path, colours: Sequence[RGBTuple], size: int = 32
) -> Path:
    """Write a horizontal strip with one size x size square per colour."""
    if not colours:
        raise ValueError("no colours to draw")
    if size < 1:
        raise ValueError(f"swatch size must be positive, got {size}")
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    row = np.asarray(colours, dtype=np.uint8).reshape(1, -1, 3)
    strip = np.repeat(np.repeat(row, size, axis=0), size, axis=1)
    Image.fromarray(strip).save(path)
    return path


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "load_image_rgba",
    "image_to_pixels",
    "save_image_rgba",
    "save_palette_swatch",
    "is_image_file",
]
