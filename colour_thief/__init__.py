# colour_thief/__init__.py
"""
colour_thief package.

Purpose:
  Extract a small representative palette from RGB(A) pixels with modified
  median-cut quantization, and map pixels onto it. See extract_palette.py for CLI.

Public API:
  quantize       : engine entry point, pixels + max_colors -> ColourPalette.
  get_palette    : sampling facade (stride, alpha and near-white filtering).
  get_color      : dominant colour via the facade.
  SamplingOptions: facade prefilter settings.
  ColourPalette  : palette base (iteration, len, map, map_pixels).
  core_types     : shared type aliases and pixel helpers.
  image_io       : Pillow-backed image loading and saving.
  utils          : formatting and logging helpers.

Quick start:
  from colour_thief import quantize
  palette = quantize([(255, 0, 0), (0, 0, 255), (0, 255, 0)], 2)
  palette.map((250, 10, 10))
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import core_types
from . import image_io
from . import utils

from .palette import ColourPalette, SimpleColourMap, VBoxColourMap  # noqa: E402
from .quantize import quantize  # noqa: E402
from .sampling import SamplingOptions, get_color, get_palette  # noqa: E402
from .vbox import VBox  # noqa: E402

__all__ = [
    "__version__",
    "core_types",
    "image_io",
    "utils",
    "ColourPalette",
    "SimpleColourMap",
    "VBoxColourMap",
    "VBox",
    "quantize",
    "SamplingOptions",
    "get_color",
    "get_palette",
]
