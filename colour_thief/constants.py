# colour_thief/constants.py
"""
Global tunables used across the project.

- Histogram resolution (SIGBITS and derived sizes)
- Refinement loop knobs (MAX_ITERATIONS, FRACT_BY_POPULATION)
- Palette size limits for the engine and for the sampling facade
- Sampling defaults (stride, minimum alpha, near-white thresholds)
"""
from __future__ import annotations

# =========================
# Histogram resolution
# =========================
SIGBITS: int = 5
RSHIFT: int = 8 - SIGBITS
HISTO_SIDE: int = 1 << SIGBITS
HISTO_SIZE: int = 1 << (3 * SIGBITS)

# =========================
# Refinement loop
# =========================
MAX_ITERATIONS: int = 1000
FRACT_BY_POPULATION: float = 0.75

MIN_MAX_COLORS: int = 1
MAX_MAX_COLORS: int = 256

# =========================
# Sampling facade
# =========================
DEFAULT_QUALITY: int = 10
DEFAULT_MIN_ALPHA: int = 125
DEFAULT_MAX_RED: int = 250
DEFAULT_MAX_GREEN: int = 250
DEFAULT_MAX_BLUE: int = 250

MIN_COLOR_COUNT: int = 2
MAX_COLOR_COUNT: int = 20
DEFAULT_COLOR_COUNT: int = 10
DOMINANT_COLOR_COUNT: int = 5
