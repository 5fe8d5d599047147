# colour_thief/utils.py
from __future__ import annotations

"""
Shared utilities for colour_thief.

Includes duration and number formatting, palette usage reporting for the CLI,
and tidy print-based logging.
"""

import sys
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np

from .core_types import RGBTuple, rgb_to_hex


#  Time / size formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        rem = int(round(seconds - 60 * minutes))
        return f"{minutes}m {rem}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Palette usage


def colour_usage_report(
    mapped_rgb: np.ndarray, palette: Sequence[RGBTuple]
) -> List[Tuple[str, int, float]]:
    """
    Count how many mapped pixels landed on each palette colour.

    Returns (hex, count, share) rows in palette order. Colours that received
    no pixels are reported with a zero count.
    """
    flat = np.asarray(mapped_rgb, dtype=np.uint8).reshape(-1, 3)
    total = int(flat.shape[0])
    counts = {tuple(c): 0 for c in palette}
    if total:
        uniques, n = np.unique(flat, axis=0, return_counts=True)
        for row, c in zip(uniques.tolist(), n.tolist()):
            key = (int(row[0]), int(row[1]), int(row[2]))
            if key in counts:
                counts[key] += int(c)
    report: List[Tuple[str, int, float]] = []
    for rgb in palette:
        c = counts[tuple(rgb)]
        report.append((rgb_to_hex(rgb), c, (c / total) if total else 0.0))
    return report


#  CLI / progress logging


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps ordered output when folder runs print from several threads.
    """
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1,234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def format_percentage(x: float, decimals: int = 1) -> str:
    """Format percentage; accepts 0..1 or 0..100 inputs."""
    val = x * 100.0 if 0.0 <= x <= 1.0 else x
    return f"{val:.{decimals}f}%"


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [sample] Quality: 10  Min alpha: 125  Max white: 250  Colours: 10
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    # formatting
    "format_seconds_compact",
    "format_total_duration_compact",
    "format_bool_on_off",
    "format_number_compact",
    "format_percentage",
    # palette usage
    "colour_usage_report",
    # logging / progress
    "enable_line_buffered_stdout",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
