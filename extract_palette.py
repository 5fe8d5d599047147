#!/usr/bin/env python3
"""
extract_palette.py
Extract a representative colour palette from images with modified median cut.

Usage:
  python extract_palette.py INPUT [--outdir DIR] --count N --quality Q --min-alpha A --max-white T [--remap] [--swatch] [--jobs J] --debug

Input:
  Any Pillow-readable image, or a folder of .png/.jpg/.jpeg/.webp files.

Output:
  The palette as hex codes with the share of sampled pixels mapped to each.
  --remap writes <stem>_palette.png with every pixel mapped onto the palette.
  --swatch writes <stem>_swatch.png, one square per palette colour.
  Files go next to INPUT unless --outdir is given.

Notes:
  Sampling keeps every Q-th pixel, drops pixels with alpha < A and pixels whose
  three channels are all above T, then quantizes what is left.
"""

from __future__ import annotations

import argparse
import io
import sys
import time
from concurrent.futures import ProcessPoolExecutor
from contextlib import redirect_stdout
from pathlib import Path
from typing import List, Optional

from PIL import UnidentifiedImageError

from colour_thief.constants import (
    DEFAULT_COLOR_COUNT,
    DEFAULT_MAX_RED,
    DEFAULT_MIN_ALPHA,
    DEFAULT_QUALITY,
)
from colour_thief.image_io import (
    image_to_pixels,
    is_image_file,
    load_image_rgba,
    save_image_rgba,
    save_palette_swatch,
)
from colour_thief.quantize import quantize
from colour_thief.sampling import SamplingOptions, create_pixel_array, validate_options
from colour_thief.utils import (
    colour_usage_report,
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_percentage,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp"}
OUTPUT_SUFFIXES = ("_palette", "_swatch")


# CLI args


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for palette extraction.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        outdir: optional Path for outputs
        count: palette size (2..20)
        quality: sample stride
        min_alpha: minimum alpha kept
        max_white: near-white threshold applied to r, g and b
        remap: bool, write the palette-mapped image
        swatch: bool, write a swatch strip
        jobs: parallel file workers
        debug: bool for verbose quantization details
    """
    parser = argparse.ArgumentParser(
        prog="extract_palette",
        description="Extract dominant colours from image(s) with median-cut quantization.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=DEFAULT_COLOR_COUNT,
        help="Palette size (2..20).",
    )
    parser.add_argument(
        "--quality",
        type=int,
        default=DEFAULT_QUALITY,
        help="Sample every Nth pixel. 1 = every pixel.",
    )
    parser.add_argument(
        "--min-alpha",
        type=int,
        default=DEFAULT_MIN_ALPHA,
        help="Ignore pixels with alpha below this value.",
    )
    parser.add_argument(
        "--max-white",
        type=int,
        default=DEFAULT_MAX_RED,
        help="Ignore pixels whose r, g and b are all above this value.",
    )
    parser.add_argument(
        "--remap", action="store_true", help="Write <stem>_palette.png"
    )
    parser.add_argument(
        "--swatch", action="store_true", help="Write <stem>_swatch.png"
    )
    parser.add_argument(
        "--jobs", type=int, default=2, help="Files processed in parallel"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Verbose quantization details"
    )
    return parser.parse_args(argv)


def options_from_args(args: argparse.Namespace) -> SamplingOptions:
    return SamplingOptions(
        quality=args.quality,
        min_alpha=args.min_alpha,
        max_red=args.max_white,
        max_green=args.max_white,
        max_blue=args.max_white,
    )


def _is_output_artifact(path: Path) -> bool:
    return path.stem.endswith(OUTPUT_SUFFIXES)


# Per-file processing


def _process_single_image(
    src_path: Path,
    outdir: Optional[Path],
    count: int,
    options: SamplingOptions,
    remap: bool,
    swatch: bool,
    debug: bool,
) -> None:
    """
    Process a single image path end-to-end:
      load -> sample -> quantize -> report -> optional remap / swatch.
    """
    t_start = time.perf_counter()
    print_banner(src_path.name)
    dst_dir = outdir if outdir is not None else src_path.parent

    try:
        rgb_in, alpha = load_image_rgba(src_path)
        sampled = create_pixel_array(image_to_pixels(rgb_in, alpha), options)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        error(f"{src_path.name}: {e}")
        return
    height, width = rgb_in.shape[0], rgb_in.shape[1]
    t_loaded = time.perf_counter()

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Loaded", f"{width}x{height}"),
                    ("Sampled", int(sampled.shape[0])),
                    ("Prep time", format_seconds_compact(t_loaded - t_start)),
                ]
            )
        )

    try:
        palette = quantize(sampled, count, debug=debug)
    except ValueError as e:
        error(f"{src_path.name}: {e}")
        return
    t_quant = time.perf_counter()

    mapped_sample = palette.map_pixels(sampled)
    log(f"Palette ({len(palette)} colours):")
    for hex_code, n, share in colour_usage_report(mapped_sample, palette.colours):
        log(f"  {hex_code}  pixels={n:,}  share={format_percentage(share)}")

    if remap:
        mapped = palette.map_pixels(rgb_in)
        out = save_image_rgba(dst_dir / f"{src_path.stem}_palette.png", mapped, alpha)
        log(f"Wrote {out.name} | size={width}x{height}")
    if swatch:
        out = save_palette_swatch(
            dst_dir / f"{src_path.stem}_swatch.png", palette.colours
        )
        log(f"Wrote {out.name}")
    t_end = time.perf_counter()

    if debug:
        debug_log(
            f"Total {format_total_duration_compact(t_end - t_start)}  "
            f"(load={format_seconds_compact(t_loaded - t_start)}, "
            f"quantize={format_seconds_compact(t_quant - t_loaded)}, "
            f"write={format_seconds_compact(t_end - t_quant)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(t_end - t_start)}")


def _process_one_captured(
    path: Path,
    outdir: Optional[Path],
    count: int,
    options: SamplingOptions,
    remap: bool,
    swatch: bool,
    debug: bool,
) -> str:
    """
    Process a single file with stdout capture.

    Runs in a worker process so each file gets its own stdout; the parent
    prints the captured blocks in order.
    """
    buf = io.StringIO()
    with redirect_stdout(buf):
        _process_single_image(path, outdir, count, options, remap, swatch, debug)
    return buf.getvalue()


# Entry point


def main(argv: Optional[List[str]] = None) -> None:
    """
    CLI entry point.

    Handles single file or folder. In folder mode supports --jobs parallelism
    while preserving readable output ordering.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)
    options = options_from_args(args)

    try:
        validate_options(args.count, options)
    except ValueError as e:
        error(str(e))
        sys.exit(2)
    if args.jobs < 1:
        error(f"jobs must be at least 1, got {args.jobs}")
        sys.exit(2)

    print_config_line(
        "sample",
        [
            ("Colours", args.count),
            ("Quality", options.quality),
            ("Min alpha", options.min_alpha),
            ("Max white", args.max_white),
            ("Jobs", args.jobs),
        ],
        debug=False,
    )

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        sys.exit(2)
    if args.outdir is not None:
        args.outdir.mkdir(parents=True, exist_ok=True)

    if src.is_dir():
        all_entries = list(src.iterdir())
        candidates = [
            p
            for p in all_entries
            if p.is_file()
            and p.suffix.lower() in IMAGE_EXTS
            and not _is_output_artifact(p)
        ]
        candidates.sort(key=lambda p: p.name.lower())
        files: List[Path] = []
        for p in candidates:
            if is_image_file(p):
                files.append(p)
            else:
                warn(f"skipping unreadable image: {p.name}")
        if args.debug:
            debug_log(
                key_value_pairs_to_string(
                    [("Folder entries", len(all_entries)), ("Images", len(files))]
                )
            )

        if args.jobs == 1:
            for p in files:
                _process_single_image(
                    p,
                    args.outdir,
                    args.count,
                    options,
                    args.remap,
                    args.swatch,
                    args.debug,
                )
        else:
            with ProcessPoolExecutor(max_workers=args.jobs) as ex:
                futures = [
                    ex.submit(
                        _process_one_captured,
                        p,
                        args.outdir,
                        args.count,
                        options,
                        args.remap,
                        args.swatch,
                        args.debug,
                    )
                    for p in files
                ]
                blocks = [f.result() for f in futures]
            print("".join(blocks), end="", flush=True)
    else:
        _process_single_image(
            src,
            args.outdir,
            args.count,
            options,
            args.remap,
            args.swatch,
            args.debug,
        )


if __name__ == "__main__":
    main()
