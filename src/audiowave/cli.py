"""Command-line interface for audiowave."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console

from . import __version__
from .doctor import render_report, run_doctor
from .errors import AudioWaveError
from .events import SamplesFailed
from .logging_utils import setup_logging
from .paths import default_export_path, log_dir
from .rasterizer import Canvas, rasterize, rasterize_discrete
from .renderers import RenderStyle, SvgBackend, grid_to_text, render_waveform
from .runtime_config import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_COLUMNS,
    DEFAULT_LINE_WIDTH,
    DEFAULT_ROWS,
    RENDER_MODES,
    normalize_render_mode,
    resolve_log_level,
)
from .services.sample_provider import SampleProvider
from .version import build_help_epilog

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="audiowave",
        description="Render audio files as waveforms.",
        epilog=build_help_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument(
        "--quiet", action="store_true", help="Only show warnings and errors"
    )
    parser.add_argument("--log-file", help="Write logs to a file path")

    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render an audio file waveform")
    render.add_argument("path", help="Audio file to read")
    render.add_argument(
        "--mode",
        choices=RENDER_MODES,
        default="ascii",
        help="ascii prints to the terminal, svg exports a vector image.",
    )
    render.add_argument("--columns", type=int, default=DEFAULT_COLUMNS)
    render.add_argument("--rows", type=int, default=DEFAULT_ROWS)
    render.add_argument("--width", type=float, default=DEFAULT_CANVAS_WIDTH)
    render.add_argument("--height", type=float, default=DEFAULT_CANVAS_HEIGHT)
    render.add_argument("--line-width", type=float, default=DEFAULT_LINE_WIDTH)
    render.add_argument("--fill-color", default="#ffffff")
    render.add_argument("--stroke-color", default="#000000")
    render.add_argument(
        "--output", help="SVG output path (defaults to the documents folder)"
    )

    doctor = subparsers.add_parser("doctor", help="Check decoder tooling")
    doctor.add_argument(
        "--require-ffmpeg",
        action="store_true",
        help="Fail when ffmpeg is unavailable.",
    )
    return parser


async def load_track_samples(path: str) -> list[float]:
    """Decode ``path`` through a `SampleProvider` and return its samples."""
    provider = SampleProvider(path)
    try:
        result = await provider.load()
    finally:
        await provider.aclose()
    if isinstance(result, SamplesFailed):
        raise result.error
    return result.samples


def run_render(args: argparse.Namespace, console: Console) -> int:
    samples = asyncio.run(load_track_samples(args.path))
    mode = normalize_render_mode(args.mode)
    if mode == "ascii":
        grid = rasterize_discrete(samples, args.columns, args.rows)
        console.print(grid_to_text(grid), soft_wrap=True)
        return 0

    canvas = Canvas(args.width, args.height)
    path = rasterize(samples, canvas, args.line_width)
    backend = SvgBackend(canvas)
    render_waveform(
        path,
        backend,
        RenderStyle(fill_color=args.fill_color, stroke_color=args.stroke_color),
    )
    target = backend.save(Path(args.output) if args.output else default_export_path())
    console.print(f"Waveform image saved as SVG to {target}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console()
    try:
        level = resolve_log_level(verbose=args.verbose, quiet=args.quiet)
        setup_logging(
            log_dir=log_dir(),
            level=level,
            log_file=Path(args.log_file) if args.log_file else None,
        )
        logger.info("Starting audiowave CLI", extra={"event": "cli_start"})
        if args.command == "doctor":
            report = run_doctor(require_ffmpeg=args.require_ffmpeg)
            print(render_report(report))
            return report.exit_code
        return run_render(args, console)
    except (AudioWaveError, ValueError) as exc:
        logger.error("Render failed: %s", exc, extra={"event": "render_failed"})
        print(f"An error occurred: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:  # pragma: no cover - top-level safety net
        logger.exception("Unhandled error: %s", exc)
        print("Unexpected error. Re-run with --verbose for details.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
