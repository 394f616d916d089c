"""Tests for CLI argparse configuration."""

from __future__ import annotations

import pytest

from audiowave.cli import build_parser
from audiowave.version import __version__


def test_render_defaults_match_console_and_canvas_sizes() -> None:
    args = build_parser().parse_args(["render", "song.wav"])

    assert args.command == "render"
    assert args.path == "song.wav"
    assert args.mode == "ascii"
    assert (args.columns, args.rows) == (80, 20)
    assert (args.width, args.height) == (300.0, 100.0)
    assert args.line_width == 1.0
    assert args.output is None


def test_render_accepts_svg_options() -> None:
    args = build_parser().parse_args(
        [
            "render",
            "song.mp3",
            "--mode",
            "svg",
            "--width",
            "640",
            "--height",
            "120",
            "--stroke-color",
            "#ff0000",
            "--output",
            "out.svg",
        ]
    )

    assert args.mode == "svg"
    assert args.width == 640.0
    assert args.height == 120.0
    assert args.stroke_color == "#ff0000"
    assert args.output == "out.svg"


def test_render_rejects_unknown_mode() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["render", "song.wav", "--mode", "png"])


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_doctor_subcommand_flags() -> None:
    args = build_parser().parse_args(["--quiet", "doctor", "--require-ffmpeg"])

    assert args.command == "doctor"
    assert args.require_ffmpeg is True
    assert args.quiet is True


def test_cli_help_includes_version_metadata() -> None:
    help_text = build_parser().format_help()

    assert "Platform: " in help_text
    assert f"Version: {__version__}" in help_text
