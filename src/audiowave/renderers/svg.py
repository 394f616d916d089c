"""SVG vector backend for exporting waveform paths."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from xml.sax.saxutils import quoteattr

from rich.color import Color, ColorParseError

from audiowave.rasterizer import Canvas, Point

logger = logging.getLogger(__name__)


class SvgBackend:
    """Collects drawing calls and serializes them as one SVG document.

    Waveform paths use y-up coordinates with the origin at the bottom-left;
    SVG is y-down, so every y is flipped against the canvas height.
    """

    def __init__(self, canvas: Canvas) -> None:
        self._canvas = canvas
        self._elements: list[str] = []

    def fill_background(self, canvas: Canvas, color: str) -> None:
        self._canvas = canvas
        self._elements.append(
            f'<rect x="0" y="0" width="{_fmt(canvas.width)}" '
            f'height="{_fmt(canvas.height)}" fill={quoteattr(to_hex(color))} />'
        )

    def draw_polyline(
        self, points: Sequence[Point], color: str, line_width: float
    ) -> None:
        height = float(self._canvas.height)
        coords = " ".join(f"{_fmt(p.x)},{_fmt(height - p.y)}" for p in points)
        self._elements.append(
            f"<polyline points={quoteattr(coords)} fill=\"none\" "
            f"stroke={quoteattr(to_hex(color))} "
            f'stroke-width="{_fmt(line_width)}" stroke-linecap="round" '
            f'stroke-linejoin="round" />'
        )

    def to_svg(self) -> str:
        width = _fmt(self._canvas.width)
        height = _fmt(self._canvas.height)
        body = "\n  ".join(self._elements)
        return (
            '<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{width}" height="{height}" viewBox="0 0 {width} {height}">\n'
            f"  {body}\n"
            "</svg>\n"
        )

    def save(self, path: Path | str) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_svg(), encoding="utf-8")
        logger.info(
            "Waveform exported",
            extra={"event": "waveform_exported", "path": str(target), "format": "svg"},
        )
        return target


def to_hex(color: str) -> str:
    """Normalize a color name or hex string to ``#rrggbb``."""
    try:
        parsed = Color.parse(color)
    except ColorParseError as exc:
        raise ValueError(f"Unknown color: {color!r}") from exc
    return parsed.get_truecolor().hex


def _fmt(value: float) -> str:
    text = f"{float(value):.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text
