"""Render backend contract and the driver that feeds it a waveform path.

Backends only need two drawing capabilities, which keeps the geometry core
independent of any particular 2-D drawing library.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from audiowave.rasterizer import Canvas, Point, WaveformPath


@dataclass(frozen=True)
class RenderStyle:
    """Colors and stroke settings applied when drawing a waveform."""

    fill_color: str = "#ffffff"
    stroke_color: str = "#000000"
    line_width: float | None = None


class RenderBackend(Protocol):
    """Minimal drawing surface consumed by `render_waveform`."""

    def fill_background(self, canvas: Canvas, color: str) -> None: ...

    def draw_polyline(
        self, points: Sequence[Point], color: str, line_width: float
    ) -> None: ...


def render_waveform(
    path: WaveformPath,
    backend: RenderBackend,
    style: RenderStyle | None = None,
) -> None:
    """Fill the background then stroke the waveform polyline."""
    style = style or RenderStyle()
    line_width = style.line_width if style.line_width is not None else path.line_width
    backend.fill_background(path.canvas, style.fill_color)
    backend.draw_polyline(path.points, style.stroke_color, line_width)
