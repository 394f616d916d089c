"""Waveform render backends."""

from .ascii import grid_to_lines, grid_to_text
from .base import RenderBackend, RenderStyle, render_waveform
from .svg import SvgBackend

__all__ = [
    "RenderBackend",
    "RenderStyle",
    "SvgBackend",
    "grid_to_lines",
    "grid_to_text",
    "render_waveform",
]
