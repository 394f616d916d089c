"""Waveform rasterization for decoded audio sample buffers.

The public entry points live in `audiowave.rasterizer` (paths and grids),
`audiowave.services.sample_provider` (off-loop decoding) and
`audiowave.renderers` (SVG and terminal output).
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:
    __version__ = version("audiowave")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"
