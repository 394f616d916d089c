"""Text renderers for discrete waveform grids."""

from __future__ import annotations

from rich.text import Text

from audiowave.rasterizer import WaveformGrid


def grid_to_lines(
    grid: WaveformGrid, *, mark: str = "|", empty: str = " "
) -> list[str]:
    """Return grid rows top-to-bottom, the last row first."""
    return [
        "".join(mark if cell else empty for cell in row)
        for row in reversed(grid.cells)
    ]


def grid_to_text(grid: WaveformGrid, *, style: str = "", mark: str = "|") -> Text:
    """Build a styled `rich.text.Text` block for terminal output."""
    return Text(
        "\n".join(grid_to_lines(grid, mark=mark)),
        style=style,
        no_wrap=True,
        overflow="ignore",
    )
