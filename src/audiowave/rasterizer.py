"""Geometry core turning a sample buffer into waveform paths and grids.

Both entry points are pure functions of their inputs. They never perform I/O
and hold no state, so they are safe to call from worker threads.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import InvalidCanvasError

SampleBuffer = Sequence[float]


@dataclass(frozen=True)
class Canvas:
    """Target drawing surface size in renderer units."""

    width: float
    height: float


@dataclass(frozen=True)
class Point:
    """Path vertex in y-up canvas coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class WaveformPath:
    """Closed polyline for one sample buffer, scaled to a canvas."""

    points: tuple[Point, ...]
    canvas: Canvas
    line_width: float = 1.0


@dataclass(frozen=True)
class WaveformGrid:
    """Column-bucketed waveform cells indexed ``cells[row][column]``.

    Row 0 is the bottom row.
    """

    rows: int
    columns: int
    cells: tuple[tuple[bool, ...], ...]

    def is_filled(self, row: int, column: int) -> bool:
        return self.cells[row][column]

    def column_height(self, column: int) -> int:
        return sum(1 for row in self.cells if row[column])


def sample_range(samples: SampleBuffer) -> tuple[float, float]:
    """Return ``(min, max)`` of the finite samples, ``(0.0, 0.0)`` when none."""
    bounds = _finite_bounds(samples)
    if bounds is None:
        return 0.0, 0.0
    return bounds


def rasterize(
    samples: SampleBuffer,
    canvas: Canvas,
    line_width: float = 1.0,
) -> WaveformPath:
    """Map every sample to a path vertex, capped at the vertical midline.

    The amplitude range maps onto ``[height / 2, height * 1.5]``, so the
    waveform is drawn upward from the midline. Empty and zero-range buffers
    produce a flat line at ``height / 2``. NaN and infinite samples are
    left out of the range and sit on the midline.
    """
    _validate_canvas(canvas)
    width = float(canvas.width)
    height = float(canvas.height)
    midline = height / 2.0

    count = len(samples)
    minimum, maximum = sample_range(samples)
    value_range = maximum - minimum
    scale = height / value_range if value_range != 0 else 0.0

    points = [Point(0.0, midline)]
    for index, value in enumerate(samples):
        x = index / count * width
        value = float(value)
        if scale and math.isfinite(value):
            y = (value - minimum) * scale + midline
        else:
            y = midline
        points.append(Point(x, y))
    points.append(Point(width, midline))
    return WaveformPath(points=tuple(points), canvas=canvas, line_width=line_width)


def rasterize_discrete(
    samples: SampleBuffer,
    columns: int,
    rows: int,
) -> WaveformGrid:
    """Bucket samples into ``columns`` and fill each column's min/max span."""
    if not _positive_int(columns) or not _positive_int(rows):
        raise InvalidCanvasError(
            f"Grid size must be positive, got {columns}x{rows} (columns x rows)."
        )

    count = len(samples)
    global_min, global_max = sample_range(samples)
    cells = [[False] * columns for _ in range(rows)]
    for column in range(columns):
        start = column * count // columns
        end = min((column + 1) * count // columns, count)
        if start >= end:
            continue
        bucket = samples[start:end]
        bounds = _finite_bounds(bucket)
        if bounds is None:
            low = high = 0
        else:
            low = _scale_row(bounds[0], global_min, global_max, rows)
            high = _scale_row(bounds[1], global_min, global_max, rows)
        for row in range(low, max(high, low + 1)):
            cells[row][column] = True
    return WaveformGrid(
        rows=rows,
        columns=columns,
        cells=tuple(tuple(row) for row in cells),
    )


def _scale_row(value: float, minimum: float, maximum: float, rows: int) -> int:
    if maximum == minimum:
        return 0
    normalized = (value - minimum) / (maximum - minimum)
    if not math.isfinite(normalized):
        return 0
    return max(0, min(rows - 1, int(round(normalized * rows))))


def _validate_canvas(canvas: Canvas) -> None:
    for name, value in (("width", canvas.width), ("height", canvas.height)):
        if not math.isfinite(value) or value <= 0:
            raise InvalidCanvasError(
                f"Canvas {name} must be finite and positive, got {value!r}."
            )


def _positive_int(value: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _finite_bounds(samples: SampleBuffer) -> tuple[float, float] | None:
    minimum = math.inf
    maximum = -math.inf
    for raw in samples:
        value = float(raw)
        if not math.isfinite(value):
            continue
        if value < minimum:
            minimum = value
        if value > maximum:
            maximum = value
    if minimum > maximum:
        return None
    return minimum, maximum
