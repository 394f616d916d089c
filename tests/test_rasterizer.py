"""Tests for continuous waveform path rasterization."""

from __future__ import annotations

import math

import pytest

from audiowave.errors import InvalidCanvasError
from audiowave.rasterizer import Canvas, Point, rasterize, sample_range


def test_rasterize_mixed_buffer_matches_formula() -> None:
    path = rasterize([0.0, 1.0, -1.0, 0.0], Canvas(4, 10))

    assert [point.x for point in path.points] == [0.0, 0.0, 1.0, 2.0, 3.0, 4.0]
    assert [point.y for point in path.points] == [5.0, 10.0, 15.0, 5.0, 10.0, 5.0]


def test_rasterize_all_zero_buffer_is_flat() -> None:
    path = rasterize([0.0] * 100, Canvas(100, 50))

    assert len(path.points) == 102
    assert all(point.y == 25.0 for point in path.points)
    assert path.points[-1] == Point(100.0, 25.0)


def test_rasterize_empty_buffer_returns_caps_only() -> None:
    path = rasterize([], Canvas(20, 8))

    assert path.points == (Point(0.0, 4.0), Point(20.0, 4.0))


def test_rasterize_constant_nonzero_buffer_is_flat() -> None:
    path = rasterize([0.42] * 7, Canvas(70, 30))

    assert {point.y for point in path.points} == {15.0}


def test_rasterize_point_count_and_monotonic_x() -> None:
    samples = [math.sin(index / 3.0) for index in range(257)]
    width = 123.0
    path = rasterize(samples, Canvas(width, 40))

    xs = [point.x for point in path.points]
    assert len(xs) == len(samples) + 2
    assert xs == sorted(xs)
    assert xs[-2] <= width
    assert path.points[0].y == 20.0
    assert path.points[-1].y == 20.0


def test_rasterize_maps_range_to_upper_half() -> None:
    path = rasterize([-0.5, 0.25, 0.5], Canvas(3, 10))
    inner = [point.y for point in path.points[1:-1]]

    assert min(inner) == 5.0
    assert max(inner) == 15.0


def test_rasterize_keeps_line_width_and_canvas() -> None:
    canvas = Canvas(10, 10)
    path = rasterize([0.1, 0.2], canvas, line_width=2.5)

    assert path.canvas is canvas
    assert path.line_width == 2.5


@pytest.mark.parametrize(
    "canvas",
    [
        Canvas(0, 10),
        Canvas(10, 0),
        Canvas(-1, 10),
        Canvas(10, -5),
        Canvas(math.inf, 10),
        Canvas(10, math.nan),
    ],
)
def test_rasterize_rejects_invalid_canvas(canvas: Canvas) -> None:
    with pytest.raises(InvalidCanvasError):
        rasterize([0.0, 1.0], canvas)


def test_sample_range_handles_empty_and_unordered_values() -> None:
    assert sample_range([]) == (0.0, 0.0)
    assert sample_range([3.0, -2.0, 7.5, 0.0]) == (-2.0, 7.5)
    assert sample_range((1.0,)) == (1.0, 1.0)


def test_rasterize_puts_non_finite_samples_on_midline() -> None:
    path = rasterize([0.0, math.nan, 1.0, math.inf], Canvas(4, 10))

    assert [point.x for point in path.points] == [0.0, 0.0, 1.0, 2.0, 3.0, 4.0]
    assert [point.y for point in path.points] == [5.0, 5.0, 5.0, 15.0, 5.0, 5.0]


def test_rasterize_all_non_finite_buffer_is_flat() -> None:
    path = rasterize([math.nan, -math.inf], Canvas(2, 10))

    assert all(point.y == 5.0 for point in path.points)


def test_sample_range_skips_non_finite_values() -> None:
    assert sample_range([math.nan, -1.0, math.inf, 2.0, -math.inf]) == (-1.0, 2.0)
    assert sample_range([math.nan]) == (0.0, 0.0)
