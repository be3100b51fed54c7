"""Tests for the fractal clock window body."""

from __future__ import annotations

import math

import pytest

from demodeck.demo.panels.color_test import gradient_pixels
from demodeck.demo.panels.fractal_clock import FractalClock
from demodeck.demo.windows import OpenWindows, WindowKind
from demodeck.host.headless import HeadlessContext


@pytest.mark.parametrize("depth", [0, 1, 2, 5])
def test_each_level_doubles_the_branches(depth: int) -> None:
    clock = FractalClock(depth=depth)

    assert len(clock.segments()) == 2 ** (depth + 2) - 1


def test_hands_start_at_the_origin_and_point_up_at_midnight() -> None:
    clock = FractalClock(time=0.0, zoom=1.0, depth=0)

    second, minute, hour = clock.segments()

    for start, _, width, luminance in (second, minute, hour):
        assert start == (0.0, 0.0)
        assert width == clock.start_line_width
        assert luminance == 1.0
    (_, _), (x, y), _, _ = hour
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(-0.5)


def test_branches_get_thinner_and_darker() -> None:
    clock = FractalClock(depth=3)

    segments = clock.segments()

    widths = [width for _, _, width, _ in segments]
    assert widths[-1] == pytest.approx(clock.start_line_width * clock.width_factor**3)
    assert all(math.isfinite(value) for value in widths)


def test_window_tracks_the_supplied_time_unless_paused() -> None:
    ctx = HeadlessContext()
    clock = FractalClock()
    flag = OpenWindows.isolated(WindowKind.FRACTAL_CLOCK).flag(WindowKind.FRACTAL_CLOCK)

    ctx.run_frame(lambda ui: clock.window(ui.ctx, flag, 120.0))
    assert clock.time == 120.0
    assert clock.line_count == len(clock.segments())

    clock.paused = True
    record = ctx.run_frame(lambda ui: clock.window(ui.ctx, flag, 180.0))
    assert clock.time == 120.0
    assert record.windows == ("Fractal Clock",)
    assert record.find("Fractal Clock/<lines>") is not None


def test_window_advances_on_its_own_without_a_clock() -> None:
    ctx = HeadlessContext()
    clock = FractalClock(time=10.0)
    flag = OpenWindows.isolated(WindowKind.FRACTAL_CLOCK).flag(WindowKind.FRACTAL_CLOCK)

    ctx.run_frame(lambda ui: clock.window(ui.ctx, flag, None))

    assert clock.time > 10.0


def test_gradient_is_a_black_to_white_ramp() -> None:
    pixels = gradient_pixels(256)

    assert len(pixels) == 256
    assert pixels[0] == (0, 0, 0, 255)
    assert pixels[-1] == (255, 255, 255, 255)
    assert gradient_pixels(0) == []
