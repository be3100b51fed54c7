"""Fractal clock: clock hands that branch recursively into a tree of lines."""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass, field

from ...host.surface import AttrToggle, Context, Segment, Toggle, Ui, WindowSpec

__all__ = ["FractalClock"]

_TAU = 2.0 * math.pi
_FALLBACK_STEP = 1.0 / 60.0
_MAX_DEPTH = 14
_MIN_WIDTH = 0.05


def _hand_angle(time: float, period: float) -> float:
    # 12 o'clock points up, angles grow clockwise in screen space.
    return _TAU * (time % period) / period - _TAU / 4.0


@dataclass(slots=True)
class FractalClock:
    """Persistent options for the clock plus the time being shown."""

    paused: bool = False
    time: float = 0.0
    zoom: float = 0.25
    start_line_width: float = 2.5
    depth: int = 9
    length_factor: float = 0.8
    luminance_factor: float = 0.8
    width_factor: float = 0.9
    line_count: int = field(default=0, compare=False)

    def window(self, ctx: Context, flag: Toggle, seconds_since_midnight: float | None) -> None:
        spec = WindowSpec(title="Fractal Clock", scroll=False, default_size=(512.0, 512.0))
        ctx.show_window(spec, flag, lambda ui: self.ui(ui, seconds_since_midnight))

    def ui(self, ui: Ui, seconds_since_midnight: float | None) -> None:
        if not self.paused:
            if seconds_since_midnight is None:
                self.time += _FALLBACK_STEP
            else:
                self.time = seconds_since_midnight
        ui.checkbox(AttrToggle(self, "paused"), "Paused")
        segments = self.segments()
        self.line_count = len(segments)
        ui.monospace(f"Painted line count: {self.line_count}")
        ui.lines(segments)

    def segments(self) -> list[Segment]:
        """Return every line of the clock, centered on the origin."""

        second = cmath.rect(self.length_factor, _hand_angle(self.time, 60.0))
        minute = cmath.rect(self.length_factor, _hand_angle(self.time, 60.0 * 60.0))
        hour = cmath.rect(0.5, _hand_angle(self.time, 12.0 * 60.0 * 60.0))

        width = self.start_line_width
        luminance = 1.0
        segments = [self._segment(0j, hand, width, luminance) for hand in (second, minute, hour)]

        # Each branch repeats the second and minute hands relative to the hour hand.
        hour_angle = cmath.phase(hour)
        rotors = [
            cmath.rect(self.length_factor, cmath.phase(hand) - hour_angle) for hand in (second, minute)
        ]
        nodes = [(second, second), (minute, minute)]
        for _ in range(max(0, min(self.depth, _MAX_DEPTH))):
            width *= self.width_factor
            luminance *= self.luminance_factor
            if width < _MIN_WIDTH:
                break
            next_nodes = []
            for position, direction in nodes:
                for rotor in rotors:
                    branch = direction * rotor
                    end = position + branch
                    segments.append(self._segment(position, end, width, luminance))
                    next_nodes.append((end, branch))
            nodes = next_nodes
        return segments

    def _segment(self, start: complex, end: complex, width: float, luminance: float) -> Segment:
        zoom = self.zoom
        return (
            (start.real * zoom, start.imag * zoom),
            (end.real * zoom, end.imag * zoom),
            width,
            luminance,
        )
