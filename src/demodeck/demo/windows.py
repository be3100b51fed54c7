"""Visibility flags for the fixed set of demo windows."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["WindowKind", "OpenWindows", "WindowFlag"]


class WindowKind(str, Enum):
    """Every window the demo app knows about.

    The value of each member is the matching attribute on :class:`OpenWindows`.
    """

    DEMO = "demo"
    FRACTAL_CLOCK = "fractal_clock"
    SETTINGS = "settings"
    INSPECTION = "inspection"
    MEMORY = "memory"
    RESIZE = "resize"
    COLOR_TEST = "color_test"


@dataclass(slots=True)
class OpenWindows:
    """Which windows are currently shown.

    ``OpenWindows()`` is the default state: only the demo window is open.
    """

    demo: bool = True
    fractal_clock: bool = False

    # host panels
    settings: bool = False
    inspection: bool = False
    memory: bool = False
    resize: bool = False

    # debug
    color_test: bool = False

    @classmethod
    def none(cls) -> OpenWindows:
        """Return a set with every window closed."""

        return cls(demo=False)

    @classmethod
    def default(cls) -> OpenWindows:
        """Return the start-up state (demo window only)."""

        return cls()

    @classmethod
    def isolated(cls, kind: WindowKind) -> OpenWindows:
        """Return a set where ``kind`` is the only open window."""

        windows = cls.none()
        setattr(windows, kind.value, True)
        return windows

    def is_open(self, kind: WindowKind) -> bool:
        return bool(getattr(self, kind.value))

    def open_kinds(self) -> tuple[WindowKind, ...]:
        return tuple(kind for kind in WindowKind if self.is_open(kind))

    def flag(self, kind: WindowKind) -> WindowFlag:
        """Return a handle that can read and write only ``kind``'s flag."""

        return WindowFlag(self, kind)


class WindowFlag:
    """Mutation capability scoped to a single visibility flag."""

    __slots__ = ("_windows", "_kind")

    def __init__(self, windows: OpenWindows, kind: WindowKind) -> None:
        self._windows = windows
        self._kind = kind

    @property
    def kind(self) -> WindowKind:
        return self._kind

    @property
    def value(self) -> bool:
        return self._windows.is_open(self._kind)

    def set(self, value: bool) -> None:
        setattr(self._windows, self._kind.value, bool(value))

    def toggle(self) -> None:
        self.set(not self.value)

    def close(self) -> None:
        self.set(False)

    def __bool__(self) -> bool:
        return self.value

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"WindowFlag({self._kind.value}={self.value})"
