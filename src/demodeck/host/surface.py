"""Render-surface contracts shared by the demo windows and every host.

The demo code only talks to these protocols. A host (headless recorder,
PySide6 adapter, ...) implements them and decides how a frame is drawn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence, runtime_checkable

from .memory import UiMemory

__all__ = [
    "Toggle",
    "AttrToggle",
    "WindowSpec",
    "Segment",
    "Ui",
    "Context",
    "TextureAllocator",
    "TextureId",
]

TextureId = int
Segment = tuple[tuple[float, float], tuple[float, float], float, float]
"""A line ``(start, end, width, luminance)`` in unit-circle coordinates."""


@runtime_checkable
class Toggle(Protocol):
    """A boolean that a checkbox can read and write."""

    @property
    def value(self) -> bool: ...

    def set(self, value: bool) -> None: ...


class AttrToggle:
    """:class:`Toggle` over a boolean attribute of an arbitrary object."""

    __slots__ = ("_target", "_name")

    def __init__(self, target: Any, name: str) -> None:
        self._target = target
        self._name = name

    @property
    def value(self) -> bool:
        return bool(getattr(self._target, self._name))

    def set(self, value: bool) -> None:
        setattr(self._target, self._name, bool(value))


@dataclass(frozen=True, slots=True)
class WindowSpec:
    """Title and chrome options for a floating window."""

    title: str
    scroll: bool = False
    resizable: bool = True
    auto_sized: bool = False
    default_size: tuple[float, float] | None = None
    default_height: float | None = None


class TextureAllocator(Protocol):
    """Capability to upload pixel data to the integration's painter."""

    def alloc_srgba_premultiplied(
        self, size: tuple[int, int], pixels: Sequence[tuple[int, int, int, int]]
    ) -> TextureId: ...

    def free(self, texture_id: TextureId) -> None: ...


class Context(Protocol):
    """Frame-global host state reachable from any :class:`Ui`."""

    memory: UiMemory

    def clear_memory(self) -> None: ...

    def show_window(
        self, spec: WindowSpec, flag: Toggle, body: Callable[[Ui], None]
    ) -> bool: ...

    def settings_ui(self, ui: Ui) -> None: ...

    def inspection_ui(self, ui: Ui) -> None: ...

    def memory_ui(self, ui: Ui) -> None: ...


class Ui(Protocol):
    """Immediate-mode drawing surface for one region of the screen."""

    @property
    def ctx(self) -> Context: ...

    def label(self, text: str) -> None: ...

    def heading(self, text: str) -> None: ...

    def monospace(self, text: str) -> None: ...

    def button(self, text: str, *, hover_text: str | None = None, monospace: bool = False) -> bool: ...

    def checkbox(self, toggle: Toggle, text: str, *, hover_text: str | None = None) -> bool: ...

    def separator(self) -> None: ...

    def hyperlink(self, url: str, text: str | None = None) -> None: ...

    def menu_bar(self, body: Callable[[Ui], None]) -> None: ...

    def menu(self, title: str, body: Callable[[Ui], None]) -> None: ...

    def trailing(self, body: Callable[[Ui], None]) -> None: ...

    def scroll_area(self, body: Callable[[Ui], None]) -> None: ...

    def resize_area(self, body: Callable[[Ui], None]) -> None: ...

    def lines(self, segments: Sequence[Segment]) -> None: ...

    def image(self, texture_id: TextureId, size: tuple[int, int]) -> None: ...
