"""Behaviour shared by every host context."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from ..utils.logging import set_current_frame
from .memory import UiMemory
from .surface import AttrToggle, Toggle, Ui, WindowSpec

__all__ = ["HostStyle", "HostContext"]

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class HostStyle:
    """Host-wide presentation options edited from the Settings window."""

    debug_paint: bool = False
    animate_windows: bool = True
    striped_lists: bool = False
    pixels_per_point: float = 1.0


class HostContext(ABC):
    """Owns the UI memory and implements the built-in host panels.

    Subclasses decide how windows are actually put on screen.
    """

    def __init__(self, memory: UiMemory | None = None, style: HostStyle | None = None) -> None:
        self.memory = memory or UiMemory()
        self.style = style or HostStyle()
        self.frame_nr = 0
        self._shown: list[str] = []
        self._shown_last_frame: tuple[str, ...] = ()

    # ------------------------------------------------------------------
    # Frame lifecycle
    # ------------------------------------------------------------------
    def begin_frame(self) -> None:
        self.frame_nr += 1
        self._shown = []
        set_current_frame(self.frame_nr)

    def end_frame(self) -> tuple[str, ...]:
        self._shown_last_frame = tuple(self._shown)
        set_current_frame(None)
        return self._shown_last_frame

    @property
    def windows_shown(self) -> tuple[str, ...]:
        """Titles shown so far in the current frame."""

        return tuple(self._shown)

    # ------------------------------------------------------------------
    # Context protocol
    # ------------------------------------------------------------------
    def clear_memory(self) -> None:
        """Replace the UI memory with a fresh, empty one."""

        LOGGER.info(
            "Clearing UI memory (%d areas, %d scroll offsets, %d collapsibles)",
            len(self.memory.areas),
            len(self.memory.scroll_offsets),
            len(self.memory.collapsing),
        )
        self.memory = UiMemory()

    @abstractmethod
    def show_window(self, spec: WindowSpec, flag: Toggle, body: Callable[[Ui], None]) -> bool:
        """Draw ``body`` inside a window while ``flag`` is set.

        Returns whether the window was drawn. The window's close control
        may only clear ``flag``.
        """

    def _enter_window(self, spec: WindowSpec, flag: Toggle) -> bool:
        if not flag.value:
            return False
        self.memory.area(spec.title)
        self._shown.append(spec.title)
        return True

    # ------------------------------------------------------------------
    # Built-in panels
    # ------------------------------------------------------------------
    def settings_ui(self, ui: Ui) -> None:
        ui.heading("Style")
        ui.checkbox(AttrToggle(self.style, "debug_paint"), "Paint debug rectangles")
        ui.checkbox(AttrToggle(self.style, "animate_windows"), "Animate windows")
        ui.checkbox(AttrToggle(self.style, "striped_lists"), "Striped lists")
        ui.label(f"Pixels per point: {self.style.pixels_per_point:g}")

    def inspection_ui(self, ui: Ui) -> None:
        ui.label(f"Frame: {self.frame_nr}")
        ui.label(f"Windows shown last frame: {len(self._shown_last_frame)}")
        for title in self._shown_last_frame:
            ui.monospace(f"  {title}")

    def memory_ui(self, ui: Ui) -> None:
        memory = self.memory
        ui.label(f"Window areas: {len(memory.areas)}")
        ui.label(f"Scroll offsets: {len(memory.scroll_offsets)}")
        ui.label(f"Collapsing headers: {len(memory.collapsing)}")
        for title in memory.stacking():
            ui.monospace(f"  {title}")
        if ui.button("Reset window areas"):
            memory.reset_areas()
        if ui.button("Clear entire memory", hover_text="Forget scroll, collapsibles etc"):
            self.clear_memory()
