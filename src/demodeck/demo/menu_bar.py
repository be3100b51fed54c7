"""Top menu bar: File / Windows / About plus the trailing clock button."""

from __future__ import annotations

import logging
import math

from .. import __version__
from ..host.surface import Ui
from .windows import OpenWindows, WindowKind

__all__ = ["EGUI_HOME_PAGE", "format_clock", "show_menu_bar", "WINDOW_CHECKBOXES"]

LOGGER = logging.getLogger(__name__)

_SECONDS_PER_DAY = 24.0 * 60.0 * 60.0
EGUI_HOME_PAGE = "https://github.com/emilk/egui"

# ``None`` entries are separators.
WINDOW_CHECKBOXES: tuple[tuple[WindowKind, str, str | None] | None, ...] = (
    (WindowKind.DEMO, "Demo", None),
    (WindowKind.FRACTAL_CLOCK, "Fractal Clock", None),
    None,
    (WindowKind.SETTINGS, "Settings", None),
    (WindowKind.INSPECTION, "Inspection", None),
    (WindowKind.MEMORY, "Memory", None),
    (WindowKind.RESIZE, "Resize examples", None),
    None,
    (WindowKind.COLOR_TEST, "Color test", "For testing the integrations painter"),
)


def format_clock(seconds: float) -> str:
    """Format seconds since midnight as ``HH:MM:SS.CC``, wrapping at 24h."""

    hours = math.floor(seconds % _SECONDS_PER_DAY / 3600.0)
    minutes = math.floor(seconds % 3600.0 / 60.0)
    secs = math.floor(seconds % 60.0)
    centis = math.floor(seconds % 1.0 * 100.0)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{centis:02d}"


def show_menu_bar(ui: Ui, windows: OpenWindows, seconds_since_midnight: float | None) -> None:
    """Render the menu bar, mutating ``windows`` and host memory in place."""

    def _bar(bar: Ui) -> None:
        bar.menu("File", _file_menu)
        bar.menu("Windows", lambda menu: _windows_menu(menu, windows))
        bar.menu("About", _about_menu)

        if seconds_since_midnight is not None:
            text = format_clock(seconds_since_midnight)

            def _clock(trailing: Ui) -> None:
                if trailing.button(text, monospace=True):
                    windows.flag(WindowKind.FRACTAL_CLOCK).toggle()

            bar.trailing(_clock)

    ui.menu_bar(_bar)


def _file_menu(menu: Ui) -> None:
    if menu.button("Reorganize windows"):
        LOGGER.debug("Resetting window areas")
        menu.ctx.memory.reset_areas()
    if menu.button("Clear entire memory", hover_text="Forget scroll, collapsibles etc"):
        LOGGER.warning("Clearing entire UI memory")
        menu.ctx.clear_memory()


def _windows_menu(menu: Ui, windows: OpenWindows) -> None:
    for entry in WINDOW_CHECKBOXES:
        if entry is None:
            menu.separator()
            continue
        kind, text, hover = entry
        menu.checkbox(windows.flag(kind), text, hover_text=hover)


def _about_menu(menu: Ui) -> None:
    menu.label(f"This is demodeck {__version__}")
    menu.label("A window-visibility playground for immediate-mode hosts.")
    menu.hyperlink(EGUI_HOME_PAGE, "egui home page")
