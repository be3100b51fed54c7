"""Tests for the menu bar and the clock formatter."""

from __future__ import annotations

from dataclasses import asdict

import pytest

from demodeck.demo.menu_bar import EGUI_HOME_PAGE, WINDOW_CHECKBOXES, format_clock, show_menu_bar
from demodeck.demo.windows import OpenWindows, WindowKind
from demodeck.host.headless import FrameRecord, HeadlessContext
from demodeck.host.surface import WindowSpec


def _bar(ctx: HeadlessContext, windows: OpenWindows, seconds: float | None = None) -> FrameRecord:
    return ctx.run_frame(lambda ui: show_menu_bar(ui, windows, seconds))


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0.0, "00:00:00.00"),
        (3661.5, "01:01:01.50"),
        (86399.99, "23:59:59.99"),
        (86400.0, "00:00:00.00"),
        (86400.0 + 59.25, "00:00:59.25"),
        (12 * 3600.0 + 34 * 60.0 + 56.0, "12:34:56.00"),
    ],
)
def test_format_clock(seconds: float, expected: str) -> None:
    assert format_clock(seconds) == expected


def test_menus_are_rendered_in_order() -> None:
    ctx = HeadlessContext()

    record = _bar(ctx, OpenWindows())

    assert record.texts("menu") == ["File", "Windows", "About"]
    assert record.texts("button", scope="File") == ["Reorganize windows", "Clear entire memory"]
    assert any("demodeck" in text for text in record.texts("label", scope="About"))
    link = record.find("About/egui home page")
    assert link is not None
    assert link.kind == "hyperlink"
    assert link.value == EGUI_HOME_PAGE


def test_windows_menu_lists_every_window_once() -> None:
    ctx = HeadlessContext()

    record = _bar(ctx, OpenWindows())

    labels = record.texts("checkbox", scope="Windows")
    assert labels == [entry[1] for entry in WINDOW_CHECKBOXES if entry is not None]
    kinds = [entry[0] for entry in WINDOW_CHECKBOXES if entry is not None]
    assert sorted(kinds, key=lambda kind: kind.value) == sorted(WindowKind, key=lambda kind: kind.value)
    assert len([item for item in record if item.kind == "separator"]) == 2


def test_checkboxes_reflect_current_state() -> None:
    ctx = HeadlessContext()
    windows = OpenWindows(memory=True)

    record = _bar(ctx, windows)

    assert record.checkbox("Windows/Demo") is True
    assert record.checkbox("Windows/Memory") is True
    assert record.checkbox("Windows/Settings") is False


def test_checkbox_click_toggles_the_flag_within_the_same_frame() -> None:
    ctx = HeadlessContext()
    windows = OpenWindows()

    ctx.click("Windows/Settings")
    record = _bar(ctx, windows)

    assert windows.settings is True
    assert record.checkbox("Windows/Settings") is True


def test_double_toggle_returns_to_the_prior_state() -> None:
    ctx = HeadlessContext()
    windows = OpenWindows(inspection=True)
    before = asdict(windows)

    ctx.click("Windows/Inspection")
    _bar(ctx, windows)
    ctx.click("Windows/Inspection")
    _bar(ctx, windows)

    assert asdict(windows) == before


def test_clock_button_is_absent_without_time() -> None:
    ctx = HeadlessContext()

    record = _bar(ctx, OpenWindows(), None)

    assert record.find("trailing/0") is None


def test_clock_button_shows_time_and_toggles_the_clock_window() -> None:
    ctx = HeadlessContext()
    windows = OpenWindows()

    record = _bar(ctx, windows, 3661.5)
    clock = record.find("trailing/0")
    assert clock is not None
    assert clock.kind == "button"
    assert clock.text == "01:01:01.50"

    ctx.click("trailing/0")
    _bar(ctx, windows, 3662.0)
    assert windows.fractal_clock is True

    ctx.click("trailing/0")
    _bar(ctx, windows, 3663.0)
    assert windows.fractal_clock is False


def test_reorganize_resets_areas_but_not_visibility() -> None:
    ctx = HeadlessContext()
    windows = OpenWindows(settings=True)
    ctx.memory.area("Demo")
    ctx.memory.scroll_offsets["Demo"] = 12.0

    ctx.click("File/Reorganize windows")
    _bar(ctx, windows)

    assert ctx.memory.areas == {}
    assert ctx.memory.scroll_offsets == {"Demo": 12.0}
    assert windows == OpenWindows(settings=True)


def test_clear_memory_replaces_host_memory() -> None:
    ctx = HeadlessContext()
    windows = OpenWindows()
    original = ctx.memory
    spec = WindowSpec("Scratch", scroll=True)
    ctx.run_frame(lambda ui: ui.ctx.show_window(spec, windows.flag(WindowKind.DEMO), lambda _ui: None))
    ctx.memory.collapsing["Scratch/details"] = True
    assert not original.is_empty()

    ctx.click("File/Clear entire memory")
    _bar(ctx, windows)

    assert ctx.memory is not original
    assert ctx.memory.is_empty()
    assert windows == OpenWindows()
