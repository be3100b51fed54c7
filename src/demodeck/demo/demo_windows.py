"""The demo app: menu bar plus every window it can open."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Mapping

from ..host.surface import Context, TextureAllocator, Ui, WindowSpec
from ..utils.records import coerce_dataclass
from .links import DemoEnvironment, LinkDispatcher
from .menu_bar import show_menu_bar
from .panels import LOREM_IPSUM, LOREM_IPSUM_LONG, ColorTest, DemoPanel, FractalClock
from .windows import OpenWindows, WindowKind

__all__ = ["DemoWindows", "RESIZE_WINDOW_TITLES", "TRANSIENT_FIELDS"]

LOGGER = logging.getLogger(__name__)

TRANSIENT_FIELDS: frozenset[str] = frozenset({"color_test", "links"})

_DEMO = WindowSpec(title="Demo", scroll=True)
_SETTINGS = WindowSpec(title="Settings")
_INSPECTION = WindowSpec(title="Inspection", scroll=True)
_MEMORY = WindowSpec(title="Memory", resizable=False)
_COLOR_TEST = WindowSpec(title="Color Test", scroll=True, default_size=(800.0, 1024.0))

_RESIZABLE = WindowSpec(title="resizable", scroll=False, resizable=True)
_RESIZABLE_EMBEDDED_SCROLL = WindowSpec(
    title="resizable + embedded scroll", scroll=False, resizable=True, default_height=300.0
)
_RESIZABLE_SCROLL = WindowSpec(
    title="resizable + scroll", scroll=True, resizable=True, default_height=300.0
)
_AUTO_SIZED = WindowSpec(title="auto_sized", auto_sized=True)

RESIZE_WINDOW_TITLES: tuple[str, ...] = (
    _RESIZABLE.title,
    _RESIZABLE_EMBEDDED_SCROLL.title,
    _RESIZABLE_SCROLL.title,
    _AUTO_SIZED.title,
)


@dataclass(slots=True)
class DemoWindows:
    """Owns the visibility set and the content state of every demo window."""

    open_windows: OpenWindows = field(default_factory=OpenWindows)
    demo_panel: DemoPanel = field(default_factory=DemoPanel)
    fractal_clock: FractalClock = field(default_factory=FractalClock)
    color_test: ColorTest = field(default_factory=ColorTest)
    links: LinkDispatcher = field(default_factory=LinkDispatcher)

    def ui(
        self,
        ui: Ui,
        env: DemoEnvironment,
        tex_allocator: TextureAllocator | None = None,
    ) -> None:
        """Show the app ui (menu bar and windows) for one frame."""

        self.open_windows = self.links.dispatch(env.link, self.open_windows)
        show_menu_bar(ui, self.open_windows, env.seconds_since_midnight)
        self._windows(ui.ctx, env, tex_allocator)

    def _windows(
        self,
        ctx: Context,
        env: DemoEnvironment,
        tex_allocator: TextureAllocator | None,
    ) -> None:
        windows = self.open_windows

        ctx.show_window(_DEMO, windows.flag(WindowKind.DEMO), self.demo_panel.ui)
        ctx.show_window(_SETTINGS, windows.flag(WindowKind.SETTINGS), ctx.settings_ui)
        ctx.show_window(_INSPECTION, windows.flag(WindowKind.INSPECTION), ctx.inspection_ui)
        ctx.show_window(_MEMORY, windows.flag(WindowKind.MEMORY), ctx.memory_ui)
        ctx.show_window(
            _COLOR_TEST,
            windows.flag(WindowKind.COLOR_TEST),
            lambda ui: self.color_test.ui(ui, tex_allocator),
        )
        self.fractal_clock.window(
            ctx, windows.flag(WindowKind.FRACTAL_CLOCK), env.seconds_since_midnight
        )
        self._resize_windows(ctx)

    def _resize_windows(self, ctx: Context) -> None:
        # The whole group shares one flag: closing any of them closes all.
        open_flag = self.open_windows.flag(WindowKind.RESIZE)

        def _resizable(ui: Ui) -> None:
            ui.label("scroll:    NO")
            ui.label("resizable: YES")
            ui.label(LOREM_IPSUM)

        def _embedded_scroll(ui: Ui) -> None:
            ui.label("scroll:    NO")
            ui.label("resizable: YES")
            ui.heading("We have a sub-region with scroll bar:")

            def _long_text(inner: Ui) -> None:
                inner.label(LOREM_IPSUM_LONG)
                inner.label(LOREM_IPSUM_LONG)

            ui.scroll_area(_long_text)

        def _scroll(ui: Ui) -> None:
            ui.label("scroll:    YES")
            ui.label("resizable: YES")
            ui.label(LOREM_IPSUM_LONG)

        def _auto_sized(ui: Ui) -> None:
            ui.label("This window will auto-size based on its contents.")
            ui.heading("Resize this area:")
            ui.resize_area(lambda inner: inner.label(LOREM_IPSUM))
            ui.heading("Resize the above area!")

        ctx.show_window(_RESIZABLE, open_flag, _resizable)
        ctx.show_window(_RESIZABLE_EMBEDDED_SCROLL, open_flag, _embedded_scroll)
        ctx.show_window(_RESIZABLE_SCROLL, open_flag, _scroll)
        ctx.show_window(_AUTO_SIZED, open_flag, _auto_sized)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def to_state(self) -> dict[str, Any]:
        """Return the persisted record; transient fields are left out."""

        state = {
            item.name: asdict(getattr(self, item.name))
            for item in fields(self)
            if item.name not in TRANSIENT_FIELDS
        }
        state["fractal_clock"].pop("line_count", None)
        return state

    @classmethod
    def from_state(cls, payload: Mapping[str, Any]) -> DemoWindows:
        """Rebuild from a persisted record, using defaults for anything invalid."""

        app = cls(
            open_windows=coerce_dataclass(OpenWindows, payload.get("open_windows")),
            demo_panel=coerce_dataclass(DemoPanel, payload.get("demo_panel")),
            fractal_clock=coerce_dataclass(
                FractalClock, payload.get("fractal_clock"), exclude=("line_count",)
            ),
        )
        LOGGER.debug(
            "Restored demo state; open windows: %s",
            [kind.value for kind in app.open_windows.open_kinds()],
        )
        return app
