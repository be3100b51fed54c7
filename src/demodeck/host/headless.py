"""Recording host used for scripted runs and tests.

Every widget drawn during a frame is captured as a :class:`RenderedItem`.
User input is scripted ahead of time: :meth:`HeadlessContext.click` and
:meth:`HeadlessContext.close` queue interactions that fire on the next
frame, the same way a real backend delivers input collected between frames.

Widget paths are ``"<scope>/<text>"`` where the scope is the enclosing menu
or window title (``"Windows/Settings"``, ``"Demo/Increment"``). Buttons in
the trailing menu-bar region are addressed by position (``"trailing/0"``)
because their text changes from frame to frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Sequence

from .context import HostContext, HostStyle
from .memory import UiMemory
from .surface import Segment, TextureId, Toggle, Ui, WindowSpec

__all__ = ["RenderedItem", "FrameRecord", "HeadlessUi", "HeadlessContext", "HeadlessTextureAllocator"]

LOGGER = logging.getLogger(__name__)

TRAILING_SCOPE = "trailing"


@dataclass(frozen=True, slots=True)
class RenderedItem:
    """One widget drawn during a headless frame."""

    kind: str
    path: str
    text: str = ""
    value: Any = None


@dataclass(slots=True)
class FrameRecord:
    """Everything drawn during one headless frame."""

    frame_nr: int
    items: list[RenderedItem] = field(default_factory=list)
    windows: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[RenderedItem]:
        return iter(self.items)

    def find(self, path: str) -> RenderedItem | None:
        for item in self.items:
            if item.path == path:
                return item
        return None

    def texts(self, kind: str | None = None, *, scope: str | None = None) -> list[str]:
        return [
            item.text
            for item in self.items
            if (kind is None or item.kind == kind)
            and (scope is None or item.path.startswith(f"{scope}/"))
        ]

    def checkbox(self, path: str) -> bool | None:
        item = self.find(path)
        if item is None or item.kind != "checkbox":
            return None
        return bool(item.value)


class HeadlessUi:
    """:class:`~demodeck.host.surface.Ui` that records instead of drawing."""

    def __init__(self, ctx: HeadlessContext, scope: str, record: FrameRecord) -> None:
        self._ctx = ctx
        self._scope = scope
        self._record = record
        self._position = 0

    @property
    def ctx(self) -> HeadlessContext:
        return self._ctx

    @property
    def scope(self) -> str:
        return self._scope

    def _path(self, text: str) -> str:
        if self._scope == TRAILING_SCOPE:
            return f"{self._scope}/{self._position}"
        return f"{self._scope}/{text}" if self._scope else text

    def _add(self, kind: str, text: str = "", value: Any = None, *, path: str | None = None) -> RenderedItem:
        item = RenderedItem(kind=kind, path=path or self._path(text), text=text, value=value)
        self._record.items.append(item)
        self._position += 1
        return item

    def _child(self, scope: str) -> HeadlessUi:
        return HeadlessUi(self._ctx, scope, self._record)

    # ------------------------------------------------------------------
    # Widgets
    # ------------------------------------------------------------------
    def label(self, text: str) -> None:
        self._add("label", text)

    def heading(self, text: str) -> None:
        self._add("heading", text)

    def monospace(self, text: str) -> None:
        self._add("monospace", text)

    def button(self, text: str, *, hover_text: str | None = None, monospace: bool = False) -> bool:
        path = self._path(text)
        clicked = self._ctx._consume_click(path)
        self._add("button", text, clicked, path=path)
        return clicked

    def checkbox(self, toggle: Toggle, text: str, *, hover_text: str | None = None) -> bool:
        path = self._path(text)
        changed = self._ctx._consume_click(path)
        if changed:
            toggle.set(not toggle.value)
        self._add("checkbox", text, toggle.value, path=path)
        return changed

    def separator(self) -> None:
        self._add("separator", path=f"{self._scope}/---")

    def hyperlink(self, url: str, text: str | None = None) -> None:
        self._add("hyperlink", text or url, url)

    def lines(self, segments: Sequence[Segment]) -> None:
        self._add("lines", f"{len(segments)} lines", len(segments), path=f"{self._scope}/<lines>")

    def image(self, texture_id: TextureId, size: tuple[int, int]) -> None:
        self._add("image", f"texture {texture_id}", texture_id, path=f"{self._scope}/<image>")

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def menu_bar(self, body: Callable[[Ui], None]) -> None:
        self._add("menu_bar", path="<menu_bar>")
        body(self._child(""))

    def menu(self, title: str, body: Callable[[Ui], None]) -> None:
        # Headless menus are always expanded so every entry is reachable.
        self._add("menu", title)
        body(self._child(title))

    def trailing(self, body: Callable[[Ui], None]) -> None:
        body(self._child(TRAILING_SCOPE))

    def scroll_area(self, body: Callable[[Ui], None]) -> None:
        self._ctx.memory.scroll_offsets.setdefault(f"{self._scope}/scroll", 0.0)
        body(self._child(self._scope))

    def resize_area(self, body: Callable[[Ui], None]) -> None:
        body(self._child(self._scope))


class HeadlessTextureAllocator:
    """Texture allocator that keeps pixel buffers in memory."""

    def __init__(self) -> None:
        self._next_id: TextureId = 1
        self.textures: dict[TextureId, tuple[tuple[int, int], list[tuple[int, int, int, int]]]] = {}

    def alloc_srgba_premultiplied(
        self, size: tuple[int, int], pixels: Sequence[tuple[int, int, int, int]]
    ) -> TextureId:
        width, height = size
        if len(pixels) != width * height:
            raise ValueError(f"Expected {width * height} pixels for {size}, got {len(pixels)}")
        texture_id = self._next_id
        self._next_id += 1
        self.textures[texture_id] = (size, list(pixels))
        return texture_id

    def free(self, texture_id: TextureId) -> None:
        self.textures.pop(texture_id, None)


class HeadlessContext(HostContext):
    """Host context that renders frames into :class:`FrameRecord` objects."""

    def __init__(self, memory: UiMemory | None = None, style: HostStyle | None = None) -> None:
        super().__init__(memory, style)
        self._pending_clicks: list[str] = []
        self._pending_closes: set[str] = set()
        self._clicks: list[str] = []
        self._closes: set[str] = set()
        self._record: FrameRecord | None = None
        self.last_frame: FrameRecord | None = None

    def click(self, *paths: str) -> None:
        """Queue widget activations for the next frame."""

        self._pending_clicks.extend(paths)

    def close(self, *titles: str) -> None:
        """Queue a click on the close button of each titled window."""

        self._pending_closes.update(titles)

    def run_frame(self, body: Callable[[Ui], None]) -> FrameRecord:
        """Run one frame of ``body`` against a fresh root surface."""

        self.begin_frame()
        self._clicks, self._pending_clicks = self._pending_clicks, []
        self._closes, self._pending_closes = self._pending_closes, set()
        record = FrameRecord(frame_nr=self.frame_nr)
        self._record = record
        try:
            body(HeadlessUi(self, "", record))
        finally:
            self._record = None
        record.windows = self.end_frame()
        for path in self._clicks:
            LOGGER.debug("Click on %s matched no widget in frame %d", path, self.frame_nr)
        for title in self._closes:
            LOGGER.debug("Close of %s matched no open window in frame %d", title, self.frame_nr)
        self._clicks = []
        self._closes = set()
        self.last_frame = record
        return record

    def show_window(self, spec: WindowSpec, flag: Toggle, body: Callable[[Ui], None]) -> bool:
        if self._record is None:
            raise RuntimeError("show_window called outside of run_frame")
        if flag.value and spec.title in self._closes:
            self._closes.discard(spec.title)
            LOGGER.debug("Window %s closed by its close button", spec.title)
            flag.set(False)
        if not self._enter_window(spec, flag):
            return False
        if spec.scroll:
            self.memory.scroll_offsets.setdefault(spec.title, 0.0)
        self._record.items.append(RenderedItem(kind="window", path=spec.title, text=spec.title, value=spec))
        body(HeadlessUi(self, spec.title, self._record))
        return True

    def _consume_click(self, path: str) -> bool:
        try:
            self._clicks.remove(path)
        except ValueError:
            return False
        return True
