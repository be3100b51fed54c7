"""PySide6 host: drives demo frames from a timer and maps them onto Qt widgets.

Qt is retained-mode, so each surface keeps the widgets it created on earlier
frames and reuses them positionally. Signals from Qt (button clicks, menu
triggers, sub-window close requests) are queued and handed to the widget
that produced them on the next frame.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from PySide6.QtCore import QPointF, Qt, QTimer, QUrl
from PySide6.QtGui import (
    QAction,
    QCloseEvent,
    QColor,
    QDesktopServices,
    QFont,
    QImage,
    QPainter,
    QPen,
    QPixmap,
)
from PySide6.QtWidgets import (
    QCheckBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMdiArea,
    QMdiSubWindow,
    QMenu,
    QMenuBar,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from .context import HostContext, HostStyle
from .memory import AreaState, UiMemory
from .surface import Segment, TextureId, Toggle, Ui, WindowSpec

__all__ = ["QtContext", "QtMainWindow", "QtTextureAllocator", "install_qt_message_handler"]

LOGGER = logging.getLogger(__name__)

_DEFAULT_WINDOW_SIZE = (420, 320)


class QtTextureAllocator:
    """Keeps uploaded textures as :class:`QImage` instances."""

    def __init__(self) -> None:
        self._next_id: TextureId = 1
        self._images: dict[TextureId, QImage] = {}

    def alloc_srgba_premultiplied(
        self, size: tuple[int, int], pixels: Sequence[tuple[int, int, int, int]]
    ) -> TextureId:
        width, height = size
        image = QImage(width, height, QImage.Format.Format_RGBA8888_Premultiplied)
        for index, (r, g, b, a) in enumerate(pixels):
            image.setPixelColor(index % width, index // width, QColor(r, g, b, a))
        texture_id = self._next_id
        self._next_id += 1
        self._images[texture_id] = image
        return texture_id

    def free(self, texture_id: TextureId) -> None:
        self._images.pop(texture_id, None)

    def image(self, texture_id: TextureId) -> QImage | None:
        return self._images.get(texture_id)


class _LinesCanvas(QWidget):
    """Paints line segments given in unit-circle coordinates."""

    def __init__(self) -> None:
        super().__init__()
        self.segments: Sequence[Segment] = ()
        self.setMinimumSize(256, 256)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    def paintEvent(self, event: Any) -> None:  # noqa: N802 - Qt override
        del event
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(16, 16, 16))
        center = QPointF(self.width() / 2.0, self.height() / 2.0)
        scale = min(self.width(), self.height()) / 2.0
        for (x0, y0), (x1, y1), width, luminance in self.segments:
            level = max(0, min(255, round(255 * luminance)))
            painter.setPen(QPen(QColor(level, level, level), width))
            painter.drawLine(
                center + QPointF(x0 * scale, y0 * scale),
                center + QPointF(x1 * scale, y1 * scale),
            )
        painter.end()


class _NestedFrame(QFrame):
    """Framed sub-region used by ``resize_area``."""

    def __init__(self) -> None:
        super().__init__()
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.inner_layout = QVBoxLayout()
        self.setLayout(self.inner_layout)


class _NestedScroll(QScrollArea):
    """Scrollable sub-region used by ``scroll_area``."""

    def __init__(self) -> None:
        super().__init__()
        self.setWidgetResizable(True)
        inner = QWidget()
        self.inner_layout = QVBoxLayout()
        inner.setLayout(self.inner_layout)
        self.setWidget(inner)


class _SubWindow(QMdiSubWindow):
    """MDI sub-window whose close button only requests a close."""

    def __init__(self, context: QtContext, title: str) -> None:
        super().__init__()
        self._context = context
        self.setWindowTitle(title)
        self.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose, False)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        event.ignore()
        self._context.request_close(self.windowTitle())


class _PanelUi:
    """Surface over a Qt layout; widgets are matched to calls by position."""

    def __init__(self, context: QtContext, scope: str, layout: QVBoxLayout | QHBoxLayout) -> None:
        self._context = context
        self._scope = scope
        self._layout = layout
        self._index = 0

    @property
    def ctx(self) -> QtContext:
        return self._context

    def finish(self) -> None:
        """Hide widgets that were not drawn this frame."""

        for position in range(self._index, self._layout.count()):
            item = self._layout.itemAt(position)
            widget = item.widget() if item is not None else None
            if widget is not None:
                widget.hide()

    def _slot(self, kind: str, factory: Callable[[], QWidget]) -> QWidget:
        item = self._layout.itemAt(self._index)
        widget = item.widget() if item is not None else None
        if widget is None or widget.property("demodeck-kind") != kind:
            while self._layout.count() > self._index:
                stale = self._layout.takeAt(self._index)
                if stale is not None and stale.widget() is not None:
                    stale.widget().deleteLater()
            widget = factory()
            widget.setProperty("demodeck-kind", kind)
            self._layout.addWidget(widget)
        widget.show()
        self._index += 1
        return widget

    def _key(self) -> str:
        return f"{self._scope}#{self._index}"

    def _text(self, kind: str, text: str, font: QFont | None = None) -> None:
        label = self._slot(kind, QLabel)
        assert isinstance(label, QLabel)
        label.setWordWrap(kind == "label")
        if font is not None:
            label.setFont(font)
        label.setText(text)

    def label(self, text: str) -> None:
        self._text("label", text)

    def heading(self, text: str) -> None:
        font = QFont()
        font.setPointSizeF(font.pointSizeF() * 1.3)
        font.setBold(True)
        self._text("heading", text, font)

    def monospace(self, text: str) -> None:
        self._text("monospace", text, QFont("monospace"))

    def button(self, text: str, *, hover_text: str | None = None, monospace: bool = False) -> bool:
        key = self._key()
        context = self._context

        def _make() -> QWidget:
            widget = QPushButton()
            widget.clicked.connect(lambda: context.queue_click(key))
            return widget

        widget = self._slot("button", _make)
        assert isinstance(widget, QPushButton)
        widget.setText(text)
        widget.setToolTip(hover_text or "")
        if monospace:
            widget.setFont(QFont("monospace"))
        return context.consume_click(key)

    def checkbox(self, toggle: Toggle, text: str, *, hover_text: str | None = None) -> bool:
        key = self._key()
        context = self._context

        def _make() -> QWidget:
            widget = QCheckBox()
            widget.clicked.connect(lambda _checked=False: context.queue_click(key))
            return widget

        widget = self._slot("checkbox", _make)
        assert isinstance(widget, QCheckBox)
        changed = context.consume_click(key)
        if changed:
            toggle.set(not toggle.value)
        widget.setText(text)
        widget.setToolTip(hover_text or "")
        widget.setChecked(toggle.value)
        return changed

    def separator(self) -> None:
        def _make() -> QWidget:
            line = QFrame()
            line.setFrameShape(QFrame.Shape.HLine)
            return line

        self._slot("separator", _make)

    def hyperlink(self, url: str, text: str | None = None) -> None:
        label = self._slot("hyperlink", QLabel)
        assert isinstance(label, QLabel)
        label.setOpenExternalLinks(True)
        label.setText(f'<a href="{url}">{text or url}</a>')

    def lines(self, segments: Sequence[Segment]) -> None:
        canvas = self._slot("lines", _LinesCanvas)
        assert isinstance(canvas, _LinesCanvas)
        canvas.segments = segments
        canvas.update()

    def image(self, texture_id: TextureId, size: tuple[int, int]) -> None:
        label = self._slot("image", QLabel)
        assert isinstance(label, QLabel)
        image = self._context.textures.image(texture_id)
        if image is None:
            label.setText(f"missing texture {texture_id}")
            return
        width, height = size
        label.setPixmap(QPixmap.fromImage(image).scaled(max(width, 256), max(height, 32)))

    def menu_bar(self, body: Callable[[Ui], None]) -> None:
        self._context.draw_menu_bar(body)

    def menu(self, title: str, body: Callable[[Ui], None]) -> None:
        # Outside the menu bar a menu degrades to a titled section.
        self.heading(title)
        body(self)

    def trailing(self, body: Callable[[Ui], None]) -> None:
        body(self)

    def scroll_area(self, body: Callable[[Ui], None]) -> None:
        self._nested("scroll", body, scroll=True)

    def resize_area(self, body: Callable[[Ui], None]) -> None:
        self._nested("resize", body, scroll=False)

    def _nested(self, kind: str, body: Callable[[Ui], None], *, scroll: bool) -> None:
        scope = f"{self._scope}/{kind}{self._index}"

        outer = self._slot(kind, _NestedScroll if scroll else _NestedFrame)
        assert isinstance(outer, (_NestedScroll, _NestedFrame))
        child = _PanelUi(self._context, scope, outer.inner_layout)
        body(child)
        child.finish()
        if isinstance(outer, _NestedScroll):
            self._context.memory.scroll_offsets[scope] = float(outer.verticalScrollBar().value())


class _MenuUi:
    """Surface for the entries of one drop-down menu."""

    def __init__(self, context: QtContext, scope: str, menu: QMenu | QMenuBar) -> None:
        self._context = context
        self._scope = scope
        self._menu = menu
        self._index = 0

    @property
    def ctx(self) -> QtContext:
        return self._context

    def _action(self, kind: str, text: str) -> tuple[str, QAction]:
        key = f"{self._scope}#{self._index}"
        self._index += 1
        action = self._context.menu_action(key, self._menu, kind)
        if kind != "separator":
            action.setText(text)
        return key, action

    def label(self, text: str) -> None:
        _, action = self._action("label", text)
        action.setEnabled(False)

    heading = label
    monospace = label

    def button(self, text: str, *, hover_text: str | None = None, monospace: bool = False) -> bool:
        key, action = self._action("button", text)
        action.setToolTip(hover_text or "")
        return self._context.consume_click(key)

    def checkbox(self, toggle: Toggle, text: str, *, hover_text: str | None = None) -> bool:
        key, action = self._action("checkbox", text)
        action.setToolTip(hover_text or "")
        changed = self._context.consume_click(key)
        if changed:
            toggle.set(not toggle.value)
        action.setChecked(toggle.value)
        return changed

    def separator(self) -> None:
        self._action("separator", "")

    def hyperlink(self, url: str, text: str | None = None) -> None:
        key, action = self._action("hyperlink", text or url)
        action.setToolTip(url)
        if self._context.consume_click(key):
            QDesktopServices.openUrl(QUrl(url))

    def menu_bar(self, body: Callable[[Ui], None]) -> None:
        self._context.draw_menu_bar(body)

    def menu(self, title: str, body: Callable[[Ui], None]) -> None:
        body(_MenuUi(self._context, f"{self._scope}/{title}", self._context.submenu(self._menu, title)))

    def trailing(self, body: Callable[[Ui], None]) -> None:
        body(self)

    def scroll_area(self, body: Callable[[Ui], None]) -> None:
        body(self)

    resize_area = scroll_area

    def lines(self, segments: Sequence[Segment]) -> None:
        self.label(f"{len(segments)} lines")

    def image(self, texture_id: TextureId, size: tuple[int, int]) -> None:
        self.label(f"texture {texture_id}")


class _MenuBarUi(_MenuUi):
    """Top-level menu bar; ``menu`` creates drop-downs, ``trailing`` the corner."""

    def __init__(self, context: QtContext, bar: QMenuBar, corner: QWidget) -> None:
        super().__init__(context, "", bar)
        self._bar = bar
        self._corner = corner

    def menu(self, title: str, body: Callable[[Ui], None]) -> None:
        body(_MenuUi(self._context, title, self._context.top_menu(self._bar, title)))

    def trailing(self, body: Callable[[Ui], None]) -> None:
        panel = _PanelUi(self._context, "trailing", self._corner.layout())
        body(panel)
        panel.finish()


class QtContext(HostContext):
    """Host context backed by a :class:`QMdiArea` and a :class:`QMenuBar`."""

    def __init__(
        self,
        mdi: QMdiArea,
        menu_bar: QMenuBar,
        *,
        memory: UiMemory | None = None,
        style: HostStyle | None = None,
    ) -> None:
        super().__init__(memory, style)
        self._mdi = mdi
        self._menu_bar = menu_bar
        self._corner = QWidget()
        corner_layout = QHBoxLayout()
        corner_layout.setContentsMargins(0, 0, 4, 0)
        self._corner.setLayout(corner_layout)
        menu_bar.setCornerWidget(self._corner, Qt.Corner.TopRightCorner)
        self.textures = QtTextureAllocator()
        self._pending_clicks: set[str] = set()
        self._pending_closes: set[str] = set()
        self._clicks: set[str] = set()
        self._closes: set[str] = set()
        self._windows: dict[str, tuple[_SubWindow, QVBoxLayout]] = {}
        self._placed: dict[str, AreaState] = {}
        self._menus: dict[str, QMenu] = {}
        self._actions: dict[str, QAction] = {}
        mdi.subWindowActivated.connect(self._on_window_activated)

    # ------------------------------------------------------------------
    # Input queue
    # ------------------------------------------------------------------
    def queue_click(self, key: str) -> None:
        self._pending_clicks.add(key)

    def request_close(self, title: str) -> None:
        self._pending_closes.add(title)

    def consume_click(self, key: str) -> bool:
        if key in self._clicks:
            self._clicks.discard(key)
            return True
        return False

    def begin_frame(self) -> None:
        super().begin_frame()
        self._clicks, self._pending_clicks = self._pending_clicks, set()
        self._closes, self._pending_closes = self._pending_closes, set()

    def end_frame(self) -> tuple[str, ...]:
        shown = super().end_frame()
        for title, (window, _) in self._windows.items():
            if title not in shown and window.isVisible():
                window.hide()
        return shown

    def run_frame(self, body: Callable[[Ui], None]) -> tuple[str, ...]:
        self.begin_frame()
        body(_MenuBarUi(self, self._menu_bar, self._corner))
        return self.end_frame()

    # ------------------------------------------------------------------
    # Menus
    # ------------------------------------------------------------------
    def draw_menu_bar(self, body: Callable[[Ui], None]) -> None:
        body(_MenuBarUi(self, self._menu_bar, self._corner))

    def top_menu(self, bar: QMenuBar, title: str) -> QMenu:
        menu = self._menus.get(title)
        if menu is None:
            menu = bar.addMenu(title)
            menu.setToolTipsVisible(True)
            self._menus[title] = menu
        return menu

    def submenu(self, parent: QMenu | QMenuBar, title: str) -> QMenu:
        key = f"{id(parent)}/{title}"
        menu = self._menus.get(key)
        if menu is None:
            menu = parent.addMenu(title)
            menu.setToolTipsVisible(True)
            self._menus[key] = menu
        return menu

    def menu_action(self, key: str, menu: QMenu | QMenuBar, kind: str) -> QAction:
        action = self._actions.get(key)
        if action is None:
            if kind == "separator":
                action = menu.addSeparator()
            else:
                action = menu.addAction("")
                action.setCheckable(kind == "checkbox")
                action.triggered.connect(lambda _checked=False: self.queue_click(key))
            self._actions[key] = action
        return action

    # ------------------------------------------------------------------
    # Windows
    # ------------------------------------------------------------------
    def show_window(self, spec: WindowSpec, flag: Toggle, body: Callable[[Ui], None]) -> bool:
        if flag.value and spec.title in self._closes:
            self._closes.discard(spec.title)
            LOGGER.debug("Window %s closed by its close button", spec.title)
            flag.set(False)
        if not self._enter_window(spec, flag):
            return False

        window, layout = self._windows.get(spec.title) or self._create_window(spec)
        area = self.memory.area(spec.title)
        if self._placed.get(spec.title) is not area:
            # New window, or the area memory was reset since it was placed.
            window.move(int(area.position[0]), int(area.position[1]))
            self._placed[spec.title] = area
        panel = _PanelUi(self, spec.title, layout)
        body(panel)
        panel.finish()
        if spec.auto_sized or not spec.resizable:
            window.adjustSize()
        if not window.isVisible():
            window.show()
        return True

    def _on_window_activated(self, window: QMdiSubWindow | None) -> None:
        if isinstance(window, _SubWindow):
            self.memory.bring_to_front(window.windowTitle())

    def _create_window(self, spec: WindowSpec) -> tuple[_SubWindow, QVBoxLayout]:
        window = _SubWindow(self, spec.title)
        content = QWidget()
        layout = QVBoxLayout()
        layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        content.setLayout(layout)
        if spec.scroll:
            scroll = QScrollArea()
            scroll.setWidgetResizable(True)
            scroll.setWidget(content)
            window.setWidget(scroll)
        else:
            window.setWidget(content)
        width, height = spec.default_size or _DEFAULT_WINDOW_SIZE
        if spec.default_height is not None:
            height = spec.default_height
        window.resize(int(width), int(height))
        self._mdi.addSubWindow(window)
        self._windows[spec.title] = (window, layout)
        LOGGER.debug("Created sub-window %s", spec.title)
        return window, layout


class QtMainWindow(QMainWindow):
    """Top-level window that runs ``frame`` on a timer."""

    def __init__(
        self,
        frame: Callable[[QtContext], None],
        *,
        title: str = "demodeck",
        frame_rate: float = 30.0,
        size: tuple[int, int] = (1280, 800),
        on_close: Callable[[], None] | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(title)
        self.resize(*size)
        mdi = QMdiArea()
        self.setCentralWidget(mdi)
        self.context = QtContext(mdi, self.menuBar())
        self._frame = frame
        self._on_close = on_close
        self._timer = QTimer(self)
        self._timer.setInterval(max(1, int(1000.0 / max(frame_rate, 1.0))))
        self._timer.timeout.connect(self._tick)

    def start(self) -> None:
        self._tick()
        self._timer.start()

    def _tick(self) -> None:
        self._frame(self.context)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        self._timer.stop()
        if self._on_close is not None:
            self._on_close()
        super().closeEvent(event)


def install_qt_message_handler() -> None:
    """Redirect Qt warnings to the Python logging stack."""

    from PySide6.QtCore import QtMsgType, qInstallMessageHandler

    level_map = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _handler(mode, context, message):  # type: ignore[no-untyped-def]
        del context
        level = level_map.get(mode, logging.INFO)
        logging.getLogger("PySide6").log(level, message)

    qInstallMessageHandler(_handler)
