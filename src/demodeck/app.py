"""Application bootstrap helpers for the demodeck demo app."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Callable, Dict, Sequence, TextIO, cast, get_args, get_origin, get_type_hints

from .demo import DemoEnvironment, DemoLink, DemoWindows
from .host.headless import HeadlessContext, HeadlessTextureAllocator
from .services.settings import Settings, load_settings
from .services.state_store import DemoStateStore
from .utils import logging as logging_utils

_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_FALSE_VALUES = {"0", "false", "no", "off", "disabled"}
_NONE_VALUES = {"none", "null"}
_LOGGER = logging.getLogger(__name__)


def configure_logging(debug: bool = False, *, force: bool = False) -> None:
    """Configure structured logging for the application."""

    level = logging.DEBUG if debug else logging.INFO
    logging_utils.setup_logging(level, force=force)
    _LOGGER.debug("Logging configured (level=%s)", logging.getLevelName(level))


def parse_link(value: str | None) -> DemoLink | None:
    """Map a CLI/env link name (case-insensitive) to a :class:`DemoLink`."""

    if value is None or not value.strip():
        return None
    try:
        return DemoLink(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(link.value for link in DemoLink)
        raise ValueError(f"Unknown link '{value}'; expected one of: {choices}") from exc


def run_headless(
    app: DemoWindows,
    frames: int,
    *,
    link: DemoLink | None = None,
    context: HeadlessContext | None = None,
    clock: Callable[[], datetime] | None = None,
) -> HeadlessContext:
    """Render ``frames`` frames of ``app`` without a display."""

    ctx = context or HeadlessContext()
    textures = HeadlessTextureAllocator()
    now = clock or datetime.now
    for _ in range(max(0, frames)):
        env = DemoEnvironment.now(link, clock=now())
        ctx.run_frame(lambda ui: app.ui(ui, env, textures))
    shown = ctx.last_frame.windows if ctx.last_frame is not None else ()
    _LOGGER.info("Rendered %d headless frame(s); last frame showed %s", frames, list(shown))
    return ctx


def run_qt(app: DemoWindows, settings: Settings, *, link: DemoLink | None, on_close: Callable[[], None]) -> int:
    """Run the demo inside a PySide6 main window until it is closed."""

    try:  # Local import to avoid mandatory PySide6 dependency at import time.
        from PySide6.QtWidgets import QApplication

        from .host import qt as qt_host
    except ImportError as exc:  # pragma: no cover - depends on desktop stack
        raise RuntimeError("PySide6 must be installed to launch the demodeck UI.") from exc

    qt_host.install_qt_message_handler()
    qapp = cast(Any, QApplication.instance() or QApplication(sys.argv))
    qapp.setApplicationName("demodeck")
    qapp.setApplicationDisplayName("demodeck")

    def _frame(ctx: Any) -> None:
        env = DemoEnvironment.now(link)
        ctx.run_frame(lambda ui: app.ui(ui, env, ctx.textures))

    window = qt_host.QtMainWindow(
        _frame,
        frame_rate=settings.frame_rate,
        size=(settings.window_width, settings.window_height),
        on_close=on_close,
    )
    window.show()
    window.start()
    return int(qapp.exec())


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point invoked by the `demodeck` console script."""

    args = _parse_cli_args(argv)

    debug = _env_flag("DEMODECK_DEBUG", default=False)
    configure_logging(debug)

    try:
        overrides = _coerce_cli_overrides(args.overrides or [])
        if args.state_path:
            overrides["state_path"] = args.state_path
        if args.no_persist:
            overrides["persist_state"] = False
        settings = load_settings(overrides or None)
        link = parse_link(args.link if args.link is not None else settings.link)
    except ValueError as exc:
        print(f"Invalid argument: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    if settings.debug_logging and not debug:
        configure_logging(True, force=True)

    store = DemoStateStore(settings.resolved_state_path())
    if args.reset_state:
        store.clear()
    app = store.load() if settings.persist_state else DemoWindows()

    if args.dump_state:
        _dump_state(app, store)
        return

    def _save() -> None:
        if not settings.persist_state:
            return
        try:
            store.save(app)
        except OSError as exc:
            _LOGGER.warning("Failed to save demo state to %s: %s", store.path, exc)

    if args.headless:
        run_headless(app, args.frames, link=link)
        _save()
        return

    exit_code = run_qt(app, settings, link=link, on_close=_save)
    if exit_code:
        raise SystemExit(exit_code)


def _env_flag(name: str, *, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _parse_cli_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="demodeck",
        description="Run the demodeck window demo, with or without a display.",
    )
    parser.add_argument(
        "--link",
        choices=[link.value for link in DemoLink],
        default=None,
        help="Open a specific part of the demo on start-up.",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Render frames without a display (useful for smoke tests).",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=1,
        metavar="N",
        help="Number of frames to render in headless mode.",
    )
    parser.add_argument(
        "--state-path",
        metavar="PATH",
        help="Override the default ~/.demodeck/state.json path.",
    )
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help="Neither load nor save window state.",
    )
    parser.add_argument(
        "--reset-state",
        action="store_true",
        help="Delete the stored window state before starting.",
    )
    parser.add_argument(
        "--dump-state",
        action="store_true",
        help="Print the persisted window state as JSON and exit.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override a runtime setting (repeatable).",
    )
    return parser.parse_args(argv)


def _coerce_cli_overrides(items: Sequence[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if not items:
        return overrides

    fields = Settings.__dataclass_fields__  # type: ignore[attr-defined]
    type_hints = get_type_hints(Settings)
    for entry in items:
        if "=" not in entry:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        key, raw_value = entry.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError("Override is missing a field name.")
        if key not in fields:
            raise ValueError(f"Unknown setting '{key}'.")
        annotation = type_hints.get(key, fields[key].type)
        overrides[key] = _coerce_value(annotation, raw_value.strip())
    return overrides


def _coerce_value(annotation: Any, raw_value: str) -> Any:
    target = _resolve_annotation(annotation)
    normalized = raw_value.strip()

    if normalized.lower() in _NONE_VALUES and type(None) in get_args(annotation):
        return None

    if target is str or target is Any:
        return normalized
    if target is bool:
        return _parse_bool(normalized)
    if target is int:
        return int(normalized, 10)
    if target is float:
        return float(normalized)
    return normalized


def _resolve_annotation(annotation: Any) -> Any:
    if get_origin(annotation) is None:
        return annotation
    args = [arg for arg in get_args(annotation) if arg is not type(None)]
    return args[0] if args else get_origin(annotation)


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot coerce '{value}' to a boolean.")


def _dump_state(app: DemoWindows, store: DemoStateStore, *, stream: TextIO | None = None) -> None:
    destination = stream or sys.stdout
    output = {"state": app.to_state(), "meta": {"path": str(store.path)}}
    json.dump(output, destination, indent=2)
    destination.write("\n")
