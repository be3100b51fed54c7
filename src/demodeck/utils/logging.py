"""Logging setup for demodeck.

Records are written to a rotating log file (and optionally the console),
each stamped with the number of the frame the host was drawing when the
record was emitted, so per-frame events such as link activations and
window closes can be lined up in the log.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

__all__ = ["FrameFilter", "setup_logging", "get_logger", "get_log_path", "set_current_frame"]

_LOG_DIR_ENV = "DEMODECK_LOG_DIR"
_LOG_FILE_NAME = "demodeck.log"
_DEFAULT_LOG_DIR = Path.home() / ".demodeck" / "logs"
_RECORD_FORMAT = "%(asctime)s %(levelname)-7s [frame %(frame)s] %(name)s: %(message)s"
_QUIET_LOGGERS: tuple[str, ...] = ("PySide6", "shiboken6")
_CONFIGURED = False
_LOG_PATH: Path | None = None
_CURRENT_FRAME: int | None = None


class FrameFilter(logging.Filter):
    """Adds a ``frame`` attribute to every record passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.frame = "-" if _CURRENT_FRAME is None else _CURRENT_FRAME
        return True


def set_current_frame(frame_nr: int | None) -> None:
    """Record which frame is being drawn; ``None`` between frames."""

    global _CURRENT_FRAME
    _CURRENT_FRAME = frame_nr


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    max_bytes: int = 512_000,
    backup_count: int = 2,
    force: bool = False,
) -> Path:
    """Install the file (and console) handlers on the root logger.

    Repeated calls are no-ops unless ``force`` is set, which replaces the
    existing handlers, e.g. to switch on debug output once the settings
    have been read.
    """

    global _CONFIGURED, _LOG_PATH
    if _CONFIGURED and not force and _LOG_PATH is not None:
        return _LOG_PATH

    directory = Path(log_dir or os.environ.get(_LOG_DIR_ENV) or _DEFAULT_LOG_DIR).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / _LOG_FILE_NAME

    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(_RECORD_FORMAT, datefmt="%H:%M:%S")
    frame_filter = FrameFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(frame_filter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.captureWarnings(True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    _CONFIGURED = True
    _LOG_PATH = log_path
    return log_path


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_log_path() -> Path | None:
    """Return the active log file, or ``None`` before :func:`setup_logging`."""

    return _LOG_PATH
