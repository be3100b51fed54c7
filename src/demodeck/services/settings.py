"""Runtime settings for the demo host and their environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

__all__ = ["Settings", "load_settings", "default_state_path"]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".demodeck"
_ENV_OVERRIDES: Mapping[str, str] = {
    "DEMODECK_STATE_PATH": "state_path",
    "DEMODECK_LINK": "link",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "DEMODECK_DEBUG_LOGGING": "debug_logging",
    "DEMODECK_PERSIST": "persist_state",
}
_FLOAT_ENV_OVERRIDES: Mapping[str, str] = {
    "DEMODECK_FRAME_RATE": "frame_rate",
}
_INT_ENV_OVERRIDES: Mapping[str, str] = {
    "DEMODECK_WINDOW_WIDTH": "window_width",
    "DEMODECK_WINDOW_HEIGHT": "window_height",
}
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}


def default_state_path() -> Path:
    return _SETTINGS_DIR / "state.json"


@dataclass(slots=True)
class Settings:
    """Options controlling how the demo host runs."""

    frame_rate: float = 30.0
    state_path: str | None = None
    persist_state: bool = True
    debug_logging: bool = False
    window_width: int = 1280
    window_height: int = 800
    link: str | None = None

    def resolved_state_path(self) -> Path:
        if self.state_path:
            return Path(self.state_path).expanduser()
        return default_state_path()


def load_settings(overrides: Mapping[str, Any] | None = None) -> Settings:
    """Return defaults updated by ``DEMODECK_*`` variables, then ``overrides``."""

    settings = _apply_env_overrides(Settings())
    if overrides:
        settings = _apply_overrides(settings, overrides, source="CLI")
    return settings


def _apply_overrides(settings: Settings, overrides: Mapping[str, Any], *, source: str) -> Settings:
    defaults = {item.name: item.default for item in fields(Settings)}
    # ``None`` only clears fields that are optional to begin with.
    filtered = {
        key: value
        for key, value in overrides.items()
        if key in defaults and (value is not None or defaults[key] is None)
    }
    if filtered:
        LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
        settings = replace(settings, **filtered)
    return settings


def _apply_env_overrides(settings: Settings) -> Settings:
    overrides: dict[str, Any] = {}
    for env_name, field_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is not None:
            overrides[field_name] = value
    for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is not None:
            overrides[field_name] = value.strip().lower() in _TRUE_VALUES
    for env_name, field_name in _INT_ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is None:
            continue
        try:
            overrides[field_name] = int(value, 10)
        except ValueError:
            LOGGER.warning("Environment override %s=%s is not a valid integer", env_name, value)
    for env_name, field_name in _FLOAT_ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is None:
            continue
        try:
            overrides[field_name] = float(value)
        except ValueError:
            LOGGER.warning("Environment override %s=%s is not a valid float", env_name, value)
    if overrides:
        settings = _apply_overrides(settings, overrides, source="environment")
    return settings
