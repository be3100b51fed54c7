"""JSON persistence for the demo app's windows and their content state."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from ..demo.demo_windows import DemoWindows
from .settings import default_state_path

__all__ = ["DemoStateStore", "STATE_VERSION"]

LOGGER = logging.getLogger(__name__)
STATE_VERSION = 1


class DemoStateStore:
    """Persistence adapter for :class:`DemoWindows`.

    Only the flat persisted record is written. Transient state (the color
    test's textures, the last seen link) always starts fresh on load.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_state_path()

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self) -> DemoWindows:
        """Load the persisted state, or defaults when nothing usable is stored."""

        payload = self._read_payload()
        if not payload:
            return DemoWindows()
        version = payload.get("version")
        if version != STATE_VERSION:
            LOGGER.info("State file %s has version %r; loading known fields only", self._path, version)
        return DemoWindows.from_state(payload)

    def save(self, app: DemoWindows) -> Path:
        """Persist ``app`` to disk with an atomic file write."""

        payload = self._serialize(app)
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug(
            "State saved to %s: open windows=%s",
            self._path,
            [kind.value for kind in app.open_windows.open_kinds()],
        )
        return self._path

    def clear(self) -> None:
        """Remove the stored state so the next load starts from defaults."""

        self._path.unlink(missing_ok=True)

    def _serialize(self, app: DemoWindows) -> Dict[str, Any]:
        data = app.to_state()
        data["version"] = STATE_VERSION
        return data

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
            payload = json.loads(text)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("State file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("State file %s does not contain an object; ignoring it", self._path)
            return {}
        return payload
