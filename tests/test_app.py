"""Tests covering the application bootstrap helpers."""

from __future__ import annotations

import io
import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

import pytest

from demodeck import app
from demodeck.demo import DemoLink, DemoWindows, WindowKind
from demodeck.demo.windows import OpenWindows
from demodeck.services.state_store import DemoStateStore


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DEMODECK_LOG_DIR", str(tmp_path / "logs"))
    for name in ("DEMODECK_STATE_PATH", "DEMODECK_LINK", "DEMODECK_PERSIST", "DEMODECK_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(app, "configure_logging", lambda *args, **kwargs: None)


def test_parse_link_accepts_known_names() -> None:
    assert app.parse_link("clock") is DemoLink.CLOCK
    assert app.parse_link(" CLOCK ") is DemoLink.CLOCK
    assert app.parse_link(None) is None
    assert app.parse_link("") is None


def test_parse_link_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown link"):
        app.parse_link("kitchen-sink")


def test_run_headless_applies_link_once() -> None:
    demo = DemoWindows()
    ticks = iter(datetime(2024, 1, 1, 0, 0, second) for second in range(10))

    ctx = app.run_headless(demo, 3, link=DemoLink.CLOCK, clock=lambda: next(ticks))

    assert ctx.frame_nr == 3
    assert demo.open_windows == OpenWindows.isolated(WindowKind.FRACTAL_CLOCK)
    assert ctx.last_frame is not None
    assert ctx.last_frame.windows == ("Fractal Clock",)
    assert demo.fractal_clock.time == pytest.approx(2.0)


def test_main_headless_saves_state(tmp_path: Path) -> None:
    state_path = tmp_path / "state.json"

    app.main(["--headless", "--frames", "2", "--link", "clock", "--state-path", str(state_path)])

    saved = DemoStateStore(state_path).load()
    assert saved.open_windows == OpenWindows.isolated(WindowKind.FRACTAL_CLOCK)


def test_main_no_persist_writes_nothing(tmp_path: Path) -> None:
    state_path = tmp_path / "state.json"

    app.main(["--headless", "--no-persist", "--state-path", str(state_path)])

    assert not state_path.exists()


def test_main_reset_state_starts_from_defaults(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    state_path = tmp_path / "state.json"
    stored = DemoWindows(open_windows=OpenWindows.isolated(WindowKind.MEMORY))
    DemoStateStore(state_path).save(stored)

    app.main(["--reset-state", "--dump-state", "--state-path", str(state_path)])

    output = json.loads(capsys.readouterr().out)
    assert output["state"]["open_windows"] == asdict(OpenWindows.default())
    assert output["meta"]["path"] == str(state_path)


def test_dump_state_reports_persisted_record(tmp_path: Path) -> None:
    demo = DemoWindows()
    demo.demo_panel.counter = 3
    buffer = io.StringIO()

    app._dump_state(demo, DemoStateStore(tmp_path / "state.json"), stream=buffer)

    payload = json.loads(buffer.getvalue())
    assert payload["state"]["demo_panel"]["counter"] == 3
    assert "color_test" not in payload["state"]


def test_invalid_override_exits_with_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        app.main(["--headless", "--state-path", str(tmp_path / "s.json"), "--set", "frame_rate=fast"])

    assert excinfo.value.code == 2


def test_unknown_env_link_exits_with_usage_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DEMODECK_LINK", "nowhere")

    with pytest.raises(SystemExit) as excinfo:
        app.main(["--headless", "--state-path", str(tmp_path / "s.json")])

    assert excinfo.value.code == 2


def test_coerce_cli_overrides_uses_field_types() -> None:
    overrides = app._coerce_cli_overrides(["frame_rate=12.5", "persist_state=no", "window_width=640"])

    assert overrides == {"frame_rate": 12.5, "persist_state": False, "window_width": 640}

    with pytest.raises(ValueError):
        app._coerce_cli_overrides(["nonsense"])
    with pytest.raises(ValueError):
        app._coerce_cli_overrides(["missing_field=1"])


def test_none_override_clears_an_inherited_link(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DEMODECK_LINK", "nowhere")
    state_path = tmp_path / "state.json"

    app.main(["--headless", "--state-path", str(state_path), "--set", "link=none"])

    assert DemoStateStore(state_path).load().open_windows == OpenWindows.default()
    assert app._coerce_cli_overrides(["state_path=NULL"]) == {"state_path": None}
    assert app._coerce_cli_overrides(["link=clock"]) == {"link": "clock"}
