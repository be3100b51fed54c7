"""Tests for runtime settings and their overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from demodeck.services.settings import Settings, default_state_path, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DEMODECK_STATE_PATH",
        "DEMODECK_LINK",
        "DEMODECK_DEBUG_LOGGING",
        "DEMODECK_PERSIST",
        "DEMODECK_FRAME_RATE",
        "DEMODECK_WINDOW_WIDTH",
        "DEMODECK_WINDOW_HEIGHT",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_overrides() -> None:
    settings = load_settings()

    assert settings == Settings()
    assert settings.resolved_state_path() == default_state_path()


def test_env_overrides_are_typed(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DEMODECK_STATE_PATH", str(tmp_path / "s.json"))
    monkeypatch.setenv("DEMODECK_PERSIST", "off")
    monkeypatch.setenv("DEMODECK_FRAME_RATE", "60")
    monkeypatch.setenv("DEMODECK_WINDOW_WIDTH", "1024")
    monkeypatch.setenv("DEMODECK_LINK", "clock")

    settings = load_settings()

    assert settings.resolved_state_path() == tmp_path / "s.json"
    assert settings.persist_state is False
    assert settings.frame_rate == pytest.approx(60.0)
    assert settings.window_width == 1024
    assert settings.link == "clock"


def test_invalid_numeric_env_values_are_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEMODECK_FRAME_RATE", "fast")
    monkeypatch.setenv("DEMODECK_WINDOW_HEIGHT", "tall")

    settings = load_settings()

    assert settings.frame_rate == Settings().frame_rate
    assert settings.window_height == Settings().window_height


def test_cli_overrides_take_precedence_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEMODECK_DEBUG_LOGGING", "true")

    settings = load_settings({"debug_logging": False, "frame_rate": 10.0, "unknown": 1})

    assert settings.debug_logging is False
    assert settings.frame_rate == 10.0


def test_none_override_clears_only_optional_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEMODECK_LINK", "clock")

    settings = load_settings({"link": None, "frame_rate": None})

    assert settings.link is None
    assert settings.frame_rate == Settings().frame_rate
