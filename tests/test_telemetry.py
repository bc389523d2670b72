from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict

import pytest

from md_live.runtime import telemetry


class RecordingConfig:
    def __init__(self) -> None:
        self.calls: Dict[str, Any] = {}

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("with_"):
            raise AttributeError(name)

        def record(value: Any) -> "RecordingConfig":
            self.calls[name] = value
            return self

        return record


@pytest.fixture
def fake_telelog(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.setattr(telemetry, "tl", SimpleNamespace(Config=RecordingConfig))
    monkeypatch.setattr(telemetry, "user_log_dir", lambda *args: str(tmp_path / "logs"))
    monkeypatch.setattr(telemetry, "_ACTIVE_CONFIG", None)
    for name in ("LOG_FILE", "DISABLE_CONSOLE", "LOG_LEVEL"):
        monkeypatch.delenv(f"MD_LIVE_{name}", raising=False)
    return tmp_path / "logs"


def test_console_host_keeps_console_output(fake_telelog: Path) -> None:
    telemetry.configure()

    calls = telemetry._ACTIVE_CONFIG.calls
    assert calls["with_console_output"] is True
    assert "with_file_output" not in calls


def test_full_screen_host_logs_to_default_file(fake_telelog: Path) -> None:
    telemetry.configure(console=False)

    calls = telemetry._ACTIVE_CONFIG.calls
    assert calls["with_console_output"] is False
    assert calls["with_file_output"] == str(fake_telelog / "md_live.log")
    assert fake_telelog.is_dir()


def test_log_file_variable_wins_over_default(
    fake_telelog: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("MD_LIVE_LOG_FILE", "/tmp/editor.log")

    telemetry.configure(preset="development", console=False)

    calls = telemetry._ACTIVE_CONFIG.calls
    assert calls["with_min_level"] == "DEBUG"
    assert calls["with_console_output"] is False
    assert calls["with_file_output"] == "/tmp/editor.log"


def test_production_preset_always_writes_a_file(fake_telelog: Path) -> None:
    telemetry.configure(preset="production")

    calls = telemetry._ACTIVE_CONFIG.calls
    assert calls["with_console_output"] is False
    assert calls["with_file_output"] == str(fake_telelog / "md_live.log")


def test_unknown_preset_is_rejected(fake_telelog: Path) -> None:
    with pytest.raises(ValueError, match="Unknown preset"):
        telemetry.configure(preset="verbose")
