from __future__ import annotations

from pathlib import Path

from md_live.config import EditorSettings


def test_defaults_without_environment() -> None:
    settings = EditorSettings.from_env({})

    assert settings.data_dir is None
    assert settings.export_name == "markdown.md"
    assert settings.dark_mode is False
    assert settings.persist is True
    assert settings.log_preset is None


def test_environment_overrides() -> None:
    settings = EditorSettings.from_env(
        {
            "MD_LIVE_DATA_DIR": "/tmp/md-live",
            "MD_LIVE_EXPORT_NAME": "notes.md",
            "MD_LIVE_DARK": "yes",
            "MD_LIVE_PERSIST": "0",
            "MD_LIVE_LOG_PRESET": "development",
        }
    )

    assert settings.data_dir == Path("/tmp/md-live")
    assert settings.export_name == "notes.md"
    assert settings.dark_mode is True
    assert settings.persist is False
    assert settings.log_preset == "development"
