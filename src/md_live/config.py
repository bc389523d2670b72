"""Editor settings read from ``MD_LIVE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from md_live.adapters.storage import DEFAULT_EXPORT_NAME

ENV_PREFIX = "MD_LIVE_"


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    return environ.get(f"{ENV_PREFIX}{name}")


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _env(environ, name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass
class EditorSettings:
    data_dir: Optional[Path] = None
    export_name: str = DEFAULT_EXPORT_NAME
    dark_mode: bool = False
    persist: bool = True
    log_preset: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        env = os.environ if environ is None else environ
        data_dir = _env(env, "DATA_DIR")
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else None,
            export_name=_env(env, "EXPORT_NAME") or DEFAULT_EXPORT_NAME,
            dark_mode=_env_flag(env, "DARK", False),
            persist=_env_flag(env, "PERSIST", True),
            log_preset=_env(env, "LOG_PRESET") or None,
        )


__all__ = ["ENV_PREFIX", "EditorSettings"]
