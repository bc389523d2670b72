"""Session persistence and markdown file import/export.

The last session lives in a small JSON key-value file under the per-user
data directory. Exported files are written and read without newline
translation so an export followed by an import returns the same text.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from contextlib import suppress
from pathlib import Path
from typing import IO, Dict, Optional, Protocol, Union

from platformdirs import user_data_dir

from md_live.runtime import telemetry

LOGGER_NAME = "md_live.storage"
APP_NAME = "md-live"
APP_AUTHOR = "md-live"
STORAGE_KEY = "markdown"
SESSION_FILENAME = "session.json"
DEFAULT_EXPORT_NAME = "markdown.md"

FileSource = Union[str, "os.PathLike[str]", IO[str], IO[bytes]]


class SessionStoreError(RuntimeError):
    """Raised when the session or a markdown file cannot be read or written."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class SessionStore(Protocol):
    def load_last_session(self) -> Optional[str]:
        ...

    def save_session(self, buffer: str) -> None:
        ...

    def export_to_file(self, buffer: str, filename: Union[str, "os.PathLike[str]"]) -> Path:
        ...

    async def import_from_file(self, source: FileSource) -> str:
        ...


def default_data_dir() -> Path:
    return Path(user_data_dir(APP_NAME, APP_AUTHOR))


def write_text_file(text: str, path: Union[str, "os.PathLike[str]"]) -> Path:
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError as exc:
        raise SessionStoreError(f"Cannot write {target}: {exc}", path=target) from exc
    telemetry.record_event(
        "storage.export", data={"path": str(target), "length": len(text)}, logger_name=LOGGER_NAME
    )
    return target


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def read_text_file(source: FileSource) -> str:
    """Read markdown from a path or an open file handle."""

    if hasattr(source, "read"):
        data = source.read()  # type: ignore[union-attr]
        return _decode(data) if isinstance(data, bytes) else data

    path = Path(source)  # type: ignore[arg-type]
    if not path.exists():
        raise SessionStoreError(f"File not found: {path}", path=path)
    try:
        text = _decode(path.read_bytes())
    except OSError as exc:
        raise SessionStoreError(f"Cannot read {path}: {exc}", path=path) from exc
    telemetry.record_event(
        "storage.import", data={"path": str(path), "length": len(text)}, logger_name=LOGGER_NAME
    )
    return text


class _FileTransfer:
    """Export/import shared by every store; only session storage differs."""

    def export_to_file(
        self, buffer: str, filename: Union[str, "os.PathLike[str]"] = DEFAULT_EXPORT_NAME
    ) -> Path:
        return write_text_file(buffer, filename)

    async def import_from_file(self, source: FileSource) -> str:
        return await asyncio.to_thread(read_text_file, source)


class JsonSessionStore(_FileTransfer):
    """Keeps the last buffer under ``STORAGE_KEY`` in a JSON file."""

    def __init__(
        self,
        data_dir: Union[str, "os.PathLike[str]", None] = None,
        *,
        filename: str = SESSION_FILENAME,
    ) -> None:
        self.data_dir = Path(data_dir) if data_dir is not None else default_data_dir()
        self.path = self.data_dir / filename

    def _read_all(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise SessionStoreError(f"Cannot load session: {exc}", path=self.path) from exc
        return data if isinstance(data, dict) else {}

    def load_last_session(self) -> Optional[str]:
        value = self._read_all().get(STORAGE_KEY)
        # An empty buffer is not worth restoring.
        if not isinstance(value, str) or not value:
            return None
        return value

    def save_session(self, buffer: str) -> None:
        try:
            data = self._read_all()
        except SessionStoreError as exc:
            # An unreadable session file is overwritten.
            telemetry.record_event(
                "storage.session_reset",
                level="warning",
                data={"path": str(self.path), "reason": str(exc)},
                logger_name=LOGGER_NAME,
            )
            data = {}
        data[STORAGE_KEY] = buffer
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=".session-", suffix=".json")
        except OSError as exc:
            raise SessionStoreError(f"Cannot save session: {exc}", path=self.path) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            with suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise SessionStoreError(f"Cannot save session: {exc}", path=self.path) from exc


class MemorySessionStore(_FileTransfer):
    """Process-local store used when persistence is switched off."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self._values: Dict[str, str] = {}
        if initial is not None:
            self._values[STORAGE_KEY] = initial

    def load_last_session(self) -> Optional[str]:
        return self._values.get(STORAGE_KEY) or None

    def save_session(self, buffer: str) -> None:
        self._values[STORAGE_KEY] = buffer


__all__ = [
    "DEFAULT_EXPORT_NAME",
    "JsonSessionStore",
    "MemorySessionStore",
    "STORAGE_KEY",
    "SessionStore",
    "SessionStoreError",
    "default_data_dir",
    "read_text_file",
    "write_text_file",
]
