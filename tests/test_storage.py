from __future__ import annotations

import asyncio
import io
import json
import os
from pathlib import Path

import pytest

from md_live.actions import export_file, import_file, restore_session
from md_live.adapters.storage import (
    STORAGE_KEY,
    JsonSessionStore,
    MemorySessionStore,
    SessionStoreError,
    read_text_file,
)
from md_live.buffer import EditorSession, SelectionRange


def test_missing_session_loads_as_absent(tmp_path: Path) -> None:
    assert JsonSessionStore(tmp_path).load_last_session() is None


def test_save_then_load(tmp_path: Path) -> None:
    store = JsonSessionStore(tmp_path)

    store.save_session("# Notes\n\nhello")

    assert store.load_last_session() == "# Notes\n\nhello"
    saved = json.loads((tmp_path / "session.json").read_text(encoding="utf-8"))
    assert saved == {STORAGE_KEY: "# Notes\n\nhello"}


def test_empty_buffer_is_not_restored(tmp_path: Path) -> None:
    store = JsonSessionStore(tmp_path)

    store.save_session("")

    assert store.load_last_session() is None


def test_corrupt_session_file_fails_to_load(tmp_path: Path) -> None:
    (tmp_path / "session.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(SessionStoreError, match="Cannot load session"):
        JsonSessionStore(tmp_path).load_last_session()


def test_save_overwrites_corrupt_session_file(tmp_path: Path) -> None:
    (tmp_path / "session.json").write_text("{not json", encoding="utf-8")
    store = JsonSessionStore(tmp_path)

    store.save_session("x")

    assert store.load_last_session() == "x"


def test_failed_save_leaves_no_temp_files(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def refuse(src: str, dst: object) -> None:
        raise OSError("read-only file system")

    monkeypatch.setattr(os, "replace", refuse)
    store = JsonSessionStore(tmp_path)

    with pytest.raises(SessionStoreError, match="Cannot save session"):
        store.save_session("text")
    assert list(tmp_path.iterdir()) == []


def test_creates_data_dir_on_save(tmp_path: Path) -> None:
    JsonSessionStore(tmp_path / "nested" / "dir").save_session("text")

    assert (tmp_path / "nested" / "dir" / "session.json").exists()


def test_export_then_import_round_trips_bytes(tmp_path: Path) -> None:
    store = MemorySessionStore()
    content = "# Title\r\n\r\nCafé `code`\n\ttabbed\n"

    path = store.export_to_file(content, tmp_path / "out.md")

    assert path.read_bytes() == content.encode("utf-8")
    assert asyncio.run(store.import_from_file(path)) == content


def test_import_from_open_handle() -> None:
    handle = io.BytesIO("**hi**".encode("utf-8"))

    assert read_text_file(handle) == "**hi**"


def test_import_latin1_fallback(tmp_path: Path) -> None:
    legacy = tmp_path / "legacy.md"
    legacy.write_bytes("caf\xe9".encode("latin-1"))

    assert read_text_file(legacy) == "café"


def test_import_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SessionStoreError, match="File not found"):
        read_text_file(tmp_path / "nonexistent.md")


def test_restore_seeds_session(tmp_path: Path) -> None:
    store = JsonSessionStore(tmp_path)
    store.save_session("saved text")
    session = EditorSession()

    assert restore_session(session, store) is not None
    assert session.text == "saved text"
    assert session.selection == SelectionRange(0, 0)


def test_restore_with_nothing_saved() -> None:
    session = EditorSession("keep")

    assert restore_session(session, MemorySessionStore()) is None
    assert session.text == "keep"


def test_export_uses_default_name(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    path = export_file(EditorSession("body"), MemorySessionStore())

    assert path.name == "markdown.md"
    assert (tmp_path / "markdown.md").read_text(encoding="utf-8") == "body"


def test_import_file_replaces_buffer_and_resets_caret(tmp_path: Path) -> None:
    source = tmp_path / "in.md"
    source.write_text("imported", encoding="utf-8")
    session = EditorSession("old", selection=SelectionRange(1, 3))

    asyncio.run(import_file(session, MemorySessionStore(), source))

    assert session.text == "imported"
    assert session.selection == SelectionRange(0, 0)
