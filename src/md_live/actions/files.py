"""Actions that move a session's buffer in and out of storage."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from md_live.adapters.storage import DEFAULT_EXPORT_NAME, FileSource, SessionStore
from md_live.buffer import BufferMirror, EditorSession, SelectionRange


def restore_session(session: EditorSession, store: SessionStore) -> Optional[BufferMirror]:
    """Seed ``session`` from the last saved buffer, if there is one."""

    saved = store.load_last_session()
    if saved is None:
        return None
    return session.replace_text(saved, selection=SelectionRange(), label="restore")


def import_text(session: EditorSession, text: str) -> BufferMirror:
    """Replace the whole buffer with imported text and reset the caret to the top."""

    return session.replace_text(text, selection=SelectionRange(0, 0), label="import")


async def import_file(
    session: EditorSession, store: SessionStore, source: FileSource
) -> BufferMirror:
    text = await store.import_from_file(source)
    return import_text(session, text)


def export_file(
    session: EditorSession,
    store: SessionStore,
    filename: Union[str, "os.PathLike[str]"] = DEFAULT_EXPORT_NAME,
) -> Path:
    return store.export_to_file(session.text, filename)


__all__ = ["export_file", "import_file", "import_text", "restore_session"]
