"""Wires an EditorSession and its change pipeline into UI callbacks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from md_live.actions import (
    ChangePipeline,
    export_file,
    format_selection,
    import_file,
    restore_session,
)
from md_live.adapters.render import HtmlRenderer, Renderer
from md_live.adapters.storage import (
    DEFAULT_EXPORT_NAME,
    FileSource,
    SessionStore,
    SessionStoreError,
    write_text_file,
)
from md_live.buffer import BufferMirror, EditorSession, SelectionRange, has_selection
from md_live.formatting import DocumentStats, FormatDirective, FormatResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class EditorUIHooks:
    """Callbacks the controller uses to update host widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_preview: Callable[[str], None] = _noop
    update_stats: Callable[[DocumentStats], None] = _noop
    update_status: Callable[[str], None] = _noop
    # Non-blocking toast for adapter failures
    notify: Callable[[str], None] = _noop
    set_format_enabled: Callable[[bool], None] = _noop
    log: Callable[[str], None] = _noop


class EditorController:
    """Bridges host edits and commands to the session and back.

    ``update_buffer`` is only called when the engine itself rewrote the text
    (formatting, restore, import); plain typing already lives in the widget.
    """

    def __init__(
        self,
        session: EditorSession,
        hooks: EditorUIHooks,
        *,
        renderer: Optional[Renderer] = None,
        store: Optional[SessionStore] = None,
        export_name: str = DEFAULT_EXPORT_NAME,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.renderer = renderer or HtmlRenderer()
        self.store = store
        self.export_name = export_name
        self.pipeline = ChangePipeline(
            renderer=self.renderer,
            store=store,
            on_preview=hooks.update_preview,
            on_stats=hooks.update_stats,
            notify=self._notify,
        )
        self.pipeline.attach(session)
        session.on_selection(self._selection_changed)
        self.pipeline.refresh(session)
        self.hooks.set_format_enabled(session.has_selection)

    def pull_buffer(self) -> BufferMirror:
        return self.session.mirror()

    def push_host_edit(self, text: str, selection: SelectionRange) -> None:
        self._log_state("edit ->", length=len(text))
        self.session.replace_text(text, selection=selection, label="host_edit")

    def update_selection(self, selection: SelectionRange) -> None:
        self.session.set_selection(selection)

    def restore(self) -> bool:
        if self.store is None:
            return False
        try:
            restored = restore_session(self.session, self.store)
        except SessionStoreError as exc:
            self._notify(f"Could not restore last session: {exc}")
            return False
        if restored is None:
            return False
        self.hooks.update_buffer(restored)
        self.hooks.update_status("Restored last session")
        return True

    def apply_directive(self, directive: FormatDirective) -> FormatResult:
        self._log_state("format ->", directive=directive.label)
        result = format_selection(self.session, directive)
        if result.changed:
            self.hooks.update_buffer(self.session.mirror())
            self.hooks.update_status(directive.label)
        else:
            self.hooks.update_status("Select text to format")
        return result

    def toggle_theme(self) -> bool:
        dark = self.session.toggle_dark_mode()
        self.hooks.update_status("dark" if dark else "light")
        return dark

    def export(self, filename: Union[str, "os.PathLike[str]", None] = None) -> Optional[Path]:
        if self.store is None:
            self._notify("Export unavailable: no store configured")
            return None
        try:
            path = export_file(self.session, self.store, filename or self.export_name)
        except SessionStoreError as exc:
            self._notify(str(exc))
            return None
        self.hooks.update_status(f"Saved {path}")
        return path

    def export_html(self, filename: Union[str, "os.PathLike[str]", None] = None) -> Optional[Path]:
        target = Path(filename) if filename else Path(self.export_name).with_suffix(".html")
        renderer = self.renderer if isinstance(self.renderer, HtmlRenderer) else HtmlRenderer()
        document = renderer.render_document(
            self.session.text, dark=self.session.dark_mode, title=target.stem
        )
        try:
            path = write_text_file(document, target)
        except SessionStoreError as exc:
            self._notify(str(exc))
            return None
        self.hooks.update_status(f"Saved {path}")
        return path

    async def import_file(self, source: FileSource) -> bool:
        if self.store is None:
            self._notify("Import unavailable: no store configured")
            return False
        try:
            mirror = await import_file(self.session, self.store, source)
        except SessionStoreError as exc:
            self._notify(str(exc))
            return False
        self.hooks.update_buffer(mirror)
        self.hooks.update_status(f"Opened {getattr(source, 'name', source)}")
        return True

    def _selection_changed(self, mirror: BufferMirror) -> None:
        self.hooks.set_format_enabled(has_selection(mirror.selection))

    def _notify(self, message: str) -> None:
        self._log_state("notify ->", message=message)
        self.hooks.notify(message)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        selection = self.session.selection
        return {
            "session": self.session.name,
            "version": self.session.version,
            "selection": (selection.start, selection.end),
            "dark": self.session.dark_mode,
        }


__all__ = ["EditorController", "EditorUIHooks"]
