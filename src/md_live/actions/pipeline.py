"""The fixed listener chain that runs after every buffer change.

Order is persist, render, recount. A failing persist or render is logged and
reported through ``notify``; the buffer is never rolled back and the
remaining listeners still run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from md_live.adapters.render import Renderer, RenderError
from md_live.adapters.storage import SessionStore, SessionStoreError
from md_live.buffer import BUFFER_CHANGED, THEME_CHANGED, BufferMirror, EditorSession
from md_live.formatting import DocumentStats, document_stats
from md_live.runtime import telemetry

LOGGER_NAME = "md_live.pipeline"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass
class ChangePipeline:
    renderer: Renderer
    store: Optional[SessionStore] = None
    on_preview: Callable[[str], None] = _noop
    on_stats: Callable[[DocumentStats], None] = _noop
    notify: Callable[[str], None] = _noop
    last_html: str = ""
    last_stats: DocumentStats = field(default_factory=lambda: DocumentStats(0, 0))

    def attach(self, session: EditorSession) -> None:
        session.bus.subscribe(BUFFER_CHANGED, self.persist)
        session.bus.subscribe(BUFFER_CHANGED, self.render)
        session.bus.subscribe(BUFFER_CHANGED, self.recount)
        session.bus.subscribe(THEME_CHANGED, self.render)

    def refresh(self, session: EditorSession) -> None:
        """Render and count the current buffer without persisting it."""

        snapshot = session.mirror()
        self.render(snapshot)
        self.recount(snapshot)

    def persist(self, snapshot: BufferMirror) -> None:
        if self.store is None:
            return
        try:
            self.store.save_session(snapshot.text)
        except SessionStoreError as exc:
            self._report("persist", snapshot, exc)

    def render(self, snapshot: BufferMirror) -> None:
        try:
            html = self.renderer.render(snapshot.text)
        except RenderError as exc:
            self._report("render", snapshot, exc)
            return
        self.last_html = html
        self.on_preview(html)

    def recount(self, snapshot: BufferMirror) -> None:
        self.last_stats = document_stats(snapshot.text)
        self.on_stats(self.last_stats)

    def _report(self, stage: str, snapshot: BufferMirror, exc: Exception) -> None:
        telemetry.record_event(
            f"pipeline.{stage}_failed",
            level="error",
            data={"version": snapshot.version, "error": str(exc)},
            logger_name=LOGGER_NAME,
        )
        self.notify(f"{stage.capitalize()} failed: {exc}")


__all__ = ["ChangePipeline"]
