"""Editing session owning the buffer, its selection, and change listeners."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from md_live.runtime import telemetry

from .state import SelectionRange, has_selection
from .sync import BufferMirror
from .validation import clamp_range

BUFFER_CHANGED = "buffer.changed"
SELECTION_CHANGED = "selection.changed"
THEME_CHANGED = "theme.changed"

Listener = Callable[[BufferMirror], None]


class ChangeBus:
    """Event bus that calls subscribers strictly in subscription order."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: BufferMirror) -> None:
        for callback in tuple(self._subscribers.get(event, ())):
            callback(payload)


class EditorSession:
    """The single owner of one document's text and selection.

    The buffer is an immutable ``str`` replaced wholesale on each edit; every
    replacement bumps ``version`` and fires ``buffer.changed`` before the new
    selection is announced with ``selection.changed``.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        selection: Optional[SelectionRange] = None,
        dark_mode: bool = False,
        bus: Optional[ChangeBus] = None,
    ) -> None:
        self.name = name
        self.bus = bus or ChangeBus()
        self.dark_mode = dark_mode
        self.version = 0
        self._text = text
        self._selection = clamp_range(text, selection or SelectionRange())

    @property
    def text(self) -> str:
        return self._text

    @property
    def selection(self) -> SelectionRange:
        return self._selection

    @property
    def has_selection(self) -> bool:
        return has_selection(self._selection)

    def mirror(self) -> BufferMirror:
        return BufferMirror(
            version=self.version,
            text=self._text,
            selection=self._selection,
            attributes={"session": self.name, "theme": "dark" if self.dark_mode else "light"},
        )

    def on_change(self, callback: Listener) -> None:
        self.bus.subscribe(BUFFER_CHANGED, callback)

    def on_selection(self, callback: Listener) -> None:
        self.bus.subscribe(SELECTION_CHANGED, callback)

    def set_selection(self, selection: SelectionRange) -> SelectionRange:
        selection = clamp_range(self._text, selection)
        if selection != self._selection:
            self._selection = selection
            self.bus.emit(SELECTION_CHANGED, self.mirror())
        return selection

    def replace_text(
        self,
        text: str,
        *,
        selection: Optional[SelectionRange] = None,
        label: str = "edit",
    ) -> BufferMirror:
        """Swap in ``text`` and notify listeners.

        ``selection`` defaults to the current range clamped to the new text.
        Replacing the buffer with identical text only updates the selection.
        """

        target = clamp_range(text, selection if selection is not None else self._selection)
        if text == self._text:
            self.set_selection(target)
            return self.mirror()

        with telemetry.span(
            f"session::{label}",
            logger_name="md_live.session",
            component="session",
            metadata={"session": self.name, "version": self.version + 1},
        ):
            self._text = text
            self.version += 1
            selection_moved = target != self._selection
            self._selection = target
            snapshot = self.mirror()
            self.bus.emit(BUFFER_CHANGED, snapshot)
            if selection_moved:
                self.bus.emit(SELECTION_CHANGED, snapshot)
        return snapshot

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        self.bus.emit(THEME_CHANGED, self.mirror())
        return self.dark_mode


__all__ = [
    "BUFFER_CHANGED",
    "SELECTION_CHANGED",
    "THEME_CHANGED",
    "ChangeBus",
    "EditorSession",
    "Listener",
]
