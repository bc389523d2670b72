"""Boundary types for exchanging buffer state with host widgets.

Hosts such as Textual's ``TextArea`` address text by ``(row, column)``
while the engine works on flat character offsets; the helpers here convert
between the two.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .state import SelectionRange

Location = Tuple[int, int]  # (row, column)


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot of the session's buffer."""

    version: int
    text: str
    selection: SelectionRange
    attributes: dict[str, str] = field(default_factory=dict)


class SelectionRangeError(RuntimeError):
    """Raised when a selection does not fit the buffer it refers to."""

    def __init__(self, message: str, *, selection: SelectionRange | None = None) -> None:
        super().__init__(message)
        self.selection = selection


def offset_for_location(text: str, location: Location) -> int:
    lines = text.split("\n")
    row, col = location
    row = max(0, min(row, len(lines) - 1))
    offset = 0
    for i in range(row):
        offset += len(lines[i]) + 1  # newline
    return offset + max(0, min(col, len(lines[row])))


def location_for_offset(text: str, offset: int) -> Location:
    lines = text.split("\n")
    running = 0
    for row, line in enumerate(lines):
        if offset <= running + len(line):
            return (row, max(0, offset - running))
        running += len(line) + 1
    return (len(lines) - 1, len(lines[-1]))


__all__ = [
    "BufferMirror",
    "Location",
    "SelectionRangeError",
    "location_for_offset",
    "offset_for_location",
]
