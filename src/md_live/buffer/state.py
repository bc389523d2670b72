"""Selection state tied to a text buffer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SelectionRange:
    """Half-open ``[start, end)`` offsets into a buffer.

    ``start == end`` is a bare caret. Hosts sometimes report a selection that
    was dragged backwards, so the pair is stored in ascending order.
    """

    start: int = 0
    end: int = 0

    def __post_init__(self) -> None:
        if self.start > self.end:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)


def has_selection(selection: SelectionRange) -> bool:
    """True when ``selection`` covers at least one character."""

    return selection.end > selection.start


__all__ = ["SelectionRange", "has_selection"]
