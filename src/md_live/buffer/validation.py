"""Range validation shared by the session and the format applicator."""

from __future__ import annotations

from .state import SelectionRange
from .sync import SelectionRangeError


def range_fits(text: str, selection: SelectionRange) -> bool:
    return 0 <= selection.start <= selection.end <= len(text)


def ensure_range(text: str, selection: SelectionRange) -> SelectionRange:
    if not range_fits(text, selection):
        raise SelectionRangeError(
            f"Selection {selection.start}..{selection.end} outside buffer of length {len(text)}",
            selection=selection,
        )
    return selection


def clamp_range(text: str, selection: SelectionRange) -> SelectionRange:
    """Pull both offsets into ``[0, len(text)]``, keeping their order."""

    if range_fits(text, selection):
        return selection
    limit = len(text)
    start = max(0, min(selection.start, limit))
    end = max(0, min(selection.end, limit))
    return SelectionRange(start, end)


__all__ = ["clamp_range", "ensure_range", "range_fits"]
