"""Buffer state: the editing session, selections, and host sync helpers."""

from .session import (
    BUFFER_CHANGED,
    SELECTION_CHANGED,
    THEME_CHANGED,
    ChangeBus,
    EditorSession,
)
from .state import SelectionRange, has_selection
from .sync import (
    BufferMirror,
    SelectionRangeError,
    location_for_offset,
    offset_for_location,
)
from .validation import clamp_range, ensure_range, range_fits

__all__ = [
    "BUFFER_CHANGED",
    "SELECTION_CHANGED",
    "THEME_CHANGED",
    "ChangeBus",
    "EditorSession",
    "SelectionRange",
    "has_selection",
    "BufferMirror",
    "SelectionRangeError",
    "location_for_offset",
    "offset_for_location",
    "clamp_range",
    "ensure_range",
    "range_fits",
]
