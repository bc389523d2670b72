from __future__ import annotations

from typing import List

import pytest

from md_live.actions import (
    block_code,
    bold,
    format_selection,
    header,
    import_text,
    inline_code,
    italic,
    link,
)
from md_live.buffer import (
    BUFFER_CHANGED,
    SELECTION_CHANGED,
    BufferMirror,
    EditorSession,
    SelectionRange,
    SelectionRangeError,
    clamp_range,
    ensure_range,
    has_selection,
    location_for_offset,
    offset_for_location,
)
from md_live.formatting import FormatDirective


def test_has_selection_tracks_range_width() -> None:
    assert has_selection(SelectionRange(0, 1)) is True
    assert has_selection(SelectionRange(3, 3)) is False
    assert EditorSession("abc", selection=SelectionRange(1, 2)).has_selection is True
    assert EditorSession("abc").has_selection is False


def test_listeners_fire_in_subscription_order() -> None:
    session = EditorSession()
    calls: List[str] = []
    session.on_change(lambda mirror: calls.append("persist"))
    session.on_change(lambda mirror: calls.append("render"))
    session.on_change(lambda mirror: calls.append("recount"))

    session.replace_text("hello")

    assert calls == ["persist", "render", "recount"]


def test_replace_text_bumps_version_and_clamps_selection() -> None:
    session = EditorSession("hello world", selection=SelectionRange(6, 11))

    mirror = session.replace_text("hey")

    assert mirror.version == 1
    assert session.selection == SelectionRange(3, 3)


def test_identical_text_only_moves_selection() -> None:
    session = EditorSession("same")
    changes: List[BufferMirror] = []
    selections: List[BufferMirror] = []
    session.on_change(changes.append)
    session.on_selection(selections.append)

    session.replace_text("same", selection=SelectionRange(0, 2))

    assert changes == []
    assert session.version == 0
    assert selections[-1].selection == SelectionRange(0, 2)


def test_format_selection_commits_and_notifies() -> None:
    session = EditorSession("Hello world", selection=SelectionRange(6, 11))
    events: List[str] = []
    session.bus.subscribe(BUFFER_CHANGED, lambda mirror: events.append("buffer"))
    session.bus.subscribe(SELECTION_CHANGED, lambda mirror: events.append("selection"))

    result = bold(session)

    assert session.text == "Hello **world**"
    assert session.selection == SelectionRange(15, 15)
    assert result.selection == session.selection
    assert events == ["buffer", "selection"]


def test_format_selection_without_selection_leaves_session_alone() -> None:
    session = EditorSession("test")
    events: List[BufferMirror] = []
    session.on_change(events.append)

    result = format_selection(session, FormatDirective.ITALIC)

    assert result.changed is False
    assert session.text == "test"
    assert session.version == 0
    assert events == []


def test_multiline_header_through_session() -> None:
    session = EditorSession("a\nb", selection=SelectionRange(0, 3))

    header(session)

    assert session.text == "# a\nb"


def test_import_text_resets_selection_to_top() -> None:
    session = EditorSession("old text", selection=SelectionRange(2, 5))

    import_text(session, "fresh content")

    assert session.text == "fresh content"
    assert session.selection == SelectionRange(0, 0)


def test_listener_error_does_not_roll_back_buffer() -> None:
    session = EditorSession("before")

    def explode(mirror: BufferMirror) -> None:
        raise KeyError("listener")

    session.on_change(explode)

    with pytest.raises(KeyError):
        session.replace_text("after")
    assert session.text == "after"


def test_toggle_dark_mode_flips_flag() -> None:
    session = EditorSession()

    assert session.toggle_dark_mode() is True
    assert session.mirror().attributes["theme"] == "dark"
    assert session.toggle_dark_mode() is False


def test_clamp_and_ensure_range() -> None:
    assert clamp_range("abc", SelectionRange(-2, 10)) == SelectionRange(0, 3)
    assert ensure_range("abc", SelectionRange(1, 2)) == SelectionRange(1, 2)

    with pytest.raises(SelectionRangeError) as info:
        ensure_range("abc", SelectionRange(0, 4))
    assert info.value.selection == SelectionRange(0, 4)


def test_offsets_and_locations_convert_both_ways() -> None:
    text = "ab\ncde\n\nf"

    assert offset_for_location(text, (1, 2)) == 5
    assert offset_for_location(text, (3, 1)) == 9
    assert location_for_offset(text, 5) == (1, 2)
    assert location_for_offset(text, 7) == (2, 0)
    assert location_for_offset(text, 99) == (3, 1)


@pytest.mark.parametrize(
    ("verb", "expected"),
    [
        (bold, "**two**"),
        (italic, "_two_"),
        (header, "# two"),
        (link, "[two](url)"),
        (inline_code, "`two`"),
        (block_code, "\n```\ntwo\n```\n"),
    ],
)
def test_directive_verbs(verb, expected: str) -> None:
    session = EditorSession("one two three", selection=SelectionRange(4, 7))

    verb(session)

    assert session.text == f"one {expected} three"
    assert session.has_selection is False
