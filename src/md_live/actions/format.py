"""Formatting verbs applied to an editing session."""

from __future__ import annotations

from md_live.buffer import EditorSession
from md_live.formatting import FormatDirective, FormatResult, apply
from md_live.runtime import telemetry


def format_selection(session: EditorSession, directive: FormatDirective) -> FormatResult:
    """Apply ``directive`` to the session's selection and commit the result.

    A caret with no selection leaves the session untouched.
    """

    result = apply(session.text, session.selection, directive)
    if not result.changed:
        telemetry.record_event(
            "format.noop",
            level="debug",
            data={"directive": directive.label, "caret": session.selection.start},
            logger_name="md_live.actions",
        )
        return result
    session.replace_text(
        result.buffer,
        selection=result.selection,
        label=f"format_{directive.label}",
    )
    return result


def bold(session: EditorSession) -> FormatResult:
    return format_selection(session, FormatDirective.BOLD)


def italic(session: EditorSession) -> FormatResult:
    return format_selection(session, FormatDirective.ITALIC)


def header(session: EditorSession) -> FormatResult:
    return format_selection(session, FormatDirective.HEADER)


def link(session: EditorSession) -> FormatResult:
    return format_selection(session, FormatDirective.LINK)


def inline_code(session: EditorSession) -> FormatResult:
    return format_selection(session, FormatDirective.INLINE_CODE)


def block_code(session: EditorSession) -> FormatResult:
    return format_selection(session, FormatDirective.BLOCK_CODE)


__all__ = [
    "format_selection",
    "bold",
    "italic",
    "header",
    "link",
    "inline_code",
    "block_code",
]
