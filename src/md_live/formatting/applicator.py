"""Selection-aware formatting.

``apply`` wraps the selected span of a buffer in a directive's markers and
reports where the caret lands afterwards. The markers go around the trimmed
core of the selection so surrounding whitespace stays outside them:
``"  hi  "`` becomes ``"  **hi**  "``, never ``"**  hi  **"``.

Two behaviors are kept on purpose. Applying a directive twice wraps twice
(there is no toggle-off), and ``HEADER`` only prefixes the start of the
selection even when it spans several lines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from md_live.buffer.state import SelectionRange
from md_live.buffer.validation import clamp_range, range_fits
from md_live.runtime import telemetry

from .directives import FormatDirective

LOGGER_NAME = "md_live.formatting"


@dataclass(frozen=True, slots=True)
class FormatResult:
    buffer: str
    selection_start: int
    selection_end: int
    changed: bool = True

    @property
    def selection(self) -> SelectionRange:
        return SelectionRange(self.selection_start, self.selection_end)


def split_whitespace(text: str) -> Tuple[str, str, str]:
    """Split ``text`` into ``(leading, core, trailing)`` whitespace segments.

    A whitespace-only string is both the leading and the trailing segment,
    so wrapping it writes the whitespace on each side of the empty markers.
    """

    core = text.strip()
    if not core:
        return text, "", text
    lead_len = len(text) - len(text.lstrip())
    trail_len = len(text) - len(text.rstrip())
    return text[:lead_len], core, text[len(text) - trail_len :]


def apply(buffer: str, selection: SelectionRange, directive: FormatDirective) -> FormatResult:
    """Wrap ``buffer[selection]`` with ``directive`` and collapse to a caret after it."""

    if not range_fits(buffer, selection):
        clamped = clamp_range(buffer, selection)
        telemetry.record_event(
            "format.clamped",
            level="warning",
            data={
                "requested": (selection.start, selection.end),
                "clamped": (clamped.start, clamped.end),
                "length": len(buffer),
            },
            logger_name=LOGGER_NAME,
        )
        selection = clamped

    start, end = selection.start, selection.end
    if start == end:
        return FormatResult(buffer, start, end, changed=False)

    with telemetry.span(
        f"format::{directive.label}",
        logger_name=LOGGER_NAME,
        component="formatting",
        metadata={"start": start, "end": end},
    ):
        leading, core, trailing = split_whitespace(buffer[start:end])
        inserted = leading + directive.prefix + core + directive.suffix + trailing
        caret = start + len(inserted)
        return FormatResult(buffer[:start] + inserted + buffer[end:], caret, caret)


__all__ = ["FormatResult", "apply", "split_whitespace"]
