"""Best-effort plain-text projection used for the status bar counters."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Bold must run before italic, or ``**x**`` would be eaten by the single-marker rule.
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(\*\*|__)(.*?)\1"), r"\2"),
    (re.compile(r"(\*|_)(.*?)\1"), r"\2"),
    (re.compile(r"`([^`]*)`"), r"\1"),
    (re.compile(r"```([\s\S]*?)```"), r"\1"),
    (re.compile(r"\[(.*?)\]\((.*?)\)"), r"\1"),
    (re.compile(r"^# (.*$)", re.MULTILINE | re.IGNORECASE), r"\1"),
    (re.compile(r"^\s*[\r\n]", re.MULTILINE), ""),
)


@dataclass(frozen=True, slots=True)
class DocumentStats:
    words: int
    characters: int


def to_plain_text(markdown: str) -> str:
    text = markdown
    for pattern, replacement in _RULES:
        text = pattern.sub(replacement, text)
    return text


def character_count(markdown: str) -> int:
    return len(to_plain_text(markdown))


def word_count(markdown: str) -> int:
    """Count whitespace-separated tokens in the raw buffer, markers included."""

    return len(markdown.split())


def document_stats(markdown: str) -> DocumentStats:
    return DocumentStats(words=word_count(markdown), characters=character_count(markdown))


__all__ = [
    "DocumentStats",
    "character_count",
    "document_stats",
    "to_plain_text",
    "word_count",
]
