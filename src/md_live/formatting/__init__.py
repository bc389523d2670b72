"""Formatting directives, the selection-aware applicator, and text projection."""

from .applicator import FormatResult, apply, split_whitespace
from .directives import FormatDirective
from .plain_text import (
    DocumentStats,
    character_count,
    document_stats,
    to_plain_text,
    word_count,
)

__all__ = [
    "FormatDirective",
    "FormatResult",
    "apply",
    "split_whitespace",
    "DocumentStats",
    "character_count",
    "document_stats",
    "to_plain_text",
    "word_count",
]
