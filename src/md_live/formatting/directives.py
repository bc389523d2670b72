"""The closed set of formatting directives and their marker pairs."""

from __future__ import annotations

from enum import Enum


class FormatDirective(Enum):
    """Formatting intent carrying the literal markers wrapped around a span."""

    BOLD = ("**", "**")
    ITALIC = ("_", "_")
    HEADER = ("# ", "")
    LINK = ("[", "](url)")
    INLINE_CODE = ("`", "`")
    BLOCK_CODE = ("\n```\n", "\n```\n")

    def __init__(self, prefix: str, suffix: str) -> None:
        self.prefix = prefix
        self.suffix = suffix

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, name: str) -> "FormatDirective":
        key = name.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError as exc:
            known = ", ".join(member.label for member in cls)
            raise ValueError(f"Unknown directive '{name}'. Expected one of: {known}") from exc


__all__ = ["FormatDirective"]
