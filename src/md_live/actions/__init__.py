"""Session-level verbs: formatting, file transfer, and the change pipeline."""

from .files import export_file, import_file, import_text, restore_session
from .format import (
    block_code,
    bold,
    format_selection,
    header,
    inline_code,
    italic,
    link,
)
from .pipeline import ChangePipeline

__all__ = [
    "format_selection",
    "bold",
    "italic",
    "header",
    "link",
    "inline_code",
    "block_code",
    "export_file",
    "import_file",
    "import_text",
    "restore_session",
    "ChangePipeline",
]
