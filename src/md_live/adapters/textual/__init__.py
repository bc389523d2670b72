"""Textual host for the editor; the app itself lives in ``.app``."""

from .controller import EditorController, EditorUIHooks

__all__ = ["EditorController", "EditorUIHooks"]
