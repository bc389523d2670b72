"""Markdown to HTML rendering with syntax-highlighted code blocks."""

from __future__ import annotations

import html
import re
from typing import Dict, Optional, Protocol

import markdown2
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from md_live.runtime import telemetry

LOGGER_NAME = "md_live.render"
MARKDOWN_EXTRAS = ["fenced-code-blocks", "highlightjs-lang", "tables", "strike"]
LANG_PREFIX = "hljs language-"
LIGHT_STYLE = "default"
DARK_STYLE = "monokai"

_CODE_BLOCK = re.compile(
    r'<pre[^>]*><code(?: class="(?P<lang>[^"]*)")?>(?P<body>.*?)</code></pre>',
    re.DOTALL,
)


class RenderError(RuntimeError):
    """Raised when markdown cannot be turned into HTML."""


class Renderer(Protocol):
    def render(self, markdown_text: str) -> str:
        ...


class CodeHighlighter:
    """Highlights code with pygments, picking the lexer from a language hint.

    A recognized hint wins. An unknown or missing hint falls back to
    pygments' content-based guess, and then to plain text.
    """

    def __init__(self) -> None:
        self._formatter = HtmlFormatter(nowrap=True)
        self._lexers: Dict[str, Lexer] = {}

    def lexer_for(self, code: str, language: Optional[str] = None) -> Lexer:
        if language:
            cached = self._lexers.get(language.lower())
            if cached is not None:
                return cached
            try:
                lexer = get_lexer_by_name(language.lower())
            except ClassNotFound:
                pass
            else:
                self._lexers[language.lower()] = lexer
                return lexer
        try:
            return guess_lexer(code)
        except ClassNotFound:
            return TextLexer()

    def highlight(self, code: str, language: Optional[str] = None) -> tuple[str, str]:
        """Return ``(language name, highlighted html)`` for ``code``."""

        lexer = self.lexer_for(code, language)
        name = lexer.aliases[0] if lexer.aliases else lexer.name.lower()
        return name, highlight(code, lexer, self._formatter)


class HtmlRenderer:
    """``markdown2`` for the document, ``CodeHighlighter`` for fenced blocks."""

    def __init__(
        self,
        *,
        extras: Optional[list[str]] = None,
        highlighter: Optional[CodeHighlighter] = None,
    ) -> None:
        self.extras = list(extras or MARKDOWN_EXTRAS)
        if "highlightjs-lang" not in self.extras:
            # markdown2 would otherwise colorize blocks itself and drop the hint.
            self.extras.append("highlightjs-lang")
        self.highlighter = highlighter or CodeHighlighter()

    def render(self, markdown_text: str) -> str:
        with telemetry.span(
            "render::html",
            logger_name=LOGGER_NAME,
            component="render",
            metadata={"length": len(markdown_text)},
        ):
            try:
                body = str(markdown2.markdown(markdown_text, extras=self.extras))
            except Exception as exc:
                raise RenderError(f"Cannot render markdown: {exc}") from exc
            return _CODE_BLOCK.sub(self._highlight_block, body)

    def _highlight_block(self, match: "re.Match[str]") -> str:
        classes = (match.group("lang") or "").split()
        language = classes[0] if classes else None
        code = html.unescape(match.group("body"))
        name, highlighted = self.highlighter.highlight(code, language)
        return f'<pre><code class="{LANG_PREFIX}{name}">{highlighted}</code></pre>'

    @staticmethod
    def stylesheet(dark: bool = False) -> str:
        style = DARK_STYLE if dark else LIGHT_STYLE
        return HtmlFormatter(style=style).get_style_defs(".hljs")

    def render_document(self, markdown_text: str, *, dark: bool = False, title: str = "Preview") -> str:
        theme = "dark-theme" if dark else "light-theme"
        return (
            "<!DOCTYPE html>\n"
            f"<html><head><meta charset=\"utf-8\"><title>{html.escape(title)}</title>\n"
            f"<style>{self.stylesheet(dark)}</style></head>\n"
            f"<body class=\"{theme} markdown-content\">\n"
            f"{self.render(markdown_text)}"
            "</body></html>\n"
        )


__all__ = [
    "CodeHighlighter",
    "HtmlRenderer",
    "LANG_PREFIX",
    "RenderError",
    "Renderer",
]
