"""Executable Textual app hosting the live markdown editor."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, VerticalScroll
    from textual.widgets import Footer, Header, Input, Markdown, Static, TextArea
    from textual.widgets.text_area import Selection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use md_live.adapters.textual.app"
    ) from exc

from md_live.adapters.render import HtmlRenderer
from md_live.adapters.storage import JsonSessionStore, MemorySessionStore, SessionStore
from md_live.buffer import (
    BufferMirror,
    EditorSession,
    SelectionRange,
    location_for_offset,
    offset_for_location,
)
from md_live.config import EditorSettings
from md_live.formatting import DocumentStats, FormatDirective
from md_live.runtime import telemetry

from .controller import EditorController, EditorUIHooks


def build_store(settings: EditorSettings) -> SessionStore:
    if not settings.persist:
        return MemorySessionStore()
    return JsonSessionStore(settings.data_dir)


class MarkdownEditorApp(App[None]):
    """Editor on the left, live preview on the right, counters underneath."""

    CSS = """
    #panes {
        height: 1fr;
    }

    #editor {
        width: 1fr;
        border: round $accent;
    }

    #preview-pane {
        width: 1fr;
        border: round $secondary;
        padding: 0 1;
    }

    #stats-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #path-input {
        display: none;
    }

    #path-input.-visible {
        display: block;
    }
    """

    BINDINGS = [
        Binding("ctrl+b", "format('bold')", "Bold", priority=True),
        Binding("ctrl+n", "format('italic')", "Italic", priority=True),
        Binding("ctrl+r", "format('header')", "Header", priority=True),
        Binding("ctrl+l", "format('link')", "Link", priority=True),
        Binding("ctrl+g", "format('inline_code')", "Code", priority=True),
        Binding("ctrl+t", "format('block_code')", "Block", priority=True),
        Binding("ctrl+d", "toggle_theme", "Theme", priority=True),
        Binding("ctrl+s", "export", "Save", priority=True),
        Binding("ctrl+o", "open_prompt", "Open", priority=True),
        Binding("f5", "export_html", "HTML"),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        settings: Optional[EditorSettings] = None,
        *,
        open_path: Optional[Path] = None,
        store: Optional[SessionStore] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or EditorSettings()
        self.store = store or build_store(self.settings)
        self.open_path = open_path
        self.controller: EditorController | None = None
        self._format_enabled = False
        self._logger = telemetry.get_logger("md_live.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            yield TextArea(id="editor")
            with VerticalScroll(id="preview-pane"):
                yield Markdown(id="preview")
        yield Static("", id="stats-line")
        yield Input(placeholder="Path of a markdown file to open", id="path-input")
        yield Footer()

    async def on_mount(self) -> None:
        session = EditorSession(dark_mode=self.settings.dark_mode)
        hooks = EditorUIHooks(
            update_buffer=self._update_buffer,
            update_preview=self._update_preview,
            update_stats=self._update_stats,
            update_status=self._update_status,
            notify=self._notify,
            set_format_enabled=self._set_format_enabled,
            log=self._logger.debug,
        )
        self.controller = EditorController(
            session,
            hooks,
            renderer=HtmlRenderer(),
            store=self.store,
            export_name=self.settings.export_name,
        )
        self._apply_theme(session.dark_mode)
        if self.open_path is not None:
            await self.controller.import_file(self.open_path)
        else:
            self.controller.restore()
        self.query_one("#editor", TextArea).focus()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        if action == "format" and not self._format_enabled:
            return None
        return True

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.controller is None:
            return
        area = event.text_area
        self.controller.push_host_edit(area.text, self._selection_of(area))

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if self.controller is None:
            return
        self.controller.update_selection(self._selection_of(event.text_area))

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        event.input.remove_class("-visible")
        value = event.value.strip()
        event.input.value = ""
        self.query_one("#editor", TextArea).focus()
        if value and self.controller is not None:
            await self.controller.import_file(Path(value).expanduser())

    def action_format(self, name: str) -> None:
        if self.controller is not None:
            self.controller.apply_directive(FormatDirective.parse(name))

    def action_toggle_theme(self) -> None:
        if self.controller is not None:
            self._apply_theme(self.controller.toggle_theme())

    def action_export(self) -> None:
        if self.controller is not None:
            self.controller.export()

    def action_export_html(self) -> None:
        if self.controller is not None:
            self.controller.export_html()

    def action_open_prompt(self) -> None:
        prompt = self.query_one("#path-input", Input)
        prompt.add_class("-visible")
        prompt.focus()

    @staticmethod
    def _selection_of(area: TextArea) -> SelectionRange:
        text = area.text
        start, end = area.selection
        return SelectionRange(
            offset_for_location(text, start), offset_for_location(text, end)
        )

    def _update_buffer(self, mirror: BufferMirror) -> None:
        # The Changed message this posts echoes identical text, which the session ignores.
        area = self.query_one("#editor", TextArea)
        area.load_text(mirror.text)
        area.selection = Selection(
            location_for_offset(mirror.text, mirror.selection.start),
            location_for_offset(mirror.text, mirror.selection.end),
        )

    def _update_preview(self, html: str) -> None:
        del html  # the terminal preview renders the source; HTML goes to F5 export
        if self.controller is not None:
            self.query_one("#preview", Markdown).update(self.controller.session.text)

    def _update_stats(self, stats: DocumentStats) -> None:
        self.query_one("#stats-line", Static).update(
            f"Words: {stats.words}  Characters: {stats.characters}"
        )

    def _update_status(self, status: str) -> None:
        self.sub_title = status

    def _notify(self, message: str) -> None:
        self.notify(message, severity="warning")

    def _set_format_enabled(self, enabled: bool) -> None:
        if enabled != self._format_enabled:
            self._format_enabled = enabled
            self.refresh_bindings()

    def _apply_theme(self, dark: bool) -> None:
        self.theme = "textual-dark" if dark else "textual-light"


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = EditorSettings.from_env()
    parser = argparse.ArgumentParser(description="Live markdown editor with preview.")
    parser.add_argument("path", nargs="?", type=Path, help="Markdown file to open")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=defaults.data_dir,
        help="Directory holding the saved session (default: per-user data dir)",
    )
    parser.add_argument(
        "--export-name",
        default=defaults.export_name,
        help=f"File name used by Save (default: {defaults.export_name})",
    )
    parser.add_argument("--dark", action="store_true", default=defaults.dark_mode, help="Start in dark mode")
    parser.add_argument(
        "--no-persist",
        action="store_true",
        default=not defaults.persist,
        help="Keep the session in memory only",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=defaults.log_preset,
        help="telelog preset to use instead of MD_LIVE_* log variables",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    # The Textual screen owns the terminal, so logs go to a file.
    telemetry.configure(preset=args.log_preset, console=False)
    settings = EditorSettings(
        data_dir=args.data_dir,
        export_name=args.export_name,
        dark_mode=args.dark,
        persist=not args.no_persist,
        log_preset=args.log_preset,
    )
    MarkdownEditorApp(settings, open_path=args.path).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
