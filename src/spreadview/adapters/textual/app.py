"""Executable Textual app that hosts the spread viewer."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the viewer is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use spreadview.adapters.textual.app"
    ) from exc

from spreadview import __version__
from spreadview.document import DocumentOpenError
from spreadview.modes import CommandInterpreter
from spreadview.runtime import telemetry
from spreadview.runtime.settings import Settings
from spreadview.session import ViewerSession

from .controller import TextualUIHooks, TextualViewerAdapter, normalize_textual_key


class SpreadViewerApp(App[None]):
    """Header with the document title, the spread, and a status line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#spread-view {
		height: 1fr;
		content-align: left top;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
    ]

    def __init__(
        self, session: ViewerSession, interpreter: CommandInterpreter
    ) -> None:
        super().__init__()
        self.session = session
        self.interpreter = interpreter
        self.adapter: TextualViewerAdapter | None = None
        self._view_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        self._view_widget = Static("", id="spread-view")
        yield self._view_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._redraw,
            update_title=self._update_title,
            update_status=self._update_status,
            quit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualViewerAdapter(self.interpreter, hooks)
        self.call_after_refresh(self._redraw)

    def on_unmount(self) -> None:
        self.session.close()

    def on_resize(self, event: events.Resize) -> None:
        del event
        self.call_after_refresh(self._redraw)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+c":
            return
        key, text, modifiers = normalize_textual_key(
            event.key,
            event.character,
            ctrl=event.key.startswith("ctrl+"),
            alt=event.key.startswith("alt+"),
        )
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        if self.adapter:
            self.adapter.handle_scroll("down")
            event.stop()

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        if self.adapter:
            self.adapter.handle_scroll("up")
            event.stop()

    def _redraw(self) -> None:
        if not self.adapter or not self._view_widget:
            return
        size = self._view_widget.size
        self._view_widget.update(self.adapter.render(size.width, size.height))

    def _update_title(self, title: str) -> None:
        self.title = title

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "ui.trace", level="debug", data={"line": line}, logger_name="spreadview.ui"
        )


def _parse_args(
    argv: Optional[Sequence[str]] = None,
) -> tuple[argparse.ArgumentParser, argparse.Namespace]:
    parser = argparse.ArgumentParser(
        prog="spreadview", description="Two-up viewer for paginated documents."
    )
    parser.add_argument("path", nargs="?", help="Document to open")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser, parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser, args = _parse_args(argv)
    if not args.path:
        parser.print_usage(sys.stdout)
        return 1

    session = ViewerSession.from_settings(Settings.from_env())
    try:
        session.open(args.path)
    except DocumentOpenError as exc:
        print(f"spreadview: {exc}")
        return 1

    interpreter = CommandInterpreter(session)
    app = SpreadViewerApp(session, interpreter)
    try:
        app.run()
    finally:
        session.close()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
