"""Textual adapter that wires the command interpreter into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from spreadview.modes import CommandInterpreter, KeyInput, ModeResult

from .canvas import TextCanvas

# Textual key names that map onto the interpreter's symbolic keys.
TEXTUAL_SPECIAL_KEYS: Dict[str, str] = {
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "pageup": "PAGE_UP",
    "pagedown": "PAGE_DOWN",
    "home": "HOME",
    "end": "END",
    "escape": "ESC",
    "enter": "ENTER",
    "tab": "TAB",
    "backspace": "BACKSPACE",
}


def normalize_textual_key(
    key: str,
    character: Optional[str] = None,
    *,
    ctrl: bool = False,
    alt: bool = False,
) -> Tuple[str, Optional[str], Tuple[str, ...]]:
    """Turn a Textual key event into ``(key, text, modifiers)``."""

    modifiers = []
    if ctrl:
        modifiers.append("CTRL")
    if alt:
        modifiers.append("ALT")
    base = key.rsplit("+", 1)[-1] if modifiers else key
    if base in TEXTUAL_SPECIAL_KEYS:
        return (TEXTUAL_SPECIAL_KEYS[base], None, tuple(modifiers))
    if not modifiers and character and len(character) == 1 and character.isprintable():
        return (character, character, ())
    return (base if len(base) == 1 else base.upper(), None, tuple(modifiers))


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[], None]
    update_title: Callable[[str], None] = _noop
    update_status: Callable[[str], None] = _noop
    quit: Callable[[], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualViewerAdapter:
    """Bridges the interpreter and session bus to a Textual-friendly surface."""

    def __init__(self, interpreter: CommandInterpreter, hooks: TextualUIHooks) -> None:
        self.interpreter = interpreter
        self.session = interpreter.session
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_title()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.interpreter.feed(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
            repaint=result.repaint,
        )
        return result

    def handle_scroll(self, direction: str) -> ModeResult:
        """Mouse wheel events arrive as ``"up"`` or ``"down"``."""

        symbol = "SCROLL_DOWN" if direction == "down" else "SCROLL_UP"
        return self.handle_textual_key(symbol)

    def render(self, columns: int, rows: int) -> str:
        """Draw the current spread into a fresh ``columns`` x ``rows`` grid."""

        canvas = TextCanvas(columns, rows)
        document = self.session.document
        if document is not None and not document.closed:
            width, height = canvas.layout_size
            document.render_spread(canvas, width, height)
        return canvas.render()

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or self._pending_status()
        if status:
            self.hooks.update_status(status)
        if result.repaint:
            self._refresh_title()
            self.hooks.update_view()

    def _pending_status(self) -> str:
        count = self.interpreter.count
        if count is not None:
            return str(count)
        mode = self.interpreter.manager.active_mode
        if mode is not None and mode.name != "normal":
            return f"{mode.name}:"
        return ""

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        bus.subscribe("document.open", self._on_document_open)
        bus.subscribe("session.quit", self._on_quit)

    def _on_document_open(self, payload: object | None) -> None:
        self._log_state("event ->", event="document.open", payload=payload)
        self._refresh_title()
        self.hooks.update_view()

    def _on_quit(self, payload: object | None) -> None:
        del payload
        self._log_state("event ->", event="session.quit")
        self.hooks.quit()

    def _refresh_title(self) -> None:
        document = self.session.document
        self.hooks.update_title(document.title() if document else "spreadview")

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        document = self.session.document
        return {
            "state": self.interpreter.state.value,
            "page": document.page_number if document else None,
            "split": document.split_count if document else None,
        }


__all__ = [
    "TEXTUAL_SPECIAL_KEYS",
    "TextualUIHooks",
    "TextualViewerAdapter",
    "normalize_textual_key",
]
