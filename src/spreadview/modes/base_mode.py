"""Base classes and shared utilities for interpreter modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from spreadview.session import ViewerSession


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is either the typed character or a symbolic name such as
    ``"DOWN"`` or ``"SCROLL_UP"``; ``text`` is the printable character, if any.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def of(cls, symbol: str) -> "KeyInput":
        if len(symbol) == 1:
            return cls(key=symbol, text=symbol)
        return cls(key=symbol)

    @property
    def digit(self) -> Optional[int]:
        if self.modifiers or len(self.key) != 1 or self.key not in "0123456789":
            return None
        return int(self.key)

    @property
    def label(self) -> Optional[str]:
        """Single printable character usable as a mark label."""

        if self.modifiers:
            return None
        candidate = self.text if self.text is not None else self.key
        if len(candidate) == 1 and candidate.isprintable():
            return candidate
        return None


@dataclass(slots=True)
class ModeResult:
    """Outcome of handling one key.

    ``executed`` marks a completed command (counted towards autosave);
    ``repaint`` asks the host to redraw the spread and refresh the title.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    executed: bool = False
    repaint: bool = False


class ModeBus:
    """Minimal event bus letting the session and modes notify the host."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action can access."""

    session: "ViewerSession"
    bus: ModeBus
    count: Optional[int] = None
    extras: Dict[str, object] = field(default_factory=dict)


class Mode:
    """Base class all interpreter modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
