"""Key-command interpreter driving a viewer session."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

from spreadview.keymaps import KeymapRegistry

from .base_mode import KeyInput, ModeContext, ModeResult
from .label_mode import JumpMode, MarkMode
from .mode_manager import ModeManager
from .normal_mode import NormalMode

if TYPE_CHECKING:  # pragma: no cover
    from spreadview.session import ViewerSession


class InterpreterState(str, Enum):
    IDLE = "idle"
    ACCUMULATING_COUNT = "accumulating_count"
    AWAITING_MARK_LABEL = "awaiting_mark_label"
    AWAITING_JUMP_LABEL = "awaiting_jump_label"


class CommandInterpreter:
    """Feeds one key at a time through the normal/mark/jump modes.

    Every executed command is reported to the session, which autosaves on
    a fixed cadence.
    """

    def __init__(
        self,
        session: "ViewerSession",
        *,
        keymap_registry: Optional[KeymapRegistry] = None,
    ) -> None:
        self.session = session
        self.context = ModeContext(session=session, bus=session.bus)
        self.manager = ModeManager(self.context, keymap_registry=keymap_registry)
        self.manager.register_mode(NormalMode)
        self.manager.register_mode(MarkMode)
        self.manager.register_mode(JumpMode)

    @property
    def count(self) -> Optional[int]:
        return self.context.count

    @property
    def state(self) -> InterpreterState:
        mode = self.manager.active_mode
        name = mode.name if mode else "normal"
        if name == "mark":
            return InterpreterState.AWAITING_MARK_LABEL
        if name == "jump":
            return InterpreterState.AWAITING_JUMP_LABEL
        if self.context.count is not None:
            return InterpreterState.ACCUMULATING_COUNT
        return InterpreterState.IDLE

    def feed(self, key: KeyInput | str) -> ModeResult:
        if isinstance(key, str):
            key = KeyInput.of(key)
        result = self.manager.handle_key(key)
        if result.executed:
            self.session.note_command()
        return result

    def feed_all(self, keys: str) -> list[ModeResult]:
        """Feed every character of ``keys``; convenient for scripted input."""

        return [self.feed(KeyInput.of(char)) for char in keys]


__all__ = ["CommandInterpreter", "InterpreterState"]
