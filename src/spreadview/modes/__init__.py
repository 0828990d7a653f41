"""Mode manager, interpreter state machine and dispatch logic."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .label_mode import JumpMode, LabelMode, MarkMode
from .mode_manager import ModeManager
from .interpreter import CommandInterpreter, InterpreterState

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
    "LabelMode",
    "MarkMode",
    "JumpMode",
    "ModeManager",
    "CommandInterpreter",
    "InterpreterState",
]
