"""Declarative keymap registry and resolver.

Default viewer bindings live in :mod:`spreadview.keymaps.defaults`, which
depends on the action handlers and is imported on demand.
"""

from .models import ActionRef, Binding, KeySequence, KeyStroke, SPECIAL_KEYS, WhenClause
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "SPECIAL_KEYS",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
