"""Textual host for the spread viewer."""

from .canvas import CELL_ASPECT, TextCanvas
from .controller import TextualUIHooks, TextualViewerAdapter, normalize_textual_key

__all__ = [
    "CELL_ASPECT",
    "TextCanvas",
    "TextualUIHooks",
    "TextualViewerAdapter",
    "normalize_textual_key",
]
