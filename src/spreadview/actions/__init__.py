"""Viewer commands reachable from key bindings."""

from .core import (
    enter_jump_mode,
    enter_mark_mode,
    executed,
    repeat_counts,
)
from .layout import (
    insert_blank_left,
    insert_blank_right,
    set_split,
    toggle_first_blank,
    toggle_invert,
)
from .navigation import (
    back_page,
    back_spread,
    forward_page,
    forward_spread,
    goto_page,
    goto_printed_page,
    goto_spread,
)
from .state import (
    clear_page_delta,
    quit_viewer,
    reload_state,
    set_page_delta,
    write_state,
)

__all__ = [
    "enter_jump_mode",
    "enter_mark_mode",
    "executed",
    "repeat_counts",
    "insert_blank_left",
    "insert_blank_right",
    "set_split",
    "toggle_first_blank",
    "toggle_invert",
    "back_page",
    "back_spread",
    "forward_page",
    "forward_spread",
    "goto_page",
    "goto_printed_page",
    "goto_spread",
    "clear_page_delta",
    "quit_viewer",
    "reload_state",
    "set_page_delta",
    "write_state",
]
