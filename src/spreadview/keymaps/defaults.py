"""Built-in keymaps that seed the normal mode with the viewer commands."""

from __future__ import annotations

from typing import Iterable, Sequence

from spreadview.actions import core as core_actions
from spreadview.actions import layout as layout_actions
from spreadview.actions import navigation as navigation_actions
from spreadview.actions import state as state_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="nav.forward_spread",
        handler=navigation_actions.forward_spread,
        description="Forward one spread, or open the next document at the end",
    ),
    ActionRef(
        id="nav.back_spread",
        handler=navigation_actions.back_spread,
        description="Back one spread, or open the previous document at the start",
    ),
    ActionRef(
        id="nav.forward_page",
        handler=navigation_actions.forward_page,
        description="Forward one page",
    ),
    ActionRef(
        id="nav.back_page",
        handler=navigation_actions.back_page,
        description="Back one page",
    ),
    ActionRef(
        id="nav.goto_spread",
        handler=navigation_actions.goto_spread,
        description="Go to the spread holding page N (default first page)",
    ),
    ActionRef(
        id="nav.goto_page",
        handler=navigation_actions.goto_page,
        description="Go to page N (default last spread)",
    ),
    ActionRef(
        id="nav.goto_printed_page",
        handler=navigation_actions.goto_printed_page,
        description="Go to printed page N",
    ),
    ActionRef(
        id="layout.blank_left",
        handler=layout_actions.insert_blank_left,
        description="Insert a blank page on the left of the spread",
    ),
    ActionRef(
        id="layout.blank_right",
        handler=layout_actions.insert_blank_right,
        description="Insert a blank page on the right of the spread",
    ),
    ActionRef(
        id="layout.first_blank",
        handler=layout_actions.toggle_first_blank,
        description="Toggle a blank page before the first page",
    ),
    ActionRef(
        id="layout.invert",
        handler=layout_actions.toggle_invert,
        description="Toggle reading direction",
    ),
    ActionRef(
        id="layout.split",
        handler=layout_actions.set_split,
        description="Set pages per spread to N, or toggle one/two",
    ),
    ActionRef(
        id="state.reload",
        handler=state_actions.reload_state,
        description="Reload saved state",
    ),
    ActionRef(
        id="state.write",
        handler=state_actions.write_state,
        description="Save state now",
    ),
    ActionRef(
        id="state.quit",
        handler=state_actions.quit_viewer,
        description="Close the document and quit",
    ),
    ActionRef(
        id="state.set_delta",
        handler=state_actions.set_page_delta,
        description="Number the current page as printed page N",
    ),
    ActionRef(
        id="state.clear_delta",
        handler=state_actions.clear_page_delta,
        description="Clear printed page numbering",
    ),
    ActionRef(
        id="core.enter_mark",
        handler=core_actions.enter_mark_mode,
        description="Set a mark from the next key",
    ),
    ActionRef(
        id="core.enter_jump",
        handler=core_actions.enter_jump_mode,
        description="Jump to the mark named by the next key",
    ),
)


def _bind(binding_id: str, key: str, action_id: str, description: str) -> Binding:
    return Binding(
        id=binding_id,
        mode="normal",
        sequence=KeySequence.from_strings(key),
        action_id=action_id,
        description=description,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal.forward_j", "j", "nav.forward_spread", "Next spread"),
    _bind("normal.forward_down", "DOWN", "nav.forward_spread", "Next spread"),
    _bind("normal.forward_right", "RIGHT", "nav.forward_spread", "Next spread"),
    _bind("normal.forward_scroll", "SCROLL_DOWN", "nav.forward_spread", "Next spread"),
    _bind("normal.back_k", "k", "nav.back_spread", "Previous spread"),
    _bind("normal.back_up", "UP", "nav.back_spread", "Previous spread"),
    _bind("normal.back_left", "LEFT", "nav.back_spread", "Previous spread"),
    _bind("normal.back_scroll", "SCROLL_UP", "nav.back_spread", "Previous spread"),
    _bind("normal.forward_page", "J", "nav.forward_page", "Next page"),
    _bind("normal.back_page", "K", "nav.back_page", "Previous page"),
    _bind("normal.goto_spread", "g", "nav.goto_spread", "Go to spread"),
    _bind("normal.goto_page", "G", "nav.goto_page", "Go to page"),
    _bind("normal.goto_printed", "p", "nav.goto_printed_page", "Go to printed page"),
    _bind("normal.blank_left", "H", "layout.blank_left", "Blank on the left"),
    _bind("normal.blank_right", "L", "layout.blank_right", "Blank on the right"),
    _bind("normal.first_blank", "b", "layout.first_blank", "Toggle first blank"),
    _bind("normal.invert", "v", "layout.invert", "Toggle direction"),
    _bind("normal.split", "s", "layout.split", "Pages per spread"),
    _bind("normal.reload", "r", "state.reload", "Reload state"),
    _bind("normal.write", "w", "state.write", "Save state"),
    _bind("normal.quit", "q", "state.quit", "Quit"),
    _bind("normal.set_delta", "d", "state.set_delta", "Set printed page number"),
    _bind("normal.clear_delta", "D", "state.clear_delta", "Clear printed numbering"),
    _bind("normal.mark", "m", "core.enter_mark", "Set mark"),
    _bind("normal.jump", "'", "core.enter_jump", "Jump to mark"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings.

    A binding whose action was filtered out is skipped as well.
    """

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    registered: set[str] = set()
    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)
        registered.add(action.id)

    for binding in DEFAULT_BINDINGS:
        if binding.action_id not in registered:
            continue
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
