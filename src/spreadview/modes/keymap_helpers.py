"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import Dict, Mapping, cast

from spreadview.keymaps import KeymapResolver

from .base_mode import KeyInput, ModeContext


def key_to_token(key: KeyInput) -> str:
    if key.modifiers:
        modifier = "+".join(sorted(m.lower() for m in key.modifiers))
        return f"{modifier}+{key.key}"
    return key.key


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def keymap_flag_context(context: ModeContext) -> Dict[str, bool]:
    """Static flags from ``extras`` overlaid with live document state.

    Bindings can gate on ``inverted``, ``single_page`` and ``has_delta``.
    """

    flags = dict(cast(Mapping[str, bool], context.extras.get("keymap_flags", {})))
    document = context.session.document
    if document is not None:
        flags["inverted"] = document.inverted
        flags["single_page"] = document.split_count == 1
        flags["has_delta"] = document.page_number_delta is not None
    return flags


__all__ = ["key_to_token", "require_keymap_resolver", "keymap_flag_context"]
