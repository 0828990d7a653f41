"""Core helpers and mode-switching actions shared by every command."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

from spreadview.modes.base_mode import ModeContext, ModeResult

if TYPE_CHECKING:  # pragma: no cover
    from spreadview.document import Document
    from spreadview.keymaps import ResolutionMatch


def repeat_counts(context: ModeContext) -> Tuple[int, int]:
    """Return ``(single, double)``: the count (or 1) and count times split."""

    single = context.count or 1
    return single, single * context.session.document.split_count


def current_document(context: ModeContext) -> "Document":
    return context.session.document


def executed(
    status: str, *, message: Optional[str] = None, repaint: bool = True
) -> ModeResult:
    return ModeResult(
        consumed=True,
        status=status,
        message=message,
        executed=True,
        repaint=repaint,
    )


def enter_mark_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="mark", status="await_label")


def enter_jump_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="jump", status="await_label")


__all__ = [
    "repeat_counts",
    "current_document",
    "executed",
    "enter_mark_mode",
    "enter_jump_mode",
]
