"""Persistence, printed-page numbering and quit commands."""

from __future__ import annotations

from spreadview.modes.base_mode import ModeContext, ModeResult

from .core import current_document, executed, repeat_counts


def reload_state(context: ModeContext, match) -> ModeResult:
    del match
    found = context.session.reload()
    return executed("reload", message=None if found else "no saved state")


def write_state(context: ModeContext, match) -> ModeResult:
    del match
    try:
        context.session.save()
    except OSError as exc:
        return executed("save_failed", message=str(exc), repaint=False)
    return executed("saved", message="saved", repaint=False)


def quit_viewer(context: ModeContext, match) -> ModeResult:
    del match
    context.session.quit()
    return executed("quit", repaint=False)


def set_page_delta(context: ModeContext, match) -> ModeResult:
    del match
    single, _ = repeat_counts(context)
    current_document(context).set_page_number_delta(single)
    return executed("page_delta", message=f"p.{single}")


def clear_page_delta(context: ModeContext, match) -> ModeResult:
    del match
    current_document(context).clear_page_number_delta()
    return executed("page_delta_cleared")


__all__ = [
    "reload_state",
    "write_state",
    "quit_viewer",
    "set_page_delta",
    "clear_page_delta",
]
