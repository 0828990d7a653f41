"""Spread-shaping commands: blank slots, split count and reading direction."""

from __future__ import annotations

from spreadview.modes.base_mode import ModeContext, ModeResult

from .core import current_document, executed


def insert_blank_left(context: ModeContext, match) -> ModeResult:
    del match
    inserted = current_document(context).insert_blank_left()
    return executed("blank_left" if inserted else "blank_rejected", repaint=inserted)


def insert_blank_right(context: ModeContext, match) -> ModeResult:
    del match
    inserted = current_document(context).insert_blank_right()
    return executed("blank_right" if inserted else "blank_rejected", repaint=inserted)


def toggle_first_blank(context: ModeContext, match) -> ModeResult:
    del match
    current_document(context).toggle_first_blank()
    return executed("first_blank")


def toggle_invert(context: ModeContext, match) -> ModeResult:
    del match
    document = current_document(context)
    document.invert()
    return executed("invert", message="left-to-right" if document.inverted else None)


def set_split(context: ModeContext, match) -> ModeResult:
    """``s``: split to the count (1-10) or toggle between one and two pages."""

    del match
    document = current_document(context)
    if context.count is None:
        document.toggle_split()
        return executed("split", message=str(document.split_count))
    if document.set_split_count(context.count):
        return executed("split", message=str(document.split_count))
    return executed(
        "split_rejected", message=f"split {context.count} out of range", repaint=False
    )


__all__ = [
    "insert_blank_left",
    "insert_blank_right",
    "toggle_first_blank",
    "toggle_invert",
    "set_split",
]
