"""Page and spread movement, including chaining into sibling documents."""

from __future__ import annotations

from spreadview.modes.base_mode import ModeContext, ModeResult

from .core import current_document, executed, repeat_counts


def forward_spread(context: ModeContext, match) -> ModeResult:
    del match
    _, double = repeat_counts(context)
    if current_document(context).forward_pages(double):
        return executed("forward")
    if context.session.advance_document():
        return executed("next_document", message=current_document(context).title())
    return executed("end_of_chain", message="last document", repaint=False)


def back_spread(context: ModeContext, match) -> ModeResult:
    del match
    _, double = repeat_counts(context)
    if current_document(context).back_pages(double):
        return executed("back")
    if context.session.retreat_document():
        return executed(
            "previous_document", message=current_document(context).title()
        )
    return executed("start_of_chain", message="first document", repaint=False)


def forward_page(context: ModeContext, match) -> ModeResult:
    del match
    single, _ = repeat_counts(context)
    moved = current_document(context).forward_pages(single)
    return executed("forward" if moved else "end_of_document", repaint=moved)


def back_page(context: ModeContext, match) -> ModeResult:
    del match
    single, _ = repeat_counts(context)
    moved = current_document(context).back_pages(single)
    return executed("back" if moved else "start_of_document", repaint=moved)


def goto_spread(context: ModeContext, match) -> ModeResult:
    """``g``: first spread at or after the requested page, or page 1."""

    del match
    document = current_document(context)
    if context.count is None:
        document.page_number = 1
        return executed("goto")
    single, _ = repeat_counts(context)
    splits = document.split_count
    document.page_index = -(-(single - 1) // splits) * splits
    return executed("goto")


def goto_page(context: ModeContext, match) -> ModeResult:
    """``G``: the requested page, or the last spread."""

    del match
    document = current_document(context)
    if context.count is None:
        document.page_number = -document.split_count + 1
    elif context.count < 1:
        return executed("goto_rejected", repaint=False)
    else:
        document.page_number = context.count
    return executed("goto")


def goto_printed_page(context: ModeContext, match) -> ModeResult:
    del match
    single, _ = repeat_counts(context)
    document = current_document(context)
    if single - (document.page_number_delta or 0) < 1:
        return executed("goto_rejected", repaint=False)
    document.real_page_number = single
    return executed("goto_printed")


__all__ = [
    "forward_spread",
    "back_spread",
    "forward_page",
    "back_page",
    "goto_spread",
    "goto_page",
    "goto_printed_page",
]
