from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from spreadview.adapters.textual import (
    TextCanvas,
    TextualUIHooks,
    TextualViewerAdapter,
    normalize_textual_key,
)
from spreadview.modes import CommandInterpreter
from spreadview.session import ViewerSession

from conftest import FakePage


@pytest.fixture
def interpreter(session: ViewerSession, library: Path) -> CommandInterpreter:
    session.open(library / "a.pdf")
    return CommandInterpreter(session)


def test_adapter_repaints_and_retitles(interpreter: CommandInterpreter) -> None:
    views: List[int] = []
    titles: List[str] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_view=lambda: views.append(1),
        update_title=titles.append,
        update_status=statuses.append,
    )
    adapter = TextualViewerAdapter(interpreter, hooks)

    adapter.handle_textual_key("2", text="2")
    assert statuses[-1] == "2"
    assert views == []

    adapter.handle_textual_key("j", text="j")

    assert views == [1]
    assert titles[-1] == "a.pdf [5/10]"


def test_adapter_does_not_repaint_for_unbound_keys(
    interpreter: CommandInterpreter,
) -> None:
    views: List[int] = []
    hooks = TextualUIHooks(update_view=lambda: views.append(1))
    adapter = TextualViewerAdapter(interpreter, hooks)

    result = adapter.handle_textual_key("x", text="x")

    assert result.consumed is False
    assert views == []


def test_adapter_scroll_moves_by_spread(interpreter: CommandInterpreter) -> None:
    adapter = TextualViewerAdapter(interpreter, TextualUIHooks(update_view=lambda: None))

    adapter.handle_scroll("down")
    adapter.handle_scroll("down")
    adapter.handle_scroll("up")

    assert interpreter.session.document.page_index == 2


def test_adapter_quits_on_q(interpreter: CommandInterpreter) -> None:
    quits: List[int] = []
    hooks = TextualUIHooks(update_view=lambda: None, quit=lambda: quits.append(1))
    adapter = TextualViewerAdapter(interpreter, hooks)

    adapter.handle_textual_key("q", text="q")

    assert quits == [1]
    assert adapter.render(40, 10) == "\n".join([""] * 10)


def test_adapter_redraws_after_document_switch(
    interpreter: CommandInterpreter,
) -> None:
    titles: List[str] = []
    hooks = TextualUIHooks(update_view=lambda: None, update_title=titles.append)
    adapter = TextualViewerAdapter(interpreter, hooks)

    adapter.handle_textual_key("G", text="G")
    adapter.handle_textual_key("j", text="j")

    assert titles[-1] == "b.pdf [1/6]"


def test_adapter_emits_log_lines(interpreter: CommandInterpreter) -> None:
    logs: List[str] = []
    hooks = TextualUIHooks(update_view=lambda: None, log=logs.append)
    adapter = TextualViewerAdapter(interpreter, hooks)

    adapter.handle_textual_key("J", text="J")

    assert any(line.startswith("key ->") for line in logs)
    assert any("state='idle'" in line for line in logs)


def test_adapter_renders_both_pages(interpreter: CommandInterpreter) -> None:
    adapter = TextualViewerAdapter(interpreter, TextualUIHooks(update_view=lambda: None))

    text = adapter.render(40, 15)

    assert "page 2" in text
    assert "page 1" in text
    assert text.index("page 2") < text.index("page 1")


def test_normalize_textual_key() -> None:
    assert normalize_textual_key("down") == ("DOWN", None, ())
    assert normalize_textual_key("escape") == ("ESC", None, ())
    assert normalize_textual_key("J", "J") == ("J", "J", ())
    assert normalize_textual_key("apostrophe", "'") == ("'", "'", ())
    assert normalize_textual_key("ctrl+d", None, ctrl=True) == ("d", None, ("CTRL",))
    assert normalize_textual_key("ctrl+down", None, ctrl=True) == ("DOWN", None, ("CTRL",))


def test_text_canvas_frames_and_clips() -> None:
    canvas = TextCanvas(12, 4)

    canvas.paint_page(FakePage(0), x=0, y=0, scale=1.0, width=8, height=8)
    canvas.paint_page(FakePage(1), x=10, y=0, scale=1.0, width=8, height=8)
    lines = canvas.render().splitlines()

    assert lines[0].startswith("┌──────┐")
    assert lines[1].startswith("│page 1│")
    assert lines[3].startswith("└──────┘")
    assert lines[0][10:] == "┌─"
    assert canvas.painted == 2
    assert canvas.layout_size == (12.0, 8.0)
