from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from spreadview.document import Document
from spreadview.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)
from spreadview.keymaps.defaults import load_default_keymaps
from spreadview.modes import (
    JumpMode,
    KeyInput,
    MarkMode,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
)
from spreadview.modes.mode_manager import ModeManager

from conftest import FakePageSource


def make_context(
    registry: KeymapRegistry,
    resolver: KeymapResolver,
    *,
    pages: int = 10,
) -> ModeContext:
    document = Document(Path("/books/test.pdf"), FakePageSource(pages))
    session = SimpleNamespace(document=document)
    extras: Dict[str, Any] = {
        "keymap_registry": registry,
        "keymap_resolver": resolver,
        "keymap_flags": {},
    }
    return ModeContext(session=session, bus=ModeBus(), extras=extras)


def recording_action(action_id: str, calls: List[Any]) -> ActionRef:
    def handler(context: ModeContext, match) -> None:
        calls.append((match.binding.id, context.count))

    return ActionRef(id=action_id, handler=handler)


def test_normal_mode_uses_keymap_binding() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)
    context = make_context(registry, resolver)
    mode = NormalMode(context)

    result = mode.handle_key(KeyInput.of("J"))

    assert result.consumed is True
    assert result.executed is True
    assert context.session.document.page_index == 1


def test_normal_mode_pending_sequence() -> None:
    registry = KeymapRegistry()
    calls: List[Any] = []
    registry.register_action(recording_action("test.zz", calls))
    registry.register_binding(
        Binding(
            id="normal.zz",
            sequence=KeySequence.from_strings("z", "z"),
            action_id="test.zz",
        )
    )
    resolver = KeymapResolver(registry)
    context = make_context(registry, resolver)
    mode = NormalMode(context)

    mode.handle_key(KeyInput.of("4"))
    pending = mode.handle_key(KeyInput.of("z"))
    assert pending.status == "pending"
    assert pending.consumed is True
    assert mode.pending == ("z",)

    match = mode.handle_key(KeyInput.of("z"))

    assert match.executed is True
    assert calls == [("normal.zz", 4)]
    assert context.count is None


def test_digit_inside_pending_sequence_is_a_token() -> None:
    registry = KeymapRegistry()
    calls: List[Any] = []
    registry.register_action(recording_action("test.z1", calls))
    registry.register_binding(
        Binding(
            id="normal.z1",
            sequence=KeySequence.from_strings("z", "1"),
            action_id="test.z1",
        )
    )
    resolver = KeymapResolver(registry)
    mode = NormalMode(make_context(registry, resolver))

    mode.handle_key(KeyInput.of("z"))
    mode.handle_key(KeyInput.of("1"))

    assert calls == [("normal.z1", None)]


def test_bindings_gate_on_live_document_flags() -> None:
    registry = KeymapRegistry()
    calls: List[Any] = []
    registry.register_action(recording_action("test.rtl", calls))
    registry.register_action(recording_action("test.ltr", calls))
    registry.register_binding(
        Binding(
            id="normal.x_rtl",
            sequence=KeySequence.from_strings("x"),
            action_id="test.rtl",
            when=(WhenClause.parse("!inverted"),),
        )
    )
    registry.register_binding(
        Binding(
            id="normal.x_ltr",
            sequence=KeySequence.from_strings("x"),
            action_id="test.ltr",
            when=(WhenClause("inverted"),),
        )
    )
    resolver = KeymapResolver(registry)
    context = make_context(registry, resolver)
    mode = NormalMode(context)

    mode.handle_key(KeyInput.of("x"))
    context.session.document.invert()
    mode.handle_key(KeyInput.of("x"))

    assert [binding_id for binding_id, _ in calls] == ["normal.x_rtl", "normal.x_ltr"]


def test_action_exception_still_clears_count() -> None:
    registry = KeymapRegistry()

    def explode(context: ModeContext, match) -> ModeResult:
        raise RuntimeError("broken action")

    registry.register_action(ActionRef(id="test.boom", handler=explode))
    registry.register_binding(
        Binding(
            id="normal.boom",
            sequence=KeySequence.from_strings("x"),
            action_id="test.boom",
        )
    )
    resolver = KeymapResolver(registry)
    context = make_context(registry, resolver)
    mode = NormalMode(context)
    mode.handle_key(KeyInput.of("7"))

    with pytest.raises(RuntimeError):
        mode.handle_key(KeyInput.of("x"))
    assert context.count is None


def test_mode_manager_switches_to_label_modes() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)
    context = make_context(registry, resolver)
    manager = ModeManager(
        context,
        keymap_registry=registry,
        keymap_resolver=resolver,
        load_defaults=False,
    )
    manager.register_mode(NormalMode)
    manager.register_mode(MarkMode)
    manager.register_mode(JumpMode)

    result = manager.handle_key(KeyInput.of("m"))
    assert result.switch_to == "mark"
    assert manager.active_mode and manager.active_mode.name == "mark"

    manager.handle_key(KeyInput.of("k"))
    assert manager.active_mode and manager.active_mode.name == "normal"
    assert context.session.document.marks == {"k": 0}


def test_mode_manager_rejects_duplicate_and_unknown_modes() -> None:
    registry = KeymapRegistry()
    resolver = KeymapResolver(registry)
    context = make_context(registry, resolver)
    manager = ModeManager(
        context,
        keymap_registry=registry,
        keymap_resolver=resolver,
        load_defaults=False,
    )
    manager.register_mode(NormalMode)

    with pytest.raises(ValueError):
        manager.register_mode(NormalMode)
    with pytest.raises(KeyError):
        manager.switch_mode("visual")


def test_key_input_label_and_digit() -> None:
    assert KeyInput.of("7").digit == 7
    assert KeyInput.of("a").digit is None
    assert KeyInput.of("a").label == "a"
    assert KeyInput(key="DOWN").label is None
    assert KeyInput(key="a", text="a", modifiers=("CTRL",)).label is None
    assert KeyInput(key="a", text="a", modifiers=("CTRL",)).digit is None
