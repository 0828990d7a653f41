import pytest

from spreadview.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
)
from spreadview.keymaps.defaults import (
    DEFAULT_ACTIONS,
    DEFAULT_BINDINGS,
    load_default_keymaps,
)


def make_action(action_id: str = "nav.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    sequence: KeySequence | None = None,
    action_id: str = "nav.test",
    when: tuple[WhenClause, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or make_sequence("z", "z"),
        action_id=action_id,
        when=when,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="normal.zz")

    registry.register_binding(binding)

    assert list(registry.iter_bindings(mode="normal")) == [binding]
    assert registry.bindings_for_action("nav.test") == [binding]


def test_register_binding_requires_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.zz"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.zz"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="normal.zz.duplicate"))


def test_register_binding_non_overlapping_when() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(
        make_binding(binding_id="inverted", when=(WhenClause("inverted"),))
    )
    registry.register_binding(
        make_binding(binding_id="upright", when=(WhenClause.parse("!inverted"),))
    )

    assert len(list(registry.iter_bindings("normal"))) == 2


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding")
    before = registry.revision()

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.revision() == before + 2


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert list(registry.iter_bindings()) == []
    assert registry.unregister_binding("binding") is None


def test_keystroke_parse_and_token() -> None:
    stroke = KeyStroke.parse("Ctrl+d")

    assert stroke.key == "d"
    assert stroke.modifiers == ("ctrl",)
    assert stroke.token == "ctrl+d"
    assert KeyStroke.parse("+").token == "+"
    assert KeyStroke("DOWN").is_special


def test_default_keymaps_cover_every_command() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    keys = {
        binding.key_signature for binding in registry.iter_bindings("normal")
    }
    assert set("jkJKHLbgGvrwsqdDpm'") <= keys
    assert {"DOWN", "UP", "LEFT", "RIGHT", "SCROLL_UP", "SCROLL_DOWN"} <= keys
    assert len(list(registry.iter_bindings())) == len(DEFAULT_BINDINGS)
    for action in DEFAULT_ACTIONS:
        assert registry.bindings_for_action(action.id)


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(
        registry,
        include_actions=("nav.forward_spread",),
        include_bindings=("normal.forward_j",),
    )

    bindings = list(registry.iter_bindings())
    assert [binding.id for binding in bindings] == ["normal.forward_j"]


def test_load_default_keymaps_skips_bindings_of_excluded_actions() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_actions=("state.quit",))

    assert registry.bindings_for_action("state.quit") == []
    with pytest.raises(KeyError):
        registry.get_binding("normal.quit")


def test_load_default_keymaps_extra_binding_replaces_default() -> None:
    registry = KeymapRegistry()
    custom = Binding(
        id="normal.quit_x",
        sequence=KeySequence.from_strings("x"),
        action_id="state.quit",
    )

    load_default_keymaps(registry, extra_bindings=(custom,))

    assert registry.get_binding("normal.quit_x").action_id == "state.quit"
