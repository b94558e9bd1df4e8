"""Tests for keymaps and the keymap registry."""

from __future__ import annotations

import pytest

from histpick.core import ConfigurationError, Keymap, KeymapRegistry


class TestKeymap:
    def test_lookup_falls_through_to_parent(self):
        parent = Keymap("global-map")
        parent.bind("alt+x", "execute_extended_command")
        child = Keymap("shell-mode-map", parent)

        assert child.lookup("alt+x") == "execute_extended_command"
        assert child.lookup("alt+q") is None

    def test_local_binding_overrides_parent(self):
        parent = Keymap("global-map")
        parent.bind("alt+r", "search_backward")
        child = Keymap("shell-mode-map", parent)
        child.bind("alt+r", "insert_item")

        assert child.lookup("alt+r") == "insert_item"
        assert parent.lookup("alt+r") == "search_backward"

    def test_disable_shadows_parent(self):
        parent = Keymap("global-map")
        parent.bind("alt+s", "search_forward")
        child = Keymap("shell-mode-map", parent)
        child.disable("alt+s")

        assert child.lookup("alt+s") is None
        assert child.is_disabled("alt+s")
        assert child.defines("alt+s")
        assert child.bindings() == {"alt+s": None}

    def test_unbind_restores_fallthrough(self):
        parent = Keymap("global-map")
        parent.bind("alt+s", "search_forward")
        child = Keymap("shell-mode-map", parent)
        child.disable("alt+s")

        child.unbind("alt+s")

        assert child.lookup("alt+s") == "search_forward"
        assert not child.is_disabled("alt+s")

    def test_unbind_unknown_key_is_harmless(self):
        keymap = Keymap("text-mode-map")
        keymap.unbind("f9")
        assert keymap.bindings() == {}

    def test_defines_looks_at_parents(self):
        parent = Keymap("global-map")
        parent.bind("f2", "cycle_buffer_kind")
        child = Keymap("term-mode-map", parent)

        assert child.defines("f2")
        assert not child.defines("f3")

    def test_bindings_is_a_copy(self):
        keymap = Keymap("text-mode-map")
        keymap.bind("ctrl+x", "repeat_complex_command")
        keymap.bindings().clear()
        assert keymap.lookup("ctrl+x") == "repeat_complex_command"


class TestKeymapRegistry:
    def test_define_and_get(self):
        registry = KeymapRegistry()
        keymap = registry.define("shell-mode-map")

        assert registry.get("shell-mode-map") is keymap
        assert "shell-mode-map" in registry
        assert registry.names() == ["shell-mode-map"]

    def test_define_returns_existing(self):
        registry = KeymapRegistry()
        first = registry.define("shell-mode-map")
        first.bind("enter", "send_input")

        assert registry.define("shell-mode-map") is first

    def test_parent_by_name(self):
        registry = KeymapRegistry()
        parent = registry.define("global-map")
        child = registry.define("shell-mode-map", parent="global-map")
        assert child.parent is parent

    def test_get_unknown_raises(self):
        registry = KeymapRegistry()
        with pytest.raises(ConfigurationError) as exc_info:
            registry.get("term-mode-map")
        assert exc_info.value.name == "term-mode-map"
        assert "term-mode-map" in str(exc_info.value)

    def test_unknown_parent_name_raises(self):
        registry = KeymapRegistry()
        with pytest.raises(ConfigurationError):
            registry.define("shell-mode-map", parent="missing-map")
        assert "shell-mode-map" not in registry
