"""Tests for key parsing and keybindings."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from modalkit.keybindings import (
    DEFAULT_KEYBINDINGS,
    KeybindingsManager,
    _key_to_descriptor,
    _normalise_key_descriptor,
    default_keybindings,
    set_default_keybindings,
)
from modalkit.keys import (
    KEY_BACKSPACE,
    KEY_CTRL_C,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_SHIFT_TAB,
    KEY_SPACE,
    KEY_TAB,
    KEY_UNKNOWN,
    KEY_UP,
    Key,
    parse_key,
)

# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------


class TestParseKey:
    def test_bare_escape(self) -> None:
        assert parse_key(b"\x1b") == KEY_ESCAPE

    def test_enter(self) -> None:
        assert parse_key(b"\r") == KEY_ENTER
        assert parse_key(b"\n") == KEY_ENTER

    def test_tab_and_backspace(self) -> None:
        assert parse_key(b"\t") == KEY_TAB
        assert parse_key(b"\x7f") == KEY_BACKSPACE

    def test_ctrl_c(self) -> None:
        assert parse_key(b"\x03") == KEY_CTRL_C

    def test_ctrl_letter(self) -> None:
        key = parse_key(b"\x01")
        assert key.name == "ctrl+a"
        assert key.ctrl is True

    def test_printable(self) -> None:
        key = parse_key(b"x")
        assert key == Key(name="x", char="x")
        assert key.printable is True

    def test_space(self) -> None:
        assert parse_key(b" ") == KEY_SPACE

    def test_utf8(self) -> None:
        assert parse_key("é".encode()).char == "é"

    def test_arrows(self) -> None:
        assert parse_key(b"\x1b[A") == KEY_UP
        assert parse_key(b"\x1b[B") == KEY_DOWN

    def test_shift_tab(self) -> None:
        assert parse_key(b"\x1b[Z") == KEY_SHIFT_TAB

    def test_modified_arrow(self) -> None:
        key = parse_key(b"\x1b[1;5A")
        assert key.name == "up"
        assert key.ctrl is True
        assert key.shift is False

    def test_alt_letter(self) -> None:
        key = parse_key(b"\x1bx")
        assert key.name == "alt+x"
        assert key.alt is True
        assert key.printable is False

    def test_unknown(self) -> None:
        assert parse_key(b"") == KEY_UNKNOWN
        assert parse_key(b"\x1b[9") == KEY_UNKNOWN
        assert parse_key(b"\xff\xfe") == KEY_UNKNOWN


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


class TestDescriptors:
    def test_normalise_sorts_modifiers(self) -> None:
        assert _normalise_key_descriptor("Shift+Ctrl+X") == "ctrl+shift+x"
        assert _normalise_key_descriptor("Escape") == "escape"

    def test_key_to_descriptor(self) -> None:
        assert _key_to_descriptor(KEY_CTRL_C) == "ctrl+c"
        assert _key_to_descriptor(KEY_SHIFT_TAB) == "shift+tab"
        assert _key_to_descriptor(KEY_ESCAPE) == "escape"


# ---------------------------------------------------------------------------
# KeybindingsManager
# ---------------------------------------------------------------------------


class TestKeybindingsManager:
    def test_defaults(self) -> None:
        km = KeybindingsManager()
        assert km.matches(KEY_ESCAPE, "dialog_cancel")
        assert km.matches(KEY_CTRL_C, "dialog_cancel")
        assert km.matches(KEY_ENTER, "activate")
        assert km.matches(KEY_SPACE, "activate")
        assert km.matches(KEY_TAB, "focus_next")
        assert km.matches(KEY_SHIFT_TAB, "focus_prev")
        assert not km.matches(KEY_TAB, "focus_prev")

    def test_string_keys(self) -> None:
        km = KeybindingsManager()
        assert km.matches("Ctrl+C", "dialog_cancel")
        assert not km.matches("q", "dialog_cancel")

    def test_unknown_action_never_matches(self) -> None:
        assert KeybindingsManager().matches(KEY_ESCAPE, "no_such_action") is False

    def test_override_replaces_defaults(self) -> None:
        km = KeybindingsManager(user_overrides={"dialog_cancel": ["q"]})
        assert km.matches(Key(name="q", char="q"), "dialog_cancel")
        assert not km.matches(KEY_ESCAPE, "dialog_cancel")
        assert km.get_keys("activate") == DEFAULT_KEYBINDINGS["activate"]

    def test_actions_and_find_action(self) -> None:
        km = KeybindingsManager()
        assert km.actions() == list(DEFAULT_KEYBINDINGS)
        assert km.find_action(KEY_ESCAPE) == "dialog_cancel"
        assert km.find_action(Key(name="z", char="z")) is None

    def test_load_from_json(self, tmp_path: Path) -> None:
        path = tmp_path / "keybindings.json"
        path.write_text(json.dumps({"dialog_cancel": ["ctrl+q"], "bogus": "x"}))

        km = KeybindingsManager.load(path)
        assert km.get_keys("dialog_cancel") == ["ctrl+q"]
        assert "bogus" not in km.actions()

    def test_load_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        km = KeybindingsManager.load(tmp_path / "missing.json")
        assert km.get_keys("dialog_cancel") == ["escape", "ctrl+c"]

    def test_load_malformed_file_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "keybindings.json"
        path.write_text("{not json")

        with caplog.at_level(logging.WARNING, logger="modalkit"):
            km = KeybindingsManager.load(path)
        assert km.matches(KEY_ESCAPE, "dialog_cancel")
        assert "Ignoring keybindings file" in caplog.text


class TestDefaultManager:
    def test_shared_instance(self) -> None:
        assert default_keybindings() is default_keybindings()

    def test_replace_and_reset(self) -> None:
        custom = KeybindingsManager(user_overrides={"activate": ["x"]})
        set_default_keybindings(custom)
        assert default_keybindings() is custom

        set_default_keybindings(None)
        assert default_keybindings() is not custom
        assert default_keybindings().matches(KEY_ENTER, "activate")
