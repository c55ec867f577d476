"""Tests for dialog configuration and logging setup."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from modalkit import logging as mk_logging
from modalkit.config import CONFIG_ENV_VAR, DialogConfig
from modalkit.container import Holder
from modalkit.decoration import Styled
from modalkit.dialog import CLOSE_ONLY, Dialog
from modalkit.dimensions import Ratio
from modalkit.keys import KEY_ESCAPE, Key
from modalkit.styles import DEFAULT_PALETTE
from modalkit.widgets import Text

YAML_CONFIG = """
shadow: false
escape_closes: false
palette:
  button: "#7aa2f7"
  sparkle: "#ffffff"
keybindings:
  dialog_cancel: ["q"]
"""


# ---------------------------------------------------------------------------
# DialogConfig
# ---------------------------------------------------------------------------


class TestDialogConfig:
    def test_defaults(self) -> None:
        config = DialogConfig()
        assert config.shadow is True
        assert config.escape_closes is True
        assert config.palette == {}
        assert config.keybindings == {}

    def test_from_yaml_string(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="modalkit"):
            config = DialogConfig.from_yaml_string(YAML_CONFIG)

        assert config.shadow is False
        assert config.escape_closes is False
        assert config.palette == {"button": "#7aa2f7"}
        assert config.keybindings == {"dialog_cancel": ["q"]}
        assert "sparkle" in caplog.text

    def test_empty_yaml_gives_defaults(self) -> None:
        assert DialogConfig.from_yaml_string("") == DialogConfig()

    def test_to_dict_round_trips(self) -> None:
        config = DialogConfig(shadow=False, palette={"text": "#111111"})
        assert DialogConfig.from_dict(config.to_dict()) == config

    def test_load_from_path(self, tmp_path: Path) -> None:
        path = tmp_path / "dialog.yaml"
        path.write_text(YAML_CONFIG)
        assert DialogConfig.load(path).shadow is False

    def test_load_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "dialog.yaml"
        path.write_text("shadow: false\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert DialogConfig.load().shadow is False

    def test_load_without_file_uses_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert DialogConfig.load() == DialogConfig()

    def test_load_missing_path_uses_defaults(self, tmp_path: Path) -> None:
        assert DialogConfig.load(tmp_path / "nope.yaml") == DialogConfig()

    def test_load_invalid_yaml_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "dialog.yaml"
        path.write_text("shadow: [unclosed\n")

        with caplog.at_level(logging.WARNING, logger="modalkit"):
            config = DialogConfig.load(path)
        assert config == DialogConfig()
        assert "Failed to load dialog config" in caplog.text

    def test_load_non_mapping_document_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "dialog.yaml"
        path.write_text("- just\n- a list\n")

        with caplog.at_level(logging.WARNING, logger="modalkit"):
            config = DialogConfig.load(path)
        assert config == DialogConfig()
        assert "expected a mapping, got list" in caplog.text

    def test_scalar_document_gives_defaults(self) -> None:
        assert DialogConfig.from_yaml_string("42\n") == DialogConfig()

    def test_non_mapping_sections_are_ignored(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "dialog.yaml"
        path.write_text("shadow: false\npalette: 5\nkeybindings: [escape]\n")

        with caplog.at_level(logging.WARNING, logger="modalkit"):
            config = DialogConfig.load(path)
        assert config.shadow is False
        assert config.palette == {}
        assert config.keybindings == {}
        assert "Ignoring dialog palette" in caplog.text
        assert "Ignoring dialog keybindings" in caplog.text

    def test_styles_merge_palette(self) -> None:
        styles = DialogConfig(palette={"button": "#7aa2f7"}).styles()
        assert styles.button.bg == "#7aa2f7"
        assert styles.background.bg == DEFAULT_PALETTE["background"]

    def test_options(self) -> None:
        options = DialogConfig(shadow=False, escape_closes=False).options(CLOSE_ONLY)
        assert options.buttons == CLOSE_ONLY
        assert options.no_shadow is True
        assert options.no_escape_close is True
        assert options.button_style is not None

    def test_keybindings_manager(self) -> None:
        km = DialogConfig(keybindings={"dialog_cancel": ["q"]}).keybindings_manager()
        assert km.matches(Key(name="q", char="q"), "dialog_cancel")
        assert not km.matches(KEY_ESCAPE, "dialog_cancel")
        assert DialogConfig().keybindings_manager().matches(KEY_ESCAPE, "dialog_cancel")

    def test_configured_dialog(self, holder: Holder) -> None:
        config = DialogConfig(keybindings={"dialog_cancel": ["q"]}, shadow=False)
        dialog = Dialog(
            Text("hello"),
            config.options(),
            keybindings=config.keybindings_manager(),
        )
        assert isinstance(dialog.sub_widget, Styled)
        dialog.open(holder, Ratio(0.5))

        dialog.handle_input(KEY_ESCAPE)
        assert dialog.is_open is True
        dialog.handle_input(Key(name="q", char="q"))
        assert dialog.is_open is False

    def test_escape_close_can_be_disabled(self, holder: Holder) -> None:
        config = DialogConfig.from_yaml_string("escape_closes: false\n")
        dialog = Dialog(Text("hello"), config.options())
        dialog.open(holder, Ratio(0.5))

        dialog.handle_input(KEY_ESCAPE)
        assert dialog.is_open is True


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestLogging:
    def test_get_logger_prefixes_name(self) -> None:
        assert mk_logging.get_logger("dialog").name == "modalkit.dialog"
        assert mk_logging.get_logger("modalkit.app").name == "modalkit.app"

    def test_setup_logging_writes_to_stream(self) -> None:
        root = logging.getLogger("modalkit")
        saved_handlers, saved_level = list(root.handlers), root.level
        stream = io.StringIO()
        try:
            mk_logging.setup_logging("DEBUG", format="%(name)s %(message)s", stream=stream)
            mk_logging.get_logger("dialog").debug("spliced")
            assert stream.getvalue() == "modalkit.dialog spliced\n"

            mk_logging.disable()
            mk_logging.get_logger("dialog").debug("hidden")
            assert "hidden" not in stream.getvalue()
        finally:
            mk_logging.enable()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_setup_logging_with_file_leaves_terminal_alone(self, tmp_path: Path) -> None:
        root = logging.getLogger("modalkit")
        saved_handlers, saved_level = list(root.handlers), root.level
        path = tmp_path / "dialogs.log"
        try:
            mk_logging.setup_logging("DEBUG", format="%(message)s", file=str(path))
            assert [type(h) for h in root.handlers] == [logging.FileHandler]

            mk_logging.get_logger("dialog").debug("Opened dialog")
            for handler in root.handlers:
                handler.close()
            assert path.read_text() == "Opened dialog\n"
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_set_level(self) -> None:
        root = logging.getLogger("modalkit")
        saved = root.level
        try:
            mk_logging.set_level("warning")
            assert root.level == logging.WARNING
        finally:
            root.setLevel(saved)
