"""
Configuration for dialogs.

Dialog defaults (shadow, escape handling, colours, keybindings) can be
loaded from YAML or built programmatically.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from modalkit.dialog import Button, Options
from modalkit.keybindings import KeybindingsManager
from modalkit.logging import get_logger
from modalkit.styles import PALETTE_KEYS, DialogStyles, default_styles

logger = get_logger("config")

CONFIG_ENV_VAR = "MODALKIT_CONFIG"


def _mapping(value: Any, section: str) -> dict[str, Any]:
    """Return *value* if it is a mapping; otherwise warn and return ``{}``."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning(
            "Ignoring dialog %s: expected a mapping, got %s", section, type(value).__name__
        )
        return {}
    return value


@dataclass
class DialogConfig:
    """
    Defaults applied to dialogs built through :meth:`options`.

    Example YAML:
        shadow: false
        escape_closes: true
        palette:
          background: "#1a1b26"
          text: "#c0caf5"
          button: "#7aa2f7"
          button_text: "#1a1b26"
        keybindings:
          dialog_cancel: ["escape"]
    """

    shadow: bool = True  # Draw a drop shadow
    escape_closes: bool = True  # Close on the dialog_cancel keys
    palette: dict[str, str] = field(default_factory=dict)  # Colour overrides
    keybindings: dict[str, list[str]] = field(default_factory=dict)  # Action -> keys

    @classmethod
    def from_dict(cls, data: Any) -> DialogConfig:
        """
        Create config from a dictionary.

        A document or section that is not a mapping is ignored with a
        warning, as are unknown palette keys.
        """
        data = _mapping(data, "config")
        palette = {}
        for key, value in _mapping(data.get("palette"), "palette").items():
            if key in PALETTE_KEYS:
                palette[key] = str(value)
            else:
                logger.warning("Ignoring unknown palette key %r", key)

        keybindings = {
            action: [str(k) for k in keys]
            for action, keys in _mapping(data.get("keybindings"), "keybindings").items()
            if isinstance(keys, list)
        }

        return cls(
            shadow=data.get("shadow", True),
            escape_closes=data.get("escape_closes", True),
            palette=palette,
            keybindings=keybindings,
        )

    @classmethod
    def from_yaml(cls, path: Path) -> DialogConfig:
        """Load config from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml_string(cls, content: str) -> DialogConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data)

    @classmethod
    def load(cls, path: str | Path | None = None) -> DialogConfig:
        """
        Load config from *path*, or from the file named by ``$MODALKIT_CONFIG``.

        Falls back to the defaults when no file is given, the file does not
        exist, or it cannot be parsed.
        """
        if path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if not env_path:
                return cls()
            path = env_path

        path = Path(path).expanduser()
        if not path.is_file():
            logger.debug("No dialog config at %s, using defaults", path)
            return cls()
        try:
            return cls.from_yaml(path)
        except (yaml.YAMLError, OSError) as e:
            logger.warning("Failed to load dialog config %s: %s", path, e)
            return cls()

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "shadow": self.shadow,
            "escape_closes": self.escape_closes,
            "palette": dict(self.palette),
            "keybindings": {k: list(v) for k, v in self.keybindings.items()},
        }

    def styles(self) -> DialogStyles:
        return default_styles(self.palette)

    def keybindings_manager(self) -> KeybindingsManager:
        return KeybindingsManager(user_overrides=self.keybindings or None)

    def options(self, buttons: Sequence[Button] = ()) -> Options:
        """Build dialog :class:`Options` carrying this config's defaults."""
        styles = self.styles()
        return Options(
            buttons=buttons,
            no_shadow=not self.shadow,
            no_escape_close=not self.escape_closes,
            button_style=styles.button,
            background_style=styles.background,
        )
