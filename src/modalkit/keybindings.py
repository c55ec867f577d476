"""
Keybinding management.

Maps the logical actions widgets care about (cancel a dialog, move focus,
activate a button) to key descriptors.  Defaults can be overridden from a
dict or a JSON file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from modalkit.keys import Key
from modalkit.logging import get_logger

logger = get_logger("keybindings")

# ---------------------------------------------------------------------------
# Default keybinding map
# ---------------------------------------------------------------------------

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "dialog_cancel": ["escape", "ctrl+c"],
    "focus_next": ["tab", "right"],
    "focus_prev": ["shift+tab", "left"],
    "focus_down": ["down"],
    "focus_up": ["up"],
    "activate": ["enter", "space"],
}


# ---------------------------------------------------------------------------
# Descriptor normalisation
# ---------------------------------------------------------------------------

def _normalise_key_descriptor(descriptor: str) -> str:
    """
    Normalise a human-readable key descriptor to a canonical form.

    ``"Shift+Ctrl+X"`` -> ``"ctrl+shift+x"``
    """
    parts = [p.strip().lower() for p in descriptor.split("+")]
    modifiers = sorted(parts[:-1])
    return "+".join(modifiers + [parts[-1]])


def _key_to_descriptor(key: Key) -> str:
    """
    Convert a parsed :class:`Key` into a canonical descriptor string.

    >>> _key_to_descriptor(Key(name="ctrl+c", char="c", ctrl=True))
    'ctrl+c'
    >>> _key_to_descriptor(Key(name="tab", shift=True))
    'shift+tab'
    """
    modifiers = {
        name for name, held in (("ctrl", key.ctrl), ("alt", key.alt), ("shift", key.shift))
        if held
    }
    # ctrl+<letter> keys already carry the modifier in their name
    base = key.name.rsplit("+", 1)[-1].lower()
    return "+".join(sorted(modifiers) + [base])


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------

class KeybindingsManager:
    """
    Manages the mapping from logical action names to key descriptors.

    Parameters
    ----------
    user_overrides:
        Optional mapping of action names to key descriptor lists that
        replace the defaults for those actions.
    """

    def __init__(self, user_overrides: dict[str, list[str]] | None = None) -> None:
        self._bindings: dict[str, list[str]] = dict(DEFAULT_KEYBINDINGS)
        if user_overrides:
            self._bindings.update(user_overrides)

        self._normalised: dict[str, set[str]] = {
            action: {_normalise_key_descriptor(d) for d in descriptors}
            for action, descriptors in self._bindings.items()
        }

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> KeybindingsManager:
        """
        Load keybindings from a JSON file.

        When *config_path* is ``None`` the file ``~/.modalkit/keybindings.json``
        is used if it exists.  The file maps action names to lists of key
        descriptors::

            {"dialog_cancel": ["escape"], "activate": ["enter"]}

        Malformed files are ignored and the defaults are used.
        """
        if config_path is not None:
            path = Path(config_path)
        else:
            path = Path.home() / ".modalkit" / "keybindings.json"

        overrides: dict[str, list[str]] | None = None

        if path.is_file():
            try:
                raw: Any = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring keybindings file %s: %s", path, e)
            else:
                if isinstance(raw, dict):
                    overrides = {
                        action: val
                        for action, val in raw.items()
                        if isinstance(val, list) and all(isinstance(v, str) for v in val)
                    }

        return cls(user_overrides=overrides)

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def matches(self, key: Key | str, action: str) -> bool:
        """
        Test whether *key* matches any binding for *action*.

        *key* may be a :class:`Key` or a descriptor string such as
        ``"ctrl+c"``.  Unknown actions never match.
        """
        descriptors = self._normalised.get(action)
        if descriptors is None:
            return False

        if isinstance(key, str):
            return _normalise_key_descriptor(key) in descriptors
        return _key_to_descriptor(key) in descriptors

    def get_keys(self, action: str) -> list[str]:
        """Return the descriptors bound to *action*, as originally written."""
        return list(self._bindings.get(action, []))

    def actions(self) -> list[str]:
        """Return all registered action names."""
        return list(self._bindings.keys())

    def find_action(self, key: Key | str) -> str | None:
        """Find the first action (in insertion order) that matches *key*."""
        for action in self._bindings:
            if self.matches(key, action):
                return action
        return None


_default_manager: KeybindingsManager | None = None


def default_keybindings() -> KeybindingsManager:
    """Return the shared manager used by widgets that were not given one."""
    global _default_manager
    if _default_manager is None:
        _default_manager = KeybindingsManager()
    return _default_manager


def set_default_keybindings(manager: KeybindingsManager | None) -> None:
    """Replace the shared manager; ``None`` resets to the built-in defaults."""
    global _default_manager
    _default_manager = manager
