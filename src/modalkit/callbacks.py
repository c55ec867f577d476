"""
Observer registries for widget state changes.

A :class:`Callbacks` object maps an opaque key (usually a module constant)
to an ordered list of named callbacks.  Widgets fire a key when the state
it stands for changes, and every callback registered for it runs
synchronously, in registration order, before the triggering call returns.

Example:
    from modalkit.callbacks import Callbacks, WidgetCallback

    cbs = Callbacks()
    cbs.add("open-close", WidgetCallback("log", lambda app, w: print(w)))
    cbs.run("open-close", app, widget)
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from modalkit.errors import DialogStateError
from modalkit.logging import get_logger

if TYPE_CHECKING:
    from modalkit.app import App

logger = get_logger("callbacks")

WidgetChangedFunction = Callable[["App | None", Any], None]


@dataclass(frozen=True)
class WidgetCallback:
    """A callback with a name, so that it can later be removed by name."""

    name: str
    fn: WidgetChangedFunction

    def __call__(self, app: App | None, widget: Any) -> None:
        self.fn(app, widget)


class Callbacks:
    """Mapping from key to an ordered list of :class:`WidgetCallback`."""

    def __init__(self) -> None:
        self._registry: dict[Hashable, list[WidgetCallback]] = {}

    def add(self, key: Hashable, callback: WidgetCallback) -> None:
        """Register *callback* for *key*, after any already registered."""
        self._registry.setdefault(key, []).append(callback)

    def remove(self, key: Hashable, name: str) -> bool:
        """Remove every callback named *name* under *key*. Returns ``True`` if any was removed."""
        entries = self._registry.get(key)
        if not entries:
            return False
        kept = [cb for cb in entries if cb.name != name]
        self._registry[key] = kept
        return len(kept) != len(entries)

    def clear(self, key: Hashable | None = None) -> None:
        """Remove all callbacks, or all callbacks for *key*."""
        if key is None:
            self._registry.clear()
        else:
            self._registry.pop(key, None)

    def get(self, key: Hashable) -> list[WidgetCallback]:
        """Return a copy of the callbacks registered for *key*."""
        return list(self._registry.get(key, []))

    def run(self, key: Hashable, app: App | None, widget: Any) -> None:
        """
        Invoke every callback registered for *key*.

        The list is copied first so a callback may add or remove callbacks
        without affecting the current run.  A failing callback is logged
        and the remaining callbacks still run.  Dialog state errors are
        programmer errors and propagate.
        """
        for callback in list(self._registry.get(key, [])):
            try:
                callback(app, widget)
            except DialogStateError:
                raise
            except Exception as e:
                logger.warning(
                    "Widget callback error (key=%s, callback=%s): %s",
                    key,
                    callback.name,
                    e,
                )

    def __len__(self) -> int:
        return sum(len(v) for v in self._registry.values())
