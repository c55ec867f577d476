"""Shared pytest fixtures for modalkit tests."""

from __future__ import annotations

import pytest

from modalkit.app import App
from modalkit.component import Component
from modalkit.container import Holder
from modalkit.keybindings import set_default_keybindings
from modalkit.keys import Key


class StubComponent(Component):
    """Minimal concrete component that records the keys it is given."""

    def __init__(
        self,
        lines: list[str] | None = None,
        selectable: bool = False,
        consume: bool = False,
    ) -> None:
        super().__init__()
        self._lines = lines or ["stub"]
        self._selectable = selectable
        self._consume = consume
        self.keys: list[Key] = []

    def render(self, width: int, height: int | None = None) -> list[str]:
        self._dirty = False
        return list(self._lines)

    @property
    def selectable(self) -> bool:
        return self._selectable

    def handle_input(self, key: Key, app: App | None = None) -> bool:
        self.keys.append(key)
        return self._consume


@pytest.fixture(autouse=True)
def reset_keybindings():
    """Make sure no test leaks a custom shared keybindings manager."""
    yield
    set_default_keybindings(None)


@pytest.fixture
def main_widget() -> StubComponent:
    """A selectable widget standing in for the main screen."""
    return StubComponent(["." * 20] * 6, selectable=True, consume=True)


@pytest.fixture
def holder(main_widget: StubComponent) -> Holder:
    """A container slot holding the main screen."""
    return Holder(main_widget)


@pytest.fixture
def app(holder: Holder) -> App:
    return App(holder)
