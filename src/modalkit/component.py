"""
Abstract base component for the widget tree.

All renderable elements inherit from ``Component``.  Composite widgets
that hold exactly one replaceable child also satisfy
:class:`SettableComposite`, which is the only capability the modal dialog
needs from the container it is opened in.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from modalkit.ansi import visible_width
from modalkit.keys import Key

if TYPE_CHECKING:
    from modalkit.app import App

# Width used when asking a widget how wide it wants to be.
_UNBOUNDED = 1000


class Component(ABC):
    """
    Base class for widgets.

    Subclasses must implement :meth:`render` which returns a list of
    pre-styled text lines.  Components track *dirty* state so that a
    renderer can skip unchanged regions.
    """

    def __init__(self) -> None:
        self._dirty: bool = True
        self._visible: bool = True
        self._focused: bool = False

    # ------------------------------------------------------------------
    # Abstract API
    # ------------------------------------------------------------------

    @abstractmethod
    def render(self, width: int, height: int | None = None) -> list[str]:
        """
        Render the component into a list of text lines.

        Parameters
        ----------
        width:
            The available horizontal space in columns.  No line may be
            wider than this.
        height:
            The available number of rows, when the caller knows it.  Most
            widgets ignore it and return as many rows as they need.

        Returns
        -------
        list[str]
            One string per row.
        """
        ...

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    @property
    def selectable(self) -> bool:
        """Whether this widget can take focus and wants key events."""
        return False

    def handle_input(self, key: Key, app: App | None = None) -> bool:
        """
        Handle a keyboard event.

        Returns ``True`` if the event was consumed and should not propagate.
        """
        return False

    # ------------------------------------------------------------------
    # Sizing
    # ------------------------------------------------------------------

    def natural_width(self) -> int:
        """Width of the widget when it is not constrained."""
        lines = self.render(_UNBOUNDED)
        return max((visible_width(line) for line in lines), default=0)

    # ------------------------------------------------------------------
    # State management
    # ------------------------------------------------------------------

    def invalidate(self) -> None:
        """Mark the component as needing a re-render."""
        self._dirty = True

    @property
    def dirty(self) -> bool:
        return self._dirty

    @dirty.setter
    def dirty(self, value: bool) -> None:
        self._dirty = value

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        if self._visible != value:
            self._visible = value
            self._dirty = True

    @property
    def focused(self) -> bool:
        """Whether the component currently has input focus."""
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        if self._focused != value:
            self._focused = value
            self._dirty = True


@runtime_checkable
class SettableComposite(Protocol):
    """Anything with a single child slot that can be read and replaced."""

    @property
    def sub_widget(self) -> Component: ...

    @sub_widget.setter
    def sub_widget(self, widget: Component) -> None: ...


def user_input_if_selectable(widget: Component, key: Key, app: App | None = None) -> bool:
    """Forward *key* to *widget* only when it can accept focus."""
    if not widget.selectable:
        return False
    return widget.handle_input(key, app)


class Decorator(Component):
    """
    A component wrapping exactly one child.

    Input, selectability, focus and dirtiness pass through to the child.
    The child slot is settable, so every decorator can host a dialog.
    """

    def __init__(self, inner: Component) -> None:
        super().__init__()
        self._inner = inner

    @property
    def sub_widget(self) -> Component:
        return self._inner

    @sub_widget.setter
    def sub_widget(self, widget: Component) -> None:
        self._inner.focused = False
        self._inner = widget
        widget.focused = self._focused
        self.invalidate()

    def render(self, width: int, height: int | None = None) -> list[str]:
        self._dirty = False
        return self._inner.render(width, height)

    @property
    def selectable(self) -> bool:
        return self._inner.selectable

    def handle_input(self, key: Key, app: App | None = None) -> bool:
        return self._inner.handle_input(key, app)

    @property
    def focused(self) -> bool:
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        if self._focused != value:
            self._focused = value
            self._dirty = True
        self._inner.focused = value

    @property
    def dirty(self) -> bool:
        return self._dirty or self._inner.dirty

    @dirty.setter
    def dirty(self, value: bool) -> None:
        self._dirty = value
