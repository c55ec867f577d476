"""
Application root.

The :class:`App` owns the top of the widget tree.  It is itself a
settable composite, so a dialog can be opened "globally" over everything
the application shows.
"""

from __future__ import annotations

from modalkit.ansi import fit
from modalkit.callbacks import Callbacks
from modalkit.component import Component, user_input_if_selectable
from modalkit.keys import Key, parse_key
from modalkit.logging import get_logger

logger = get_logger("app")

QUIT = "app.quit"


class App:
    """
    Root of a widget tree.

    The app does no terminal I/O of its own: the embedding program reads
    bytes, passes them to :meth:`feed`, and writes what :meth:`render`
    returns.
    """

    def __init__(self, root: Component) -> None:
        self._root = root
        self._quitting = False
        self.callbacks = Callbacks()
        root.focused = True

    @property
    def sub_widget(self) -> Component:
        return self._root

    @sub_widget.setter
    def sub_widget(self, widget: Component) -> None:
        self._root.focused = False
        self._root = widget
        widget.focused = True
        widget.invalidate()

    @property
    def quitting(self) -> bool:
        return self._quitting

    def quit(self) -> None:
        """Ask the embedding loop to stop; fires the ``QUIT`` callbacks once."""
        if self._quitting:
            return
        self._quitting = True
        logger.debug("Quit requested")
        self.callbacks.run(QUIT, self, self._root)

    def handle_input(self, key: Key) -> bool:
        return user_input_if_selectable(self._root, key, self)

    def feed(self, data: bytes) -> bool:
        """Parse raw terminal bytes and dispatch the resulting key."""
        return self.handle_input(parse_key(data))

    def render(self, width: int, height: int) -> list[str]:
        """Render the tree into exactly *height* rows of *width* cells."""
        lines = self._root.render(width, height)[:height]
        lines = [fit(line, width) for line in lines]
        while len(lines) < height:
            lines.append(" " * width)
        self._root.dirty = False
        return lines


def quit_app(app: App | None, widget: Component) -> None:
    """Button action that quits the application."""
    if app is not None:
        app.quit()
