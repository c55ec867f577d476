"""
Leaf widgets: text, push buttons and dividers.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich.cells import set_cell_size
from rich.console import Console
from rich.text import Text as RichText

from modalkit.ansi import visible_width
from modalkit.callbacks import Callbacks, WidgetCallback
from modalkit.component import Component
from modalkit.keybindings import KeybindingsManager, default_keybindings
from modalkit.keys import Key

if TYPE_CHECKING:
    from modalkit.app import App

CLICK = "button.click"


class Text(Component):
    """
    Read-only text, word-wrapped to the available width.

    Wrapping is delegated to ``rich`` so that wide characters are measured
    in terminal cells.
    """

    def __init__(self, content: str = "") -> None:
        super().__init__()
        self._content = content

    @property
    def content(self) -> str:
        return self._content

    def set_content(self, content: str) -> None:
        if content != self._content:
            self._content = content
            self.invalidate()

    def render(self, width: int, height: int | None = None) -> list[str]:
        self._dirty = False
        if not self._content:
            return [""]
        console = Console(file=StringIO(), width=max(1, width))
        lines: list[str] = []
        for paragraph in self._content.split("\n"):
            if not paragraph:
                lines.append("")
                continue
            wrapped = RichText(paragraph).wrap(console, max(1, width))
            lines.extend(line.plain.rstrip() for line in wrapped)
        return lines

    def natural_width(self) -> int:
        return max((visible_width(line) for line in self._content.split("\n")), default=0)


class PushButton(Component):
    """
    A clickable ``< label >`` button.

    Clicking (the ``activate`` binding, enter or space by default) runs the
    callbacks registered with :meth:`on_click` in order.
    """

    def __init__(self, label: str, keybindings: KeybindingsManager | None = None) -> None:
        super().__init__()
        self._label = label
        self._keybindings = keybindings
        self.callbacks = Callbacks()

    @property
    def label(self) -> str:
        return self._label

    def on_click(self, callback: WidgetCallback) -> None:
        self.callbacks.add(CLICK, callback)

    def remove_on_click(self, name: str) -> bool:
        return self.callbacks.remove(CLICK, name)

    def click(self, app: App | None = None) -> None:
        self.callbacks.run(CLICK, app, self)

    @property
    def selectable(self) -> bool:
        return True

    def handle_input(self, key: Key, app: App | None = None) -> bool:
        bindings = self._keybindings or default_keybindings()
        if bindings.matches(key, "activate"):
            self.click(app)
            return True
        return False

    def render(self, width: int, height: int | None = None) -> list[str]:
        self._dirty = False
        text = f"< {self._label} >"
        if visible_width(text) > width:
            text = set_cell_size(text, width)
        return [text]

    def natural_width(self) -> int:
        return visible_width(f"< {self._label} >")


class Divider(Component):
    """A horizontal rule across the full width."""

    def __init__(self, char: str = "─") -> None:
        super().__init__()
        self._char = char

    def render(self, width: int, height: int | None = None) -> list[str]:
        self._dirty = False
        return [self._char * width]

    def natural_width(self) -> int:
        return 1
