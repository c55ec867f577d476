"""
Layout containers.

``Holder`` is the simplest settable slot.  ``Pile`` stacks cells top to
bottom and ``Columns`` lays them out left to right; both delegate input to
the focused cell and move focus between selectable cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from modalkit.ansi import fit
from modalkit.component import Component, Decorator
from modalkit.dimensions import Dimension, Fixed, Weight
from modalkit.keybindings import KeybindingsManager, default_keybindings
from modalkit.keys import Key

if TYPE_CHECKING:
    from modalkit.app import App


@dataclass
class ContainerWidget:
    """
    A container cell: a widget plus the policy that sizes it.

    The dimension is mutable so that a cell can be resized in place
    without rebuilding its container.
    """

    widget: Component
    dimension: Dimension = Weight(1)


class Holder(Decorator):
    """A bare single-child slot, typically the place a dialog is opened in."""


def _as_cell(item: Component | ContainerWidget) -> ContainerWidget:
    if isinstance(item, ContainerWidget):
        return item
    return ContainerWidget(item)


class _FocusList(Component):
    """Shared child and focus bookkeeping for ``Pile`` and ``Columns``."""

    def __init__(
        self,
        cells: list[Component | ContainerWidget] | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        super().__init__()
        self._keybindings = keybindings
        self._cells: list[ContainerWidget] = [_as_cell(c) for c in cells or []]
        self._focused_index: int = self._first_selectable()

    # ------------------------------------------------------------------
    # Child management
    # ------------------------------------------------------------------

    @property
    def cells(self) -> list[ContainerWidget]:
        return self._cells

    @property
    def children(self) -> list[Component]:
        """The widgets of all cells, in order."""
        return [c.widget for c in self._cells]

    def add(self, item: Component | ContainerWidget) -> None:
        self._cells.append(_as_cell(item))
        if not self._is_selectable(self._focused_index):
            self._focused_index = self._first_selectable()
        self.invalidate()

    # ------------------------------------------------------------------
    # Focus management
    # ------------------------------------------------------------------

    def _first_selectable(self) -> int:
        for i, cell in enumerate(self._cells):
            if cell.widget.visible and cell.widget.selectable:
                return i
        return 0

    def _is_selectable(self, index: int) -> bool:
        if not 0 <= index < len(self._cells):
            return False
        widget = self._cells[index].widget
        return widget.visible and widget.selectable

    @property
    def focused_index(self) -> int:
        return self._focused_index

    @focused_index.setter
    def focused_index(self, value: int) -> None:
        if not self._cells:
            return
        old = self._focused_index
        self._focused_index = max(0, min(value, len(self._cells) - 1))
        if old != self._focused_index:
            if 0 <= old < len(self._cells):
                self._cells[old].widget.focused = False
            self._cells[self._focused_index].widget.focused = self._focused
            self.invalidate()

    @property
    def focus_widget(self) -> Component | None:
        if not self._cells:
            return None
        return self._cells[self._focused_index].widget

    def _move_focus(self, step: int) -> bool:
        """Move to the next selectable cell in direction *step*, without wrapping."""
        idx = self._focused_index + step
        while 0 <= idx < len(self._cells):
            if self._is_selectable(idx):
                self.focused_index = idx
                return True
            idx += step
        return False

    @property
    def focused(self) -> bool:
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        if self._focused != value:
            self._focused = value
            self._dirty = True
        focus = self.focus_widget
        if focus is not None:
            focus.focused = value

    @property
    def selectable(self) -> bool:
        return any(self._is_selectable(i) for i in range(len(self._cells)))

    # ------------------------------------------------------------------
    # Input dispatch
    # ------------------------------------------------------------------

    _next_action = ""
    _prev_action = ""

    def handle_input(self, key: Key, app: App | None = None) -> bool:
        """
        Dispatch input to the focused cell.

        If the cell does not consume the event and it is a focus movement
        key for this container's direction, move focus instead.
        """
        if self._is_selectable(self._focused_index):
            if self._cells[self._focused_index].widget.handle_input(key, app):
                return True

        bindings = self._keybindings or default_keybindings()
        if bindings.matches(key, self._next_action):
            return self._move_focus(1)
        if bindings.matches(key, self._prev_action):
            return self._move_focus(-1)
        return False

    # ------------------------------------------------------------------
    # Dirty propagation
    # ------------------------------------------------------------------

    @property
    def dirty(self) -> bool:
        if self._dirty:
            return True
        return any(c.widget.dirty for c in self._cells if c.widget.visible)

    @dirty.setter
    def dirty(self, value: bool) -> None:
        self._dirty = value

    def invalidate(self) -> None:
        self._dirty = True
        for cell in self._cells:
            cell.widget.invalidate()


class Pile(_FocusList):
    """
    A vertical stack of cells.

    ``Fixed`` cells are rendered at their natural width, left aligned;
    every other policy gets the full width.  Rows are always padded to the
    full width so that a surrounding style fills the whole block.
    """

    _next_action = "focus_down"
    _prev_action = "focus_up"

    def render(self, width: int, height: int | None = None) -> list[str]:
        lines: list[str] = []
        for cell in self._cells:
            if not cell.widget.visible:
                continue
            if isinstance(cell.dimension, Fixed):
                cell_width = min(width, cell.widget.natural_width())
            else:
                cell_width = width
            lines.extend(fit(line, width) for line in cell.widget.render(cell_width))
        self._dirty = False
        return lines

    def natural_width(self) -> int:
        return max(
            (c.widget.natural_width() for c in self._cells if c.widget.visible),
            default=0,
        )


class Columns(_FocusList):
    """
    A horizontal row of cells.

    ``Fixed`` cells get their natural width; the remaining space is shared
    between the other cells in proportion to their weights (non-weight
    policies count as weight 1).
    """

    _next_action = "focus_next"
    _prev_action = "focus_prev"

    def column_widths(self, width: int) -> list[int]:
        widths = [0] * len(self._cells)
        weighted: list[tuple[int, int]] = []
        remaining = width
        for i, cell in enumerate(self._cells):
            if not cell.widget.visible:
                continue
            if isinstance(cell.dimension, Fixed):
                widths[i] = min(remaining, cell.widget.natural_width())
                remaining -= widths[i]
            else:
                w = cell.dimension.w if isinstance(cell.dimension, Weight) else 1
                weighted.append((i, w))

        total = sum(w for _, w in weighted)
        if total:
            given = 0
            for n, (i, w) in enumerate(weighted):
                if n == len(weighted) - 1:
                    widths[i] = remaining - given
                else:
                    widths[i] = remaining * w // total
                given += widths[i]
        return widths

    def render(self, width: int, height: int | None = None) -> list[str]:
        blocks: list[tuple[list[str], int]] = []
        widths = self.column_widths(width)
        for cell, cell_width in zip(self._cells, widths):
            if not cell.widget.visible or cell_width <= 0:
                continue
            rows = [fit(line, cell_width) for line in cell.widget.render(cell_width)]
            blocks.append((rows, cell_width))
        self._dirty = False
        if not blocks:
            return []

        rows_needed = max(len(rows) for rows, _ in blocks)
        lines: list[str] = []
        for r in range(rows_needed):
            row = "".join(
                rows[r] if r < len(rows) else " " * cell_width for rows, cell_width in blocks
            )
            lines.append(fit(row, width))
        return lines

    def natural_width(self) -> int:
        return sum(c.widget.natural_width() for c in self._cells if c.widget.visible)
