"""
Overlay compositing widget.

An :class:`Overlay` renders a *bottom* widget and paints a *top* widget
over it, positioned by an alignment and sized by a policy on each axis.
This is what a modal dialog is spliced into the tree as.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modalkit.ansi import fit, splice
from modalkit.component import Component, user_input_if_selectable
from modalkit.dimensions import (
    Dimension,
    Fixed,
    Flow,
    HAlign,
    VAlign,
    offset,
    resolve,
)
from modalkit.keys import Key

if TYPE_CHECKING:
    from modalkit.app import App


class Overlay(Component):
    """
    Two-layer compositor.

    Parameters
    ----------
    top:
        The widget painted on top; it receives input while selectable.
    bottom:
        The widget underneath, rendered at full size.
    h_align, width:
        Horizontal placement and size policy of *top*.
    v_align, height:
        Vertical placement and size policy of *top*.  ``Flow`` means "as
        many rows as the top widget needs".
    """

    def __init__(
        self,
        top: Component,
        bottom: Component,
        h_align: HAlign = HAlign.CENTER,
        width: Dimension = Fixed(),
        v_align: VAlign = VAlign.MIDDLE,
        height: Dimension = Flow(),
    ) -> None:
        super().__init__()
        self._top = top
        self._bottom = bottom
        self.h_align = h_align
        self.v_align = v_align
        self._width = width
        self._height = height
        top.focused = True

    # ------------------------------------------------------------------
    # Layers and policies
    # ------------------------------------------------------------------

    @property
    def top(self) -> Component:
        return self._top

    @property
    def bottom(self) -> Component:
        return self._bottom

    @property
    def width(self) -> Dimension:
        return self._width

    @width.setter
    def width(self, value: Dimension) -> None:
        self._width = value
        self.invalidate()

    @property
    def height(self) -> Dimension:
        return self._height

    @height.setter
    def height(self, value: Dimension) -> None:
        self._height = value
        self.invalidate()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def top_box(self, width: int, height: int) -> tuple[int, int, int, int]:
        """
        Return ``(left, top, cols, rows)`` of the top layer inside a
        *width* x *height* area.
        """
        cols = resolve(self._width, width, self._top.natural_width())
        if isinstance(self._height, (Fixed, Flow)):
            rows = min(height, len(self._top.render(cols)))
        else:
            rows = resolve(self._height, height, height)
        return offset(self.h_align, width, cols), offset(self.v_align, height, rows), cols, rows

    def render(self, width: int, height: int | None = None) -> list[str]:
        """
        Composite the top layer over the bottom layer.

        Without a *height* the area is as tall as the taller of the bottom
        layer and the top layer's natural height.
        """
        base = self._bottom.render(width, height)
        if height is None:
            cols = resolve(self._width, width, self._top.natural_width())
            height = max(len(base), len(self._top.render(cols)))

        result = [fit(line, width) for line in base[:height]]
        while len(result) < height:
            result.append(" " * width)

        left, top, cols, rows = self.top_box(width, height)
        if isinstance(self._height, (Fixed, Flow)):
            layer = self._top.render(cols)
        else:
            layer = self._top.render(cols, rows)
        layer = layer[:rows]
        while len(layer) < rows:
            layer.append("")

        for i, line in enumerate(layer):
            result[top + i] = splice(result[top + i], fit(line, cols), left)

        self._dirty = False
        return result

    def natural_width(self) -> int:
        return max(self._bottom.natural_width(), self._top.natural_width())

    # ------------------------------------------------------------------
    # Input and focus
    # ------------------------------------------------------------------

    @property
    def selectable(self) -> bool:
        return self._top.selectable or self._bottom.selectable

    def handle_input(self, key: Key, app: App | None = None) -> bool:
        """The top layer gets the event if it is selectable, otherwise the bottom."""
        if self._top.selectable:
            return self._top.handle_input(key, app)
        return user_input_if_selectable(self._bottom, key, app)

    @property
    def focused(self) -> bool:
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        # Only the top layer ever holds focus
        if self._focused != value:
            self._focused = value
            self._dirty = True
        self._top.focused = value

    @property
    def dirty(self) -> bool:
        return self._dirty or self._top.dirty or self._bottom.dirty

    @dirty.setter
    def dirty(self, value: bool) -> None:
        self._dirty = value
