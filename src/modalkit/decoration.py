"""
Single-child decorators: padding, styling, frames and drop shadows.

Each is a :class:`~modalkit.component.Decorator`, so each has a settable
``sub_widget`` slot and passes input and focus through to its child.
"""

from __future__ import annotations

from modalkit.ansi import fit, style, visible_width
from modalkit.component import Component, Decorator
from modalkit.dimensions import Dimension, Fixed, HAlign, offset, resolve
from modalkit.styles import CellStyle


class Padding(Decorator):
    """Render the child at a policy-derived width, aligned within the row."""

    def __init__(
        self,
        inner: Component,
        align: HAlign = HAlign.CENTER,
        width: Dimension = Fixed(),
    ) -> None:
        super().__init__(inner)
        self.align = align
        self.width = width

    def render(self, width: int, height: int | None = None) -> list[str]:
        self._dirty = False
        inner_width = resolve(self.width, width, self._inner.natural_width())
        left = offset(self.align, width, inner_width)
        right = width - left - inner_width
        return [
            " " * left + fit(line, inner_width) + " " * right
            for line in self._inner.render(inner_width, height)
        ]

    def natural_width(self) -> int:
        return self._inner.natural_width()


class Styled(Decorator):
    """
    Apply a :class:`CellStyle` to every rendered line.

    When *focus_style* is given it is used instead while the widget has
    focus.
    """

    def __init__(
        self,
        inner: Component,
        style: CellStyle | None,
        focus_style: CellStyle | None = None,
    ) -> None:
        super().__init__(inner)
        self.style = style
        self.focus_style = focus_style

    def render(self, width: int, height: int | None = None) -> list[str]:
        self._dirty = False
        active = self.focus_style if self._focused and self.focus_style else self.style
        lines = self._inner.render(width, height)
        if active is None:
            return lines
        return [active.apply(line) for line in lines]

    def natural_width(self) -> int:
        return self._inner.natural_width()


# Box drawing characters: top-left, top, top-right, side, bottom-left, bottom-right
UNICODE_FRAME = ("┌", "─", "┐", "│", "└", "┘")
UNICODE_ALT_FRAME = ("▛", "▀", "▜", "▌", "▙", "▟")
ASCII_FRAME = ("+", "-", "+", "|", "+", "+")


class Framed(Decorator):
    """Draw a one-cell border around the child."""

    def __init__(
        self,
        inner: Component,
        frame: tuple[str, str, str, str, str, str] = UNICODE_FRAME,
        style: CellStyle | None = None,
    ) -> None:
        super().__init__(inner)
        self.frame = frame
        self.style = style

    def _paint(self, text: str) -> str:
        return self.style.apply(text) if self.style else text

    def render(self, width: int, height: int | None = None) -> list[str]:
        self._dirty = False
        tl, top, tr, side, bl, br = self.frame
        inner_width = max(0, width - 2)
        inner_height = None if height is None else max(0, height - 2)
        body = self._inner.render(inner_width, inner_height)
        lines = [self._paint(tl + top * inner_width + tr)]
        lines.extend(
            self._paint(side) + fit(line, inner_width) + self._paint(side) for line in body
        )
        lines.append(self._paint(bl + top * inner_width + br))
        return lines

    def natural_width(self) -> int:
        return self._inner.natural_width() + 2


class Shadow(Decorator):
    """Cast a shadow *offset* cells to the right of and below the child."""

    def __init__(self, inner: Component, offset: int = 1, color: str = "#000000") -> None:
        super().__init__(inner)
        self.offset = offset
        self.color = color

    def render(self, width: int, height: int | None = None) -> list[str]:
        self._dirty = False
        inner_width = max(0, width - self.offset)
        inner_height = None if height is None else max(0, height - self.offset)
        body = self._inner.render(inner_width, inner_height)
        body_width = max((visible_width(line) for line in body), default=0)
        shade = style(" " * self.offset, bg=self.color)
        blank = " " * self.offset

        lines = [
            line + (blank if row < self.offset else shade) for row, line in enumerate(body)
        ]
        for _ in range(self.offset):
            lines.append(blank + style(" " * body_width, bg=self.color))
        return lines

    def natural_width(self) -> int:
        return self._inner.natural_width() + self.offset
