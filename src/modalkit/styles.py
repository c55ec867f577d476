"""
Cell styles and the default dialog palette.

Widgets receive :class:`CellStyle` values and treat them as opaque handles
they only ever :meth:`~CellStyle.apply` to rendered text.
"""

from __future__ import annotations

from dataclasses import dataclass

from modalkit.ansi import style

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

Palette = dict[str, str]
"""A mapping from palette key to hex colour string."""

PALETTE_KEYS: list[str] = [
    "background",
    "text",
    "button",
    "button_text",
]

DEFAULT_PALETTE: Palette = {
    "background": "#ffffff",  # white
    "text": "#000000",  # black
    "button": "#00008b",  # dark blue
    "button_text": "#ffff00",  # yellow
}


# ---------------------------------------------------------------------------
# CellStyle
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CellStyle:
    """
    Foreground/background pair applied to whole rendered lines.

    Attributes
    ----------
    fg:
        Foreground hex colour, or ``None`` to leave it unchanged.
    bg:
        Background hex colour, or ``None`` to leave it unchanged.
    bold:
        Render in bold.
    """

    fg: str | None = None
    bg: str | None = None
    bold: bool = False

    def apply(self, text: str) -> str:
        return style(text, fg=self.fg, bg=self.bg, bold=self.bold)


@dataclass(frozen=True)
class DialogStyles:
    """The three styles a dialog is drawn with."""

    button: CellStyle
    background: CellStyle
    border: CellStyle


def default_styles(palette: Palette | None = None) -> DialogStyles:
    """
    Build dialog styles from *palette*, falling back to
    :data:`DEFAULT_PALETTE` for missing keys.
    """
    colors = dict(DEFAULT_PALETTE)
    if palette:
        colors.update(palette)
    return DialogStyles(
        button=CellStyle(fg=colors["button_text"], bg=colors["button"]),
        background=CellStyle(fg=colors["text"], bg=colors["background"]),
        border=CellStyle(fg=colors["button"], bg=colors["background"]),
    )
