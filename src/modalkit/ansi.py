"""
ANSI styling and cell-width helpers.

Rendered lines may carry SGR escape sequences, so anything that measures
or slices a line goes through these helpers instead of ``len()``.  Width is
measured with ``rich`` so that wide (CJK, emoji) characters count as two
cells.
"""

from __future__ import annotations

from rich.cells import cell_len, set_cell_size
from rich.text import Text as RichText

ESC = "\033"
CSI = f"{ESC}["
RESET = f"{CSI}0m"

_STYLE_CODES: dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "underline": 4,
    "reverse": 7,
}


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert ``'#rrggbb'`` or ``'#rgb'`` to an (r, g, b) tuple."""
    h = hex_color.lstrip("#")
    if len(h) == 3:
        h = h[0] * 2 + h[1] * 2 + h[2] * 2
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def hex_fg(hex_color: str) -> str:
    """24-bit foreground escape for a hex colour."""
    r, g, b = _hex_to_rgb(hex_color)
    return f"{CSI}38;2;{r};{g};{b}m"


def hex_bg(hex_color: str) -> str:
    """24-bit background escape for a hex colour."""
    r, g, b = _hex_to_rgb(hex_color)
    return f"{CSI}48;2;{r};{g};{b}m"


def style(
    text: str,
    *,
    fg: str | None = None,
    bg: str | None = None,
    bold: bool = False,
    dim: bool = False,
    underline: bool = False,
    reverse: bool = False,
) -> str:
    """
    Wrap *text* in SGR sequences followed by ``RESET``.

    *fg* and *bg* are hex colour strings.  With no styling requested the
    text is returned unchanged.
    """
    parts: list[str] = []
    if fg is not None:
        parts.append(hex_fg(fg))
    if bg is not None:
        parts.append(hex_bg(bg))
    attrs = {"bold": bold, "dim": dim, "underline": underline, "reverse": reverse}
    for attr_name, enabled in attrs.items():
        if enabled:
            parts.append(f"{CSI}{_STYLE_CODES[attr_name]}m")

    if not parts or not text:
        return text
    prefix = "".join(parts)
    # Nested resets would drop our colours for the rest of the line
    return prefix + text.replace(RESET, RESET + prefix) + RESET


def strip_ansi(text: str) -> str:
    """Remove escape sequences, leaving only the visible characters."""
    return RichText.from_ansi(text).plain


def visible_width(text: str) -> int:
    """Number of terminal cells *text* occupies."""
    return cell_len(strip_ansi(text))


def fit(text: str, width: int) -> str:
    """
    Pad or truncate *text* to exactly *width* cells.

    Truncation drops the styling of the line; padding keeps it.
    """
    current = visible_width(text)
    if current == width:
        return text
    if current < width:
        return text + " " * (width - current)
    return set_cell_size(strip_ansi(text), width)


def splice(base: str, overlay: str, start: int) -> str:
    """
    Paint *overlay* over *base* starting at cell *start*.

    The cells of *base* to the left and right of the overlay are kept as
    plain text.
    """
    plain = strip_ansi(base)
    left = set_cell_size(plain, start)
    return left + overlay + _skip_cells(plain, start + visible_width(overlay))


def _skip_cells(text: str, n: int) -> str:
    """Return what is left of *text* after its first *n* cells."""
    total = 0
    for i, ch in enumerate(text):
        if total >= n:
            # a wide character straddling the boundary becomes padding
            return " " * (total - n) + text[i:]
        total += cell_len(ch)
    return " " * (total - n) if total > n else ""
