"""
Input events for the widget tree.

Raw terminal bytes are turned into ``Key`` values here.  Everything above
this module, the modal dialog included, dispatches on ``Key`` only.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key data model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Key:
    """
    Parsed representation of a single key press.

    Attributes
    ----------
    name:
        Symbolic name for special keys (e.g. ``'escape'``, ``'ctrl+c'``).
        For plain printable characters this equals *char*.
    char:
        The literal character, if any.  Empty string otherwise.
    ctrl:
        ``True`` when Ctrl was held.
    alt:
        ``True`` when Alt (Meta/Option) was held.
    shift:
        ``True`` when Shift was held (only detectable for certain keys).
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def printable(self) -> bool:
        """Whether the key produces a visible character."""
        return bool(self.char) and not (self.ctrl or self.alt) and self.char.isprintable()


# ---------------------------------------------------------------------------
# Common key constants
# ---------------------------------------------------------------------------

KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_SHIFT_TAB = Key(name="tab", char="\t", shift=True)
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_SPACE = Key(name="space", char=" ")

# Interrupt signal; terminals in raw mode deliver it as a plain byte.
KEY_CTRL_C = Key(name="ctrl+c", char="c", ctrl=True)

KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")
KEY_HOME = Key(name="home")
KEY_END = Key(name="end")

KEY_UNKNOWN = Key(name="unknown")


_CSI_FINAL: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
    "Z": KEY_SHIFT_TAB,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_key(data: bytes) -> Key:
    """
    Parse raw terminal input bytes into a ``Key``.

    Recognises bare escape, control bytes (ctrl+letter, enter, tab,
    backspace), ``ESC [`` cursor sequences with optional xterm modifier
    suffixes, Alt+character and printable UTF-8.  Anything else becomes
    ``KEY_UNKNOWN``.
    """
    if not data:
        return KEY_UNKNOWN

    if data[:1] == b"\x1b":
        if len(data) == 1:
            return KEY_ESCAPE
        if data[1:2] == b"[":
            return _parse_csi(data[2:])
        if len(data) == 2:
            inner = parse_key(data[1:])
            if inner is KEY_UNKNOWN:
                return KEY_UNKNOWN
            base = inner.name.rsplit("+", 1)[-1]
            return Key(name=f"alt+{base}", char=inner.char, ctrl=inner.ctrl, alt=True)
        return KEY_UNKNOWN

    byte = data[0]
    if len(data) == 1:
        if byte in (0x0D, 0x0A):
            return KEY_ENTER
        if byte == 0x09:
            return KEY_TAB
        if byte in (0x7F, 0x08):
            return KEY_BACKSPACE
        if 1 <= byte <= 26:
            letter = chr(byte + 96)
            return Key(name=f"ctrl+{letter}", char=letter, ctrl=True)

    try:
        ch = data.decode("utf-8")
    except UnicodeDecodeError:
        return KEY_UNKNOWN

    if len(ch) == 1 and ch.isprintable():
        if ch == " ":
            return KEY_SPACE
        return Key(name=ch, char=ch)
    return KEY_UNKNOWN


def _parse_csi(payload: bytes) -> Key:
    """Parse what follows ``ESC [``; only cursor-style finals are supported."""
    try:
        text = payload.decode("ascii")
    except UnicodeDecodeError:
        return KEY_UNKNOWN
    if not text:
        return KEY_UNKNOWN

    base = _CSI_FINAL.get(text[-1])
    if base is None:
        return KEY_UNKNOWN
    if len(text) == 1:
        return base

    # xterm modifiers: "1;<mod><final>", mod = 1 + shift + 2*alt + 4*ctrl
    params = text[:-1].split(";")
    if len(params) != 2 or not params[1].isdigit():
        return KEY_UNKNOWN
    mod = int(params[1]) - 1
    return Key(
        name=base.name,
        char=base.char,
        shift=bool(mod & 1) or base.shift,
        alt=bool(mod & 2),
        ctrl=bool(mod & 4),
    )
