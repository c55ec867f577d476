"""
Size policies and alignments.

A size policy says how much of the available width or height a widget
should take.  Policies are immutable values so that they can be saved and
restored by identity or equality (see :class:`modalkit.dialog.Maximizer`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Fixed:
    """Use the widget's natural size."""


@dataclass(frozen=True)
class Flow:
    """Use as many rows as the widget needs at the given width."""


@dataclass(frozen=True)
class Weight:
    """Take a proportional share of the available space."""

    w: int = 1


@dataclass(frozen=True)
class Ratio:
    """Take a fraction of the available space (``1.0`` is all of it)."""

    r: float = 1.0


@dataclass(frozen=True)
class Units:
    """Take exactly *n* cells, clipped to what is available."""

    n: int


Dimension = Fixed | Flow | Weight | Ratio | Units


class HAlign(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VAlign(Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


def resolve(dimension: Dimension, available: int, natural: int) -> int:
    """
    Turn a policy into a concrete number of cells.

    ``Fixed`` and ``Flow`` both mean "natural size"; the distinction only
    matters to containers that split space among several children.
    """
    if isinstance(dimension, (Fixed, Flow)):
        size = natural
    elif isinstance(dimension, Ratio):
        size = int(available * dimension.r)
    elif isinstance(dimension, Units):
        size = dimension.n
    else:
        size = available
    return max(0, min(size, available))


def offset(align: HAlign | VAlign, available: int, size: int) -> int:
    """Return where a *size*-cell span starts inside *available* cells."""
    slack = max(0, available - size)
    if align in (HAlign.LEFT, VAlign.TOP):
        return 0
    if align in (HAlign.RIGHT, VAlign.BOTTOM):
        return slack
    return slack // 2
