"""
Exceptions raised when a dialog is used in a state that does not allow it.

These signal programmer error.  They are never swallowed by callback
dispatch, so a misused dialog fails at the call that misused it.
"""

from __future__ import annotations


class DialogStateError(RuntimeError):
    """A dialog operation was called in a state that does not allow it."""


class DialogNotOpenError(DialogStateError):
    """The operation needs an open dialog."""


class DialogAlreadyOpenError(DialogStateError):
    """The dialog is already spliced into a container."""
