"""
Logging utilities for modalkit.

All modules log through children of the ``modalkit`` logger so that an
application can tune or silence the dialog subsystem in one place.  What
gets logged:

- ``modalkit.dialog`` at DEBUG on every splice, restore and maximize
- ``modalkit.callbacks`` at WARNING when an observer raises
- ``modalkit.config`` / ``modalkit.keybindings`` at WARNING when a
  configuration file is ignored

A full-screen application owns the terminal, so the usual setup sends the
log to a file only:

    from modalkit.logging import setup_logging

    setup_logging("DEBUG", file="dialogs.log")
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_root_logger = logging.getLogger("modalkit")

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _coerce_level(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure logging for modalkit, replacing any earlier configuration.

    Args:
        level: Log level name (DEBUG, INFO, ...) or number
        format: Log format string, defaults to ``DEFAULT_FORMAT``
        stream: Stream to log to.  Defaults to stderr unless *file* is
            given, in which case only the file is written
        file: Optional file path to write logs
    """
    level = _coerce_level(level)
    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    formatter = logging.Formatter(format or DEFAULT_FORMAT)

    handlers: list[logging.Handler] = []
    if stream is not None or not file:
        handlers.append(logging.StreamHandler(stream or sys.stderr))
    if file:
        handlers.append(logging.FileHandler(file))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        _root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Args:
        name: Submodule name (e.g., "dialog", "callbacks")

    Returns:
        Logger instance
    """
    if name.startswith("modalkit."):
        return logging.getLogger(name)
    return logging.getLogger(f"modalkit.{name}")


def set_level(level: str | int) -> None:
    """Set the log level for modalkit."""
    _root_logger.setLevel(_coerce_level(level))


_level_before_disable: int | None = None


def disable() -> None:
    """Disable all logging for modalkit, child loggers included."""
    global _level_before_disable
    if _level_before_disable is None:
        _level_before_disable = _root_logger.level
    # Children consult the effective level, not the parent's disabled flag
    _root_logger.setLevel(logging.CRITICAL + 1)
    _root_logger.disabled = True


def enable() -> None:
    """Re-enable logging for modalkit."""
    global _level_before_disable
    if _level_before_disable is not None:
        _root_logger.setLevel(_level_before_disable)
        _level_before_disable = None
    _root_logger.disabled = False
