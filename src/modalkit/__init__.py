"""
Modal dialogs for a retained-mode terminal widget tree.

A dialog is opened by splicing an overlay into a container's child slot
and closed by putting the original child back.  While open it captures all
keyboard input.  The small set of widgets needed to build and host dialogs
(text, buttons, piles, columns, frames, overlays) ships alongside.
"""
from __future__ import annotations

from modalkit.app import App, quit_app
from modalkit.callbacks import Callbacks, WidgetCallback
from modalkit.component import Component, Decorator, SettableComposite, user_input_if_selectable
from modalkit.config import DialogConfig
from modalkit.container import Columns, ContainerWidget, Holder, Pile
from modalkit.decoration import Framed, Padding, Shadow, Styled
from modalkit.dialog import (
    CANCEL,
    CLOSE,
    CLOSE_ONLY,
    EXIT,
    EXIT_CANCEL,
    NO_BUTTONS,
    OK_CANCEL,
    OPEN_CLOSE,
    QUIT,
    SAVED_CONTAINER,
    SAVED_SUB_WIDGET,
    Button,
    Dialog,
    DialogAlreadyOpenError,
    DialogNotOpenError,
    DialogStateError,
    Maximizer,
    Options,
    close_dialog,
    open_dialog,
    open_dialog_ext,
    user_input,
)
from modalkit.dimensions import Fixed, Flow, HAlign, Ratio, Units, VAlign, Weight
from modalkit.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from modalkit.keys import Key, parse_key
from modalkit.overlay import Overlay
from modalkit.styles import DEFAULT_PALETTE, CellStyle, default_styles
from modalkit.widgets import Divider, PushButton, Text

__version__ = "0.1.0"

__all__ = [
    # Dialog
    "Dialog",
    "Options",
    "Button",
    "Maximizer",
    "open_dialog",
    "open_dialog_ext",
    "close_dialog",
    "user_input",
    "OPEN_CLOSE",
    "SAVED_SUB_WIDGET",
    "SAVED_CONTAINER",
    "DialogStateError",
    "DialogNotOpenError",
    "DialogAlreadyOpenError",
    # Preset buttons
    "QUIT",
    "EXIT",
    "CLOSE",
    "CANCEL",
    "OK_CANCEL",
    "EXIT_CANCEL",
    "CLOSE_ONLY",
    "NO_BUTTONS",
    # Core
    "App",
    "quit_app",
    "Component",
    "Decorator",
    "SettableComposite",
    "user_input_if_selectable",
    "Callbacks",
    "WidgetCallback",
    # Widgets
    "Text",
    "PushButton",
    "Divider",
    "Holder",
    "Pile",
    "Columns",
    "ContainerWidget",
    "Padding",
    "Styled",
    "Framed",
    "Shadow",
    "Overlay",
    # Sizing
    "Fixed",
    "Flow",
    "Weight",
    "Ratio",
    "Units",
    "HAlign",
    "VAlign",
    # Keys
    "Key",
    "parse_key",
    "KeybindingsManager",
    "DEFAULT_KEYBINDINGS",
    # Styles and config
    "CellStyle",
    "DEFAULT_PALETTE",
    "default_styles",
    "DialogConfig",
]
