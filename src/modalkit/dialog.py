"""
Modal dialogs.

A :class:`Dialog` is opened *in* a container: the container's current
child is swapped for an :class:`~modalkit.overlay.Overlay` that paints the
dialog over that child, and the child is remembered so that closing puts
it back exactly.  While open, the dialog swallows every key event so that
nothing reaches the widgets underneath.

Example:
    from modalkit import App, Dialog, Holder, Text, Ratio, OK_CANCEL, Options

    main = Holder(Text("main screen"))
    app = App(main)
    dialog = Dialog(Text("Really quit?"), Options(buttons=OK_CANCEL))

    dialog.open(main, Ratio(0.5), app)   # main.sub_widget is now an Overlay
    dialog.close(app)                    # main.sub_widget is the Text again
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from modalkit.app import quit_app
from modalkit.callbacks import Callbacks, WidgetCallback
from modalkit.component import Component, SettableComposite, user_input_if_selectable
from modalkit.container import Columns, ContainerWidget, Pile
from modalkit.decoration import Framed, Padding, Shadow, Styled
from modalkit.errors import DialogAlreadyOpenError, DialogNotOpenError, DialogStateError
from modalkit.dimensions import Dimension, Fixed, Flow, HAlign, Ratio, VAlign, Weight
from modalkit.keybindings import KeybindingsManager, default_keybindings
from modalkit.keys import Key
from modalkit.logging import get_logger
from modalkit.overlay import Overlay
from modalkit.styles import CellStyle, Palette, default_styles
from modalkit.widgets import Divider, PushButton

if TYPE_CHECKING:
    from modalkit.app import App

logger = get_logger("dialog")

# Callback registry keys
OPEN_CLOSE = "dialog.open_close"
SAVED_SUB_WIDGET = "dialog.saved_sub_widget"
SAVED_CONTAINER = "dialog.saved_container"


# ---------------------------------------------------------------------------
# Buttons and options
# ---------------------------------------------------------------------------

ButtonAction = Callable[["App | None", Component], None]


@dataclass(frozen=True)
class Button:
    """
    A button to show at the bottom of a dialog.

    Attributes
    ----------
    label:
        Text on the button.
    action:
        Called with ``(app, button_widget)`` on click.  ``None`` means
        "close the dialog".
    """

    label: str
    action: ButtonAction | None = None


QUIT = Button("Quit", quit_app)
EXIT = Button("Exit", quit_app)
CLOSE = Button("Close")
CANCEL = Button("Cancel")

OK_CANCEL: tuple[Button, ...] = (Button("Ok", quit_app), CANCEL)
EXIT_CANCEL: tuple[Button, ...] = (EXIT, CANCEL)
CLOSE_ONLY: tuple[Button, ...] = (CLOSE,)
NO_BUTTONS: tuple[Button, ...] = ()


@dataclass(frozen=True)
class Options:
    """
    Construction options for a :class:`Dialog`.

    Attributes
    ----------
    buttons:
        Buttons in display order.  Empty means no divider and no button row.
    no_shadow:
        Do not draw a drop shadow.
    no_escape_close:
        Do not close on the ``dialog_cancel`` keys (escape, ctrl+c).
    button_style:
        Style of the focused button.  Defaults to the palette.
    background_style:
        Style of the dialog body and border.  Defaults to the palette.
    """

    buttons: Sequence[Button] = ()
    no_shadow: bool = False
    no_escape_close: bool = False
    button_style: CellStyle | None = None
    background_style: CellStyle | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "buttons", tuple(self.buttons))


# ---------------------------------------------------------------------------
# Body construction
# ---------------------------------------------------------------------------

@dataclass
class _DialogRef:
    """One-slot cell so the body can refer to the dialog built around it."""

    dialog: Dialog | None = None

    def get(self) -> Dialog:
        if self.dialog is None:
            raise DialogStateError("Dialog body was used before its dialog was constructed")
        return self.dialog


@dataclass(frozen=True)
class DialogBody:
    """The pieces of a built dialog body that callers may want to reach."""

    pile: Pile
    content_wrapper: ContainerWidget
    divider: Component | None = None
    buttons: list[PushButton] = field(default_factory=list)


def _close_action(ref: _DialogRef) -> ButtonAction:
    def close(app: App | None, widget: Component) -> None:
        ref.get().close(app)

    return close


def build_body(
    content: Component,
    buttons: Sequence[Button],
    *,
    button_style: CellStyle,
    background_style: CellStyle,
    border_style: CellStyle,
    ref: _DialogRef,
    keybindings: KeybindingsManager | None = None,
) -> DialogBody:
    """
    Stack *content* above an optional divider and button row.

    Buttons without an action close the dialog that *ref* will point to.
    """
    wrapper = ContainerWidget(content, Weight(1))
    cells: list[Component | ContainerWidget] = [wrapper]

    widgets: list[PushButton] = []
    columns: list[Component | ContainerWidget] = []
    for i, spec in enumerate(buttons):
        button = PushButton(spec.label, keybindings)
        action = spec.action if spec.action is not None else _close_action(ref)
        button.on_click(WidgetCallback(f"cb-{i}", action))
        widgets.append(button)
        columns.append(
            ContainerWidget(
                Padding(
                    Styled(button, background_style, button_style),
                    HAlign.CENTER,
                    Fixed(),
                ),
                Weight(1),
            )
        )

    divider: Component | None = None
    if columns:
        divider = Styled(Divider(), border_style)
        cells.append(ContainerWidget(divider, Flow()))
        cells.append(ContainerWidget(Columns(columns, keybindings), Flow()))

    return DialogBody(
        pile=Pile(cells, keybindings),
        content_wrapper=wrapper,
        divider=divider,
        buttons=widgets,
    )


# ---------------------------------------------------------------------------
# Dialog widget
# ---------------------------------------------------------------------------

class Dialog(Component):
    """
    A modal dialog.

    The dialog is a composite whose ``sub_widget`` is the decorated body
    (frame, background and, unless disabled, a shadow).  Opening it in a
    container records the container and its previous child; closing
    restores that child.  Between the two, :attr:`is_open` is ``True`` and
    :attr:`saved_container` / :attr:`saved_sub_widget` are set; otherwise
    all three are falsy.

    Parameters
    ----------
    content:
        The widget shown in the body of the dialog.
    options:
        Buttons, shadow and escape behaviour, styles.
    palette:
        Colour overrides used for any style *options* leaves unset.
    keybindings:
        Manager deciding which keys cancel the dialog and activate
        buttons.  Defaults to the shared manager.
    """

    def __init__(
        self,
        content: Component,
        options: Options | None = None,
        *,
        palette: Palette | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        super().__init__()
        self.options = options or Options()
        self.callbacks = Callbacks()
        self._keybindings = keybindings
        self._open = False
        self._saved_sub_widget: Component | None = None
        self._saved_container: SettableComposite | None = None

        defaults = default_styles(palette)
        button_style = self.options.button_style or defaults.button
        background_style = self.options.background_style or defaults.background
        border_style = self.options.background_style or defaults.border

        ref = _DialogRef()
        self.body = build_body(
            content,
            self.options.buttons,
            button_style=button_style,
            background_style=background_style,
            border_style=border_style,
            ref=ref,
            keybindings=keybindings,
        )

        decorated: Component = Styled(
            Framed(self.body.pile, style=border_style),
            background_style,
        )
        if not self.options.no_shadow:
            decorated = Shadow(decorated, 1)
        self._inner = decorated
        ref.dialog = self

    def __repr__(self) -> str:
        return f"Dialog(open={self._open}, buttons={len(self.body.buttons)})"

    # ------------------------------------------------------------------
    # Composite
    # ------------------------------------------------------------------

    @property
    def sub_widget(self) -> Component:
        return self._inner

    @sub_widget.setter
    def sub_widget(self, widget: Component) -> None:
        self._inner = widget
        self.invalidate()

    @property
    def content_wrapper(self) -> ContainerWidget:
        return self.body.content_wrapper

    @property
    def keybindings(self) -> KeybindingsManager:
        return self._keybindings or default_keybindings()

    # ------------------------------------------------------------------
    # Rendering and focus
    # ------------------------------------------------------------------

    def render(self, width: int, height: int | None = None) -> list[str]:
        self._dirty = False
        return self._inner.render(width, height)

    def natural_width(self) -> int:
        return self._inner.natural_width()

    @property
    def focused(self) -> bool:
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        if self._focused != value:
            self._focused = value
            self._dirty = True
        self._inner.focused = value

    @property
    def dirty(self) -> bool:
        return self._dirty or self._inner.dirty

    @dirty.setter
    def dirty(self, value: bool) -> None:
        self._dirty = value

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def no_function(self) -> WidgetCallback:
        """The callback run when the user cancels the dialog."""
        return WidgetCallback("no", lambda app, widget: self.close(app))

    @property
    def escape_closes(self) -> bool:
        return not self.options.no_escape_close

    @property
    def is_open(self) -> bool:
        return self._open

    def set_open(self, open: bool, app: App | None = None) -> None:
        """Set the open flag; ``OPEN_CLOSE`` callbacks run only on a change."""
        prev = self._open
        self._open = open
        if prev != open:
            self.callbacks.run(OPEN_CLOSE, app, self)

    @property
    def saved_sub_widget(self) -> Component | None:
        return self._saved_sub_widget

    def set_saved_sub_widget(self, widget: Component | None, app: App | None = None) -> None:
        self._saved_sub_widget = widget
        self.callbacks.run(SAVED_SUB_WIDGET, app, self)

    @property
    def saved_container(self) -> SettableComposite | None:
        return self._saved_container

    def set_saved_container(
        self, container: SettableComposite | None, app: App | None = None
    ) -> None:
        self._saved_container = container
        self.callbacks.run(SAVED_CONTAINER, app, self)

    def on_open_close(self, callback: WidgetCallback) -> None:
        self.callbacks.add(OPEN_CLOSE, callback)

    def remove_on_open_close(self, name: str) -> bool:
        return self.callbacks.remove(OPEN_CLOSE, name)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    @property
    def selectable(self) -> bool:
        # An open dialog takes input even with no buttons
        return self._open or self._inner.selectable

    def handle_input(self, key: Key, app: App | None = None) -> bool:
        return user_input(self, key, app)

    # ------------------------------------------------------------------
    # Opening and closing
    # ------------------------------------------------------------------

    def open(
        self, container: SettableComposite, width: Dimension, app: App | None = None
    ) -> None:
        open_dialog(self, container, width, app)

    def open_ext(
        self,
        container: SettableComposite,
        width: Dimension,
        height: Dimension,
        app: App | None = None,
    ) -> None:
        open_dialog_ext(self, container, width, height, app)

    def open_globally(self, width: Dimension, app: App) -> None:
        """Open over the application's whole widget tree."""
        open_dialog(self, app, width, app)

    def close(self, app: App | None = None) -> None:
        close_dialog(self, app)

    # ------------------------------------------------------------------
    # Live size
    # ------------------------------------------------------------------

    def _overlay(self, operation: str) -> Overlay:
        container = self._saved_container
        overlay = container.sub_widget if container is not None else None
        if not self._open or not isinstance(overlay, Overlay):
            raise DialogNotOpenError(f"Cannot {operation}: dialog is not open")
        return overlay

    @property
    def width(self) -> Dimension:
        return self._overlay("read width").width

    @width.setter
    def width(self, value: Dimension) -> None:
        self._overlay("set width").width = value

    @property
    def height(self) -> Dimension:
        return self._overlay("read height").height

    @height.setter
    def height(self, value: Dimension) -> None:
        self._overlay("set height").height = value

    def set_content_width(self, dimension: Dimension, app: App | None = None) -> None:
        """Size the content row: ``Fixed()`` for natural width, else a share."""
        self.body.content_wrapper.dimension = dimension
        self.invalidate()


# ---------------------------------------------------------------------------
# Splice controller
# ---------------------------------------------------------------------------

def open_dialog(
    dialog: Dialog,
    container: SettableComposite,
    width: Dimension,
    app: App | None = None,
) -> None:
    """Open *dialog* in *container*, using as many rows as it needs."""
    open_dialog_ext(dialog, container, width, Flow(), app)


def open_dialog_ext(
    dialog: Dialog,
    container: SettableComposite,
    width: Dimension,
    height: Dimension,
    app: App | None = None,
) -> None:
    """
    Splice *dialog* over the current child of *container*.

    The child is wrapped in a centred :class:`Overlay` with *dialog* on
    top, the overlay replaces it in the container, and the child is kept
    in ``dialog.saved_sub_widget`` until :func:`close_dialog`.

    Raises
    ------
    DialogAlreadyOpenError
        If *dialog* is already open; nothing is changed.
    """
    if dialog.is_open:
        raise DialogAlreadyOpenError("Cannot open dialog: it is already open")

    prior = container.sub_widget
    overlay = Overlay(
        dialog,
        prior,
        h_align=HAlign.CENTER,
        width=width,
        v_align=VAlign.MIDDLE,
        height=height,
    )

    if isinstance(width, Fixed):
        dialog.set_content_width(Fixed(), app)
    else:
        dialog.set_content_width(Weight(1), app)

    dialog.set_saved_sub_widget(prior, app)
    dialog.set_saved_container(container, app)
    container.sub_widget = overlay
    dialog.set_open(True, app)
    logger.debug("Opened %r over %s", dialog, type(prior).__name__)


def close_dialog(dialog: Dialog, app: App | None = None) -> None:
    """
    Put back the child *dialog* replaced when it was opened.

    Raises
    ------
    DialogNotOpenError
        If *dialog* is not open; nothing is changed.
    """
    container = dialog.saved_container
    prior = dialog.saved_sub_widget
    if not dialog.is_open or container is None or prior is None:
        raise DialogNotOpenError("Cannot close dialog: it is not open")

    container.sub_widget = prior
    dialog.set_saved_sub_widget(None, app)
    dialog.set_saved_container(None, app)
    dialog.set_open(False, app)
    logger.debug("Closed %r, restored %s", dialog, type(prior).__name__)


def user_input(dialog: Dialog, key: Key, app: App | None = None) -> bool:
    """
    Route a key event through *dialog*.

    While open, the cancel keys close the dialog (unless escape-close is
    disabled) and every other key goes to the body; either way the event
    is reported as handled.  While closed, the body's own answer is
    returned.
    """
    if dialog.is_open:
        if dialog.escape_closes and dialog.keybindings.matches(key, "dialog_cancel"):
            dialog.no_function(app, dialog)
        else:
            user_input_if_selectable(dialog.sub_widget, key, app)
        return True
    return user_input_if_selectable(dialog.sub_widget, key, app)


# ---------------------------------------------------------------------------
# Maximizer
# ---------------------------------------------------------------------------

@dataclass
class Maximizer:
    """
    Toggle an open dialog between its own size and the whole container.

    ``width`` and ``height`` hold the policies in force before
    :meth:`maximize` and are only meaningful while :attr:`maxed` is set.
    """

    maxed: bool = False
    width: Dimension | None = None
    height: Dimension | None = None

    def maximize(self, dialog: Dialog, app: App | None = None) -> bool:
        if self.maxed:
            return False
        self.width = dialog.width
        self.height = dialog.height
        dialog.width = Ratio(1.0)
        dialog.height = Ratio(1.0)
        self.maxed = True
        logger.debug("Maximized %r", dialog)
        return True

    def unmaximize(self, dialog: Dialog, app: App | None = None) -> bool:
        if not self.maxed:
            return False
        dialog.width = self.width
        dialog.height = self.height
        self.maxed = False
        logger.debug("Restored %r to %s x %s", dialog, self.width, self.height)
        return True

    def toggle(self, dialog: Dialog, app: App | None = None) -> bool:
        """Maximize if not maxed, else restore. Returns the new ``maxed`` state."""
        if self.maxed:
            self.unmaximize(dialog, app)
        else:
            self.maximize(dialog, app)
        return self.maxed
