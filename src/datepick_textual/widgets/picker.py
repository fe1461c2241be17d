"""Behaviour shared by the date and time pickers.

A picker is a masked text field with a toggle and a clear button, plus an
overlay shown below it while open.  All value handling is delegated to a
:class:`ValueSynchronizer`; the widget only forwards events to it and
redraws from its state.
"""

from __future__ import annotations

from textual import events, on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Input

from datepick_textual.config import PickerSettings
from datepick_textual.models import Value
from datepick_textual.sync import ValueSynchronizer
from datepick_textual.wheel import WheelTiming
from datepick_textual.widgets.masked_input import MaskedInput
from datepick_textual.widgets.wheel_column import WheelColumn


class BasePicker(Widget):
    """A masked field with an overlay selector. Subclasses provide the overlay."""

    BINDINGS = [
        Binding("escape", "close_overlay", "Close", show=False),
        Binding("enter", "confirm", "Confirm", show=False),
    ]

    DEFAULT_CSS = """
    BasePicker {
        height: auto;
        width: auto;
    }
    BasePicker > .picker-field {
        height: 3;
        width: auto;
    }
    BasePicker .picker-input {
        width: 22;
    }
    BasePicker .picker-toggle, BasePicker .picker-clear {
        min-width: 5;
        width: 5;
    }
    BasePicker > .picker-overlay {
        display: none;
        height: auto;
        width: auto;
        border: round $accent;
        padding: 0 1;
    }
    BasePicker.-open > .picker-overlay {
        display: block;
    }
    BasePicker .picker-wheels {
        height: auto;
        width: auto;
    }
    """

    ICON = "?"

    class Changed(Message):
        """Posted when the picker's committed value changes."""

        def __init__(self, picker: BasePicker, value: Value | None) -> None:
            self.picker = picker
            self.value = value
            super().__init__()

        @property
        def control(self) -> BasePicker:
            """Alias for self.picker."""
            return self.picker

    def __init__(
        self,
        settings: PickerSettings,
        *,
        value: Value | None = None,
        timing: WheelTiming | None = None,
        **kwargs,
    ) -> None:
        """Initialize the picker.

        Args:
            settings: Mask layout, overlay style, dismiss policy and fallback.
            value: Initial committed value.
            timing: Wheel debounce and grace period.
        """
        super().__init__(**kwargs)
        self.settings = settings
        self.sync = ValueSynchronizer(
            settings.config,
            fallback=settings.fallback,
            dismiss_policy=settings.dismiss_policy,
            uses_wheels=settings.uses_wheels,
            timing=timing or WheelTiming(),
            on_commit=self._on_commit,
            on_draft=self._on_draft,
            set_timer=self.set_timer,
        )
        if value is not None:
            self.sync.on_external_value_set(value)

    @property
    def value(self) -> Value | None:
        """The committed value, or None."""
        return self.sync.committed

    def set_value(self, value: Value | None) -> None:
        """Set the committed value programmatically.

        While the user is typing or the overlay is open, the value is applied
        once they are done.
        """
        self.sync.on_external_value_set(value)
        self.refresh_view()

    def compose(self) -> ComposeResult:
        """Create the field row and the overlay."""
        with Horizontal(classes="picker-field"):
            yield Button(self.ICON, classes="picker-toggle")
            yield MaskedInput(
                self.settings.config,
                value=self.sync.live_text,
                classes="picker-input",
            )
            yield Button("x", classes="picker-clear")
        with Vertical(classes="picker-overlay"):
            yield from self.compose_overlay()

    def compose_overlay(self) -> ComposeResult:
        """Create the overlay content."""
        yield from ()

    @property
    def input(self) -> MaskedInput:
        """The masked text field."""
        return self.query_one(".picker-input", MaskedInput)

    # -- redraw -----------------------------------------------------------

    def refresh_view(self) -> None:
        """Redraw the field and overlay from the synchronizer's state."""
        if not self.is_mounted:
            return
        field = self.input
        if field.value != self.sync.live_text:
            field.value = self.sync.live_text
            field.cursor_position = len(field.value)
        self.set_class(self.sync.is_open, "-open")
        if self.sync.is_open:
            self.refresh_overlay()

    async def prepare_overlay(self) -> None:
        """Bring the overlay in line with a freshly opened draft."""

    def refresh_overlay(self) -> None:
        """Redraw the overlay for the current draft."""
        for column in self.query(WheelColumn):
            column.highlight(self.sync.unit_option(self.sync.draft, column.unit))

    def position_wheels(self) -> None:
        """Scroll every settled wheel to the draft's option.

        A wheel that does not show the option is left where it is.
        """
        resolvers = self.sync.resolvers
        for column in self.query(WheelColumn):
            resolver = resolvers.get(column.unit)
            if resolver is not None and resolver.pending:
                continue
            option = self.sync.unit_option(self.sync.draft, column.unit)
            if option not in column.options:
                continue
            column.scroll_to_index(column.options.index(option))

    async def redraw_overlay(self) -> None:
        """Rebuild and reposition the open overlay after the draft moved."""
        await self.prepare_overlay()
        self.refresh_overlay()
        self.call_after_refresh(self.position_wheels)

    # -- synchronizer callbacks -------------------------------------------

    def _on_commit(self, value: Value | None) -> None:
        self.log.debug(f"{self.__class__.__name__}: committed {value}")
        self.post_message(self.Changed(self, value))

    def _on_draft(self, value: Value) -> None:
        if self.sync.is_open:
            self.refresh_overlay()
            self.position_wheels()

    # -- actions ----------------------------------------------------------

    async def action_open(self) -> None:
        """Open the overlay."""
        self.sync.on_open()
        await self.prepare_overlay()
        self.refresh_view()
        self.call_after_refresh(self.position_wheels)

    def action_confirm(self) -> None:
        """Commit the overlay's draft."""
        if not self.sync.is_open:
            return
        self.sync.on_confirm()
        self.refresh_view()

    def action_close_overlay(self) -> None:
        """Close the overlay without confirming."""
        if not self.sync.is_open:
            return
        self.sync.on_dismiss()
        self.refresh_view()

    async def action_toggle(self) -> None:
        """Open the overlay, or close it without confirming."""
        if self.sync.is_open:
            self.action_close_overlay()
        else:
            await self.action_open()

    async def action_clear(self) -> None:
        """Clear the value."""
        self.sync.on_clear()
        self.refresh_view()
        if self.sync.is_open:
            await self.redraw_overlay()

    # -- event handlers ---------------------------------------------------

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        """Track focus of the text field."""
        if isinstance(event.widget, MaskedInput):
            self.sync.on_focus()

    def on_descendant_blur(self, event: events.DescendantBlur) -> None:
        """Drop invalid typed text when the text field loses focus."""
        if isinstance(event.widget, MaskedInput):
            self.sync.on_blur()
            self.refresh_view()

    @on(Input.Changed, ".picker-input")
    async def _text_changed(self, event: Input.Changed) -> None:
        event.stop()
        if event.value == self.sync.live_text:
            return
        formatted = self.sync.on_raw_text_edit(event.value)
        if formatted != event.value:
            event.input.value = formatted
        if self.sync.is_open:
            await self.redraw_overlay()

    @on(Input.Submitted, ".picker-input")
    def _text_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_confirm()

    @on(Button.Pressed, ".picker-toggle")
    async def _toggle_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        await self.action_toggle()

    @on(Button.Pressed, ".picker-clear")
    async def _clear_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        await self.action_clear()

    @on(Button.Pressed, ".picker-confirm")
    def _confirm_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.action_confirm()

    @on(WheelColumn.Scrolled)
    def _wheel_scrolled(self, event: WheelColumn.Scrolled) -> None:
        event.stop()
        self.sync.on_scroll_offset(event.unit, event.offset)

    @on(WheelColumn.Picked)
    def _wheel_picked(self, event: WheelColumn.Picked) -> None:
        event.stop()
        self.sync.on_grid_unit_selected(event.unit, event.option)
