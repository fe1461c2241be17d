"""A scrollable column of options used as a picker wheel."""

from __future__ import annotations

from typing import Sequence

from textual import events
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.message import Message
from textual.widgets import Static

from datepick_textual.models import Unit
from datepick_textual.widgets import option_label

# Blank rows above and below the options, so every option can scroll to the
# middle row of a five-row column.
_PAD_ROWS = 2


class _WheelRow(Static):
    """One option of a wheel."""

    def __init__(self, label: str, index: int, **kwargs) -> None:
        super().__init__(label, **kwargs)
        self.index = index

    def on_click(self, event: events.Click) -> None:
        """Pick this row's option."""
        event.stop()
        column = self.parent
        if isinstance(column, WheelColumn):
            column.pick(self.index)


class WheelColumn(VerticalScroll):
    """A five-row column whose middle row is the wheel's current option.

    The scroll offset, in rows, equals the index of the option in the middle
    row.  Every change of the offset is reported with :class:`Scrolled`;
    clicking a row reports :class:`Picked`.
    """

    DEFAULT_CSS = """
    WheelColumn {
        width: 8;
        height: 5;
        scrollbar-size-vertical: 0;
        border: none;
    }
    WheelColumn > .wheel-row {
        width: 100%;
        height: 1;
        content-align: center middle;
        color: $text-muted;
    }
    WheelColumn > .wheel-row.-selected {
        color: $text;
        text-style: bold reverse;
    }
    """

    class Scrolled(Message):
        """Posted when the wheel's scroll offset changes."""

        def __init__(self, column: WheelColumn, unit: Unit, offset: float) -> None:
            self.column = column
            self.unit = unit
            self.offset = offset
            super().__init__()

        @property
        def control(self) -> WheelColumn:
            """Alias for self.column."""
            return self.column

    class Picked(Message):
        """Posted when a row of the wheel is clicked."""

        def __init__(self, column: WheelColumn, unit: Unit, option: object) -> None:
            self.column = column
            self.unit = unit
            self.option = option
            super().__init__()

        @property
        def control(self) -> WheelColumn:
            """Alias for self.column."""
            return self.column

    def __init__(self, unit: Unit, options: Sequence[object], **kwargs) -> None:
        """Initialize the column.

        Args:
            unit: The unit this wheel selects.
            options: The options, top to bottom.
        """
        super().__init__(**kwargs)
        self.unit = unit
        self.options = tuple(options)

    def compose(self) -> ComposeResult:
        """Create the padding rows and one row per option."""
        for _ in range(_PAD_ROWS):
            yield Static("", classes="wheel-pad")
        for index, option in enumerate(self.options):
            yield _WheelRow(option_label(self.unit, option), index, classes="wheel-row")
        for _ in range(_PAD_ROWS):
            yield Static("", classes="wheel-pad")

    def watch_scroll_y(self, old_value: float, new_value: float) -> None:
        """Report every scroll position change."""
        super().watch_scroll_y(old_value, new_value)
        self.post_message(self.Scrolled(self, self.unit, new_value))

    def scroll_to_index(self, index: int) -> None:
        """Scroll so the option at *index* sits in the middle row."""
        self.scroll_to(y=index, animate=False)

    def highlight(self, option: object) -> None:
        """Mark the row of *option* as selected."""
        for row in self.query(_WheelRow):
            row.set_class(self.options[row.index] == option, "-selected")

    def pick(self, index: int) -> None:
        """Report the option at *index* as picked."""
        self.post_message(self.Picked(self, self.unit, self.options[index]))
