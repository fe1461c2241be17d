"""Month calendar used as the date picker's grid overlay."""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.containers import Grid, Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Label, Static

from datepick_textual.grid import MONTH_LABELS, WEEKDAY_LABELS, month_grid
from datepick_textual.models import DateValue


def day_button_id(value: DateValue) -> str:
    """Return the widget id of the calendar button for *value*."""
    return f"day-{value.year:04d}-{value.month:02d}-{value.day:02d}"


class CalendarGrid(Widget):
    """A Sunday-first month calendar with previous/next month buttons."""

    DEFAULT_CSS = """
    CalendarGrid {
        width: 30;
        height: auto;
    }
    CalendarGrid > .calendar-header {
        height: 1;
    }
    CalendarGrid .calendar-title {
        width: 1fr;
        content-align: center middle;
    }
    CalendarGrid .calendar-nav {
        min-width: 3;
        width: 3;
        height: 1;
        border: none;
    }
    CalendarGrid > .calendar-days {
        grid-size: 7;
        grid-gutter: 0 1;
        height: auto;
    }
    CalendarGrid .calendar-weekday, CalendarGrid .calendar-blank {
        width: 3;
        height: 1;
        color: $text-muted;
    }
    CalendarGrid .calendar-day {
        min-width: 3;
        width: 3;
        height: 1;
        border: none;
    }
    CalendarGrid .calendar-day.-today {
        text-style: underline;
    }
    CalendarGrid .calendar-day.-selected {
        background: $accent;
    }
    """

    class DaySelected(Message):
        """Posted when a day is clicked."""

        def __init__(self, calendar: CalendarGrid, value: DateValue) -> None:
            self.calendar = calendar
            self.value = value
            super().__init__()

        @property
        def control(self) -> CalendarGrid:
            """Alias for self.calendar."""
            return self.calendar

    class Navigate(Message):
        """Posted when the previous or next month button is clicked."""

        def __init__(self, calendar: CalendarGrid, delta: int) -> None:
            self.calendar = calendar
            self.delta = delta
            super().__init__()

        @property
        def control(self) -> CalendarGrid:
            """Alias for self.calendar."""
            return self.calendar

    def __init__(
        self,
        year: int,
        month: int,
        selected: DateValue | None = None,
        **kwargs,
    ) -> None:
        """Initialize the calendar.

        Args:
            year: Year of the month shown.
            month: Month shown (1-12).
            selected: Date to highlight, if any.
        """
        super().__init__(**kwargs)
        self.year = year
        self.month = month
        self.selected = selected
        self._days: dict[str, DateValue] = {}

    def compose(self) -> ComposeResult:
        """Create the header, weekday labels and day buttons."""
        self._days = {}
        with Horizontal(classes="calendar-header"):
            yield Button("<", classes="calendar-nav calendar-prev")
            yield Label(f"{MONTH_LABELS[self.month - 1]} {self.year}", classes="calendar-title")
            yield Button(">", classes="calendar-nav calendar-next")
        with Grid(classes="calendar-days"):
            for label in WEEKDAY_LABELS:
                yield Label(label, classes="calendar-weekday")
            for cell in month_grid(self.year, self.month, selected=self.selected):
                if cell is None:
                    yield Static("", classes="calendar-blank")
                    continue
                button_id = day_button_id(cell.value)
                self._days[button_id] = cell.value
                button = Button(str(cell.value.day), id=button_id, classes="calendar-day")
                button.set_class(cell.is_today, "-today")
                button.set_class(cell.is_selected, "-selected")
                yield button

    def show(self, year: int, month: int, selected: DateValue | None) -> None:
        """Display another month or selection, rebuilding only when something changed."""
        if (year, month, selected) == (self.year, self.month, self.selected):
            return
        self.year, self.month, self.selected = year, month, selected
        self.refresh(recompose=True)

    @on(Button.Pressed, ".calendar-prev")
    def _previous_month(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.Navigate(self, -1))

    @on(Button.Pressed, ".calendar-next")
    def _next_month(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.Navigate(self, 1))

    @on(Button.Pressed, ".calendar-day")
    def _day_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        value = self._days.get(event.button.id or "")
        if value is not None:
            self.post_message(self.DaySelected(self, value))
