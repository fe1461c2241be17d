"""Demo Textual application showing both pickers."""

from __future__ import annotations

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Label, Static

from datepick_textual.config import DemoSettings
from datepick_textual.mask import format_value
from datepick_textual.widgets.date_picker import DatePicker
from datepick_textual.widgets.time_picker import TimePicker

_FOOTER_TEXT = "\\[Tab] Next field  \\[Enter] Confirm  \\[Esc] Close  \\[Ctrl+Q] Quit"


class PickerDemoApp(App):
    """A small form with a date picker and a time picker."""

    TITLE = "datepick-textual"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, settings: DemoSettings) -> None:
        """Initialize the app.

        Args:
            settings: Resolved picker settings and initial values.
        """
        super().__init__()
        self.settings = settings

    def compose(self) -> ComposeResult:
        """Create the app layout."""
        with Vertical(id="demo-form"):
            yield Label("Date", classes="demo-label")
            yield DatePicker(
                self.settings.date,
                value=self.settings.initial_date,
                timing=self.settings.timing,
                id="date-picker",
            )
            yield Label("Time", classes="demo-label")
            yield TimePicker(
                self.settings.time,
                value=self.settings.initial_time,
                timing=self.settings.timing,
                id="time-picker",
            )
        yield Static(
            self._status_text(self.settings.initial_date, self.settings.initial_time),
            id="status-bar",
        )
        yield Static(_FOOTER_TEXT, id="footer-bar")

    def _status_text(self, date_value, time_value) -> str:
        """Describe the committed values of both pickers."""
        date_text = format_value(date_value, self.settings.date.config) or "none"
        time_text = format_value(time_value, self.settings.time.config) or "none"
        return f"Date: {date_text}   Time: {time_text}"

    @on(DatePicker.Changed)
    @on(TimePicker.Changed)
    def _picker_changed(self, event: DatePicker.Changed | TimePicker.Changed) -> None:
        date_value = self.query_one("#date-picker", DatePicker).value
        time_value = self.query_one("#time-picker", TimePicker).value
        self.query_one("#status-bar", Static).update(self._status_text(date_value, time_value))
