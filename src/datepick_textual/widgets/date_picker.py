"""Date picker: masked YYYY/MM/DD field with a calendar or wheel overlay."""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button

from datepick_textual.config import PickerSettings
from datepick_textual.models import DATE_UNITS, DATE_MASK, DateValue
from datepick_textual.widgets.calendar_grid import CalendarGrid
from datepick_textual.widgets.picker import BasePicker
from datepick_textual.widgets.wheel_column import WheelColumn


class DatePicker(BasePicker):
    """A date field with a month calendar (or year/month/day wheels) below it.

    In calendar mode a click on a day commits it and closes the overlay.
    In wheel mode the wheels only change the draft until Confirm is pressed.
    """

    ICON = "\U0001f4c5"

    class Changed(BasePicker.Changed):
        """Posted when the committed date changes."""

    def __init__(self, settings: PickerSettings | None = None, **kwargs) -> None:
        """Initialize the date picker.

        Args:
            settings: Picker settings; defaults to a calendar overlay.
        """
        super().__init__(settings or PickerSettings(config=DATE_MASK), **kwargs)

    def compose_overlay(self) -> ComposeResult:
        """Create the calendar, or the wheels and a Confirm button."""
        if not self.settings.uses_wheels:
            draft = self.sync.draft
            yield CalendarGrid(self.sync.view_year, self.sync.view_month, selected=draft)
            return
        with Horizontal(classes="picker-wheels"):
            for unit in DATE_UNITS:
                yield WheelColumn(unit, self.sync.wheel_options(unit), classes=f"wheel-{unit.value}")
        yield Button("Confirm", classes="picker-confirm")

    async def prepare_overlay(self) -> None:
        """Re-centre the year wheel on the draft's year."""
        if not self.settings.uses_wheels:
            return
        years = self.query_one(".wheel-year", WheelColumn)
        options = self.sync.wheel_options(years.unit)
        if options != years.options:
            years.options = options
            await years.recompose()

    def refresh_overlay(self) -> None:
        """Show the draft's month in the calendar, or highlight it on the wheels."""
        if self.settings.uses_wheels:
            super().refresh_overlay()
            return
        draft = self.sync.draft
        selected = draft if isinstance(draft, DateValue) else None
        self.query_one(CalendarGrid).show(self.sync.view_year, self.sync.view_month, selected)

    @on(CalendarGrid.DaySelected)
    def _day_selected(self, event: CalendarGrid.DaySelected) -> None:
        event.stop()
        self.sync.on_date_selected(event.value)
        self.action_confirm()

    @on(CalendarGrid.Navigate)
    def _month_navigated(self, event: CalendarGrid.Navigate) -> None:
        event.stop()
        self.sync.on_navigate_month(event.delta)
        self.refresh_overlay()
