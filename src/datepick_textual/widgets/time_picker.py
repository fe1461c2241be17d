"""Time picker: masked HH:MM[:SS][ AM|PM] field with hour/minute columns."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button

from datepick_textual.config import PickerSettings
from datepick_textual.models import MaskConfig, MaskKind
from datepick_textual.widgets.picker import BasePicker
from datepick_textual.widgets.wheel_column import WheelColumn


class TimePicker(BasePicker):
    """A time field with one column per unit below it.

    With wheels, scrolling a column settles on the option in its middle row;
    without, the columns are plain lists and only clicks select.
    """

    ICON = "⏰"

    class Changed(BasePicker.Changed):
        """Posted when the committed time changes."""

    def __init__(self, settings: PickerSettings | None = None, **kwargs) -> None:
        """Initialize the time picker.

        Args:
            settings: Picker settings; defaults to 24-hour wheels without seconds.
        """
        if settings is None:
            settings = PickerSettings(config=MaskConfig(MaskKind.TIME), uses_wheels=True)
        super().__init__(settings, **kwargs)

    def compose_overlay(self) -> ComposeResult:
        """Create one column per unit and a Confirm button."""
        with Horizontal(classes="picker-wheels"):
            for unit in self.settings.config.units:
                yield WheelColumn(unit, self.sync.wheel_options(unit), classes=f"wheel-{unit.value}")
        yield Button("Confirm", classes="picker-confirm")
