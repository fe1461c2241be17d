"""Tests for the MaskedInput widget keyboard handling and auto-formatting."""

from __future__ import annotations

from textual.app import App, ComposeResult

from datepick_textual.models import DATE_MASK, MaskConfig, MaskKind
from datepick_textual.widgets.masked_input import MaskedInput, digit_capacity, placeholder_for


class _MaskApp(App):
    """Minimal app with a single MaskedInput for isolated widget testing."""

    def __init__(self, config: MaskConfig = DATE_MASK) -> None:
        super().__init__()
        self.config = config

    def compose(self) -> ComposeResult:
        """Compose a single MaskedInput."""
        yield MaskedInput(self.config, id="field")


async def _type(keys: list[str], config: MaskConfig = DATE_MASK) -> str:
    """Press *keys* in a fresh field and return its value."""
    app = _MaskApp(config)
    async with app.run_test() as pilot:
        inp = app.query_one("#field", MaskedInput)
        inp.focus()
        await pilot.pause()
        await pilot.press(*keys)
        return inp.value


class TestDateMask:
    """Tests for digit filtering and auto-separators with the date mask."""

    async def test_digits_produce_year(self):
        """Typing 4 digits produces the year portion."""
        assert await _type(["2", "0", "2", "6"]) == "2026"

    async def test_inserts_first_separator(self):
        """A slash appears once the month is started."""
        assert await _type(["2", "0", "2", "6", "0"]) == "2026/0"

    async def test_full_date(self):
        """Both slashes are inserted when the full date is typed."""
        assert await _type(["2", "0", "2", "6", "0", "1", "1", "5"]) == "2026/01/15"

    async def test_month_clamped(self):
        """A month above 12 is clamped as soon as it is complete."""
        assert await _type(["2", "0", "2", "6", "1", "3"]) == "2026/12"

    async def test_letter_is_blocked(self):
        """Letter characters are not accepted."""
        assert await _type(["a"]) == ""

    async def test_space_is_blocked(self):
        """Space is not accepted."""
        assert await _type(["space"]) == ""

    async def test_slash_is_blocked(self):
        """Separators are inserted, never typed."""
        assert await _type(["2", "slash"]) == "2"

    async def test_no_more_than_eight_digits(self):
        """Typing beyond 8 digits does not change the value."""
        keys = ["2", "0", "2", "6", "0", "1", "1", "5", "9", "9"]
        assert await _type(keys) == "2026/01/15"

    async def test_backspace_passes_through(self):
        """Backspace removes the last character."""
        assert await _type(["2", "0", "2", "6", "0", "backspace"]) == "2026/"


class TestTimeMask:
    """Tests for time masks."""

    async def test_24h(self):
        """Four digits form HH:MM."""
        assert await _type(["1", "4", "3", "0"], MaskConfig(MaskKind.TIME)) == "14:30"

    async def test_letter_blocked_in_24h(self):
        """Meridiem letters are rejected by 24-hour masks."""
        assert await _type(["1", "p"], MaskConfig(MaskKind.TIME)) == "1"

    async def test_12h_meridiem(self):
        """Typing p appends PM."""
        config = MaskConfig(MaskKind.TIME, uses_12h=True)
        assert await _type(["0", "1", "3", "0", "p"], config) == "01:30 PM"

    async def test_12h_switch_meridiem(self):
        """The last meridiem letter wins."""
        config = MaskConfig(MaskKind.TIME, uses_12h=True)
        assert await _type(["0", "1", "3", "0", "p", "a"], config) == "01:30 AM"

    async def test_seconds(self):
        """Six digits form HH:MM:SS."""
        config = MaskConfig(MaskKind.TIME, has_seconds=True)
        assert await _type(["1", "4", "3", "0", "0", "5"], config) == "14:30:05"


class TestHelpers:
    """Tests for the placeholder, capacity and cursor helpers."""

    def test_placeholders(self):
        assert placeholder_for(DATE_MASK) == "YYYY/MM/DD"
        assert placeholder_for(MaskConfig(MaskKind.TIME)) == "HH:MM"
        config = MaskConfig(MaskKind.TIME, uses_12h=True, has_seconds=True)
        assert placeholder_for(config) == "HH:MM:SS AM"

    def test_capacity(self):
        assert digit_capacity(DATE_MASK) == 8
        assert digit_capacity(MaskConfig(MaskKind.TIME)) == 4
        assert digit_capacity(MaskConfig(MaskKind.TIME, has_seconds=True)) == 6

    def test_cursor_after_digits(self):
        assert MaskedInput._cursor_after_digits("2026/01/15", 0) == 0
        assert MaskedInput._cursor_after_digits("2026/01/15", 4) == 4
        assert MaskedInput._cursor_after_digits("2026/01/15", 5) == 6
        assert MaskedInput._cursor_after_digits("2026/01/15", 20) == 10
