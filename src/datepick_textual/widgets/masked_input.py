"""Text input that only accepts mask characters and reformats as you type."""

from __future__ import annotations

from textual.widgets import Input

from datepick_textual.mask import accepts_char, format_text
from datepick_textual.models import MaskConfig, MaskKind


def placeholder_for(config: MaskConfig) -> str:
    """Return the placeholder describing the layout of *config*."""
    if config.kind is MaskKind.DATE:
        return "YYYY/MM/DD"
    text = "HH:MM:SS" if config.has_seconds else "HH:MM"
    return f"{text} AM" if config.uses_12h else text


def digit_capacity(config: MaskConfig) -> int:
    """Return how many digits the mask holds."""
    if config.kind is MaskKind.DATE:
        return 8
    return 6 if config.has_seconds else 4


class MaskedInput(Input):
    """An Input that only accepts the characters of its mask.

    Digit keys (and, for 12-hour times, the letters of AM/PM) are inserted at
    the cursor and the whole value is reformatted, so separators appear as
    the user types.  Anything else except navigation keys is rejected.
    """

    # Keys that should pass through to the default Input handler.
    _PASSTHROUGH_KEYS = frozenset(
        {
            "backspace",
            "delete",
            "left",
            "right",
            "home",
            "end",
            "tab",
            "shift+tab",
            "escape",
            "enter",
            "up",
            "down",
        }
    )

    def __init__(self, config: MaskConfig, **kwargs) -> None:
        """Initialize with the placeholder of the mask.

        Digits are inserted at the cursor, so focusing does not select the text.

        Args:
            config: The mask layout to enforce.
        """
        kwargs.setdefault("placeholder", placeholder_for(config))
        kwargs.setdefault("select_on_focus", False)
        super().__init__(**kwargs)
        self.config = config

    @staticmethod
    def _cursor_after_digits(text: str, count: int) -> int:
        """Return the cursor position just after the *count*-th digit of *text*.

        Args:
            text: The formatted value.
            count: Number of digits that should sit left of the cursor.

        Returns:
            The cursor position, or the end of the text if it has fewer digits.
        """
        if count <= 0:
            return 0
        seen = 0
        for pos, char in enumerate(text):
            if char.isdigit():
                seen += 1
                if seen == count:
                    return pos + 1
        return len(text)

    async def _on_key(self, event) -> None:
        """Intercept keys: allow mask characters and navigation, reject everything else."""
        key = event.key

        if key in self._PASSTHROUGH_KEYS:
            await super()._on_key(event)
            return

        char = event.character
        event.prevent_default()
        event.stop()
        if not (char and accepts_char(char, self.config)):
            return

        current = self.value
        is_digit = char.isdigit()
        if is_digit and sum(c.isdigit() for c in current) >= digit_capacity(self.config):
            return

        cursor = self.cursor_position
        before = current[:cursor]
        formatted = format_text(before + char + current[cursor:], self.config)

        self.value = formatted
        if is_digit:
            digits_before = sum(c.isdigit() for c in before) + 1
            self.cursor_position = self._cursor_after_digits(formatted, digits_before)
        else:
            self.cursor_position = len(formatted)
