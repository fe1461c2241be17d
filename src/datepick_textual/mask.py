"""Incremental mask formatting and parsing for typed date and time text.

Dates are written ``YYYY/MM/DD`` and times ``HH:MM[:SS][ AM|PM]``.  The
formatter is applied after every keystroke, so it has to cope with any
prefix of those layouts and must be a fixed point on its own output.
"""

from __future__ import annotations

import re

from datepick_textual.models import (
    DateValue,
    MaskConfig,
    MaskKind,
    Meridiem,
    Segment,
    TimeValue,
    Value,
    days_in_month,
)
from datepick_textual.segments import validate

DATE_SEPARATOR = "/"
TIME_SEPARATOR = ":"

_NON_DIGITS = re.compile(r"[^0-9]")
_MERIDIEM_HINT = re.compile(r"[ap]", re.IGNORECASE)
_MERIDIEM_CHARS = frozenset("apmAPM")


def _meridiem_hint(raw: str) -> Meridiem | None:
    """Return the meridiem implied by the last ``a``/``p`` in *raw*, if any."""
    hints = _MERIDIEM_HINT.findall(raw)
    if not hints:
        return None
    return Meridiem.AM if hints[-1].lower() == "a" else Meridiem.PM


def _format_date(digits: str) -> str:
    digits = digits[:8]
    parts = [digits[:4]]
    if len(digits) > 4:
        parts.append(validate(digits[4:6], Segment.MONTH))
    if len(digits) > 6:
        parts.append(validate(digits[6:8], Segment.DAY))
    return DATE_SEPARATOR.join(parts)


def _format_time(digits: str, raw: str, config: MaskConfig) -> str:
    digits = digits[: 6 if config.has_seconds else 4]
    segments = (config.hour_segment, Segment.MINSEC, Segment.MINSEC)
    parts = [
        validate(digits[start : start + 2], segment)
        for start, segment in zip(range(0, len(digits), 2), segments)
    ]
    text = TIME_SEPARATOR.join(parts)

    meridiem = _meridiem_hint(raw) if config.uses_12h else None
    if meridiem is None:
        return text
    return f"{text} {meridiem.value}" if text else meridiem.value


def format_text(raw: str, config: MaskConfig) -> str:
    """Reformat raw or partially typed text into the mask's canonical layout.

    Non-digits are stripped, the digits are split into fixed-width segments,
    complete two-digit segments are clamped, and separators are inserted
    only once the following segment has started.  For 12-hour time masks a
    typed ``a`` or ``p`` anywhere in the text appends ``AM``/``PM``.

    Args:
        raw: The text as it currently stands in the field.
        config: The mask layout.

    Returns:
        The canonical text; ``""`` for input without digits or meridiem.
    """
    digits = _NON_DIGITS.sub("", raw)
    if config.kind is MaskKind.DATE:
        return _format_date(digits)
    return _format_time(digits, raw, config)


def _complete_pattern(config: MaskConfig) -> re.Pattern[str]:
    if config.kind is MaskKind.DATE:
        return re.compile(r"[0-9]{4}/[0-9]{2}/[0-9]{2}")
    pattern = r"[0-9]{2}:[0-9]{2}"
    if config.has_seconds:
        pattern += r":[0-9]{2}"
    if config.uses_12h:
        pattern += r" (?:AM|PM)"
    return re.compile(pattern)


def is_complete(text: str, config: MaskConfig) -> bool:
    """Return True if *text* has every segment of the mask fully typed.

    The text is formatted first, so raw input is accepted too.  A 12-hour
    time is only complete once its meridiem is present.
    """
    return _complete_pattern(config).fullmatch(format_text(text, config)) is not None


def is_cleared(text: str, config: MaskConfig) -> bool:
    """Return True if *text* formats to nothing, i.e. the user cleared the field."""
    return format_text(text, config) == ""


def parse_text(text: str, config: MaskConfig) -> Value | None:
    """Parse typed text into a value.

    Args:
        text: Raw or formatted text.
        config: The mask layout.

    Returns:
        A :class:`DateValue` or :class:`TimeValue`, or None when the text is
        incomplete or names a date that does not exist (e.g. ``2023/02/29``).
    """
    formatted = format_text(text, config)
    if not is_complete(formatted, config):
        return None

    if config.kind is MaskKind.DATE:
        year, month, day = (int(part) for part in formatted.split(DATE_SEPARATOR))
        if year < 1 or day > days_in_month(year, month):
            return None
        return DateValue(year, month, day)

    clock, _, suffix = formatted.partition(" ")
    numbers = [int(part) for part in clock.split(TIME_SEPARATOR)]
    return TimeValue(
        hour=numbers[0],
        minute=numbers[1],
        second=numbers[2] if config.has_seconds else None,
        meridiem=Meridiem(suffix) if config.uses_12h else None,
    )


def format_value(value: Value | None, config: MaskConfig) -> str:
    """Return the canonical text for *value*, or ``""`` for None."""
    if value is None:
        return ""
    if isinstance(value, DateValue):
        return f"{value.year:04d}/{value.month:02d}/{value.day:02d}"

    text = f"{value.hour:02d}:{value.minute:02d}"
    if config.has_seconds:
        text += f":{value.second or 0:02d}"
    if config.uses_12h:
        text += f" {(value.meridiem or Meridiem.AM).value}"
    return text


def accepts_char(char: str, config: MaskConfig) -> bool:
    """Return True if the text field should accept *char* for this mask.

    Digits are always accepted; the letters of ``AM``/``PM`` only by
    12-hour time masks.
    """
    if len(char) != 1:
        return False
    if char.isascii() and char.isdigit():
        return True
    return config.kind is MaskKind.TIME and config.uses_12h and char in _MERIDIEM_CHARS
