"""Shared widget utilities."""

from __future__ import annotations

from datepick_textual.grid import MONTH_LABELS
from datepick_textual.models import Unit


def option_label(unit: Unit, option: object) -> str:
    """Return the text a wheel row shows for *option*.

    Months are shown by their three-letter name, years as four digits, and
    everything else as-is (time options are already zero-padded strings).

    Args:
        unit: The wheel's unit.
        option: One of the wheel's options.

    Returns:
        The display label.
    """
    if unit is Unit.MONTH and isinstance(option, int):
        return MONTH_LABELS[option - 1][:3]
    if unit is Unit.YEAR and isinstance(option, int):
        return f"{option:04d}"
    if unit is Unit.DAY and isinstance(option, int):
        return f"{option:02d}"
    return str(option)
