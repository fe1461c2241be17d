"""Pure generators for calendar cells and overlay option lists."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from functools import lru_cache

from datepick_textual.models import DateValue, MaskConfig, days_in_month

WEEKDAY_LABELS: tuple[str, ...] = ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")

MONTH_LABELS: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class DayCell:
    """One day of a month grid."""

    value: DateValue
    is_today: bool = False
    is_selected: bool = False


@dataclass(frozen=True)
class TimeUnitOptions:
    """Option lists for the units of a time overlay."""

    hours: tuple[str, ...]
    minutes: tuple[str, ...]
    seconds: tuple[str, ...] | None = None
    meridiems: tuple[str, ...] | None = None


@dataclass(frozen=True)
class DateUnitOptions:
    """Option lists for the year, month and day wheels."""

    years: tuple[int, ...]
    months: tuple[int, ...]
    days: tuple[int, ...]


def leading_blanks(year: int, month: int) -> int:
    """Return how many empty cells precede the 1st in a Sunday-first week."""
    return (date(year, month, 1).weekday() + 1) % 7


def month_grid(
    year: int,
    month: int,
    today: DateValue | None = None,
    selected: DateValue | None = None,
) -> list[DayCell | None]:
    """Build the cells of a Sunday-first month calendar.

    Args:
        year: Calendar year.
        month: Month number (1-12).
        today: The date to mark as today; defaults to the current date.
        selected: The date to mark as selected, if any.

    Returns:
        ``None`` for each leading blank (0-6 of them), then one
        :class:`DayCell` per day from the 1st to the last day of the month.
    """
    if today is None:
        today = DateValue.today()
    cells: list[DayCell | None] = [None] * leading_blanks(year, month)
    for day in valid_days(year, month):
        value = DateValue(year, month, day)
        cells.append(DayCell(value, is_today=value == today, is_selected=value == selected))
    return cells


def valid_days(year: int, month: int) -> tuple[int, ...]:
    """Return the day numbers that exist in the given month."""
    return tuple(range(1, days_in_month(year, month) + 1))


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``(year, month)`` by *delta* months, rolling over year boundaries."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


@lru_cache(maxsize=None)
def time_unit_options(config: MaskConfig) -> TimeUnitOptions:
    """Return the hour, minute, second and meridiem options for *config*.

    The lists are built once per configuration and shared afterwards.
    """
    hour_range = range(1, 13) if config.uses_12h else range(24)
    sixty = tuple(f"{n:02d}" for n in range(60))
    return TimeUnitOptions(
        hours=tuple(f"{n:02d}" for n in hour_range),
        minutes=sixty,
        seconds=sixty if config.has_seconds else None,
        meridiems=("AM", "PM") if config.uses_12h else None,
    )


@lru_cache(maxsize=None)
def date_unit_options(center_year: int, span: int = 100) -> DateUnitOptions:
    """Return the year, month and day wheel options around *center_year*.

    Years run from ``center_year - span // 2`` for *span* years.  Days always
    run to 31; the day is clamped against the month when a value is built.
    """
    first_year = max(center_year - span // 2, 1)
    return DateUnitOptions(
        years=tuple(range(first_year, first_year + span)),
        months=tuple(range(1, 13)),
        days=tuple(range(1, 32)),
    )
