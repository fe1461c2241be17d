"""Data models for picker values, masks, and overlay units."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum

_DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Return True if *year* is a Gregorian leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month.

    Args:
        year: Calendar year.
        month: Month number (1-12).

    Returns:
        28-31, accounting for February in leap years.
    """
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_PER_MONTH[month - 1]


class MaskKind(Enum):
    """Which kind of text a mask describes."""

    DATE = "date"
    TIME = "time"


class Segment(Enum):
    """A two-digit numeric segment of a mask and its closed range."""

    MONTH = "month"
    DAY = "day"
    HOUR24 = "hour24"
    HOUR12 = "hour12"
    MINSEC = "minsec"

    @property
    def bounds(self) -> tuple[int, int]:
        """Return the inclusive ``(low, high)`` range for this segment."""
        match self:
            case Segment.MONTH:
                return (1, 12)
            case Segment.DAY:
                return (1, 31)
            case Segment.HOUR24:
                return (0, 23)
            case Segment.HOUR12:
                return (1, 12)
            case Segment.MINSEC:
                return (0, 59)


class Meridiem(Enum):
    """Ante or post meridiem marker for 12-hour times."""

    AM = "AM"
    PM = "PM"


class Unit(Enum):
    """A single selectable unit of an overlay (one wheel or one grid column)."""

    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MERIDIEM = "meridiem"


DATE_UNITS: tuple[Unit, ...] = (Unit.YEAR, Unit.MONTH, Unit.DAY)


class DismissPolicy(Enum):
    """What closing the overlay without an explicit confirm does.

    ``DISCARD`` throws the draft away and reverts to the committed value.
    ``COMMIT_SELECTION`` keeps the last selection made since the overlay
    opened, as single-click pickers do.
    """

    DISCARD = "discard"
    COMMIT_SELECTION = "commit"


@dataclass(frozen=True)
class MaskConfig:
    """Layout of a mask: date or time, 12h or 24h, with or without seconds."""

    kind: MaskKind
    uses_12h: bool = False
    has_seconds: bool = False

    @property
    def hour_segment(self) -> Segment:
        """Return the segment used to validate the hour."""
        return Segment.HOUR12 if self.uses_12h else Segment.HOUR24

    @property
    def units(self) -> tuple[Unit, ...]:
        """Return the overlay units, in display order."""
        if self.kind is MaskKind.DATE:
            return DATE_UNITS
        units = [Unit.HOUR, Unit.MINUTE]
        if self.has_seconds:
            units.append(Unit.SECOND)
        if self.uses_12h:
            units.append(Unit.MERIDIEM)
        return tuple(units)


DATE_MASK = MaskConfig(MaskKind.DATE)


@dataclass(frozen=True)
class DateValue:
    """A calendar date. Always holds a day that exists in its month."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise ValueError(f"day out of range for {self.year}-{self.month:02d}: {self.day}")

    @classmethod
    def from_date(cls, value: date) -> DateValue:
        """Build a DateValue from a :class:`datetime.date`."""
        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls) -> DateValue:
        """Return today's date."""
        return cls.from_date(date.today())

    def to_date(self) -> date:
        """Convert to a :class:`datetime.date`."""
        return date(self.year, self.month, self.day)


@dataclass(frozen=True)
class TimeValue:
    """A wall-clock time.

    In 12-hour mode ``hour`` is 1-12 and ``meridiem`` is set; otherwise
    ``hour`` is 0-23 and ``meridiem`` is None.  ``second`` is None unless the
    picker shows seconds.
    """

    hour: int
    minute: int
    second: int | None = None
    meridiem: Meridiem | None = None

    @classmethod
    def from_time(cls, value: time, config: MaskConfig) -> TimeValue:
        """Build a TimeValue shaped for *config* from a :class:`datetime.time`."""
        second = value.second if config.has_seconds else None
        if not config.uses_12h:
            return cls(value.hour, value.minute, second)
        meridiem = Meridiem.PM if value.hour >= 12 else Meridiem.AM
        return cls(value.hour % 12 or 12, value.minute, second, meridiem)

    @classmethod
    def now(cls, config: MaskConfig) -> TimeValue:
        """Return the current time, truncated to the precision of *config*."""
        return cls.from_time(datetime.now().time(), config)

    def to_time(self) -> time:
        """Convert to a 24-hour :class:`datetime.time`."""
        hour = self.hour
        if self.meridiem is not None:
            hour = hour % 12 + (12 if self.meridiem is Meridiem.PM else 0)
        return time(hour, self.minute, self.second or 0)


Value = DateValue | TimeValue
