"""Shared test fixtures."""

from __future__ import annotations

from typing import Callable

import pytest

from datepick_textual.models import DATE_MASK, DateValue, MaskConfig, MaskKind, TimeValue


class ManualClock:
    """A monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


class FakeTimer:
    """A scheduled callback; ``stop()`` cancels it."""

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.stopped = False
        self.fired = False

    def stop(self) -> None:
        self.stopped = True


class FakeTimers:
    """Timer factory driven by a :class:`ManualClock`."""

    def __init__(self, clock: ManualClock) -> None:
        self.clock = clock
        self.scheduled: list[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.clock.now + delay, callback)
        self.scheduled.append(timer)
        return timer

    @property
    def active(self) -> list[FakeTimer]:
        """Timers that are neither stopped nor fired."""
        return [t for t in self.scheduled if not t.stopped and not t.fired]

    def advance(self, seconds: float) -> None:
        """Move the clock forward and fire every timer that came due."""
        self.clock.now += seconds
        while True:
            due = sorted(
                (t for t in self.active if t.due <= self.clock.now),
                key=lambda t: t.due,
            )
            if not due:
                return
            for timer in due:
                if not timer.stopped and not timer.fired:
                    timer.fired = True
                    timer.callback()


@pytest.fixture
def clock() -> ManualClock:
    """A manual clock starting at t=1000s."""
    return ManualClock()


@pytest.fixture
def timers(clock: ManualClock) -> FakeTimers:
    """A fake timer factory sharing the manual clock."""
    return FakeTimers(clock)


@pytest.fixture
def date_config() -> MaskConfig:
    """The date mask."""
    return DATE_MASK


@pytest.fixture
def time_config() -> MaskConfig:
    """A 24-hour time mask without seconds."""
    return MaskConfig(MaskKind.TIME)


@pytest.fixture
def time_12h_config() -> MaskConfig:
    """A 12-hour time mask without seconds."""
    return MaskConfig(MaskKind.TIME, uses_12h=True)


@pytest.fixture
def date_fallback() -> DateValue:
    """A fixed fallback date, so tests don't depend on today."""
    return DateValue(2024, 6, 15)


@pytest.fixture
def time_fallback() -> TimeValue:
    """A fixed fallback time."""
    return TimeValue(12, 0)

