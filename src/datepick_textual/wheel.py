"""Resolution of continuous wheel scroll offsets into discrete options.

A wheel reports its scroll offset many times per gesture.  The resolver
waits for the offset to stop changing before choosing an option, and ignores
offsets reported just after the overlay opened, when the presentation layer
is still scrolling wheels into place on its own.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

from textual import log

from datepick_textual.debounce import DebounceTimer, SetTimer, asyncio_set_timer

T = TypeVar("T")


@dataclass(frozen=True)
class WheelTiming:
    """Timing and geometry shared by the wheels of one overlay.

    Attributes:
        debounce: Quiet period, in seconds, before an offset is resolved.
        grace: Period after opening, in seconds, during which offsets are ignored.
        unit_height: Scroll distance of one option.
    """

    debounce: float = 0.15
    grace: float = 0.5
    unit_height: float = 1.0


class WheelResolver(Generic[T]):
    """Debounced, suppressible mapping from scroll offset to option.

    One resolver exists per wheel while the overlay is open.  It owns a
    single debounce timer; every offset change restarts it, and only the
    timer callback resolves an option.

    Args:
        options: The ordered options shown by the wheel.
        on_resolve: Called with the newly resolved option.
        selected: The option selected when the overlay opened.
        timing: Debounce, grace period and row height.
        set_timer: Timer factory returning a handle with ``stop()``.
        clock: Monotonic clock in seconds.
        name: Label used in log output.
    """

    def __init__(
        self,
        options: Sequence[T],
        on_resolve: Callable[[T], None],
        *,
        selected: T | None = None,
        timing: WheelTiming = WheelTiming(),
        set_timer: SetTimer = asyncio_set_timer,
        clock: Callable[[], float] = time.monotonic,
        name: str = "",
    ) -> None:
        self.options: tuple[T, ...] = tuple(options)
        self.name = name
        self.selected = selected
        self.offset = 0.0
        self.resolved_index = self.index_of(selected) if selected is not None else 0
        self._on_resolve = on_resolve
        self._timing = timing
        self._clock = clock
        self.suppress_until = clock() + timing.grace
        self._pending_index: int | None = None
        self._debounce = DebounceTimer(timing.debounce, self.settle, set_timer)

    @property
    def pending(self) -> bool:
        """Whether an offset is waiting for the debounce period to elapse."""
        return self._debounce.pending

    def index_for_offset(self, offset: float) -> int:
        """Return the option index under *offset*, clamped to the list."""
        index = round(offset / self._timing.unit_height)
        return min(max(index, 0), len(self.options) - 1)

    def index_of(self, option: T) -> int:
        """Return the index of *option*, or 0 if the wheel does not show it."""
        try:
            return self.options.index(option)
        except ValueError:
            return 0

    def on_offset_change(self, offset: float) -> None:
        """Record a new scroll offset and restart the debounce timer.

        Offsets reported inside the grace period after opening are recorded
        but never resolved.
        """
        self.offset = offset
        if self._clock() < self.suppress_until:
            log.debug(f"wheel {self.name}: offset {offset} ignored during grace period")
            return
        self._pending_index = self.index_for_offset(offset)
        self._debounce.trigger()

    def settle(self) -> T | None:
        """Resolve the pending offset now.

        Returns:
            The newly selected option, or None if nothing was pending or the
            option under the offset is already selected.
        """
        index = self._pending_index
        if index is None:
            return None
        self._pending_index = None
        self.resolved_index = index
        option = self.options[index]
        if option == self.selected:
            return None
        self.selected = option
        log.debug(f"wheel {self.name}: resolved {option!r}")
        self._on_resolve(option)
        return option

    def select(self, option: T) -> None:
        """Mark *option* as selected without emitting it."""
        self.selected = option
        self.resolved_index = self.index_of(option)

    def flush(self) -> None:
        """Resolve a pending offset immediately instead of waiting."""
        if self._debounce.pending:
            self._debounce.force()

    def close(self) -> None:
        """Cancel any pending resolution."""
        self._debounce.cancel()
        self._pending_index = None

    def set_options(self, options: Sequence[T]) -> None:
        """Replace the options, keeping the selected option.

        A pending offset refers to the old rows, so it is dropped, and offsets
        reported while the rows are rebuilt are ignored for another grace period.
        """
        self.close()
        self.suppress_until = max(self.suppress_until, self._clock() + self._timing.grace)
        self.options = tuple(options)
        self.resolved_index = self.index_of(self.selected) if self.selected is not None else 0
