"""State machine keeping the committed, draft and typed values of a picker in step.

A picker holds three notions of its current value:

* ``committed`` is what the host application has been told about.
* ``draft`` is what the overlay highlights while it is open.
* ``live_text`` is what the text field shows.

Whenever the field is neither focused nor open, ``live_text`` is the
canonical text of ``committed`` and ``draft`` equals ``committed`` (or the
fallback when nothing is committed).  The transitions below are the only
places any of the three change.
"""

from __future__ import annotations

import time
from dataclasses import replace
from enum import Enum
from functools import partial
from types import MappingProxyType
from typing import Callable, Mapping

from textual import log

from datepick_textual.debounce import SetTimer, asyncio_set_timer
from datepick_textual.grid import date_unit_options, shift_month, time_unit_options
from datepick_textual.mask import format_text, format_value, is_cleared, parse_text
from datepick_textual.models import (
    DateValue,
    DismissPolicy,
    MaskConfig,
    MaskKind,
    Meridiem,
    Segment,
    TimeValue,
    Unit,
    Value,
    days_in_month,
)
from datepick_textual.wheel import WheelResolver, WheelTiming

Fallback = Value | Callable[[], Value] | None
CommitCallback = Callable[[Value | None], None]

_UNSET = object()


class SyncPhase(Enum):
    """Coarse interaction state of a picker."""

    CLOSED_SYNCED = "closed-synced"
    CLOSED_EDITING = "closed-editing"
    OPEN_EDITING = "open-editing"


class ValueSynchronizer:
    """Reconciles typed text, overlay draft and committed value for one picker.

    Args:
        config: The mask layout of the picker.
        fallback: Draft used when nothing is committed: a value, a callable
            returning one, or None for "now".
        dismiss_policy: What closing the overlay without confirming does.
        uses_wheels: Whether the overlay scrolls wheels (one resolver per unit)
            rather than showing a grid.
        timing: Wheel debounce and grace period.
        on_commit: Called whenever the user commits a value or clears it.
        on_draft: Called whenever an overlay selection or wheel changes the draft.
        set_timer: Timer factory for the wheel debounce.
        clock: Monotonic clock in seconds.
    """

    def __init__(
        self,
        config: MaskConfig,
        *,
        fallback: Fallback = None,
        dismiss_policy: DismissPolicy = DismissPolicy.DISCARD,
        uses_wheels: bool = False,
        timing: WheelTiming = WheelTiming(),
        on_commit: CommitCallback | None = None,
        on_draft: Callable[[Value], None] | None = None,
        set_timer: SetTimer = asyncio_set_timer,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.dismiss_policy = dismiss_policy
        self.uses_wheels = uses_wheels
        self.timing = timing
        self.on_commit = on_commit
        self.on_draft = on_draft
        self._fallback = fallback
        self._set_timer = set_timer
        self._clock = clock

        self._committed: Value | None = None
        self._draft: Value = self.fallback_value()
        self._live_text = ""
        self._is_open = False
        self._is_focused = False
        self._opened_at: float | None = None
        self._selected_since_open = False
        self._queued: object = _UNSET
        self._resolvers: dict[Unit, WheelResolver] = {}
        self._year_center = self._draft.year if isinstance(self._draft, DateValue) else 0
        self.view_year, self.view_month = self._view_of(self._draft)

    # -- observable state -------------------------------------------------

    @property
    def committed(self) -> Value | None:
        """The value the host application has been given, or None."""
        return self._committed

    @property
    def draft(self) -> Value:
        """The value highlighted in the overlay. Never None."""
        return self._draft

    @property
    def live_text(self) -> str:
        """The text the field should display."""
        return self._live_text

    @property
    def is_open(self) -> bool:
        """Whether the overlay is open."""
        return self._is_open

    @property
    def is_focused(self) -> bool:
        """Whether the text field has focus."""
        return self._is_focused

    @property
    def opened_at(self) -> float | None:
        """Clock reading when the overlay last opened, or None while closed."""
        return self._opened_at

    @property
    def phase(self) -> SyncPhase:
        """The current interaction phase."""
        if self._is_open:
            return SyncPhase.OPEN_EDITING
        if self._is_focused:
            return SyncPhase.CLOSED_EDITING
        return SyncPhase.CLOSED_SYNCED

    @property
    def resolvers(self) -> Mapping[Unit, WheelResolver]:
        """The wheel resolvers of the open overlay, keyed by unit."""
        return MappingProxyType(self._resolvers)

    @property
    def has_queued_value(self) -> bool:
        """Whether an external value is waiting for the picker to settle."""
        return self._queued is not _UNSET

    def fallback_value(self) -> Value:
        """Return the draft to use when nothing is committed."""
        fallback = self._fallback
        if callable(fallback):
            return fallback()
        if fallback is not None:
            return fallback
        if self.config.kind is MaskKind.DATE:
            return DateValue.today()
        return TimeValue.now(self.config)

    def wheel_options(self, unit: Unit) -> tuple:
        """Return the options a wheel for *unit* shows."""
        if self.config.kind is MaskKind.DATE:
            options = date_unit_options(self._year_center)
            match unit:
                case Unit.YEAR:
                    return options.years
                case Unit.MONTH:
                    return options.months
                case Unit.DAY:
                    return options.days
            return ()
        options = time_unit_options(self.config)
        match unit:
            case Unit.HOUR:
                return options.hours
            case Unit.MINUTE:
                return options.minutes
            case Unit.SECOND:
                return options.seconds or ()
            case Unit.MERIDIEM:
                return options.meridiems or ()
        return ()

    def unit_option(self, value: Value, unit: Unit):
        """Return the wheel option that represents *unit* of *value*."""
        if isinstance(value, DateValue):
            return getattr(value, unit.value)
        match unit:
            case Unit.HOUR:
                return f"{value.hour:02d}"
            case Unit.MINUTE:
                return f"{value.minute:02d}"
            case Unit.SECOND:
                return f"{value.second or 0:02d}"
            case Unit.MERIDIEM:
                return (value.meridiem or Meridiem.AM).value
        return None

    def wheel_index(self, unit: Unit) -> int:
        """Return the row a wheel for *unit* should show for the current draft."""
        options = self.wheel_options(unit)
        option = self.unit_option(self._draft, unit)
        return options.index(option) if option in options else 0

    # -- transitions ------------------------------------------------------

    def on_focus(self) -> None:
        """The text field gained focus. No value changes."""
        self._is_focused = True
        log.debug(f"sync: focus -> {self.phase.value}")

    def on_blur(self) -> None:
        """The text field lost focus; drop typed text that is not a valid value."""
        self._is_focused = False
        if not self._is_open and parse_text(self._live_text, self.config) is None:
            reverted = format_value(self._committed, self.config)
            if reverted != self._live_text:
                log.debug(f"sync: blur reverts {self._live_text!r} to {reverted!r}")
            self._live_text = reverted
        self._settle()

    def on_raw_text_edit(self, text: str) -> str:
        """Apply an edit of the text field.

        The text is reformatted; a complete, valid value is committed at
        once, and text that clears to nothing clears the committed value.

        Args:
            text: The field's text after the edit.

        Returns:
            The reformatted text the field should display.
        """
        formatted = format_text(text, self.config)
        self._live_text = formatted

        if is_cleared(formatted, self.config):
            if self._committed is not None:
                self._committed = None
                self._draft = self.fallback_value()
                self._sync_resolvers()
                self._notify(None)
            return formatted

        value = parse_text(formatted, self.config)
        if value is not None:
            self._committed = value
            self._draft = value
            self._follow_view(value)
            self._sync_resolvers()
            self._notify(value)
        return formatted

    def on_open(self) -> None:
        """Open the overlay, starting from the committed value or the fallback."""
        if self._is_open:
            return
        self._draft = self._committed if self._committed is not None else self.fallback_value()
        self._is_open = True
        self._opened_at = self._clock()
        self._selected_since_open = False
        self._follow_view(self._draft)
        if isinstance(self._draft, DateValue):
            self._year_center = self._draft.year
        if self.uses_wheels:
            self._start_wheels()
        log.debug(f"sync: open with draft {self._draft}")

    def on_grid_unit_selected(self, unit: Unit, value: object) -> None:
        """Select one unit of the draft in the overlay (grid click or wheel row)."""
        if not self._is_open:
            log.warning(f"sync: {unit.value} selected while closed, ignored")
            return
        self._apply_unit(unit, value)

    def on_date_selected(self, value: DateValue) -> None:
        """Select a whole date from the calendar grid."""
        if not self._is_open:
            log.warning("sync: date selected while closed, ignored")
            return
        self._select_draft(value)

    def on_scroll_offset(self, unit: Unit, offset: float) -> None:
        """Forward a wheel scroll offset to that wheel's resolver."""
        resolver = self._resolvers.get(unit)
        if resolver is None:
            log.debug(f"sync: no open wheel for {unit.value}, offset ignored")
            return
        resolver.on_offset_change(offset)

    def on_confirm(self) -> None:
        """Commit the draft and close the overlay."""
        if not self._is_open:
            return
        for resolver in self._resolvers.values():
            resolver.flush()
        self._close()
        self._commit(self._draft)
        self._settle()

    def on_dismiss(self) -> None:
        """Close the overlay without an explicit confirm.

        Under ``COMMIT_SELECTION`` a selection made since opening is
        committed; otherwise the draft reverts to the committed value.
        """
        if not self._is_open:
            return
        if self.dismiss_policy is DismissPolicy.COMMIT_SELECTION and self._selected_since_open:
            for resolver in self._resolvers.values():
                resolver.flush()
            self._close()
            self._commit(self._draft)
        else:
            self._close()
            self._draft = self._committed if self._committed is not None else self.fallback_value()
        self._settle()

    def on_clear(self) -> None:
        """Clear the committed value and the field."""
        self._committed = None
        self._live_text = ""
        self._draft = self.fallback_value()
        self._follow_view(self._draft)
        self._sync_resolvers()
        log.debug("sync: cleared")
        self._notify(None)
        self._settle()

    def on_external_value_set(self, value: Value | None) -> None:
        """Replace the committed value on behalf of the host application.

        The change waits until the field is neither focused nor open, so it
        never interrupts typing or an open overlay.  The last queued value
        wins.

        Times are reshaped for the mask (24-hour or 12-hour, with or without
        seconds); a value of the wrong kind is ignored.
        """
        try:
            value = self._shape(value)
        except ValueError:
            log.warning(f"sync: external value {value!r} does not fit this picker, ignored")
            return
        if self.phase is SyncPhase.CLOSED_SYNCED:
            self._apply_external(value)
        else:
            log.debug(f"sync: external value {value} queued while {self.phase.value}")
            self._queued = value

    def on_navigate_month(self, delta: int) -> None:
        """Move the calendar view by *delta* months without touching any value."""
        year, month = shift_month(self.view_year, self.view_month, delta)
        if year >= 1:
            self.view_year, self.view_month = year, month

    # -- internals --------------------------------------------------------

    def _notify(self, value: Value | None) -> None:
        if self.on_commit is not None:
            self.on_commit(value)

    def _commit(self, value: Value) -> None:
        self._committed = value
        self._draft = value
        self._live_text = format_value(value, self.config)
        log.debug(f"sync: committed {value}")
        self._notify(value)

    def _shape(self, value: Value | None) -> Value | None:
        if value is None:
            return None
        if self.config.kind is MaskKind.DATE:
            if not isinstance(value, DateValue):
                raise ValueError(value)
            return value
        if not isinstance(value, TimeValue):
            raise ValueError(value)
        return TimeValue.from_time(value.to_time(), self.config)

    def _apply_external(self, value: Value | None) -> None:
        self._committed = value
        self._draft = value if value is not None else self.fallback_value()
        self._live_text = format_value(value, self.config)
        self._follow_view(self._draft)

    def _settle(self) -> None:
        """Re-establish the closed-and-unfocused invariant if it applies."""
        if self.phase is not SyncPhase.CLOSED_SYNCED:
            return
        if self._queued is not _UNSET:
            queued, self._queued = self._queued, _UNSET
            self._apply_external(queued)
            return
        self._live_text = format_value(self._committed, self.config)
        if self._committed is not None:
            self._draft = self._committed

    def _close(self) -> None:
        for resolver in self._resolvers.values():
            resolver.close()
        self._resolvers.clear()
        self._is_open = False
        self._opened_at = None

    def _start_wheels(self) -> None:
        self._resolvers = {
            unit: WheelResolver(
                self.wheel_options(unit),
                partial(self._apply_unit, unit),
                selected=self.unit_option(self._draft, unit),
                timing=self.timing,
                set_timer=self._set_timer,
                clock=self._clock,
                name=unit.value,
            )
            for unit in self.config.units
        }

    def _sync_resolvers(self) -> None:
        for unit, resolver in self._resolvers.items():
            resolver.select(self.unit_option(self._draft, unit))

    def _apply_unit(self, unit: Unit, option: object) -> None:
        if unit not in self.config.units:
            log.warning(f"sync: {unit.value} is not part of this picker, ignored")
            return
        try:
            draft = self._compose(unit, option)
        except (TypeError, ValueError):
            log.warning(f"sync: invalid {unit.value} option {option!r}, ignored")
            return
        self._select_draft(draft)

    def _select_draft(self, value: Value) -> None:
        self._draft = value
        self._selected_since_open = True
        self._follow_view(value)
        self._sync_resolvers()
        if self.on_draft is not None:
            self.on_draft(value)

    def _compose(self, unit: Unit, option: object) -> Value:
        """Combine one unit with the rest of the draft, clamping the day."""
        draft = self._draft
        if isinstance(draft, DateValue):
            year, month, day = draft.year, draft.month, draft.day
            number = int(option)
            match unit:
                case Unit.YEAR:
                    year = max(number, 1)
                case Unit.MONTH:
                    month = min(max(number, 1), 12)
                case Unit.DAY:
                    day = max(number, 1)
            return DateValue(year, month, min(day, days_in_month(year, month)))

        match unit:
            case Unit.HOUR:
                low, high = self.config.hour_segment.bounds
                return replace(draft, hour=min(max(int(option), low), high))
            case Unit.MINUTE:
                return replace(draft, minute=_clamp_minsec(int(option)))
            case Unit.SECOND:
                return replace(draft, second=_clamp_minsec(int(option)))
            case Unit.MERIDIEM:
                text = option.value if isinstance(option, Meridiem) else str(option)
                return replace(draft, meridiem=Meridiem(text.upper()))
        raise ValueError(unit)

    def _follow_view(self, value: Value) -> None:
        if not isinstance(value, DateValue):
            return
        self.view_year, self.view_month = value.year, value.month
        if value.year not in date_unit_options(self._year_center).years:
            self._year_center = value.year
            resolver = self._resolvers.get(Unit.YEAR)
            if resolver is not None:
                resolver.set_options(self.wheel_options(Unit.YEAR))

    @staticmethod
    def _view_of(value: Value) -> tuple[int, int]:
        if isinstance(value, DateValue):
            return value.year, value.month
        return 0, 0


def _clamp_minsec(number: int) -> int:
    low, high = Segment.MINSEC.bounds
    return min(max(number, low), high)
