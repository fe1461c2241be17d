"""Reusable trailing debounce timer."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol


class TimerHandle(Protocol):
    """Anything with a ``stop()`` method, such as :class:`textual.timer.Timer`."""

    def stop(self) -> None: ...


SetTimer = Callable[[float, Callable[[], None]], TimerHandle]


class _LoopTimer:
    """Adapts an :class:`asyncio.TimerHandle` to the ``stop()`` protocol."""

    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def stop(self) -> None:
        self._handle.cancel()


def asyncio_set_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Schedule *callback* on the running asyncio loop after *delay* seconds."""
    loop = asyncio.get_running_loop()
    return _LoopTimer(loop.call_later(delay, callback))


class DebounceTimer:
    """
    Reusable trailing debounce timer.

    Restarts timer on each call. Handler fires only after ``delay`` seconds
    of inactivity.

    Usage:
        self._debounce = DebounceTimer(0.15, self._settle, widget.set_timer)

        def on_scroll(self):
            self._debounce.trigger()  # Restarts timer
    """

    def __init__(self, delay: float, handler: Callable[[], None], set_timer: SetTimer):
        self._delay = delay
        self._handler = handler
        self._set_timer = set_timer
        self._timer: Optional[TimerHandle] = None

    @property
    def pending(self) -> bool:
        """Whether a trigger is waiting to fire."""
        return self._timer is not None

    def trigger(self):
        """Restart the timer."""
        self.cancel()
        self._timer = self._set_timer(self._delay, self._fire)

    def cancel(self):
        """Cancel pending trigger."""
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def force(self):
        """Cancel timer and fire handler immediately."""
        self.cancel()
        self._handler()

    def _fire(self):
        self._timer = None
        self._handler()
