"""Transient status message shown in the picker's help line."""

from __future__ import annotations

import threading
from typing import Callable

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


class StatusLine:
    """A message that clears itself after a timeout.

    Showing a new message cancels the pending clear of the previous one,
    so timers never stack.  *on_change* is called from the timer thread
    after an expiry so the caller can redraw.
    """

    def __init__(
        self,
        on_change: Callable[[], None] | None = None,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self.on_change = on_change
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._message: str | None = None
        self._timer: threading.Timer | None = None

    @property
    def message(self) -> str | None:
        with self._lock:
            return self._message

    def show(self, message: str, seconds: float) -> None:
        with self._lock:
            self._cancel_locked()
            self._message = message
            timer = self._timer_factory(seconds, lambda: self._expire(timer))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        """Drop the pending clear, keeping the current message."""
        with self._lock:
            self._cancel_locked()

    def clear(self) -> None:
        with self._lock:
            self._cancel_locked()
            self._message = None

    def _expire(self, timer: threading.Timer) -> None:
        with self._lock:
            if timer is not self._timer:
                return
            self._timer = None
            self._message = None
        if self.on_change:
            self.on_change()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
