"""Daily refresh of "today" for highlighting the current date."""

import threading
from datetime import date, datetime, timedelta
from typing import Callable

from calrange.logging import get_logger

_log = get_logger(__name__)

# Fire slightly past midnight so rounding never lands on the old day.
_MIDNIGHT_SLACK = timedelta(seconds=1)


def seconds_until_midnight(now: datetime) -> float:
    """Seconds from `now` until just after the next local midnight."""
    tomorrow = datetime.combine(now.date() + timedelta(days=1), datetime.min.time(), now.tzinfo)
    return ((tomorrow - now) + _MIDNIGHT_SLACK).total_seconds()


class MidnightRefresher:
    """Self-rescheduling one-shot timer that tracks today's date.

    Each fire updates `today`, calls `on_refresh(today)` and arms the next
    timer. `cancel()` stops the chain; a timer that races with cancel is
    ignored.

    `on_refresh` runs on the timer thread, not the thread that called
    `start()`. Callers with their own event loop must hand the call back to
    it (for example `loop.call_soon_threadsafe`) before touching UI state.
    """

    def __init__(
        self,
        on_refresh: Callable[[date], None] | None = None,
        now: Callable[[], datetime] = datetime.now,
        timer_factory: Callable[[float, Callable[[], None]], threading.Timer] = threading.Timer,
    ) -> None:
        self._on_refresh = on_refresh
        self._now = now
        self._timer_factory = timer_factory
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()
        self._cancelled = False
        self.today: date = self._now().date()

    @property
    def active(self) -> bool:
        return self._timer is not None and not self._cancelled

    def start(self) -> None:
        """Capture today and arm the timer for the next midnight."""
        with self._lock:
            if self._cancelled:
                raise RuntimeError("refresher has been cancelled")
            self._schedule()

    def _schedule(self) -> None:
        """Arm the next timer. Must hold _lock."""
        now = self._now()
        self.today = now.date()
        delay = seconds_until_midnight(now)
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self._timer_factory(delay, self._fire)
        self._timer.daemon = True
        self._timer.start()
        _log.debug("refresh_scheduled", today=self.today, delay_s=round(delay, 1))

    def _fire(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._schedule()
            today = self.today
        _log.info("today_refreshed", today=today)
        if self._on_refresh is not None:
            self._on_refresh(today)

    def cancel(self) -> None:
        """Stop refreshing. Safe to call more than once."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        _log.debug("refresh_cancelled")
