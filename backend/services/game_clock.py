"""
Tick clocks.

A clock calls one callback repeatedly at a fixed interval until it is
cancelled or restarted with a new interval. Only one job is ever active
per clock, so restarting never leaves a second timer behind.
"""

import logging
import time
from typing import Callable, Optional

import schedule

logger = logging.getLogger(__name__)

POLL_SECONDS = 0.001


class GameClock:
    """Interface for repeating timers driving the game."""

    interval_ms: Optional[float] = None

    @property
    def active(self) -> bool:
        raise NotImplementedError

    def start(self, interval_ms: float, callback: Callable[[], None]):
        raise NotImplementedError

    def cancel(self):
        raise NotImplementedError


def _validated_interval(interval_ms: float) -> float:
    if interval_ms <= 0:
        raise ValueError(f"Clock interval must be positive, got {interval_ms} ms.")
    return interval_ms


class ScheduleClock(GameClock):
    """
    Clock backed by a private `schedule.Scheduler`.

    Nothing runs by itself: the owner drives it with run_pending() or
    run_until(), so callbacks execute on the caller's thread one at a time.
    """

    def __init__(self, scheduler: Optional[schedule.Scheduler] = None, poll_seconds: float = POLL_SECONDS):
        self.scheduler = scheduler or schedule.Scheduler()
        self.poll_seconds = poll_seconds
        self.interval_ms = None
        self._job: Optional[schedule.Job] = None

    @property
    def active(self) -> bool:
        return self._job is not None

    def start(self, interval_ms: float, callback: Callable[[], None]):
        self.cancel()
        self.interval_ms = _validated_interval(interval_ms)
        self._job = self.scheduler.every(interval_ms / 1000).seconds.do(callback)
        logger.debug("Clock started at %.3f ms", interval_ms)

    def cancel(self):
        if self._job is None:
            return
        self.scheduler.cancel_job(self._job)
        self._job = None
        logger.debug("Clock cancelled")

    def run_pending(self):
        self.scheduler.run_pending()

    def run_until(self, predicate: Callable[[], bool], timeout: Optional[float] = None) -> bool:
        """
        Run due jobs until predicate() is true or the clock goes idle.

        Returns True if the predicate was satisfied.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while not predicate():
            if not self.active:
                return False
            if deadline is not None and time.monotonic() >= deadline:
                logger.warning("Clock loop timed out after %s seconds", timeout)
                return False
            self.scheduler.run_pending()
            time.sleep(self.poll_seconds)
        return True
