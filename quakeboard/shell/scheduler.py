"""Timer scheduling - Imperative Shell.

Every timer the display uses goes through a Scheduler so the rotation and
ticker can run on the asyncio loop in production and on a virtual clock in
tests. Scheduling is single-threaded and cooperative: callbacks never
overlap.
"""

import asyncio
import heapq
import itertools
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Protocol


class TimerHandle(Protocol):
    """A pending callback that can be cancelled."""

    def cancel(self) -> None: ...

    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    """Runs a callback once after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    The loop is looked up at scheduling time unless one is given, so the
    scheduler can be created before the server starts its loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ManualTimer:
    """Timer handle issued by ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler:
    """Scheduler driven by a virtual clock.

    Nothing runs until advance() is called, which fires due callbacks in
    time order (ties in scheduling order). Callbacks scheduled while
    advancing run in the same call if they fall due within the window.

    Attributes:
        time: Virtual seconds elapsed since creation
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._start = start or datetime(2025, 1, 1, tzinfo=timezone.utc)
        self._queue: list[tuple[float, int, ManualTimer]] = []
        self._counter = itertools.count()
        self.time = 0.0

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.time + max(0.0, delay), callback)
        heapq.heappush(self._queue, (timer.due, next(self._counter), timer))
        return timer

    def advance(self, seconds: float) -> int:
        """Move the virtual clock forward, firing due callbacks.

        Args:
            seconds: Virtual time to elapse

        Returns:
            Number of callbacks fired
        """
        deadline = self.time + seconds
        fired = 0

        while self._queue and self._queue[0][0] <= deadline:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled():
                continue
            self.time = due
            timer.callback()
            fired += 1

        self.time = deadline
        return fired

    def pending(self) -> int:
        """Number of scheduled callbacks that have not been cancelled."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled())

    def utcnow(self) -> datetime:
        """Virtual wall clock."""
        return self._start + timedelta(seconds=self.time)
