"""
Schedulers - Deferred, cancellable callbacks for session timers.

A session needs two kinds of deferred work:
- the one-second tick that advances elapsed time
- the delayed advance after a correct guess

Both go through a Scheduler so they can be cancelled deterministically.
Implementations:
- AsyncioScheduler: runs on an asyncio event loop (API server)
- ThreadingScheduler: runs on threading.Timer threads (CLI)
- ManualScheduler: runs only when advanced explicitly (tests, embedding)
"""

from __future__ import annotations
import asyncio
import heapq
import itertools
import threading
from typing import Callable, Protocol


class ScheduledCall(Protocol):
    """Handle to a deferred callback."""

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        ...


class AsyncioScheduler:
    """
    Schedules on an asyncio loop.

    The loop is looked up at scheduling time unless one is given,
    so sessions created inside request handlers use the server loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ThreadingScheduler:
    """Schedules each callback on its own daemon timer thread."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class _ManualCall:
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual-clock scheduler.

    Nothing runs until advance() moves the clock; due callbacks then
    run in time order, including ones scheduled by earlier callbacks.

    Usage:
        scheduler = ManualScheduler()
        session = GameSession(quiz, scheduler=scheduler)
        session.start()
        scheduler.advance(3)  # three ticks
    """

    def __init__(self):
        self.now = 0.0
        self._queue: list[tuple[float, int, _ManualCall]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualCall:
        call = _ManualCall(self.now + delay, callback)
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        return call

    @property
    def pending(self) -> int:
        """Number of scheduled, not yet cancelled callbacks."""
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running everything that falls due."""
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            self.now = due
            if not call.cancelled:
                call.callback()
        self.now = target
