"""
Timer scheduling for the single-threaded engine.

Every delayed action in the engine goes through a ``Scheduler`` so the same
code runs on an asyncio event loop in production and on a virtual clock in
tests. Delays and clock readings are in milliseconds.
"""

import asyncio
import heapq
import itertools
import time
from typing import Any, Callable, Optional, Protocol


class TimerHandle(Protocol):
    """Cancellation handle returned by ``Scheduler.call_later``."""

    def cancel(self) -> None:
        ...

    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    """Schedules callbacks on the engine's event loop."""

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        ...

    def now_ms(self) -> float:
        ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args: Any) -> asyncio.TimerHandle:
        return self._get_loop().call_later(max(delay_ms, 0) / 1000.0, callback, *args)

    def now_ms(self) -> float:
        if self._loop is not None:
            return self._loop.time() * 1000.0
        return time.monotonic() * 1000.0


class ManualTimerHandle:
    """Handle for a callback queued on a ``ManualScheduler``."""

    def __init__(self, when_ms: float, callback: Callable[..., Any], args: tuple) -> None:
        self._when_ms = when_ms
        self._callback = callback
        self._args = args
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def when(self) -> float:
        return self._when_ms

    def _run(self) -> None:
        self._callback(*self._args)


class ManualScheduler:
    """
    Virtual-time scheduler.

    Time only moves when ``advance`` is called. Callbacks due within the
    advanced window run in due-time order (ties in scheduling order), and
    callbacks scheduled by a running callback are picked up if they fall
    inside the same window.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now_ms = start_ms
        self._queue: list[tuple[float, int, ManualTimerHandle]] = []
        self._seq = itertools.count()

    def now_ms(self) -> float:
        return self._now_ms

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args: Any) -> ManualTimerHandle:
        when = self._now_ms + max(delay_ms, 0)
        handle = ManualTimerHandle(when, callback, args)
        heapq.heappush(self._queue, (when, next(self._seq), handle))
        return handle

    def advance(self, delay_ms: float) -> int:
        """
        Move the clock forward and run every callback that becomes due.

        Returns:
            Number of callbacks that ran
        """
        target = self._now_ms + delay_ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            when, _seq, handle = heapq.heappop(self._queue)
            if handle.cancelled():
                continue
            self._now_ms = when
            handle._run()
            ran += 1
        self._now_ms = target
        return ran

    def pending_count(self) -> int:
        """Number of queued callbacks that have not been cancelled."""
        return sum(1 for _when, _seq, handle in self._queue if not handle.cancelled())
