"""Schedulers that run delayed callbacks: virtual, threaded and asyncio."""
from __future__ import annotations

import asyncio
import heapq
import itertools
import threading
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Host runtime timer facility.

    ``call_later`` must return immediately; ``callback`` runs once after
    ``delay`` seconds unless the returned handle is cancelled first.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class _VirtualTimer:
    __slots__ = ("due", "seq", "callback", "cancelled")

    def __init__(self, due: float, seq: int, callback: Callable[[], None]) -> None:
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __lt__(self, other: _VirtualTimer) -> bool:
        return (self.due, self.seq) < (other.due, other.seq)


class VirtualClock:
    """Deterministic scheduler driven by explicit ``advance`` calls.

    Callbacks fire in due-time order, ties in scheduling order. Callbacks
    scheduled while advancing fire in the same call if they fall due
    inside the advanced window.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._heap: list[_VirtualTimer] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> _VirtualTimer:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        timer = _VirtualTimer(self._now + delay, next(self._seq), callback)
        heapq.heappush(self._heap, timer)
        return timer

    def advance(self, seconds: float) -> int:
        """Move time forward, firing due callbacks. Returns the number fired."""
        if seconds < 0:
            raise ValueError("seconds must be non-negative")
        target = self._now + seconds
        fired = 0
        while self._heap and self._heap[0].due <= target:
            timer = heapq.heappop(self._heap)
            if timer.cancelled:
                continue
            self._now = timer.due
            timer.callback()
            fired += 1
        self._now = target
        return fired

    def run_until_idle(self, limit: int = 10_000) -> int:
        """Fire every pending callback, jumping time forward as needed."""
        fired = 0
        while self._heap and fired < limit:
            timer = heapq.heappop(self._heap)
            if timer.cancelled:
                continue
            self._now = max(self._now, timer.due)
            timer.callback()
            fired += 1
        return fired

    def pending(self) -> int:
        """Number of scheduled, not yet cancelled callbacks."""
        return sum(1 for timer in self._heap if not timer.cancelled)


class ThreadScheduler:
    """Daemon ``threading.Timer`` scheduler.

    Callbacks fire on timer threads. Pass ``dispatch`` to hand each fired
    callback to the owner thread instead, e.g. ``queue.put``.
    """

    def __init__(self, dispatch: Callable[[Callable[[], None]], None] | None = None) -> None:
        self._dispatch = dispatch

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        target = callback if self._dispatch is None else (lambda: self._dispatch(callback))
        timer = threading.Timer(delay, target)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop via ``loop.call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop if loop is not None else asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        return self._loop.call_later(delay, callback)
