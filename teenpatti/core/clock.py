"""
Clocks for delayed automated turns.

The engine never waits on wall-clock time itself. A ``TableSession``
asks a clock to run a callback after the bot's "thinking" delay:

- ``AsyncioClock`` uses the running event loop (server)
- ``VirtualClock`` only moves when ``advance`` is called (tests)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, List, Optional
import asyncio
import heapq
import itertools


class ScheduledCall:
    """Handle for a callback waiting on a ``VirtualClock``."""

    __slots__ = ("when", "seq", "callback", "cancelled")

    def __init__(self, when: float, seq: int, callback: Callable[[], None]):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __lt__(self, other: ScheduledCall) -> bool:
        return (self.when, self.seq) < (other.when, other.seq)


class Clock(ABC):
    """Schedules callbacks to run after a delay."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]):
        """
        Run ``callback`` after ``delay`` seconds.

        Returns:
            A handle with a ``cancel()`` method
        """


class VirtualClock(Clock):
    """
    Manually advanced clock.

    Usage:
        clock = VirtualClock()
        clock.call_later(1.0, callback)
        clock.advance(1.0)  # runs callback
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[ScheduledCall] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.now + max(delay, 0.0), next(self._counter), callback)
        heapq.heappush(self._queue, call)
        return call

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting (cancelled ones excluded)."""
        return sum(1 for c in self._queue if not c.cancelled)

    def advance(self, seconds: float) -> int:
        """
        Move time forward, running every callback that falls due.

        Callbacks scheduled by other callbacks run too if they fall due
        before the new time.

        Returns:
            Number of callbacks run
        """
        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0].when <= target:
            call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self.now = call.when
            call.callback()
            ran += 1
        self.now = target
        return ran

    def run_all(self, limit: int = 1000) -> int:
        """Run callbacks until none are left (or ``limit`` is hit)."""
        ran = 0
        while ran < limit:
            live = [c for c in self._queue if not c.cancelled]
            if not live:
                break
            ran += self.advance(min(c.when for c in live) - self.now)
        return ran


class AsyncioClock(Clock):
    """Clock backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
