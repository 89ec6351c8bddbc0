"""
Time, clock, and scheduler abstractions for deterministic testing.

This module provides two injectable capabilities instead of global facilities:

  - A Clock answers "what time is it?" (RealClock for production, FrozenClock
    for tests).
  - A Scheduler runs a callback once after a delay and can cancel it
    (AsyncioScheduler on a running event loop, ManualScheduler on a virtual
    timeline that tests advance by hand).

The key insight: code that accepts a Scheduler instead of calling a global
timer can be tested deterministically. A debounce test can advance virtual
time by exactly 99 ms and assert nothing fired, then 1 ms more and assert it
did, without sleeping or racing the wall clock.

All scheduler delays are in milliseconds.
"""

import asyncio
import heapq
import itertools
from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol, Tuple

from utilkit.utils.errors import InvalidArgument


class Clock(Protocol):
    """
    Abstract time source protocol.

    **Usage**: Consumers should accept a Clock instance (injected via constructor
    or function parameter) and call clock.now() whenever they need the current
    time. In production, pass a RealClock; in tests, pass a FrozenClock.
    """

    def now(self) -> datetime:
        """
        Return the current time according to this clock.

        Returns:
            datetime object representing "now" (timezone-aware, UTC preferred).
        """
        ...


class RealClock:
    """Clock that returns the actual current system time (UTC)."""

    def now(self) -> datetime:
        # Use timezone.utc to ensure timezone-aware datetime
        return datetime.now(timezone.utc)


class FrozenClock:
    """
    Clock that always returns a fixed timestamp (for deterministic tests).

    **Usage**:
        clock = FrozenClock(datetime(2015, 1, 5, tzinfo=timezone.utc))
        current_time = clock.now()  # Always returns 2015-01-05T00:00:00+00:00
    """

    def __init__(self, fixed_now: datetime):
        self._fixed_now = fixed_now

    def now(self) -> datetime:
        return self._fixed_now


def get_real_clock() -> Clock:
    """Factory function to create a RealClock instance."""
    return RealClock()


def get_frozen_clock(fixed_now: datetime) -> Clock:
    """Factory function to create a FrozenClock with a given timestamp."""
    return FrozenClock(fixed_now)


class TimerHandle:
    """
    A single scheduled callback.

    Handles are returned by Scheduler.schedule() and passed back to
    Scheduler.cancel(). A handle is active until it fires or is cancelled;
    it never fires twice.

    Attributes:
        due_ms: Time (in the scheduler's own timeline, ms) the callback is due.
        callback: Zero-argument callable to run.
        cancelled: True once cancel() was called before the callback fired.
        fired: True once the callback has started running.
    """

    def __init__(self, due_ms: float, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False
        # Backend-specific handle (asyncio.TimerHandle for AsyncioScheduler)
        self._native = None

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def _run(self) -> None:
        if not self.active:
            return
        self.fired = True
        self.callback()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "fired" if self.fired else "active"
        return f"TimerHandle(due_ms={self.due_ms}, {state})"


class Scheduler(Protocol):
    """
    Abstract timer facility protocol.

    **Conceptual**: A Scheduler is any object that can run a callback once,
    some number of milliseconds from now, on the caller's own timeline, and
    cancel that callback before it fires. Rate controllers depend on this
    protocol rather than on a global timer so that tests can substitute a
    ManualScheduler.

    **Contract**:
      - schedule(0, cb) never runs cb synchronously; it runs at the next
        scheduling opportunity.
      - cancel() on a fired or already cancelled handle is a no-op.
    """

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        ...

    def cancel(self, handle: TimerHandle) -> None:
        ...


def validate_duration(name: str, value: float) -> float:
    """Return `value` if it is a non-negative number of milliseconds, else raise InvalidArgument."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgument(f"{name} must be a number of milliseconds, got: {value!r}")
    if value < 0:
        raise InvalidArgument(f"{name} must be non-negative, got: {value}")
    return value


class AsyncioScheduler:
    """
    Scheduler backed by an asyncio event loop.

    Callbacks run on the loop's thread via loop.call_later, which gives the
    single cooperative timeline the rate controllers assume. If no loop is
    passed, the running loop is looked up at schedule time, so schedule()
    must be called from inside a coroutine or loop callback.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        validate_duration("delay_ms", delay_ms)
        loop = self._get_loop()
        handle = TimerHandle(loop.time() * 1000.0 + delay_ms, callback)
        handle._native = loop.call_later(delay_ms / 1000.0, handle._run)
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        if not handle.active:
            return
        handle.cancelled = True
        if handle._native is not None:
            handle._native.cancel()


class ManualScheduler:
    """
    Scheduler on a virtual timeline that only moves when told to.

    **Conceptual**: ManualScheduler is the deterministic fake clock for
    rate-control tests and simulations. Time starts at `start_ms` and only
    advances through advance(). Due callbacks run in order of due time, ties
    broken by scheduling order, and during each callback now() reports that
    callback's due time. Callbacks scheduled while advancing also run if they
    fall due inside the advanced window.

    **Usage**:
        scheduler = ManualScheduler()
        scheduler.schedule(100, lambda: print("fired"))
        scheduler.advance(99)   # nothing
        scheduler.advance(1)    # prints "fired"

    Exceptions raised by callbacks propagate out of advance()/run_pending();
    the callback that raised is considered fired and later callbacks remain
    queued.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()
        # Cancelled handles still sitting in _queue
        self._cancelled = 0

    def now(self) -> float:
        """Return the current virtual time in milliseconds."""
        return self._now

    @property
    def pending_count(self) -> int:
        """Number of scheduled callbacks that have neither fired nor been cancelled."""
        return len(self._queue) - self._cancelled

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        validate_duration("delay_ms", delay_ms)
        handle = TimerHandle(self._now + delay_ms, callback)
        heapq.heappush(self._queue, (handle.due_ms, next(self._sequence), handle))
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        if not handle.active:
            return
        handle.cancelled = True
        self._cancelled += 1
        # Drop dead entries once they make up most of the queue, so a long
        # burst of restarts without advancing time stays bounded
        if self._cancelled * 2 > len(self._queue):
            self._queue = [entry for entry in self._queue if entry[2].active]
            heapq.heapify(self._queue)
            self._cancelled = 0

    def advance(self, ms: float) -> None:
        """
        Move virtual time forward by `ms`, firing every callback due on the way.

        Args:
            ms: Non-negative number of milliseconds to advance.

        Raises:
            InvalidArgument: If ms is negative.
        """
        if ms < 0:
            raise InvalidArgument(f"Cannot advance time backwards, got: {ms}")
        target = self._now + ms
        self._fire_until(target)
        self._now = target

    def run_pending(self) -> None:
        """Fire everything due at the current instant (e.g. zero-delay callbacks)."""
        self._fire_until(self._now)

    def _fire_until(self, target: float) -> None:
        while self._queue and self._queue[0][0] <= target:
            due_ms, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                self._cancelled -= 1
                continue
            self._now = max(self._now, due_ms)
            handle._run()


def get_default_scheduler() -> Scheduler:
    """
    Factory function for the scheduler used when none is injected.

    Returns:
        AsyncioScheduler bound to whichever event loop is running at schedule time.
    """
    return AsyncioScheduler()
