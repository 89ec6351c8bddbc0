"""
Tests for utilkit/utils/time.py

These tests verify the clock abstraction works for both real and frozen time,
and that the schedulers honour the timer contract the rate controllers rely on.
"""

import asyncio
from datetime import datetime, timezone

import pytest

from utilkit.utils.errors import InvalidArgument
from utilkit.utils.time import (
    AsyncioScheduler,
    FrozenClock,
    ManualScheduler,
    RealClock,
    get_default_scheduler,
    get_frozen_clock,
    get_real_clock,
    validate_duration,
)


def test_real_clock_returns_current_time():
    """Test that RealClock returns a time close to actual current time."""
    clock = RealClock()

    before = datetime.now(timezone.utc)
    clock_time = clock.now()
    after = datetime.now(timezone.utc)

    assert before <= clock_time <= after
    assert clock_time.tzinfo == timezone.utc


def test_frozen_clock_returns_fixed_time():
    """Test that FrozenClock always returns the configured timestamp."""
    fixed_time = datetime(2015, 1, 5, 12, 30, 45, tzinfo=timezone.utc)
    clock = FrozenClock(fixed_time)

    assert clock.now() == fixed_time
    assert clock.now() == fixed_time


def test_clock_factories():
    """Test that the factory functions return working clocks."""
    fixed_time = datetime(2018, 3, 10, 8, 15, 0, tzinfo=timezone.utc)

    assert get_frozen_clock(fixed_time).now() == fixed_time
    assert get_real_clock().now().tzinfo == timezone.utc


def test_validate_duration_rejects_bad_values():
    """Negative, boolean, and non-numeric durations are rejected."""
    assert validate_duration("wait_ms", 0) == 0
    assert validate_duration("wait_ms", 12.5) == 12.5

    with pytest.raises(InvalidArgument):
        validate_duration("wait_ms", -1)
    with pytest.raises(InvalidArgument):
        validate_duration("wait_ms", True)
    with pytest.raises(InvalidArgument):
        validate_duration("wait_ms", "100")


def test_manual_scheduler_fires_at_due_time():
    """A callback fires only once virtual time reaches its due time."""
    scheduler = ManualScheduler()
    fired = []

    scheduler.schedule(100, lambda: fired.append(scheduler.now()))

    scheduler.advance(99)
    assert fired == []

    scheduler.advance(1)
    assert fired == [100]
    assert scheduler.pending_count == 0


def test_manual_scheduler_orders_by_due_time_then_schedule_order():
    """Earlier due times fire first; equal due times fire in scheduling order."""
    scheduler = ManualScheduler()
    order = []

    scheduler.schedule(50, lambda: order.append("b"))
    scheduler.schedule(10, lambda: order.append("a"))
    scheduler.schedule(50, lambda: order.append("c"))

    scheduler.advance(100)

    assert order == ["a", "b", "c"]
    assert scheduler.now() == 100


def test_manual_scheduler_zero_delay_is_not_synchronous():
    """schedule(0, cb) defers cb until the scheduler runs pending work."""
    scheduler = ManualScheduler()
    fired = []

    scheduler.schedule(0, lambda: fired.append(True))
    assert fired == []

    scheduler.run_pending()
    assert fired == [True]


def test_manual_scheduler_cancel():
    """Cancelled handles never fire; cancelling twice is harmless."""
    scheduler = ManualScheduler()
    fired = []

    handle = scheduler.schedule(10, lambda: fired.append(True))
    scheduler.cancel(handle)
    scheduler.cancel(handle)

    scheduler.advance(20)
    assert fired == []
    assert handle.cancelled
    assert not handle.active


def test_manual_scheduler_drops_cancelled_entries_during_long_bursts():
    """Restarting a timer many times without advancing keeps the queue small."""
    scheduler = ManualScheduler()
    fired = []

    handle = scheduler.schedule(10, lambda: fired.append(0))
    for i in range(1, 1000):
        scheduler.cancel(handle)
        handle = scheduler.schedule(10, lambda i=i: fired.append(i))
    keeper = scheduler.schedule(50, lambda: fired.append("keeper"))

    assert scheduler.pending_count == 2
    assert len(scheduler._queue) <= 4

    scheduler.advance(50)
    assert fired == [999, "keeper"]
    assert scheduler.pending_count == 0
    assert not keeper.active


def test_manual_scheduler_pending_count_tracks_cancel_and_fire():
    scheduler = ManualScheduler()
    first = scheduler.schedule(10, lambda: None)
    scheduler.schedule(20, lambda: None)
    scheduler.schedule(30, lambda: None)

    scheduler.cancel(first)
    assert scheduler.pending_count == 2

    scheduler.advance(20)
    assert scheduler.pending_count == 1


def test_manual_scheduler_runs_callbacks_scheduled_during_advance():
    """A callback scheduled by another callback fires if it falls in the window."""
    scheduler = ManualScheduler()
    fired = []

    def first():
        fired.append(("first", scheduler.now()))
        scheduler.schedule(30, lambda: fired.append(("second", scheduler.now())))

    scheduler.schedule(10, first)
    scheduler.advance(50)

    assert fired == [("first", 10), ("second", 40)]


def test_manual_scheduler_rejects_negative_advance():
    """Time cannot move backwards."""
    scheduler = ManualScheduler(start_ms=5)

    with pytest.raises(InvalidArgument):
        scheduler.advance(-1)
    assert scheduler.now() == 5


def test_manual_scheduler_propagates_callback_errors():
    """An exception from a callback escapes advance(); later callbacks stay queued."""
    scheduler = ManualScheduler()
    fired = []

    def boom():
        raise RuntimeError("boom")

    scheduler.schedule(10, boom)
    scheduler.schedule(20, lambda: fired.append(True))

    with pytest.raises(RuntimeError):
        scheduler.advance(30)
    assert fired == []

    scheduler.advance(10)
    assert fired == [True]


def test_asyncio_scheduler_fires_and_cancels():
    """AsyncioScheduler runs callbacks on the event loop after the delay."""
    fired = []

    async def scenario():
        scheduler = AsyncioScheduler()
        scheduler.schedule(5, lambda: fired.append("kept"))
        dropped = scheduler.schedule(5, lambda: fired.append("dropped"))
        scheduler.cancel(dropped)

        # Zero delay is still deferred past the current step
        scheduler.schedule(0, lambda: fired.append("zero"))
        assert fired == []

        await asyncio.sleep(0.05)

    asyncio.run(scenario())

    assert fired == ["zero", "kept"]


def test_get_default_scheduler_is_asyncio():
    """The default scheduler is backed by asyncio."""
    assert isinstance(get_default_scheduler(), AsyncioScheduler)
