import asyncio

import pytest

from assignment_tracker.core.exceptions import SchedulingError
from assignment_tracker.services import AsyncioScheduler, ManualScheduler


def test_manual_runs_tasks_in_due_order():
    scheduler = ManualScheduler()
    calls = []
    scheduler.schedule(0.5, calls.append, "late")
    scheduler.schedule(0.25, calls.append, "early")
    scheduler.schedule(0.5, calls.append, "late-second")

    assert scheduler.advance(0.25) == 1
    assert calls == ["early"]
    assert scheduler.now == 0.25

    scheduler.advance(0.25)
    assert calls == ["early", "late", "late-second"]


def test_manual_runs_tasks_scheduled_by_callbacks_within_window():
    scheduler = ManualScheduler()
    calls = []

    def first():
        calls.append("first")
        scheduler.schedule(0.25, calls.append, "second")

    scheduler.schedule(0.25, first)
    scheduler.advance(1.0)
    assert calls == ["first", "second"]


def test_cancelled_task_never_runs():
    scheduler = ManualScheduler()
    calls = []
    handle = scheduler.schedule(0.5, calls.append, "x")

    assert handle.pending
    assert handle.cancel() is True
    assert handle.cancel() is False
    assert handle.cancelled
    assert scheduler.pending_count == 0

    scheduler.run_until_idle()
    assert calls == []


def test_cancel_after_run_returns_false():
    scheduler = ManualScheduler()
    handle = scheduler.schedule(0, lambda: None)
    scheduler.run_until_idle()
    assert handle.done
    assert handle.cancel() is False


def test_manual_cancel_all():
    scheduler = ManualScheduler()
    scheduler.schedule(1, lambda: None)
    scheduler.schedule(2, lambda: None)
    assert scheduler.cancel_all() == 2
    assert scheduler.run_until_idle() == 0


def test_manual_callback_errors_propagate():
    scheduler = ManualScheduler()

    def boom():
        raise RuntimeError("boom")

    scheduler.schedule(0.5, boom)
    with pytest.raises(RuntimeError):
        scheduler.advance(1)


@pytest.mark.parametrize("scheduler", [ManualScheduler(), AsyncioScheduler()])
def test_negative_delay_rejected(scheduler):
    with pytest.raises(SchedulingError):
        scheduler.schedule(-1, lambda: None)


def test_manual_clock_cannot_go_backwards():
    with pytest.raises(SchedulingError):
        ManualScheduler().advance(-0.5)


def test_asyncio_scheduler_requires_running_loop():
    with pytest.raises(SchedulingError):
        AsyncioScheduler().schedule(0.1, lambda: None)


def test_asyncio_scheduler_fires_and_cancels():
    calls = []

    async def scenario():
        scheduler = AsyncioScheduler()
        kept = scheduler.schedule(0.01, calls.append, "kept")
        dropped = scheduler.schedule(0.01, calls.append, "dropped")
        dropped.cancel()
        assert scheduler.pending_count == 1

        await scheduler.wait_idle(timeout=2.0)
        assert kept.done
        assert scheduler.pending_count == 0

    asyncio.run(scenario())
    assert calls == ["kept"]


def test_asyncio_wait_idle_times_out():
    async def scenario():
        scheduler = AsyncioScheduler()
        scheduler.schedule(10, lambda: None)
        try:
            with pytest.raises(SchedulingError):
                await scheduler.wait_idle(timeout=0.05)
        finally:
            assert scheduler.cancel_all() == 1

    asyncio.run(scenario())
