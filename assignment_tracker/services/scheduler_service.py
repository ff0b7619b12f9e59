"""
Deferred task scheduling for timer-driven assignment transitions.
"""

import asyncio
import heapq
import itertools
import time
import uuid
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.interfaces import DeferredScheduler
from ..core.exceptions import SchedulingError


class TaskHandle:
    """Handle to a scheduled callback that can be cancelled before it fires."""

    def __init__(self, callback: Callable[..., Any], args: Tuple[Any, ...], delay: float):
        self._task_id = str(uuid.uuid4())
        self._callback = callback
        self._args = args
        self._delay = delay
        self._cancelled = False
        self._done = False
        self._cancel_hook: Optional[Callable[[], None]] = None

    @property
    def task_id(self) -> str:
        return self._task_id

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._done)

    def bind_cancel_hook(self, hook: Callable[[], None]) -> None:
        """Attach the backend call that releases the underlying timer."""
        self._cancel_hook = hook

    def cancel(self) -> bool:
        """Cancel the task; returns False if it already ran or was cancelled."""
        if not self.pending:
            return False
        self._cancelled = True
        if self._cancel_hook is not None:
            self._cancel_hook()
        return True

    def run(self) -> None:
        """Invoke the callback unless the task was cancelled."""
        if not self.pending:
            return
        self._done = True
        self._callback(*self._args)

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "done" if self._done else "pending"
        return f"TaskHandle(id={self._task_id}, delay={self._delay}, state={state})"


def _check_delay(delay: float) -> None:
    if delay < 0:
        raise SchedulingError(f"Delay must be non-negative, got {delay}",
                              details={'delay': delay})


class AsyncioScheduler(DeferredScheduler):
    """Scheduler backed by ``loop.call_later`` on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._pending: Dict[str, TaskHandle] = {}

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError as e:
            raise SchedulingError("No running event loop to schedule on") from e

    def schedule(self, delay: float, callback: Callable[..., Any], *args: Any) -> TaskHandle:
        """Run ``callback(*args)`` after ``delay`` seconds on the event loop."""
        _check_delay(delay)
        loop = self._get_loop()
        handle = TaskHandle(callback, args, delay)
        timer = loop.call_later(delay, self._fire, handle)

        def release():
            timer.cancel()
            self._pending.pop(handle.task_id, None)

        handle.bind_cancel_hook(release)
        self._pending[handle.task_id] = handle
        return handle

    def _fire(self, handle: TaskHandle) -> None:
        self._pending.pop(handle.task_id, None)
        handle.run()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def cancel_all(self) -> int:
        """Cancel every pending task."""
        return sum(1 for handle in list(self._pending.values()) if handle.cancel())

    async def wait_idle(self, poll_interval: float = 0.01, timeout: Optional[float] = None) -> None:
        """Wait until no task is pending, including ones scheduled meanwhile."""
        deadline = None if timeout is None else time.monotonic() + timeout
        while self._pending:
            if deadline is not None and time.monotonic() >= deadline:
                raise SchedulingError(
                    f"Scheduler still has {len(self._pending)} pending task(s) after {timeout}s",
                    details={'pending': len(self._pending)}
                )
            await asyncio.sleep(poll_interval)


class ManualScheduler(DeferredScheduler):
    """Virtual-clock scheduler; time only moves when ``advance`` is called."""

    def __init__(self):
        self._now = 0.0
        self._queue: List[Tuple[float, int, TaskHandle]] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def schedule(self, delay: float, callback: Callable[..., Any], *args: Any) -> TaskHandle:
        """Queue ``callback(*args)`` to run ``delay`` seconds of virtual time from now."""
        _check_delay(delay)
        handle = TaskHandle(callback, args, delay)
        heapq.heappush(self._queue, (self._now + delay, next(self._sequence), handle))
        return handle

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, handle in self._queue if handle.pending)

    def cancel_all(self) -> int:
        """Cancel every queued task."""
        cancelled = sum(1 for _, _, handle in self._queue if handle.cancel())
        self._queue.clear()
        return cancelled

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every task that falls due on the way."""
        if seconds < 0:
            raise SchedulingError("Cannot move the clock backwards", details={'seconds': seconds})
        target = self._now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if not handle.pending:
                continue
            self._now = due
            handle.run()
            ran += 1
        self._now = target
        return ran

    def run_until_idle(self) -> int:
        """Run queued tasks in due order until none remain."""
        ran = 0
        while self._queue:
            due, _, handle = heapq.heappop(self._queue)
            if not handle.pending:
                continue
            self._now = max(self._now, due)
            handle.run()
            ran += 1
        return ran
