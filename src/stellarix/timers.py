"""Scheduling glue for component-owned timers.

Components never create free-floating timers.  Each timer lives in a
:class:`TimerGroup` owned by one component instance, is tracked by a
cancellation handle, and is cancelled when a competing transition
supersedes it or when the instance is disposed.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from stellarix.exceptions import SchedulerUnavailableError

_logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback on a future turn."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class AsyncioScheduler:
    """Schedule callbacks on an asyncio event loop.

    Without an explicit *loop* the running loop is looked up on every
    ``call_later``.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as exc:
                raise SchedulerUnavailableError(
                    "No running event loop; pass an explicit scheduler to components that use timers"
                ) from exc
        return loop.call_later(max(delay, 0.0), callback)


@dataclass(slots=True, eq=False)
class _ManualTimer:
    due: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-time scheduler driven explicitly by :meth:`advance`.

    Useful for deterministic tests and for server-side rendering where no
    event loop is running.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._seq = itertools.count()
        self._queue: list[tuple[float, int, _ManualTimer]] = []

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualTimer:
        timer = _ManualTimer(due=self._now + max(delay, 0.0), callback=callback)
        heapq.heappush(self._queue, (timer.due, next(self._seq), timer))
        return timer

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every timer that falls due.

        Timers fire in due-time order, ties in scheduling order.  Timers
        scheduled by a firing callback run in the same call if they fall
        due before the new time.  Returns the number of callbacks run.
        """
        if seconds < 0:
            raise ValueError("cannot advance a scheduler backwards")
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = due
            timer.cancelled = True
            timer.callback()
            fired += 1
        self._now = target
        return fired


class TimerGroup:
    """Keyed, instance-owned timers with explicit teardown.

    Starting a key that is already pending cancels the previous timer.
    After :meth:`dispose` no timer fires and no new timer can be started.
    """

    def __init__(self, scheduler: Scheduler | None = None, *, owner: str = "") -> None:
        self._scheduler: Scheduler = scheduler or AsyncioScheduler()
        self._owner = owner
        self._handles: dict[str, Cancellable] = {}
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def is_pending(self, key: str) -> bool:
        return key in self._handles

    def start(self, key: str, delay: float, callback: Callable[[], None]) -> None:
        if not self._active:
            _logger.debug("%s: timer %r not started, group disposed", self._owner, key)
            return
        self.cancel(key)

        def fire() -> None:
            if not self._active or self._handles.get(key) is not handle:
                return
            del self._handles[key]
            callback()

        handle = self._scheduler.call_later(delay, fire)
        self._handles[key] = handle

    def cancel(self, key: str) -> bool:
        handle = self._handles.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def cancel_all(self) -> None:
        handles = list(self._handles.values())
        self._handles.clear()
        for handle in handles:
            handle.cancel()

    def dispose(self) -> None:
        self._active = False
        self.cancel_all()
