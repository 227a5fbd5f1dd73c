"""
Schedulers for one-shot delayed callbacks

State machines never sleep; they ask a Scheduler to call them back later
and keep the returned handle so the callback can be cancelled.

- AsyncioScheduler: production, backed by loop.call_later
- ManualScheduler: deterministic, driven by advance()/advance_to()
- TimerGroup: owns a set of handles and cancels them together
"""

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Set

from engine.animation_clock import Clock, ManualClock

Callback = Callable[..., Any]


class TimerHandle(ABC):
    """Cancellable handle of one scheduled callback"""

    @abstractmethod
    def cancel(self) -> None:
        ...

    @abstractmethod
    def cancelled(self) -> bool:
        ...


class Scheduler(ABC):
    """Schedules one-shot callbacks relative to its clock"""

    @abstractmethod
    def now(self) -> float:
        ...

    @abstractmethod
    def call_later(self, delay: float, callback: Callback, *args: Any) -> TimerHandle:
        ...


# ---------------------------------------------------------------------------
# ASYNCIO
# ---------------------------------------------------------------------------

class _AsyncioHandle(TimerHandle):
    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """
    Scheduler backed by the running event loop

    Must be created (or first used) while the loop is running.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time()

    def call_later(self, delay: float, callback: Callback, *args: Any) -> TimerHandle:
        return _AsyncioHandle(self.loop.call_later(max(0.0, delay), callback, *args))


class LoopClock(Clock):
    """Clock reading the event loop's monotonic time"""

    def __init__(self, scheduler: AsyncioScheduler):
        self._scheduler = scheduler

    def now(self) -> float:
        return self._scheduler.now()


# ---------------------------------------------------------------------------
# MANUAL (deterministic)
# ---------------------------------------------------------------------------

class _ManualTimer(TimerHandle):
    __slots__ = ("when", "seq", "callback", "args", "_cancelled")

    def __init__(self, when: float, seq: int, callback: Callback, args: tuple):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.args = args
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def __lt__(self, other: "_ManualTimer") -> bool:
        return (self.when, self.seq) < (other.when, other.seq)


class ManualScheduler(Scheduler):
    """
    Deterministic scheduler for tests and offline frame rendering

    Timers fire in (due time, scheduling order). While a timer fires, the
    clock reads exactly its due time, so callbacks scheduling follow-up
    timers compute their delays from the right instant.

    Example:
        scheduler = ManualScheduler()
        scheduler.call_later(2.0, print, "two")
        scheduler.advance(1.0)   # nothing
        scheduler.advance(1.0)   # prints "two"
    """

    # A zero-delay chain longer than this indicates a runaway callback loop
    MAX_FIRES_PER_ADVANCE = 100_000

    def __init__(self, clock: Optional[ManualClock] = None):
        self.clock = clock or ManualClock()
        self._queue: List[_ManualTimer] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self.clock.now()

    def call_later(self, delay: float, callback: Callback, *args: Any) -> TimerHandle:
        timer = _ManualTimer(self.now() + max(0.0, delay), next(self._seq), callback, args)
        heapq.heappush(self._queue, timer)
        return timer

    @property
    def pending(self) -> int:
        """Number of scheduled, not cancelled timers"""
        return sum(1 for timer in self._queue if not timer.cancelled())

    def advance(self, dt: float) -> int:
        """Advance the clock by dt seconds, firing due timers. Returns fire count."""
        return self.advance_to(self.now() + max(0.0, dt))

    def advance_to(self, target: float) -> int:
        """Advance the clock to an absolute time, firing due timers. Returns fire count."""
        fired = 0
        while self._queue and self._queue[0].when <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled():
                continue
            self.clock.set(max(self.now(), timer.when))
            timer.callback(*timer.args)
            fired += 1
            if fired > self.MAX_FIRES_PER_ADVANCE:
                raise RuntimeError("ManualScheduler: runaway zero-delay timer chain")
        self.clock.set(max(self.now(), target))
        return fired


# ---------------------------------------------------------------------------
# TIMER GROUP
# ---------------------------------------------------------------------------

class TimerGroup:
    """
    Set of timers owned by one component

    Fired timers drop out of the group automatically; cancel_all() cancels
    whatever is still pending.
    """

    def __init__(self, scheduler: Scheduler):
        self.scheduler = scheduler
        self._handles: Set[TimerHandle] = set()

    def schedule(self, delay: float, callback: Callback, *args: Any) -> TimerHandle:
        holder: List[TimerHandle] = []

        def fire() -> None:
            if holder:
                self._handles.discard(holder[0])
            callback(*args)

        handle = self.scheduler.call_later(delay, fire)
        holder.append(handle)
        self._handles.add(handle)
        return handle

    def cancel_all(self) -> int:
        """Cancel every pending timer, returns how many were cancelled"""
        count = 0
        for handle in list(self._handles):
            if not handle.cancelled():
                handle.cancel()
                count += 1
        self._handles.clear()
        return count

    def __len__(self) -> int:
        return sum(1 for handle in self._handles if not handle.cancelled())
