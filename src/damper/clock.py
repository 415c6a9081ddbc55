"""Timer and clock capabilities consumed by the debounced invoker.

:class:`LoopScheduler` runs timers on the asyncio event loop.
:class:`VirtualScheduler` keeps its own clock that only moves when
:meth:`VirtualScheduler.advance` is called, which makes timing fully
deterministic.
"""

from __future__ import annotations

import heapq
import itertools
from asyncio import AbstractEventLoop, get_running_loop
from collections.abc import Callable
from typing import Any, Protocol


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Schedule-after-delay plus a monotonic clock, both in seconds."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> Cancellable: ...

    def time(self) -> float: ...


class LoopScheduler:
    """Scheduler backed by an asyncio event loop.

    The running loop is looked up on first use unless *loop* is given.
    """

    __slots__ = ("_loop",)

    def __init__(self, loop: AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> AbstractEventLoop:
        if self._loop is None:
            self._loop = get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], Any]) -> Cancellable:
        return self._get_loop().call_later(delay, callback)

    def time(self) -> float:
        return self._get_loop().time()

    def __repr__(self) -> str:
        return f"LoopScheduler(loop={self._loop!r})"


# Compact the heap once it holds this many timers and most are cancelled.
_MIN_COMPACT_SIZE = 100


class VirtualTimer:
    """Handle for a timer scheduled on a :class:`VirtualScheduler`."""

    __slots__ = ("_callback", "_scheduler", "_seq", "cancelled", "when")

    def __init__(
        self,
        when: float,
        seq: int,
        callback: Callable[[], Any],
        scheduler: VirtualScheduler | None = None,
    ) -> None:
        self.when = when
        self.cancelled = False
        self._seq = seq
        self._callback = callback
        self._scheduler = scheduler

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        if self._scheduler is not None:
            self._scheduler._timer_cancelled()

    def __lt__(self, other: VirtualTimer) -> bool:
        return (self.when, self._seq) < (other.when, other._seq)

    def __repr__(self) -> str:
        return f"VirtualTimer(when={self.when}, cancelled={self.cancelled})"


class VirtualScheduler:
    """Scheduler with a manually advanced clock.

    Example::

        clock = VirtualScheduler()
        save = make_debounced(write, 0.1, scheduler=clock)

        save("a")
        clock.advance(0.05)
        save("b")
        clock.advance(0.1)  # write("b") runs at t=0.15
    """

    __slots__ = ("_cancelled_count", "_counter", "_now", "_timers")

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._timers: list[VirtualTimer] = []
        self._cancelled_count = 0
        self._counter = itertools.count()

    @property
    def pending(self) -> int:
        """Number of timers that are scheduled and not cancelled."""
        return len(self._timers) - self._cancelled_count

    def time(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], Any]) -> VirtualTimer:
        timer = VirtualTimer(self._now + max(delay, 0.0), next(self._counter), callback, self)
        heapq.heappush(self._timers, timer)
        if len(self._timers) > _MIN_COMPACT_SIZE and self._cancelled_count * 2 > len(self._timers):
            self._compact()
        return timer

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every timer that falls due.

        Timers fire in deadline order, and the clock reads each timer's
        deadline while its callback runs. Timers scheduled by a callback
        fire too if they fall inside the advanced span. Exceptions raised
        by a callback propagate to the caller.
        """
        if seconds < 0:
            raise ValueError(f"cannot advance by a negative amount, got {seconds}")

        target = self._now + seconds
        while self._timers and self._timers[0].when <= target:
            timer = heapq.heappop(self._timers)
            timer._scheduler = None
            if timer.cancelled:
                self._cancelled_count -= 1
                continue
            self._now = timer.when
            timer._callback()
        self._now = target

    def _timer_cancelled(self) -> None:
        self._cancelled_count += 1

    def _compact(self) -> None:
        live = []
        for timer in self._timers:
            if timer.cancelled:
                timer._scheduler = None
            else:
                live.append(timer)
        heapq.heapify(live)
        self._timers = live
        self._cancelled_count = 0

    def __repr__(self) -> str:
        return f"VirtualScheduler(now={self._now}, pending={self.pending})"
