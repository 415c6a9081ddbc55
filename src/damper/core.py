"""Debounced invoker: the library's single state machine."""

from __future__ import annotations

import asyncio
import inspect
import logging
from functools import update_wrapper
from types import MethodType
from typing import TYPE_CHECKING, Any

from damper.clock import LoopScheduler
from damper.config import DebounceOptions

if TYPE_CHECKING:
    from collections.abc import Callable

    from damper.clock import Cancellable, Scheduler

logger = logging.getLogger(__name__)

_PendingCall = tuple[tuple[Any, ...], dict[str, Any]]


class Debounced:
    """Callable wrapper that coalesces bursts of calls to *func*.

    How it works:
        - Every call records its arguments and re-arms a ``delay`` timer,
          so the timer always measures from the latest call.
        - When the timer fires, ``func`` runs with the latest arguments
          (``trailing``), then all pending state is cleared.
        - ``leading`` runs ``func`` at once on the first call of a window.
        - ``max_wait`` forces a run when a window has stayed open that long,
          even while calls keep re-arming the timer.

    Calls that do not run ``func`` return the result of the last real run.

    Example::

        delay=0.1, default options

        t=0.00 save(1)   -> record (1,), arm timer for t=0.10
        t=0.05 save(2)   -> record (2,), re-arm timer for t=0.15
        t=0.15 timer     -> write(2), result cached

    With ``leading`` and ``trailing`` both enabled a single call runs
    ``func`` once; it takes a second call within the window to get a
    trailing run as well.

    Exceptions raised by ``func`` propagate out of whatever triggered the
    run (a call, the timer, or :meth:`flush`). Pending state is cleared
    before ``func`` runs, so a failure leaves the invoker ready for a
    fresh window.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        delay: float = 0.0,
        options: DebounceOptions | Any = None,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")

        update_wrapper(self, func)

        self._func = func
        self._delay = delay
        self._options = DebounceOptions.coerce(options)
        self._scheduler: Scheduler = scheduler or LoopScheduler()

        self._pending: _PendingCall | None = None
        self._timer: Cancellable | None = None
        self._window_start: float | None = None
        self._result: Any = None

        if self._options.signal is not None:
            self._options.signal.add_listener(self._on_abort)

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def options(self) -> DebounceOptions:
        return self._options

    @property
    def pending(self) -> bool:
        """Whether an invocation is currently owed."""
        return self._pending is not None

    @property
    def result(self) -> Any:
        """Return value of the last real invocation."""
        return self._result

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        signal = self._options.signal
        if signal is not None and signal.aborted:
            return None

        self._pending = (args, kwargs)

        max_wait = self._options.max_wait
        if max_wait is not None:
            now = self._scheduler.time()
            if self._window_start is None:
                self._window_start = now
            elif now - self._window_start >= max_wait:
                logger.debug("max_wait of %ss reached, invoking %r", max_wait, self._func)
                self._window_start = now
                self._invoke(args, kwargs)

        first_call = self._timer is None

        if self._timer is not None:
            self._timer.cancel()

        self._timer = self._scheduler.call_later(self._delay, self._on_timer)

        if self._options.leading and first_call:
            logger.debug("Leading edge, invoking %r", self._func)
            self._invoke(args, kwargs)

        return self._result

    def cancel(self) -> None:
        """Drop any pending invocation and disarm the timer."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        self._pending = None
        self._window_start = None

    def flush(self) -> Any:
        """Run the pending invocation now, if any, and return the last result."""
        pending = self._pending
        self.cancel()
        if pending is not None:
            logger.debug("Flushing pending call to %r", self._func)
            self._invoke(*pending)
        return self._result

    def _on_timer(self) -> None:
        self._timer = None
        pending = self._pending
        self.cancel()
        if self._options.trailing and pending is not None:
            logger.debug("Trailing edge, invoking %r", self._func)
            self._invoke(*pending)

    def _on_abort(self) -> None:
        logger.debug("Signal aborted, disabling debounced %r", self._func)
        self.cancel()

    def _invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        self._pending = None
        result = self._func(*args, **kwargs)
        # Awaitables are stored as tasks; the timer cannot await them and
        # suppressed callers all share the one cached result.
        if inspect.isawaitable(result):
            result = asyncio.ensure_future(result)
        self._result = result

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return MethodType(self, instance)

    def __repr__(self) -> str:
        return (
            f"Debounced(func={self._func!r}, "
            f"delay={self._delay}, "
            f"leading={self._options.leading}, "
            f"trailing={self._options.trailing}, "
            f"max_wait={self._options.max_wait}, "
            f"pending={self.pending})"
        )


def make_debounced(
    func: Callable[..., Any],
    delay: float = 0.0,
    options: DebounceOptions | Any = None,
    *,
    scheduler: Scheduler | None = None,
) -> Debounced:
    """Create a debounced version of *func*.

    Args:
        func: The callable to debounce.
        delay: Quiet period in seconds, measured from the latest call.
        options: A :class:`DebounceOptions`, or a mapping with any of the keys
            ``leading``, ``trailing``, ``max_wait`` and ``signal``. Any other
            value is treated as "use the defaults".
        scheduler: Timer and clock source. Defaults to the running asyncio
            event loop.
    """
    return Debounced(func, delay, options, scheduler=scheduler)
