"""Decorator API for debouncing functions and methods."""

from collections.abc import Callable
from typing import Any, overload

from damper.clock import Scheduler
from damper.config import DebounceOptions
from damper.core import Debounced
from damper.signal import AbortSignal


@overload
def debounce(
    func: Callable[..., Any],
    /,
) -> Debounced: ...


@overload
def debounce(
    *,
    delay: float = 0.0,
    leading: bool = False,
    trailing: bool = True,
    max_wait: float | None = None,
    signal: AbortSignal | None = None,
    scheduler: Scheduler | None = None,
) -> Callable[[Callable[..., Any]], Debounced]: ...


def debounce(
    func: Callable[..., Any] | None = None,
    /,
    *,
    delay: float = 0.0,
    leading: bool = False,
    trailing: bool = True,
    max_wait: float | None = None,
    signal: AbortSignal | None = None,
    scheduler: Scheduler | None = None,
) -> Debounced | Callable[[Callable[..., Any]], Debounced]:
    """Decorator that debounces calls to a function.

    The decorated object is a :class:`~damper.core.Debounced`: calling it
    schedules the real call, and it exposes ``cancel()`` and ``flush()``.
    Applied to a method, all instances share one invocation timeline and
    the instance is passed through as the first argument.

    Args:
        func: The function to decorate (when used without parentheses).
        delay: Quiet period in seconds, measured from the latest call.
        leading: Invoke on the first call of a window.
        trailing: Invoke after the quiet period with the latest arguments.
        max_wait: Maximum deferral in seconds, or None for no limit.
        signal: Abort signal that permanently disables the function.
        scheduler: Timer and clock source; defaults to the running loop.

    Examples:
    ```python
        # With parentheses
        @debounce(delay=0.3, leading=True)
        def refresh(query: str) -> None:
            ...

        # Without parentheses (zero delay, trailing edge)
        @debounce
        def refresh(query: str) -> None:
            ...
    ```
    """
    options = DebounceOptions(leading=leading, trailing=trailing, max_wait=max_wait, signal=signal)

    def decorator(fn: Callable[..., Any]) -> Debounced:
        return Debounced(fn, delay, options, scheduler=scheduler)

    if func is not None:
        return decorator(func)

    return decorator
