"""damper: debounce primitive for Python.

Coalesces bursts of calls into at most one real call per quiet period,
with optional leading-edge calls, a maximum wait, and abort signals.

Basic usage:

    from damper import make_debounced

    save = make_debounced(write_to_disk, 0.5, {"max_wait": 2.0})

    save(doc)     # scheduled
    save(doc)     # re-scheduled; write_to_disk runs once, 0.5s after this
    save.flush()  # or run it right now

Decorator usage:

    from damper import debounce

    @debounce(delay=0.3, leading=True)
    def refresh(query: str) -> None:
        ...
"""

from damper.clock import Cancellable, LoopScheduler, Scheduler, VirtualScheduler
from damper.config import DebounceOptions
from damper.core import Debounced, make_debounced
from damper.decorator import debounce
from damper.signal import AbortSignal

__all__ = [
    "AbortSignal",
    "Cancellable",
    "DebounceOptions",
    "Debounced",
    "LoopScheduler",
    "Scheduler",
    "VirtualScheduler",
    "debounce",
    "make_debounced",
]

__version__ = "0.1.0"
