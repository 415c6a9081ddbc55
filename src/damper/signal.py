"""One-shot cancellation signal."""

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Listener = Callable[[], Any]


class AbortSignal:
    """Observable that transitions once from active to aborted.

    Listeners are one-time: :meth:`abort` notifies each of them in
    registration order and then drops every registration.

    Example::

        signal = AbortSignal()
        save = make_debounced(write_to_disk, 0.5, {"signal": signal})

        save(doc)
        signal.abort()  # pending write is discarded, save() is now a no-op
    """

    __slots__ = ("_aborted", "_listeners", "_reason")

    def __init__(self) -> None:
        self._aborted = False
        self._reason: Any = None
        self._listeners: list[Listener] = []

    @property
    def aborted(self) -> bool:
        return self._aborted

    @property
    def reason(self) -> Any:
        return self._reason

    @property
    def listener_count(self) -> int:
        """Number of listeners still waiting for the abort."""
        return len(self._listeners)

    def add_listener(self, listener: Listener) -> None:
        """Register *listener* to run once on abort (no-op if already aborted)."""
        if self._aborted:
            return
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def abort(self, reason: Any = None) -> None:
        """Abort the signal and notify listeners. Later calls do nothing.

        Every listener runs even if an earlier one raises. The first
        exception is re-raised once all listeners have run; any further
        ones are logged.
        """
        if self._aborted:
            return
        self._aborted = True
        self._reason = reason
        listeners, self._listeners = self._listeners, []
        failure: Exception | None = None
        for listener in listeners:
            try:
                listener()
            except Exception as exc:
                if failure is None:
                    failure = exc
                else:
                    logger.exception("Abort listener %r failed", listener)
        if failure is not None:
            raise failure

    def __repr__(self) -> str:
        return f"AbortSignal(aborted={self._aborted}, listeners={len(self._listeners)})"
