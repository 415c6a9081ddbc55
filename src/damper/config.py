"""Configuration types for the damper library."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from damper.signal import AbortSignal


@dataclass(frozen=True, slots=True)
class DebounceOptions:
    """Options for a debounced callable.

    Attributes:
        leading: Invoke immediately on the first call of a new pending window.
        trailing: Invoke once the delay elapses after the most recent call,
                  using that call's arguments.
        max_wait: Maximum time in seconds a pending invocation can be deferred
                  while calls keep arriving. None means no maximum wait.
        signal: Optional :class:`~damper.signal.AbortSignal`. Once it aborts,
                the debounced callable is permanently disabled.
    """

    leading: bool = False
    trailing: bool = True
    max_wait: float | None = None
    signal: AbortSignal | None = None

    def __post_init__(self) -> None:
        if self.max_wait is not None and self.max_wait < 0:
            raise ValueError(f"max_wait must be non-negative or None, got {self.max_wait}")

    @classmethod
    def coerce(cls, value: Any) -> DebounceOptions:
        """Turn *value* into options.

        Mappings contribute their recognized keys; anything that is neither
        options nor a mapping (``None``, numbers, strings) yields the defaults.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            known = {f.name for f in fields(cls)}
            return cls(**{k: v for k, v in value.items() if k in known})
        return cls()
