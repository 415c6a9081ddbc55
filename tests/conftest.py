"""Shared fixtures for damper tests."""

import pytest

from damper.clock import VirtualScheduler


class Recorder:
    """Callable that records every call and returns its call number."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.kwargs: list[dict] = []

    def __call__(self, *args, **kwargs):
        self.calls.append(args)
        self.kwargs.append(kwargs)
        return len(self.calls)


@pytest.fixture
def clock():
    return VirtualScheduler()


@pytest.fixture
def recorder():
    return Recorder()
