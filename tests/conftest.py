"""Fixtures and configuration for pytest."""

from collections.abc import Callable

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "gpu: mark test as requiring a GPU")


class ManualScheduler:
    """Scheduler that only fires when the test says so."""

    def __init__(self) -> None:
        self.pending: Callable[[], None] | None = None
        self.requests = 0

    def request_frame(self, callback: Callable[[], None]) -> None:
        self.pending = callback
        self.requests += 1

    def fire(self, count: int = 1) -> None:
        for _ in range(count):
            assert self.pending is not None, "no frame requested"
            callback, self.pending = self.pending, None
            callback()


class StepSource:
    """Time source returning pre-programmed timestamps."""

    def __init__(self, *stamps: float) -> None:
        self.stamps = list(stamps)

    def __call__(self) -> float:
        return self.stamps.pop(0)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
