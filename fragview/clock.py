"""Delta clock for frame timing."""

import time
from collections.abc import Callable


class DeltaClock:
    """Reports real time elapsed since it was last queried."""

    def __init__(self, source: Callable[[], float] = time.perf_counter):
        """Initialize clock.

        Args:
            source: Monotonic time source in seconds
        """
        self._source = source
        self._start: float | None = None
        self._previous: float | None = None

    @property
    def running(self) -> bool:
        return self._start is not None

    @property
    def elapsed(self) -> float:
        """Seconds since the first query, 0 before it."""
        if self._start is None:
            return 0.0
        return max(0.0, self._source() - self._start)

    def get_delta(self) -> float:
        """Return seconds since the previous query.

        The first query starts the clock and returns 0. A source stepping
        backwards yields 0 rather than a negative delta.
        """
        now = self._source()
        if self._previous is None:
            self._start = self._previous = now
            return 0.0

        delta = now - self._previous
        self._previous = now
        return max(0.0, delta)
