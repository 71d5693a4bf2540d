"""Clock abstraction driving the stop schedule and frame deltas."""
import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic time source in seconds."""

    def now(self) -> float:
        ...


class MonotonicClock:
    """Wall clock for the running host."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """
    Deterministic clock for tests and headless simulation.

    Time only moves when advance() is called.
    """

    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError(f"cannot move time backwards by {seconds}")
        self._now += seconds
        return self._now
