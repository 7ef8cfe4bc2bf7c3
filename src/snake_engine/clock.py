"""Millisecond clocks for driving the engine."""

from __future__ import annotations

import time


def monotonic_ms() -> float:
    """Monotonic wall-clock time in milliseconds."""
    return time.monotonic() * 1000.0


class SimulatedClock:
    """Manually advanced clock for headless runs and tests."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now = start_ms

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError("Cannot move a clock backwards.")
        self.now += ms
        return self.now
