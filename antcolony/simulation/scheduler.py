"""Fixed-timestep driver for the simulation tick.

An external clock reports elapsed time; the scheduler runs as many ticks as
fit into the accumulated time, so simulated time keeps pace with the clock
without ever skipping a tick.
"""

from __future__ import annotations

import time
from collections.abc import Callable

MIN_TICK_SECONDS = 0.01


class TickScheduler:
    """Accumulator-based tick scheduler."""

    def __init__(self, tick: Callable[[], object], tick_seconds: float):
        """Initialize the scheduler.

        Args:
            tick: Called once per simulated tick
            tick_seconds: Simulated duration of one tick (floored at 0.01s)
        """
        self._tick = tick
        self.tick_seconds = max(MIN_TICK_SECONDS, tick_seconds)
        self.accumulator = 0.0
        self.ticks_run = 0

    def advance(self, elapsed_seconds: float) -> int:
        """Account for elapsed time and run the ticks it pays for.

        Returns:
            Number of ticks run by this call
        """
        self.accumulator += max(0.0, elapsed_seconds)
        ran = 0
        while self.accumulator >= self.tick_seconds:
            self.accumulator -= self.tick_seconds
            self._tick()
            ran += 1
        self.ticks_run += ran
        return ran

    def run_realtime(
        self,
        until: Callable[[], bool],
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Drive the scheduler from a wall clock until `until()` is true."""
        last = clock()
        while not until():
            now = clock()
            self.advance(now - last)
            last = now
            remaining = self.tick_seconds - self.accumulator
            if remaining > 0:
                sleep(remaining)
