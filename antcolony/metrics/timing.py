"""Performance timing instrumentation for colony runs."""

from collections import defaultdict
from dataclasses import dataclass


@dataclass
class TickTiming:
    """Timing breakdown for a single tick."""

    decision_ms: float = 0.0
    action_execution_ms: float = 0.0
    total_ms: float = 0.0
    agents_acted: int = 0


class PerformanceMonitor:
    """Tracks per-phase tick timing and per-generation durations.

    Ticks are folded into running totals as they arrive, so memory stays
    flat however long the run is.
    """

    def __init__(self):
        self._generation_ms: dict[int, float] = defaultdict(float)
        self.reset_ticks()

    def record_tick(self, timing: TickTiming) -> None:
        self._tick_count += 1
        self._total_ms += timing.total_ms
        self._decision_ms += timing.decision_ms
        self._action_ms += timing.action_execution_ms
        self._slowest_ms = max(self._slowest_ms, timing.total_ms)
        self._agents_acted += timing.agents_acted

    def record_generation(self, generation: int, duration_ms: float) -> None:
        self._generation_ms[generation] += duration_ms

    def generation_ms(self, generation: int) -> float:
        return self._generation_ms.get(generation, 0.0)

    def reset_ticks(self) -> None:
        self._tick_count = 0
        self._total_ms = 0.0
        self._decision_ms = 0.0
        self._action_ms = 0.0
        self._slowest_ms = 0.0
        self._agents_acted = 0

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def summary(self) -> dict:
        if not self._tick_count:
            return {}
        n = self._tick_count
        return {
            "total_ticks": n,
            "avg_tick_ms": self._total_ms / n,
            "avg_decision_ms": self._decision_ms / n,
            "avg_action_ms": self._action_ms / n,
            "slowest_tick_ms": self._slowest_ms,
            "avg_agents_per_tick": self._agents_acted / n,
            "generations_timed": len(self._generation_ms),
        }
