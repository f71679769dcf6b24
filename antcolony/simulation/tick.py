"""One simulation tick over a colony.

advance_one_tick is the only place agents act. It is driven by the
generation engine, which is itself driven by a fixed-timestep scheduler.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from antcolony.simulation.actions import ActionResult, Decision, execute_action
from antcolony.simulation.terrain import CellKind

if TYPE_CHECKING:
    from antcolony.cognition.strategies.base import DecisionStrategy
    from antcolony.metrics.timing import PerformanceMonitor
    from antcolony.simulation.colony import Colony
    from antcolony.simulation.entities import Agent, Cell


@dataclass
class AgentTickRecord:
    """Record of one agent's turn in a tick."""

    agent_index: int
    decision: Decision | None
    result: ActionResult | None
    health_before: float
    health_after: float
    cell: Cell
    died: bool = False


@dataclass
class TickRecord:
    """Record of a single simulation tick."""

    order: list[int] = field(default_factory=list)  # roster indices, in acting order
    agent_records: list[AgentTickRecord] = field(default_factory=list)

    @property
    def deaths(self) -> list[int]:
        return [r.agent_index for r in self.agent_records if r.died]


def apply_health_decay(agent: Agent, colony: Colony) -> None:
    """Per-tick drain, doubled on acidic ground. Kills at zero."""
    drain = max(0.0, colony.config.base_health_drain)
    if colony.terrain.get_cell(*agent.cell) is CellKind.ACIDIC:
        drain *= 2.0
    agent.lose_health(drain)


def live_action_order(colony: Colony, rng: random.Random) -> list[Agent]:
    """Snapshot of the living agents in a fresh random order."""
    order = colony.living_agents()
    rng.shuffle(order)
    return order


def advance_one_tick(
    colony: Colony,
    strategy: DecisionStrategy,
    rng: random.Random,
    monitor: PerformanceMonitor | None = None,
) -> TickRecord:
    """Let every living agent decay, decide and act once.

    The acting order is materialised up front; agents killed earlier in the
    tick (by decay or by someone else's action) are skipped when their turn
    comes.
    """
    record = TickRecord()
    decision_s = 0.0
    action_s = 0.0
    tick_start = time.perf_counter()

    for agent in live_action_order(colony, rng):
        record.order.append(agent.index)
        if not agent.alive:
            continue

        health_before = agent.health
        apply_health_decay(agent, colony)
        if not agent.alive:
            record.agent_records.append(
                AgentTickRecord(
                    agent_index=agent.index,
                    decision=None,
                    result=None,
                    health_before=health_before,
                    health_after=agent.health,
                    cell=agent.cell,
                    died=True,
                )
            )
            continue

        same_cell_count = colony.count_living_at(agent.cell)

        t0 = time.perf_counter()
        decision = strategy.decide(agent, colony, same_cell_count, rng)
        t1 = time.perf_counter()
        result = execute_action(decision, agent, colony, rng)
        t2 = time.perf_counter()
        decision_s += t1 - t0
        action_s += t2 - t1

        agent.steps_alive += 1
        record.agent_records.append(
            AgentTickRecord(
                agent_index=agent.index,
                decision=decision,
                result=result,
                health_before=health_before,
                health_after=agent.health,
                cell=agent.cell,
                died=not agent.alive,
            )
        )

    if monitor is not None:
        from antcolony.metrics.timing import TickTiming

        monitor.record_tick(
            TickTiming(
                decision_ms=decision_s * 1000,
                action_execution_ms=action_s * 1000,
                total_ms=(time.perf_counter() - tick_start) * 1000,
                agents_acted=len(record.agent_records),
            )
        )
    return record
