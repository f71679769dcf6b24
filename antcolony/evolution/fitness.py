"""Generation-end fitness scoring.

Both scores are pure functions of an agent's final accumulators and of the
number of nest blocks the queen built this generation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from antcolony.simulation.entities import Agent


def queen_fitness(agent: Agent) -> float:
    """Nests dominate; survival and leftover health break ties."""
    return agent.nests_built * 95.0 + agent.steps_alive * 0.08 + agent.health * 0.35


def worker_fitness(agent: Agent, queen_nests: int) -> float:
    """Feeding, sharing and survival, plus a colony bonus for every queen nest.

    Digging is penalised so workers do not tunnel the terrain away.
    """
    return (
        agent.mulch_consumed * 4.0
        + agent.health_shared * 6.0
        + agent.steps_alive * 0.05
        + queen_nests * 4.0
        - agent.blocks_dug * 0.45
    )


def compute_fitness(agent: Agent, queen_nests: int) -> float:
    if agent.is_queen:
        return queen_fitness(agent)
    return worker_fitness(agent, queen_nests)
