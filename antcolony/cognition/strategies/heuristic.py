"""Hand-authored priority rules that run before the learned policy.

They bootstrap visible nest-building behaviour in early generations, before
the evolved networks are any good. When a rule fires it short-circuits the
network entirely.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from antcolony.simulation.actions import ActionType, Decision

if TYPE_CHECKING:
    from antcolony.cognition.observation import Affordances
    from antcolony.simulation.colony import Colony
    from antcolony.simulation.entities import Agent

QUEEN_BUILD_MARGIN = 1.1  # build only with 10% health to spare over the cost
QUEEN_EAT_RATIO = 0.7
WORKER_EAT_RATIO = 0.62


def heuristic_override(agent: Agent, colony: Colony, affordances: Affordances) -> Decision | None:
    """Role-specific priority rules.

    Queen:
    1. Build a nest if affordable with margin
    2. Eat if below 70% health

    Worker:
    1. Feed the queen when standing on her cell and she is hurt
    2. Eat if below 62% health

    Returns:
        The overriding Decision, or None to defer to the learned policy
    """
    ratio = agent.health_ratio

    if agent.is_queen:
        cost = colony.config.nest_cost(agent.max_health)
        if affordances.can_build and agent.health >= cost * QUEEN_BUILD_MARGIN:
            return Decision(ActionType.BUILD_NEST)
        if affordances.can_eat and ratio < QUEEN_EAT_RATIO:
            return Decision(ActionType.EAT)
        return None

    queen = colony.live_queen
    if affordances.can_share and queen is not None and queen.cell == agent.cell:
        return Decision(ActionType.SHARE_HEALTH)
    if affordances.can_eat and ratio < WORKER_EAT_RATIO:
        return Decision(ActionType.EAT)
    return None
