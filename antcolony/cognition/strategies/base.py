"""Base protocol for decision-making strategies."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from antcolony.simulation.actions import Decision
    from antcolony.simulation.colony import Colony
    from antcolony.simulation.entities import Agent


@runtime_checkable
class DecisionStrategy(Protocol):
    """Protocol that any per-tick decision strategy must implement.

    Strategies can be:
    - NeuralPolicyStrategy (heuristic overrides, then the evolved network)
    - scripted strategies in tests
    """

    def decide(
        self, agent: Agent, colony: Colony, same_cell_count: int, rng: random.Random
    ) -> Decision:
        """Given the agent's situation, what does it do this tick?"""
        ...
