"""Decision strategies for colony agents."""

from __future__ import annotations

from antcolony.cognition.strategies.base import DecisionStrategy
from antcolony.cognition.strategies.heuristic import heuristic_override
from antcolony.cognition.strategies.neural import NeuralPolicyStrategy

__all__ = [
    "DecisionStrategy",
    "NeuralPolicyStrategy",
    "heuristic_override",
]
