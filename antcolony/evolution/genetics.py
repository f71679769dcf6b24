"""Genetic system: policy genomes, randomisation and mutation.

A genome is the flat parameter vector of one policy network. Genomes are
immutable; the only ways to obtain a new one are fresh randomisation and
clone-then-mutate.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from antcolony.cognition.network import PARAMETER_COUNT
from antcolony.errors import ValidationError

PARAMETER_BOUND = 4.0
LARGE_MUTATION_PROBABILITY = 0.14
DRIFT_SCALE = 0.015  # fine drift sigma, relative to mutation strength
MIN_SIGMA = 0.01


@dataclass(frozen=True)
class Genome:
    """Fixed-length weight/bias vector for one policy network."""

    parameters: tuple[float, ...]

    def __post_init__(self):
        if len(self.parameters) != PARAMETER_COUNT:
            raise ValidationError(
                f"Genome needs {PARAMETER_COUNT} parameters, got {len(self.parameters)}"
            )

    def clone(self) -> Genome:
        """Independent copy for a new owner."""
        return Genome(tuple(self.parameters))

    def __len__(self) -> int:
        return len(self.parameters)


class GeneticSystem:
    """Handles genetic operations for policy evolution.

    All randomness is drawn from the injected stream so that a seeded run
    replays exactly.
    """

    def __init__(self, rng: random.Random):
        """Initialize genetic system.

        Args:
            rng: Shared seeded random stream
        """
        self.rng = rng

    def uniform(self, low: float, high: float) -> float:
        return low + self.rng.random() * (high - low)

    def gaussian(self) -> float:
        """Standard normal sample from two uniform draws (Box-Muller)."""
        u1 = max(1e-9, self.rng.random())
        u2 = self.rng.random()
        radius = math.sqrt(-2.0 * math.log(u1))
        theta = 2.0 * math.pi * u2
        return radius * math.cos(theta)

    def random_genome(self) -> Genome:
        """Fresh genome with every parameter uniform in [-1, 1)."""
        return Genome(tuple(self.uniform(-1.0, 1.0) for _ in range(PARAMETER_COUNT)))

    def mutate(self, parent: Genome, strength: float) -> Genome:
        """Clone `parent` and perturb it.

        Each parameter gets a large Gaussian kick (sigma = strength) with
        probability 0.14, always gets a small drift (sigma = 1.5% of strength),
        and is then clamped to [-4, 4].

        Args:
            parent: Genome to derive from (left untouched)
            strength: Mutation strength; floored at 0.01

        Returns:
            New mutated Genome
        """
        sigma = max(MIN_SIGMA, strength)
        child = list(parent.clone().parameters)

        for i, value in enumerate(child):
            if self.rng.random() < LARGE_MUTATION_PROBABILITY:
                value += self.gaussian() * sigma
            value += self.gaussian() * sigma * DRIFT_SCALE
            child[i] = max(-PARAMETER_BOUND, min(PARAMETER_BOUND, value))

        return Genome(tuple(child))
