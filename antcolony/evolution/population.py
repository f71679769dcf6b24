"""Population management: genome pools, scoring and selection.

Orchestrates the generation boundary:
- Scores every agent of the finished generation
- Keeps the top workers as elites
- Refills the worker pool from elites by mutation, with fresh-genome injection
- Evolves the queen genome depending on whether she built anything
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from antcolony.evolution.fitness import compute_fitness

if TYPE_CHECKING:
    from antcolony.config import ColonyConfig
    from antcolony.evolution.genetics import GeneticSystem, Genome
    from antcolony.simulation.colony import Colony

logger = logging.getLogger(__name__)

FRESH_GENOME_RATE = 0.15
QUEEN_EXPLOIT_SCALE = 0.25  # queen built nests: refine
QUEEN_EXPLORE_SCALE = 1.1  # queen built nothing: explore
QUEEN_RESTART_RATE = 0.3  # queen built nothing: chance of a fresh genome


@dataclass
class GenomePool:
    """The genomes the next generation is spawned from."""

    queen: Genome
    workers: list[Genome] = field(default_factory=list)


@dataclass
class GenerationSummary:
    """Fitness statistics of one finished generation."""

    generation: int
    steps: int
    agent_count: int
    survivors: int
    queen_nests: int
    best_fitness: float
    average_fitness: float
    best_worker_fitness: float
    queen_fitness: float | None = None


class PopulationManager:
    """Scores generations and derives the next genome pool."""

    def __init__(self, genetics: GeneticSystem, config: ColonyConfig):
        """Initialize population manager.

        Args:
            genetics: GeneticSystem for randomisation and mutation
            config: Supplies worker count, elite count and mutation strength
        """
        self.genetics = genetics
        self.config = config

    def initial_pool(self) -> GenomePool:
        """Fully random pool for the first generation."""
        workers = [self.genetics.random_genome() for _ in range(self.config.effective_worker_count)]
        return GenomePool(queen=self.genetics.random_genome(), workers=workers)

    def score(self, colony: Colony, generation: int, steps: int) -> GenerationSummary:
        """Assign fitness to every agent, dead or alive.

        Returns:
            Summary statistics; best/average are 0.0 for an empty colony
        """
        queen = colony.queen
        queen_nests = queen.nests_built if queen is not None else 0

        agents = colony.all_agents()
        for agent in agents:
            agent.fitness = compute_fitness(agent, queen_nests)

        scores = [a.fitness for a in agents]
        worker_scores = [a.fitness for a in agents if not a.is_queen]
        return GenerationSummary(
            generation=generation,
            steps=steps,
            agent_count=len(agents),
            survivors=colony.count_living,
            queen_nests=queen_nests,
            best_fitness=max(scores) if scores else 0.0,
            average_fitness=sum(scores) / len(scores) if scores else 0.0,
            best_worker_fitness=max(worker_scores) if worker_scores else 0.0,
            queen_fitness=queen.fitness if queen is not None else None,
        )

    def evolve(self, pool: GenomePool, colony: Colony, queen_nests: int) -> GenomePool:
        """Derive the next pool from a scored colony.

        Args:
            pool: The pool the finished generation was spawned from
            colony: The finished, scored generation
            queen_nests: Nest blocks the queen built this generation

        Returns:
            New GenomePool; `pool` is left untouched
        """
        workers = sorted(colony.workers(), key=lambda a: a.fitness, reverse=True)
        worker_count = self.config.effective_worker_count
        elite_count = max(1, min(self.config.elite_count, worker_count))
        strength = self.config.mutation_strength

        next_workers: list[Genome] = []
        if not workers:
            logger.debug("No workers survived to scoring; refilling with random genomes")
            next_workers = [self.genetics.random_genome() for _ in range(worker_count)]
        else:
            elites = min(elite_count, len(workers))
            next_workers = [workers[i].genome.clone() for i in range(elites)]

            while len(next_workers) < worker_count:
                if self.genetics.rng.random() < FRESH_GENOME_RATE:
                    next_workers.append(self.genetics.random_genome())
                    continue
                parent = next_workers[self.genetics.rng.randrange(elites)]
                next_workers.append(self.genetics.mutate(parent, strength))

        queen = colony.queen
        if queen is None:
            next_queen = self.genetics.mutate(pool.queen, strength)
        else:
            scale = QUEEN_EXPLOIT_SCALE if queen_nests > 0 else QUEEN_EXPLORE_SCALE
            next_queen = self.genetics.mutate(queen.genome, strength * scale)
            if queen_nests == 0 and self.genetics.rng.random() < QUEEN_RESTART_RATE:
                logger.debug("Queen built no nests; restarting from a random genome")
                next_queen = self.genetics.random_genome()

        return GenomePool(queen=next_queen, workers=next_workers)
