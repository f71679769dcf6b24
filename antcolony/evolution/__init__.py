"""Neuroevolution of colony policies.

This package implements the generation-boundary mechanics:
- Genome / GeneticSystem: Policy parameter vectors, randomisation and mutation
- compute_fitness: Role-specific generation-end scoring
- PopulationManager: Elitist selection and queen exploit/explore evolution
"""

from __future__ import annotations

from antcolony.evolution.fitness import compute_fitness, queen_fitness, worker_fitness
from antcolony.evolution.genetics import GeneticSystem, Genome
from antcolony.evolution.population import GenerationSummary, GenomePool, PopulationManager

__all__ = [
    "Genome",
    "GeneticSystem",
    "GenomePool",
    "GenerationSummary",
    "PopulationManager",
    "compute_fitness",
    "queen_fitness",
    "worker_fitness",
]
