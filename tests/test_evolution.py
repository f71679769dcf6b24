"""Tests for genomes, fitness scoring and population evolution."""

from __future__ import annotations

import random

import pytest

from antcolony.cognition.network import PARAMETER_COUNT
from antcolony.config import ColonyConfig
from antcolony.errors import ValidationError
from antcolony.evolution import (
    GeneticSystem,
    Genome,
    GenomePool,
    PopulationManager,
    compute_fitness,
    queen_fitness,
    worker_fitness,
)
from antcolony.evolution.genetics import PARAMETER_BOUND
from antcolony.simulation.colony import Colony
from antcolony.simulation.entities import Role
from tests.helpers import zero_genome


class RecordingGenetics(GeneticSystem):
    """GeneticSystem that remembers every mutation strength it was asked for."""

    def __init__(self, rng: random.Random):
        super().__init__(rng)
        self.strengths: list[float] = []

    def mutate(self, parent: Genome, strength: float) -> Genome:
        self.strengths.append(strength)
        return super().mutate(parent, strength)


class ZeroRandom(random.Random):
    """Stream whose uniform draws are always 0.0, so every chance-based branch fires."""

    def random(self) -> float:
        return 0.0


# What random_genome() yields on a ZeroRandom stream
ZERO_STREAM_GENOME = Genome((-1.0,) * PARAMETER_COUNT)


class TestGenome:
    """Test the genome value type."""

    def test_wrong_length_rejected(self):
        with pytest.raises(ValidationError):
            Genome((0.0, 1.0))

    def test_clone_is_equal_but_distinct(self):
        genome = GeneticSystem(random.Random(1)).random_genome()
        clone = genome.clone()
        assert clone == genome
        assert clone is not genome


class TestGeneticSystem:
    """Test randomisation and mutation."""

    def test_random_genome_range(self):
        genome = GeneticSystem(random.Random(1)).random_genome()
        assert len(genome) == PARAMETER_COUNT
        assert all(-1.0 <= p < 1.0 for p in genome.parameters)

    def test_same_seed_same_genome(self):
        a = GeneticSystem(random.Random(9)).random_genome()
        b = GeneticSystem(random.Random(9)).random_genome()
        assert a == b

    def test_gaussian_is_standard_normal(self):
        genetics = GeneticSystem(random.Random(2))
        samples = [genetics.gaussian() for _ in range(5000)]
        mean = sum(samples) / len(samples)
        variance = sum((s - mean) ** 2 for s in samples) / len(samples)
        assert abs(mean) < 0.1
        assert 0.85 < variance < 1.15

    def test_mutation_clamped(self):
        genetics = GeneticSystem(random.Random(3))
        child = genetics.mutate(genetics.random_genome(), 100.0)
        assert all(-PARAMETER_BOUND <= p <= PARAMETER_BOUND for p in child.parameters)
        assert any(abs(p) == PARAMETER_BOUND for p in child.parameters)

    def test_mutation_leaves_parent_untouched(self):
        genetics = GeneticSystem(random.Random(4))
        parent = genetics.random_genome()
        before = parent.parameters
        child = genetics.mutate(parent, 0.32)
        assert parent.parameters == before
        assert child != parent

    def test_zero_strength_still_drifts(self):
        genetics = GeneticSystem(random.Random(5))
        parent = zero_genome()
        child = genetics.mutate(parent, 0.0)
        assert child != parent
        assert max(abs(p) for p in child.parameters) < 0.1


class TestFitness:
    """Test generation-end scoring."""

    def test_queen_formula(self, colony: Colony):
        queen = colony.spawn(Role.QUEEN, zero_genome(), (3, 2, 3))
        queen.nests_built = 2
        queen.steps_alive = 100
        queen.health = 20.0
        assert queen_fitness(queen) == pytest.approx(2 * 95.0 + 100 * 0.08 + 20.0 * 0.35)

    def test_worker_formula(self, colony: Colony):
        worker = colony.spawn(Role.WORKER, zero_genome(), (3, 2, 3))
        worker.mulch_consumed = 3
        worker.health_shared = 1.5
        worker.steps_alive = 200
        worker.blocks_dug = 4
        expected = 3 * 4.0 + 1.5 * 6.0 + 200 * 0.05 + 2 * 4.0 - 4 * 0.45
        assert worker_fitness(worker, 2) == pytest.approx(expected)

    def test_dispatch_by_role(self, colony: Colony):
        queen = colony.spawn(Role.QUEEN, zero_genome(), (3, 2, 3))
        worker = colony.spawn(Role.WORKER, zero_genome(), (4, 2, 4))
        queen.steps_alive = worker.steps_alive = 10
        assert compute_fitness(queen, 1) == queen_fitness(queen)
        assert compute_fitness(worker, 1) == worker_fitness(worker, 1)


class TestPopulationManager:
    """Test scoring and selection at the generation boundary."""

    @pytest.fixture
    def genetics(self) -> RecordingGenetics:
        return RecordingGenetics(random.Random(11))

    @pytest.fixture
    def manager(self, genetics: RecordingGenetics, config: ColonyConfig) -> PopulationManager:
        return PopulationManager(genetics, config)

    def _scored_colony(self, colony: Colony, manager: PopulationManager, nests: int) -> Colony:
        queen = colony.spawn(Role.QUEEN, manager.genetics.random_genome(), (3, 2, 3))
        queen.nests_built = nests
        for i in range(6):
            worker = colony.spawn(Role.WORKER, manager.genetics.random_genome(), (i + 1, 2, 1))
            worker.mulch_consumed = i
        manager.score(colony, generation=1, steps=10)
        return colony

    def test_initial_pool_size(self, manager: PopulationManager):
        pool = manager.initial_pool()
        assert len(pool.workers) == 4
        assert pool.queen is not None

    def test_score_summary(self, colony: Colony, manager: PopulationManager):
        self._scored_colony(colony, manager, nests=1)
        summary = manager.score(colony, generation=3, steps=10)
        assert summary.generation == 3
        assert summary.agent_count == 7
        assert summary.survivors == 7
        assert summary.queen_nests == 1
        assert summary.best_worker_fitness == pytest.approx(5 * 4.0 + 4.0)
        assert summary.best_fitness == summary.queen_fitness

    def test_score_empty_colony(self, colony: Colony, manager: PopulationManager):
        summary = manager.score(colony, generation=1, steps=0)
        assert summary.best_fitness == 0.0
        assert summary.average_fitness == 0.0
        assert summary.queen_fitness is None

    def test_elites_survive_unchanged(self, colony: Colony, manager: PopulationManager):
        self._scored_colony(colony, manager, nests=1)
        pool = GenomePool(queen=colony.queen.genome, workers=[])
        ranked = sorted(colony.workers(), key=lambda a: a.fitness, reverse=True)

        next_pool = manager.evolve(pool, colony, queen_nests=1)

        assert len(next_pool.workers) == 4
        assert next_pool.workers[:4] == [a.genome for a in ranked[:4]]

    def test_pool_refilled_beyond_elites(self, colony: Colony, config: ColonyConfig):
        config.worker_count = 12
        config.elite_count = 2
        manager = PopulationManager(GeneticSystem(random.Random(12)), config)
        self._scored_colony(colony, manager, nests=0)
        pool = GenomePool(queen=colony.queen.genome, workers=[])

        next_pool = manager.evolve(pool, colony, queen_nests=0)

        ranked = sorted(colony.workers(), key=lambda a: a.fitness, reverse=True)
        assert len(next_pool.workers) == 12
        assert next_pool.workers[:2] == [a.genome for a in ranked[:2]]

    def test_queen_refined_after_nests(
        self, colony: Colony, manager: PopulationManager, genetics: RecordingGenetics
    ):
        self._scored_colony(colony, manager, nests=2)
        manager.evolve(GenomePool(queen=colony.queen.genome), colony, queen_nests=2)
        assert genetics.strengths[-1] == pytest.approx(0.32 * 0.25)

    def test_queen_explores_without_nests(
        self, colony: Colony, manager: PopulationManager, genetics: RecordingGenetics
    ):
        self._scored_colony(colony, manager, nests=0)
        manager.evolve(GenomePool(queen=colony.queen.genome), colony, queen_nests=0)
        assert genetics.strengths[-1] == pytest.approx(0.32 * 1.1)

    def test_missing_queen_mutates_pool_queen(
        self, colony: Colony, manager: PopulationManager, genetics: RecordingGenetics
    ):
        for i in range(6):
            colony.spawn(Role.WORKER, genetics.random_genome(), (i + 1, 2, 1))
        manager.score(colony, generation=1, steps=10)
        pool = GenomePool(queen=genetics.random_genome())

        next_pool = manager.evolve(pool, colony, queen_nests=0)

        assert genetics.strengths[-1] == pytest.approx(0.32)
        assert next_pool.queen != pool.queen

    def test_barren_queen_can_restart(self, colony: Colony, config: ColonyConfig):
        genetics = RecordingGenetics(ZeroRandom())
        manager = PopulationManager(genetics, config)
        colony.spawn(Role.QUEEN, zero_genome(), (3, 2, 3))
        for i in range(4):
            colony.spawn(Role.WORKER, zero_genome(), (i + 1, 2, 1))
        manager.score(colony, generation=1, steps=10)

        next_pool = manager.evolve(GenomePool(queen=zero_genome()), colony, queen_nests=0)

        assert genetics.strengths == [pytest.approx(0.32 * 1.1)]
        assert next_pool.queen == ZERO_STREAM_GENOME

    def test_fresh_genomes_injected(self, colony: Colony, config: ColonyConfig):
        config.worker_count = 6
        config.elite_count = 2
        genetics = RecordingGenetics(ZeroRandom())
        manager = PopulationManager(genetics, config)
        queen = colony.spawn(Role.QUEEN, zero_genome(), (3, 2, 3))
        queen.nests_built = 1
        for i in range(6):
            colony.spawn(Role.WORKER, zero_genome(), (i + 1, 2, 1))
        manager.score(colony, generation=1, steps=10)

        next_pool = manager.evolve(GenomePool(queen=zero_genome()), colony, queen_nests=1)

        # Only the queen was mutated; every non-elite slot is a fresh genome
        assert genetics.strengths == [pytest.approx(0.32 * 0.25)]
        assert next_pool.workers[:2] == [zero_genome()] * 2
        assert next_pool.workers[2:] == [ZERO_STREAM_GENOME] * 4

    def test_no_workers_gives_random_pool(self, colony: Colony, manager: PopulationManager):
        colony.spawn(Role.QUEEN, zero_genome(), (3, 2, 3))
        manager.score(colony, generation=1, steps=1)
        next_pool = manager.evolve(GenomePool(queen=zero_genome()), colony, queen_nests=0)
        assert len(next_pool.workers) == 4
        assert all(g != zero_genome() for g in next_pool.workers)

    def test_evolve_leaves_old_pool_alone(self, colony: Colony, manager: PopulationManager):
        self._scored_colony(colony, manager, nests=0)
        workers = [a.genome for a in colony.workers()]
        pool = GenomePool(queen=colony.queen.genome, workers=list(workers))
        manager.evolve(pool, colony, queen_nests=0)
        assert pool.workers == workers
