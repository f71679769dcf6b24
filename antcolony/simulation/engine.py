"""Generation engine for the colony simulation.

Manages the generation lifecycle (spawning, running ticks, ending), owns the
genome pools and the seeded random stream, and hands finished generations
to the evolution engine.
"""

from __future__ import annotations

import enum
import logging
import random
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from antcolony.cognition.strategies.neural import NeuralPolicyStrategy
from antcolony.config import ColonyConfig
from antcolony.errors import EngineStateError
from antcolony.evolution.genetics import GeneticSystem
from antcolony.evolution.population import GenerationSummary, GenomePool, PopulationManager
from antcolony.simulation.colony import Colony
from antcolony.simulation.entities import Role
from antcolony.simulation.spawn import SpawnSearch
from antcolony.simulation.tick import TickRecord, advance_one_tick

if TYPE_CHECKING:
    from antcolony.cognition.strategies.base import DecisionStrategy
    from antcolony.metrics.timing import PerformanceMonitor
    from antcolony.simulation.terrain import Terrain
    from antcolony.trajectory.recorder import HistoryRecorder

logger = logging.getLogger(__name__)

RNG_SEED_OFFSET = 8128  # keeps the colony stream apart from terrain generation


class GenerationPhase(enum.Enum):
    """Lifecycle phase of the current generation."""

    SPAWNING = "spawning"
    RUNNING = "running"
    ENDING = "ending"


@dataclass(frozen=True)
class ColonyStatus:
    """Read-only counters for a presentation layer."""

    nest_blocks: int
    generation: int
    step: int
    evaluation_steps: int
    alive: int
    agent_count: int
    last_nest_blocks: int
    last_best_fitness: float
    last_average_fitness: float
    last_best_worker_fitness: float


@dataclass
class SimulationState:
    """Current state of the simulation."""

    generation: int = 0
    step: int = 0
    phase: GenerationPhase = GenerationPhase.SPAWNING
    started: bool = False
    history: list[GenerationSummary] = field(default_factory=list)

    @property
    def last_summary(self) -> GenerationSummary | None:
        return self.history[-1] if self.history else None


class ColonySimulation:
    """Core generation engine.

    Terrain, configuration and strategy are injected; nothing is looked up
    globally. All randomness flows from one stream seeded from the config.
    """

    def __init__(
        self,
        config: ColonyConfig | None = None,
        terrain: Terrain | None = None,
        strategy: DecisionStrategy | None = None,
        recorder: HistoryRecorder | None = None,
    ):
        self.config = config or ColonyConfig()
        if terrain is None:
            from antcolony.simulation.world import VoxelWorld

            terrain = VoxelWorld.from_config(self.config)
        self.terrain = terrain
        self.strategy = strategy or NeuralPolicyStrategy()
        self.rng = random.Random(self.config.seed + RNG_SEED_OFFSET)
        self.genetics = GeneticSystem(self.rng)
        self.population = PopulationManager(self.genetics, self.config)
        self.spawn_search = SpawnSearch(self.terrain, self.rng)
        self.state = SimulationState()
        self.pool: GenomePool | None = None
        self.colony: Colony | None = None

        # History recording (lazy init if enabled)
        self.recorder = recorder
        if self.recorder is None and self.config.history_recording:
            from antcolony.trajectory.recorder import HistoryRecorder

            self.recorder = HistoryRecorder(self.config.history_output_dir)

        # Performance monitoring (lazy init)
        self._perf_monitor: PerformanceMonitor | None = None
        self._generation_started_at = 0.0

    @property
    def perf_monitor(self) -> PerformanceMonitor:
        """Get or create performance monitor (lazy init)."""
        if self._perf_monitor is None:
            from antcolony.metrics.timing import PerformanceMonitor

            self._perf_monitor = PerformanceMonitor()
        return self._perf_monitor

    def start(self) -> None:
        """Create the initial random genome pool and spawn the first generation."""
        if self.state.started:
            raise EngineStateError("Simulation already started")
        self.pool = self.population.initial_pool()
        self.state.started = True
        if self.recorder is not None:
            self.recorder.start_run(self)
        self.start_generation()

    def start_generation(self) -> None:
        """Spawn a fresh colony from the current genome pool.

        The queen is placed first; each worker is placed near her when
        possible. A worker that cannot be placed anywhere truncates the roster
        for this generation.
        """
        if self.pool is None:
            raise EngineStateError("No genome pool; call start() first")

        if self.state.generation > 0 and self.config.reset_world_each_generation:
            self.terrain.reset_to_initial_state()

        self.state.phase = GenerationPhase.SPAWNING
        self.state.step = 0
        self.state.generation += 1
        self._generation_started_at = time.perf_counter()

        colony = Colony(self.terrain, self.config)
        occupied: set = set()

        queen_cell = self.spawn_search.find(occupied)
        if queen_cell is not None:
            occupied.add(queen_cell)
            colony.spawn(Role.QUEEN, self.pool.queen.clone(), queen_cell)

        for i, genome in enumerate(self.pool.workers):
            cell = None
            if colony.queen is not None:
                cell = self.spawn_search.find_near(colony.queen.cell, occupied)
            if cell is None:
                anchor = colony.queen.cell if colony.queen is not None else None
                cell = self.spawn_search.find(occupied, anchor=anchor)
            if cell is None:
                logger.warning(
                    f"Generation {self.state.generation}: placed only {i} of "
                    f"{len(self.pool.workers)} workers"
                )
                break
            occupied.add(cell)
            colony.spawn(Role.WORKER, genome.clone(), cell)

        if len(colony) == 0:
            logger.warning("No valid spawn cells were found for this generation")

        self.colony = colony
        self.state.phase = GenerationPhase.RUNNING

    def step(self) -> TickRecord | None:
        """Advance the simulation by one tick.

        When the evaluation budget is spent or every agent is dead, this tick
        is used to end the generation instead (and the next one is spawned).

        Returns:
            The tick record, or None if this call ended the generation
        """
        if not self.state.started or self.colony is None:
            raise EngineStateError("Simulation not started; call start() first")

        if (
            self.state.step >= self.config.effective_evaluation_steps
            or self.colony.count_living == 0
        ):
            self.end_generation()
            return None

        record = advance_one_tick(self.colony, self.strategy, self.rng, monitor=self.perf_monitor)
        self.state.step += 1
        return record

    def end_generation(self) -> GenerationSummary:
        """Score the colony, evolve the pools and spawn the next generation."""
        if self.colony is None or self.pool is None:
            raise EngineStateError("No generation in progress")

        self.state.phase = GenerationPhase.ENDING
        summary = self.population.score(self.colony, self.state.generation, self.state.step)
        self.state.history.append(summary)

        elapsed_ms = (time.perf_counter() - self._generation_started_at) * 1000
        self.perf_monitor.record_generation(summary.generation, elapsed_ms)

        logger.info(
            f"Generation {summary.generation} complete | nests={summary.queen_nests}"
            f" | best={summary.best_fitness:.2f} | avg={summary.average_fitness:.2f}"
            f" | bestWorker={summary.best_worker_fitness:.2f}"
        )
        if self.recorder is not None:
            self.recorder.record_generation(summary, elapsed_ms)

        self.pool = self.population.evolve(self.pool, self.colony, summary.queen_nests)
        self.start_generation()
        return summary

    def run_generation(self) -> GenerationSummary:
        """Tick until the current generation ends; return its summary."""
        if not self.state.started:
            self.start()
        generation = self.state.generation
        while self.state.generation == generation:
            self.step()
        return self.state.history[-1]

    def run(self, generations: int) -> list[GenerationSummary]:
        """Run a number of full generations."""
        return [self.run_generation() for _ in range(generations)]

    def close(self) -> None:
        """Finalize history recording, if any."""
        if self.recorder is not None:
            self.recorder.end_run(self)

    @property
    def status(self) -> ColonyStatus:
        """Snapshot of the display counters."""
        last = self.state.last_summary
        colony = self.colony
        return ColonyStatus(
            nest_blocks=self.terrain.nest_block_count,
            generation=self.state.generation,
            step=self.state.step,
            evaluation_steps=self.config.effective_evaluation_steps,
            alive=colony.count_living if colony is not None else 0,
            agent_count=len(colony) if colony is not None else 0,
            last_nest_blocks=last.queen_nests if last else 0,
            last_best_fitness=last.best_fitness if last else 0.0,
            last_average_fitness=last.average_fitness if last else 0.0,
            last_best_worker_fitness=last.best_worker_fitness if last else 0.0,
        )
