"""Generation history schemas.

Defines the structure of recorded evolution runs:
- GenerationRecord: Fitness statistics of one finished generation
- RunMetadata: Configuration and bookkeeping for an entire run
- RunHistory: Complete history from one run
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass
class GenerationRecord:
    """Statistics of one finished generation."""

    generation: int
    steps: int
    agent_count: int
    survivors: int
    queen_nests: int
    best_fitness: float
    average_fitness: float
    best_worker_fitness: float
    queen_fitness: float | None = None
    elapsed_ms: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> GenerationRecord:
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass
class RunMetadata:
    """Metadata for an entire evolution run."""

    run_id: str
    timestamp: str
    seed: int
    worker_count: int
    evaluation_steps: int
    elite_count: int
    mutation_strength: float
    world_size: tuple[int, int, int]
    generations_completed: int = 0
    config: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["world_size"] = list(self.world_size)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> RunMetadata:
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        known["world_size"] = tuple(known.get("world_size", (0, 0, 0)))
        return cls(**known)


@dataclass
class RunHistory:
    """Complete history from one run."""

    metadata: RunMetadata | None
    generations: list[GenerationRecord] = field(default_factory=list)

    @property
    def best_fitness_curve(self) -> list[float]:
        return [g.best_fitness for g in self.generations]

    @property
    def total_nests(self) -> int:
        return sum(g.queen_nests for g in self.generations)
