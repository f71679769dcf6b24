"""Entities in the simulation: colony members and their per-generation stats.

An Agent lives for exactly one generation. Only its genome can carry over,
through cloning and mutation in the evolution engine.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from antcolony.evolution.genetics import Genome

Cell = tuple[int, int, int]


class Role(enum.Enum):
    """Colony roles."""

    QUEEN = "queen"
    WORKER = "worker"


@dataclass
class Agent:
    """One colony member standing on a terrain cell."""

    role: Role
    genome: Genome
    cell: Cell
    max_health: float
    health: float = field(default=-1.0)
    alive: bool = True
    index: int = 0  # position in the colony roster

    # Per-generation accumulators
    steps_alive: int = 0
    mulch_consumed: int = 0
    blocks_dug: int = 0
    nests_built: int = 0
    health_shared: float = 0.0
    fitness: float = 0.0

    def __post_init__(self):
        if self.health < 0:
            self.health = self.max_health

    @property
    def is_queen(self) -> bool:
        return self.role is Role.QUEEN

    @property
    def health_ratio(self) -> float:
        return self.health / self.max_health if self.max_health > 0 else 0.0

    def lose_health(self, amount: float) -> None:
        """Subtract health; the agent dies the moment it reaches zero."""
        self.health -= amount
        if self.health <= 0:
            self.die()

    def gain_health(self, amount: float) -> None:
        """Add health, capped at max_health."""
        self.health = min(self.max_health, self.health + amount)

    def die(self) -> None:
        """Mark the agent as dead for the rest of the generation."""
        if not self.alive:
            return
        self.alive = False
        self.health = 0.0
