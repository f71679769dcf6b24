"""Shared test doubles and world builders for the antcolony test suite.

These are dataclass-based test doubles, not unittest.mock.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from antcolony.cognition.network import PARAMETER_COUNT
from antcolony.evolution.genetics import Genome
from antcolony.simulation.actions import ActionType, Decision
from antcolony.simulation.terrain import CellKind
from antcolony.simulation.world import VoxelWorld


def make_flat_world(
    size_x: int = 8,
    size_y: int = 6,
    size_z: int = 8,
    top: int = 2,
    kind: CellKind = CellKind.GRASS,
) -> VoxelWorld:
    """World where every column is solid `kind` from y=0 up to `top`."""
    world = VoxelWorld(size_x, size_y, size_z, generate=False)
    for x in range(size_x):
        for z in range(size_z):
            world.fill_column(x, z, top, kind)
    world.snapshot_as_initial()
    return world


def zero_genome() -> Genome:
    """Genome whose network outputs all-zero logits."""
    return Genome((0.0,) * PARAMETER_COUNT)


def genome_with(values: dict[int, float]) -> Genome:
    """Zero genome with selected parameters overridden."""
    params = [0.0] * PARAMETER_COUNT
    for index, value in values.items():
        params[index] = value
    return Genome(tuple(params))


@dataclass
class ScriptedStrategy:
    """Returns the same decision every tick and remembers who asked."""

    decision: Decision = field(default_factory=lambda: Decision(ActionType.IDLE))
    calls: list = field(default_factory=list)

    def decide(self, agent, colony, same_cell_count, rng) -> Decision:
        self.calls.append((agent.index, same_cell_count))
        return self.decision
