"""Colony roster: the generation's agents and the world they share."""

from __future__ import annotations

from typing import TYPE_CHECKING

from antcolony.errors import ValidationError
from antcolony.simulation.entities import Agent, Cell, Role

if TYPE_CHECKING:
    from antcolony.config import ColonyConfig
    from antcolony.evolution.genetics import Genome
    from antcolony.simulation.terrain import Terrain


def cell_distance(a: Cell, b: Cell) -> int:
    """Manhattan distance between two cells."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) + abs(a[2] - b[2])


class Colony:
    """Single source of truth for one generation's agents.

    Agents are kept in spawn order (queen first when placed) and are never
    removed mid-generation; dead agents stay in the roster with alive=False
    so their final stats can be scored.
    """

    def __init__(self, terrain: Terrain, config: ColonyConfig):
        self.terrain = terrain
        self.config = config
        self._agents: list[Agent] = []
        self._queen: Agent | None = None

    def spawn(self, role: Role, genome: Genome, cell: Cell) -> Agent:
        """Add a new agent at full health."""
        if role is Role.QUEEN and self._queen is not None:
            raise ValidationError("A colony can only hold one queen per generation")
        max_health = (
            self.config.queen_max_health if role is Role.QUEEN else self.config.worker_max_health
        )
        agent = Agent(
            role=role,
            genome=genome,
            cell=cell,
            max_health=max_health,
            index=len(self._agents),
        )
        self._agents.append(agent)
        if role is Role.QUEEN:
            self._queen = agent
        return agent

    @property
    def queen(self) -> Agent | None:
        """The generation's queen, alive or dead."""
        return self._queen

    @property
    def live_queen(self) -> Agent | None:
        if self._queen is not None and self._queen.alive:
            return self._queen
        return None

    def all_agents(self) -> list[Agent]:
        """All agents including dead (for scoring)."""
        return list(self._agents)

    def living_agents(self) -> list[Agent]:
        """All living agents, in spawn order."""
        return [a for a in self._agents if a.alive]

    def workers(self) -> list[Agent]:
        return [a for a in self._agents if a.role is Role.WORKER]

    def occupied_cells(self) -> set[Cell]:
        return {a.cell for a in self._agents}

    def count_living_at(self, cell: Cell) -> int:
        """Number of living agents standing on a cell."""
        return sum(1 for a in self._agents if a.alive and a.cell == cell)

    def co_located(self, agent: Agent) -> list[Agent]:
        """Other living agents on the same cell as `agent`, in spawn order."""
        return [a for a in self._agents if a.alive and a is not agent and a.cell == agent.cell]

    def workers_within_radius(self, cell: Cell, radius: int) -> int:
        """Living workers within Manhattan `radius` of a cell."""
        return sum(
            1
            for a in self._agents
            if a.alive and a.role is Role.WORKER and cell_distance(cell, a.cell) <= radius
        )

    @property
    def count_living(self) -> int:
        return sum(1 for a in self._agents if a.alive)

    @property
    def count_dead(self) -> int:
        return len(self._agents) - self.count_living

    def __len__(self) -> int:
        return len(self._agents)
