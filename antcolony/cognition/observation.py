"""Observation vector fed to the policy network."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from antcolony.cognition.network import DIRECTION_COUNT, OBSERVATION_SIZE
from antcolony.simulation.terrain import CellKind, is_solid

if TYPE_CHECKING:
    from antcolony.simulation.actions import MoveOption
    from antcolony.simulation.colony import Colony
    from antcolony.simulation.entities import Agent


@dataclass
class Affordances:
    """Which actions are currently possible for an agent."""

    can_eat: bool = False
    can_dig: bool = False
    can_share: bool = False
    can_build: bool = False
    valid_moves: int = 0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def build_observation(
    agent: Agent,
    colony: Colony,
    same_cell_count: int,
    affordances: Affordances,
    moves: list[MoveOption],
) -> list[float]:
    """Encode the agent's situation as OBSERVATION_SIZE floats.

    Layout:
        0-1   health ratio and its complement
        2     is queen
        3     crowding on the current cell
        4-7   standing on mulch / acidic / nest / other solid
        8-11  can eat / dig / share / build
        12    fraction of valid move directions
        13-15 distance and x/z offset to the queen (workers only)
        16-19 height change per valid direction
        20-23 mulch at destination per valid direction
    """
    obs = [0.0] * OBSERVATION_SIZE
    kind = colony.terrain.get_cell(*agent.cell)

    obs[0] = _clamp(agent.health_ratio, 0.0, 1.0)
    obs[1] = 1.0 - obs[0]
    obs[2] = 1.0 if agent.is_queen else 0.0
    obs[3] = _clamp((same_cell_count - 1) / 4, 0.0, 1.0)
    obs[4] = 1.0 if kind is CellKind.MULCH else 0.0
    obs[5] = 1.0 if kind is CellKind.ACIDIC else 0.0
    obs[6] = 1.0 if kind is CellKind.NEST else 0.0
    obs[7] = (
        1.0
        if is_solid(kind) and kind not in (CellKind.MULCH, CellKind.ACIDIC, CellKind.NEST)
        else 0.0
    )
    obs[8] = 1.0 if affordances.can_eat else 0.0
    obs[9] = 1.0 if affordances.can_dig else 0.0
    obs[10] = 1.0 if affordances.can_share else 0.0
    obs[11] = 1.0 if affordances.can_build else 0.0
    obs[12] = affordances.valid_moves / DIRECTION_COUNT

    queen = colony.live_queen
    if not agent.is_queen and queen is not None:
        dx = queen.cell[0] - agent.cell[0]
        dz = queen.cell[2] - agent.cell[2]
        dist = abs(dx) + abs(dz) + abs(queen.cell[1] - agent.cell[1])
        obs[13] = _clamp(dist / 30, 0.0, 1.0)
        obs[14] = _clamp(dx / 10, -1.0, 1.0)
        obs[15] = _clamp(dz / 10, -1.0, 1.0)

    for i, option in enumerate(moves):
        if not option.valid:
            continue
        obs[16 + i] = _clamp((option.cell[1] - agent.cell[1]) / 2, -1.0, 1.0)
        obs[20 + i] = 1.0 if option.kind is CellKind.MULCH else 0.0

    return obs
