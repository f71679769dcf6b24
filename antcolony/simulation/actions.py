"""Action definitions and execution for the colony simulation.

Each action has a precondition predicate and an executor. Executors re-check
their precondition against the current world, since an agent acting earlier
in the same tick may have changed the terrain or the occupancy of a cell.
Nothing here raises: an action either applies fully or is a no-op.
"""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from antcolony.simulation.colony import cell_distance
from antcolony.simulation.terrain import CellKind, find_top_solid_y, is_solid

if TYPE_CHECKING:
    from antcolony.simulation.colony import Colony
    from antcolony.simulation.entities import Agent, Cell
    from antcolony.simulation.terrain import Terrain

MAX_STEP_HEIGHT = 2
QUEEN_SHARE_MIN_DONOR_RATIO = 0.35


class ActionType(enum.Enum):
    """All possible action types, valued by their policy output index."""

    IDLE = 0
    MOVE = 1
    DIG = 2
    EAT = 3
    SHARE_HEALTH = 4
    BUILD_NEST = 5


class Direction(enum.Enum):
    """Cardinal directions for movement as (dx, dz), in policy output order."""

    EAST = (1, 0)
    WEST = (-1, 0)
    NORTH = (0, 1)
    SOUTH = (0, -1)


DIRECTIONS: list[Direction] = list(Direction)


@dataclass
class Decision:
    """What an agent chose to do this tick."""

    action: ActionType
    direction: Direction | None = None  # for MOVE


@dataclass
class ActionResult:
    """The result of executing a decision."""

    decision: Decision
    success: bool
    message: str


@dataclass
class MoveOption:
    """Feasibility of moving one step in a direction."""

    direction: Direction
    valid: bool = False
    cell: Cell | None = None
    kind: CellKind | None = None


def scan_moves(agent: Agent, terrain: Terrain) -> list[MoveOption]:
    """Evaluate all four directions from the agent's cell.

    A destination is valid when its column is inside the world rim, its top
    solid cell (y >= 1) is within MAX_STEP_HEIGHT of the agent's y, and that
    top cell is not a container.
    """
    x, y, z = agent.cell
    options = []
    for direction in DIRECTIONS:
        dx, dz = direction.value
        nx, nz = x + dx, z + dz
        option = MoveOption(direction=direction)
        if 0 < nx < terrain.size_x - 1 and 0 < nz < terrain.size_z - 1:
            ny = find_top_solid_y(terrain, nx, nz)
            if ny >= 1 and abs(ny - y) <= MAX_STEP_HEIGHT:
                kind = terrain.get_cell(nx, ny, nz)
                if kind is not CellKind.CONTAINER:
                    option.valid = True
                    option.cell = (nx, ny, nz)
                    option.kind = kind
        options.append(option)
    return options


def standing_on(agent: Agent, terrain: Terrain) -> CellKind:
    return terrain.get_cell(*agent.cell)


# --- Preconditions ---------------------------------------------------------


def can_dig(agent: Agent, terrain: Terrain) -> bool:
    if agent.is_queen or not agent.alive:
        return False
    kind = standing_on(agent, terrain)
    return is_solid(kind) and kind not in (CellKind.CONTAINER, CellKind.NEST, CellKind.MULCH)


def can_eat(agent: Agent, terrain: Terrain, same_cell_count: int) -> bool:
    """Mulch can only be eaten by an agent that is alone on its cell."""
    if not agent.alive or same_cell_count > 1:
        return False
    return standing_on(agent, terrain) is CellKind.MULCH


def can_share_health(donor: Agent, colony: Colony, same_cell_count: int) -> bool:
    if not donor.alive or donor.is_queen or donor.health <= 1:
        return False
    if same_cell_count <= 1:
        return False

    queen = colony.live_queen
    if queen is not None and queen.cell == donor.cell and queen.health < queen.max_health:
        return donor.health > donor.max_health * QUEEN_SHARE_MIN_DONOR_RATIO

    return any(other.health < donor.health - 1 for other in colony.co_located(donor))


def can_build_nest(agent: Agent, colony: Colony) -> bool:
    if agent is None or not agent.alive or not agent.is_queen:
        return False
    if agent.health < colony.config.nest_cost(agent.max_health):
        return False
    kind = standing_on(agent, colony.terrain)
    return is_solid(kind) and kind not in (CellKind.CONTAINER, CellKind.NEST)


def find_share_receiver(donor: Agent, colony: Colony) -> Agent | None:
    """The queen if she is here and hurt, else the weakest co-located agent."""
    queen = colony.live_queen
    if queen is not None and queen.cell == donor.cell and queen.health < queen.max_health:
        return queen

    receiver = None
    for other in colony.co_located(donor):
        if receiver is None or other.health < receiver.health:
            receiver = other
    return receiver


# --- Execution -------------------------------------------------------------


def execute_action(
    decision: Decision, agent: Agent, colony: Colony, rng: random.Random
) -> ActionResult:
    """Execute a decision and return the result."""
    match decision.action:
        case ActionType.MOVE:
            return _execute_move(decision, agent, colony, rng)
        case ActionType.DIG:
            return _execute_dig(decision, agent, colony)
        case ActionType.EAT:
            return _execute_eat(decision, agent, colony)
        case ActionType.SHARE_HEALTH:
            return _execute_share_health(decision, agent, colony)
        case ActionType.BUILD_NEST:
            return _execute_build_nest(decision, agent, colony)
        case _:
            return ActionResult(decision=decision, success=True, message="Idled.")


def _execute_move(
    decision: Decision, agent: Agent, colony: Colony, rng: random.Random
) -> ActionResult:
    """Move one step, preferring the movement heuristic over the requested direction."""
    options = scan_moves(agent, colony.terrain)
    valid = [o for o in options if o.valid]
    if not valid:
        return ActionResult(decision=decision, success=False, message="No valid direction.")

    preferred = heuristic_direction(agent, colony, options)
    if preferred is None:
        preferred = decision.direction

    chosen = None
    if preferred is not None:
        option = options[DIRECTIONS.index(preferred)]
        if option.valid:
            chosen = option
    if chosen is None:
        chosen = valid[rng.randrange(len(valid))]

    agent.cell = chosen.cell
    return ActionResult(
        decision=decision,
        success=True,
        message=f"Moved {chosen.direction.name.lower()} to {chosen.cell}.",
    )


def _execute_dig(decision: Decision, agent: Agent, colony: Colony) -> ActionResult:
    if not can_dig(agent, colony.terrain):
        return ActionResult(decision=decision, success=False, message="Cannot dig here.")

    x, y, z = agent.cell
    colony.terrain.set_cell(x, y, z, CellKind.AIR)
    agent.blocks_dug += 1

    if not _fall_after_removal(agent, colony.terrain, y):
        agent.die()
        return ActionResult(decision=decision, success=True, message="Dug into the void and died.")
    return ActionResult(decision=decision, success=True, message=f"Dug out {(x, y, z)}.")


def _execute_eat(decision: Decision, agent: Agent, colony: Colony) -> ActionResult:
    if not can_eat(agent, colony.terrain, colony.count_living_at(agent.cell)):
        return ActionResult(decision=decision, success=False, message="Nothing to eat alone here.")

    x, y, z = agent.cell
    colony.terrain.set_cell(x, y, z, CellKind.AIR)
    agent.gain_health(max(0.0, colony.config.mulch_health_restore))
    agent.mulch_consumed += 1

    if not _fall_after_removal(agent, colony.terrain, y):
        agent.die()
        return ActionResult(decision=decision, success=True, message="Ate mulch and fell to death.")
    return ActionResult(decision=decision, success=True, message="Ate mulch.")


def _execute_share_health(decision: Decision, donor: Agent, colony: Colony) -> ActionResult:
    """Transfer health from donor to receiver. Zero-sum by construction."""
    if not can_share_health(donor, colony, colony.count_living_at(donor.cell)):
        return ActionResult(decision=decision, success=False, message="Cannot share health.")

    receiver = find_share_receiver(donor, colony)
    if receiver is None:
        return ActionResult(decision=decision, success=False, message="No one to share with.")

    transfer = min(
        max(0.0, colony.config.health_transfer_amount),
        donor.health - 1.0,
        receiver.max_health - receiver.health,
    )
    if transfer <= 0:
        return ActionResult(decision=decision, success=False, message="Nothing to transfer.")

    donor.health -= transfer
    receiver.health += transfer
    donor.health_shared += transfer
    return ActionResult(
        decision=decision,
        success=True,
        message=f"Shared {transfer:.2f} health with {receiver.role.value} #{receiver.index}.",
    )


def _execute_build_nest(decision: Decision, queen: Agent, colony: Colony) -> ActionResult:
    if not can_build_nest(queen, colony):
        return ActionResult(decision=decision, success=False, message="Cannot build a nest here.")

    cost = colony.config.nest_cost(queen.max_health)
    x, y, z = queen.cell
    colony.terrain.set_cell(x, y, z, CellKind.NEST)
    queen.nests_built += 1
    queen.lose_health(cost)
    return ActionResult(decision=decision, success=True, message=f"Built a nest at {(x, y, z)}.")


def _fall_after_removal(agent: Agent, terrain: Terrain, previous_y: int) -> bool:
    """Drop the agent onto the first solid cell below; False if there is none."""
    x, _, z = agent.cell
    for y in range(previous_y - 1, 0, -1):
        if is_solid(terrain.get_cell(x, y, z)):
            agent.cell = (x, y, z)
            return True
    return False


# --- Movement heuristic ----------------------------------------------------


def heuristic_direction(
    agent: Agent, colony: Colony, options: list[MoveOption]
) -> Direction | None:
    """Hand-tuned direction preference, active only while the queen lives.

    A hurt queen drifts toward workers and away from acid. Workers close in
    on a hurt queen when they have health to spare, otherwise spread out,
    and favour mulch when hungry.
    """
    queen = colony.live_queen
    if queen is None:
        return None

    best: Direction | None = None
    best_score = float("-inf")

    if agent.is_queen:
        if agent.health >= agent.max_health * 0.85:
            return None
        for option in options:
            if not option.valid:
                continue
            score = float(colony.workers_within_radius(option.cell, 4))
            if option.kind is CellKind.ACIDIC:
                score -= 3.0
            if score > best_score:
                best_score = score
                best = option.direction
        return best

    worker_ratio = agent.health_ratio
    queen_needs_health = queen.health < queen.max_health * 0.9
    current_distance = cell_distance(agent.cell, queen.cell)

    for option in options:
        if not option.valid:
            continue
        delta = current_distance - cell_distance(option.cell, queen.cell)
        if queen_needs_health and worker_ratio > 0.55:
            score = delta * 2.2
        else:
            score = -delta * 1.1
        if option.kind is CellKind.MULCH and worker_ratio < 0.75:
            score += 4.0
        if option.kind is CellKind.ACIDIC:
            score -= 5.0
        if score > best_score:
            best_score = score
            best = option.direction
    return best
