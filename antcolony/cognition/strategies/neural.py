"""Evolved-policy strategy: heuristic overrides first, then the network."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from antcolony.cognition import network
from antcolony.cognition.observation import Affordances, build_observation
from antcolony.cognition.sampling import sample_masked
from antcolony.cognition.strategies.heuristic import heuristic_override
from antcolony.simulation.actions import (
    DIRECTIONS,
    ActionType,
    Decision,
    can_build_nest,
    can_dig,
    can_eat,
    can_share_health,
    scan_moves,
)

if TYPE_CHECKING:
    from antcolony.simulation.colony import Colony
    from antcolony.simulation.entities import Agent

ACTION_TEMPERATURE = 0.8
DIRECTION_TEMPERATURE = 0.75


class NeuralPolicyStrategy:
    """Decides with the agent's own genome.

    Decision priority:
    1. Role-specific heuristic overrides
    2. Masked softmax sample over the network's action logits
    3. For MOVE, masked softmax sample over the direction logits
    """

    def __init__(
        self,
        action_temperature: float = ACTION_TEMPERATURE,
        direction_temperature: float = DIRECTION_TEMPERATURE,
    ):
        self.action_temperature = action_temperature
        self.direction_temperature = direction_temperature

    def decide(
        self, agent: Agent, colony: Colony, same_cell_count: int, rng: random.Random
    ) -> Decision:
        terrain = colony.terrain
        moves = scan_moves(agent, terrain)
        affordances = Affordances(
            can_eat=can_eat(agent, terrain, same_cell_count),
            can_dig=can_dig(agent, terrain),
            can_share=can_share_health(agent, colony, same_cell_count),
            can_build=can_build_nest(agent, colony),
            valid_moves=sum(1 for m in moves if m.valid),
        )

        override = heuristic_override(agent, colony, affordances)
        if override is not None:
            return override

        observation = build_observation(agent, colony, same_cell_count, affordances, moves)
        logits = network.evaluate(agent.genome, observation)

        mask = [False] * network.ACTION_COUNT
        mask[ActionType.IDLE.value] = True
        mask[ActionType.MOVE.value] = affordances.valid_moves > 0
        mask[ActionType.DIG.value] = affordances.can_dig
        mask[ActionType.EAT.value] = affordances.can_eat
        mask[ActionType.SHARE_HEALTH.value] = affordances.can_share
        mask[ActionType.BUILD_NEST.value] = affordances.can_build

        action_index = sample_masked(
            logits[: network.ACTION_COUNT],
            mask,
            self.action_temperature,
            rng,
            default=ActionType.IDLE.value,
        )
        action = ActionType(action_index)
        if action is not ActionType.MOVE:
            return Decision(action)

        direction_index = sample_masked(
            logits[network.ACTION_COUNT :],
            [m.valid for m in moves],
            self.direction_temperature,
            rng,
            default=0,
        )
        return Decision(action, DIRECTIONS[direction_index])
