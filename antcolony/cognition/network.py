"""Fixed-topology feed-forward policy network.

One hidden tanh layer, linear outputs. The network has no state of its own:
every weight and bias is read from the genome in this order:

1. hidden weights, HIDDEN_SIZE rows of OBSERVATION_SIZE
2. hidden biases
3. output weights, OUTPUT_SIZE rows of HIDDEN_SIZE
4. output biases

Outputs 0..ACTION_COUNT-1 are action logits, the remaining DIRECTION_COUNT
outputs are movement-direction logits.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from antcolony.errors import ValidationError

if TYPE_CHECKING:
    from antcolony.evolution.genetics import Genome

OBSERVATION_SIZE = 24
HIDDEN_SIZE = 10
ACTION_COUNT = 6
DIRECTION_COUNT = 4
OUTPUT_SIZE = ACTION_COUNT + DIRECTION_COUNT
PARAMETER_COUNT = (
    OBSERVATION_SIZE * HIDDEN_SIZE + HIDDEN_SIZE + HIDDEN_SIZE * OUTPUT_SIZE + OUTPUT_SIZE
)


def evaluate(genome: Genome, observation: Sequence[float]) -> list[float]:
    """Run the network forward.

    Args:
        genome: Parameter source
        observation: OBSERVATION_SIZE input values

    Returns:
        OUTPUT_SIZE raw logits

    Raises:
        ValidationError: If the observation has the wrong length
    """
    if len(observation) != OBSERVATION_SIZE:
        raise ValidationError(
            f"Observation needs {OBSERVATION_SIZE} values, got {len(observation)}"
        )
    params = genome.parameters
    p = 0

    hidden = []
    for _ in range(HIDDEN_SIZE):
        total = 0.0
        for value in observation:
            total += value * params[p]
            p += 1
        hidden.append(total)

    for h in range(HIDDEN_SIZE):
        hidden[h] = math.tanh(hidden[h] + params[p])
        p += 1

    outputs = []
    for _ in range(OUTPUT_SIZE):
        total = 0.0
        for value in hidden:
            total += value * params[p]
            p += 1
        outputs.append(total)

    for o in range(OUTPUT_SIZE):
        outputs[o] += params[p]
        p += 1

    return outputs
