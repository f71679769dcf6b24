"""Temperature-scaled masked softmax sampling."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

MIN_TEMPERATURE = 0.05


def sample_masked(
    logits: Sequence[float],
    mask: Sequence[bool],
    temperature: float,
    rng: random.Random,
    default: int = 0,
) -> int:
    """Pick an index among the feasible entries, weighted by softmax(logits / T).

    Args:
        logits: Raw scores, one per candidate
        mask: Feasibility per candidate
        temperature: Softmax temperature (floored at 0.05)
        rng: Random stream; exactly one draw is consumed when any candidate is feasible
        default: Returned when no candidate is feasible

    Returns:
        Index of the chosen candidate
    """
    inv_temp = 1.0 / max(MIN_TEMPERATURE, temperature)
    feasible = [i for i, ok in enumerate(mask) if ok]
    if not feasible:
        return default

    max_logit = max(logits[i] * inv_temp for i in feasible)
    weights = [math.exp(logits[i] * inv_temp - max_logit) for i in feasible]
    total = sum(weights)

    roll = rng.random() * total
    for i, weight in zip(feasible, weights):
        roll -= weight
        if roll <= 0:
            return i

    # Round-off can leave a sliver of remainder
    return feasible[-1]
