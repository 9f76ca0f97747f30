from __future__ import annotations

import random

import numpy as np


def mutate_schedule(schedule: np.ndarray, mutation_rate: float, rng: random.Random) -> int:
    """Swap cells with the same room in another timeslot; returns the swap count."""
    nslots, nrooms = schedule.shape
    if nslots < 2 or mutation_rate <= 0.0:
        return 0
    swaps = 0
    for sl in range(nslots):
        for r in range(nrooms):
            if rng.random() >= mutation_rate:
                continue
            sl2 = rng.randrange(nslots - 1)
            if sl2 >= sl:
                sl2 += 1
            schedule[sl, r], schedule[sl2, r] = schedule[sl2, r], schedule[sl, r]
            swaps += 1
    return swaps
