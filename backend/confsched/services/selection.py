from __future__ import annotations

import logging
import random

import numpy as np

logger = logging.getLogger(__name__)


def rank_by_rating(ratings: np.ndarray) -> np.ndarray:
    """Schedule indices ordered by descending rating; ties keep index order."""
    return np.argsort(-ratings, kind="stable")


class WeightedSelector:
    """Fitness-proportional parent sampling over ``rating - min(rating)``.

    With ``normalize`` the shifted weights are divided by their sum so a
    uniform draw in [0, 1) covers the whole population. Without it the raw
    shifted weights are scanned, which leaves part of the draw range unmatched
    whenever they sum to less than one; those draws take the uniform fallback.
    """

    def __init__(self, *, normalize: bool = True) -> None:
        self.normalize = normalize
        self.weight_sum = 0.0

    def compute_weights(self, ratings: np.ndarray, weights: np.ndarray) -> float:
        np.subtract(ratings, ratings.min(), out=weights)
        self.weight_sum = float(weights.sum())
        if self.normalize and self.weight_sum > 0.0:
            weights /= self.weight_sum
        elif self.weight_sum <= 0.0:
            logger.debug("All schedules share the same rating; parent selection is uniform")
        return self.weight_sum

    def get_parent(self, weights: np.ndarray, rng: random.Random) -> int:
        r = rng.random()
        total = 0.0
        for index, weight in enumerate(weights):
            total += weight
            if r < total:
                return index
        return rng.randrange(len(weights))

    def get_parents(self, weights: np.ndarray, rng: random.Random, *, max_attempts: int = 64) -> tuple[int, int]:
        mom = self.get_parent(weights, rng)
        for _ in range(max_attempts):
            dad = self.get_parent(weights, rng)
            if dad != mom:
                return mom, dad
        # Weight concentrated on a single schedule: pair it with any other one.
        dad = rng.randrange(len(weights) - 1)
        if dad >= mom:
            dad += 1
        return mom, dad
