from __future__ import annotations

import numpy as np


class PopulationStore:
    """Double-buffered schedule grids plus the per-schedule scalar arrays.

    Grids are laid out as ``(schedule, timeslot, room)``. Breeding and
    mutation write into the next buffer while the current one is read; the
    two are exchanged with ``swap`` once per generation.
    """

    def __init__(self, nschedules: int, nslots: int, nrooms: int, nthemes: int) -> None:
        shape = (nschedules, nslots, nrooms)
        self.current = np.zeros(shape, dtype=np.int64)
        self.next = np.zeros(shape, dtype=np.int64)
        self.ratings = np.zeros(nschedules, dtype=np.float64)
        self.weights = np.zeros(nschedules, dtype=np.float64)
        self.ranks = np.arange(nschedules, dtype=np.int64)
        self.theme_penalties = np.zeros((nschedules, nthemes), dtype=np.int64)

    @property
    def nschedules(self) -> int:
        return self.current.shape[0]

    @property
    def nslots(self) -> int:
        return self.current.shape[1]

    @property
    def nrooms(self) -> int:
        return self.current.shape[2]

    @property
    def ncells(self) -> int:
        return self.nslots * self.nrooms

    def schedule(self, index: int) -> np.ndarray:
        return self.current[index]

    def next_schedule(self, index: int) -> np.ndarray:
        return self.next[index]

    def copy_to_next(self, source: int, target: int) -> None:
        self.next[target] = self.current[source]

    def swap(self) -> None:
        self.current, self.next = self.next, self.current
