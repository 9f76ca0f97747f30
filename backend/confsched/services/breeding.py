from __future__ import annotations

import random

import numpy as np


def order_crossover(mom: np.ndarray, dad: np.ndarray, child: np.ndarray, cut: int) -> None:
    """Fill ``child`` from two parent grids without duplicating any value.

    Columns ``[0, cut)`` come from ``mom``. Every remaining cell, row by row,
    takes ``dad``'s value at the same position; if the child already holds
    that value, the scan continues through ``dad``'s cells (wrapping around)
    until an unused value turns up. All grids hold a permutation of
    ``[0, rows * cols)``.
    """
    nrows, ncols = mom.shape
    ncells = nrows * ncols
    cut = max(0, min(cut, ncols))
    used = np.zeros(ncells, dtype=bool)

    child[:, :cut] = mom[:, :cut]
    used[mom[:, :cut].ravel()] = True

    dad_cells = dad.ravel()
    for r in range(nrows):
        for c in range(cut, ncols):
            position = r * ncols + c
            value = dad_cells[position]
            while used[value]:
                position = (position + 1) % ncells
                value = dad_cells[position]
            child[r, c] = value
            used[value] = True


def breed(mom: np.ndarray, dad: np.ndarray, child: np.ndarray, rng: random.Random) -> int:
    cut = rng.randrange(mom.shape[1])
    order_crossover(mom, dad, child, cut)
    return cut
