"""
Environment Module

The environment is a flat byte vector (the "board"), one byte per cell.

Constants:
    EMPTY:    Free cell
    CLAIMED:  Cell taken by a committed move of a network
    OCCUPIED: Cell already taken when the environment is generated

Functions:
    random_environment: Generate a random board that always leaves room for a move
"""

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.random import Generator

EMPTY    = 0
CLAIMED  = 1
OCCUPIED = 2

def random_environment(width: int, rng: 'Generator') -> np.ndarray:
    """
    Generate a random board.

    Cells are scanned left to right; every cell but the last is OCCUPIED with
    probability 1/2. The last cell is always EMPTY, so at least one legal move exists.

    Parameters:
        width: Number of cells
        rng:   Random number generator

    Returns:
        uint8 array of length 'width'
    """
    env = np.full(width, EMPTY, dtype=np.uint8)
    for i in range(width - 1):
        if rng.integers(2) == 0:
            env[i] = OCCUPIED
    return env
