"""
Fitness Step Module

This module implements the hand-crafted fitness function scoring one turn:
a network's output vector is compared against the current board, and a
winning move is committed into the board.

Output conventions, one byte per cell:
    0     - "leave this cell alone"
    1     - "play this cell"; only one such byte is legal per turn
    other - penalized in proportion to its value

Classes:
    LengthMismatchError: Raised when board and output widths differ (fatal)

Functions:
    step:            Dispatch on the configured fitness variant
    step_discrete:   Flat per-zero bonus plus random tie-breaking noise
    step_continuous: Graded closeness-to-zero reward, commit-weighted bonuses
"""

from typing import TYPE_CHECKING

from evobits.fitness.environment import CLAIMED, EMPTY

if TYPE_CHECKING:
    import numpy as np
    from numpy.random import Generator
    from evobits.run.config import Config

class LengthMismatchError(RuntimeError):
    """The environment, output and environment-out vectors do not have the same length."""

def _check_lengths(environment, output, environment_out):
    if len(environment) != len(output) or len(environment) != len(environment_out):
        raise LengthMismatchError(f"length mismatch: environment={len(environment)}, "
                                  f"output={len(output)}, environment_out={len(environment_out)}")

def _score_turn(environment     : 'np.ndarray',
                output          : 'np.ndarray',
                environment_out : 'np.ndarray',
                zero_bonus      : int,
                select_bonus    : int,
                illegal_penalty : int,
                commit_bonus    : int,
                graded          : bool) -> int:
    _check_lengths(environment, output, environment_out)

    move   = -1
    score  = 0
    zeroes = 0
    for i, n in enumerate(output):
        n = int(n)
        if graded:
            s = 255 - n
            score += s * s - 1
        if n == 0:
            zeroes += 1
        elif n == 1:
            if move != -1:
                # illegal move - only one per turn
                score -= illegal_penalty
                continue
            move = i
            score += select_bonus
        else:
            score -= n
    score += zeroes * zero_bonus

    # Everything else zero, exactly one selection, and the cell was free
    if zeroes == len(output) - 1 and move != -1 and environment[move] == EMPTY:
        environment_out[move] = CLAIMED
        score += commit_bonus
    return score

def step_discrete(environment     : 'np.ndarray',
                  output          : 'np.ndarray',
                  environment_out : 'np.ndarray',
                  config          : 'Config',
                  rng             : 'Generator') -> int:
    """
    Score one turn with the discrete variant.

    Parameters:
        environment:     The board before the move
        output:          The network output, one byte per cell
        environment_out: Board receiving the committed move, if any
        config:          Supplies the scoring constants
        rng:             Source of the tie-breaking noise

    Returns:
        The score, noise in [0, noise_max) included
    """
    score = _score_turn(environment, output, environment_out,
                        config.zero_bonus,
                        config.select_bonus,
                        config.illegal_penalty,
                        config.commit_bonus,
                        graded=False)
    return score + int(rng.integers(config.noise_max))

def step_continuous(environment     : 'np.ndarray',
                    output          : 'np.ndarray',
                    environment_out : 'np.ndarray',
                    config          : 'Config') -> int:
    """
    Score one turn with the continuous variant.

    Every output byte v also contributes (255 - v)**2 - 1, so outputs are
    rewarded for getting closer to zero even before they reach it. No noise
    is added.
    """
    return _score_turn(environment, output, environment_out,
                       config.continuous_zero_bonus,
                       config.continuous_select_bonus,
                       config.continuous_illegal_penalty,
                       config.continuous_commit_bonus,
                       graded=True)

def step(environment     : 'np.ndarray',
         output          : 'np.ndarray',
         environment_out : 'np.ndarray',
         config          : 'Config',
         rng             : 'Generator') -> int:
    """
    Score a network output against the environment, using the configured variant.

    Raises:
        LengthMismatchError: if the three vectors do not have the same length
    """
    if config.fitness_variant == 'discrete':
        return step_discrete(environment, output, environment_out, config, rng)
    elif config.fitness_variant == 'continuous':
        return step_continuous(environment, output, environment_out, config)
    else:
        raise RuntimeError("bad 'fitness_variant' in configuration")
