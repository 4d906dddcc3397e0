"""
evobits Fitness Package

The environment (a flat board of bytes) and the function scoring a network's
output against it.

Modules:
    environment: Cell markers and random board generation
    step:        The fitness function, in its discrete and continuous variants
"""

from evobits.fitness.environment import EMPTY, CLAIMED, OCCUPIED, random_environment
from evobits.fitness.step        import LengthMismatchError, step, step_discrete, step_continuous

__all__ = ['EMPTY',
           'CLAIMED',
           'OCCUPIED',
           'random_environment',
           'LengthMismatchError',
           'step',
           'step_discrete',
           'step_continuous']
