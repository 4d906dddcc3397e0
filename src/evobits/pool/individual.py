"""
Individual Module

This module implements the Individual class, a scored wrapper around one
network of the population.

Classes:
    Individual: A network together with the score accumulated in the current generation
"""

from itertools import count
from typing    import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.random import Generator
    from evobits.network import InferredLayer, StaticLayer

class Individual:
    """
    A member of the population.

    You can regard an individual as a thin wrapper around the network that
    powers it, to which it adds a unique ID and a score. Individuals live for
    one generation: the next generation is made of survivors, clones of
    survivors, and new random networks.

    Public Attributes:
        ID:      Globally unique identifier for this individual
        network: The outermost layer of the network (owned)
        score:   Score accumulated over the current generation

    Public Methods:
        get_values():         Forward-evaluate the network on the current input register
        clone():              Create an independent copy with a zero score
        mutate(rarity, rng):  Mutate the network in place
    """

    _id_generator = count(0)

    def __init__(self, network: 'InferredLayer', score: int = 0):
        """
        Parameters:
            network: The outermost layer of the network; ownership is transferred
            score:   Initial score
        """
        self.ID     : int             = next(Individual._id_generator)
        self.network: 'InferredLayer' = network
        self.score  : int             = score

    @property
    def size(self) -> int:
        """Width of the network output."""
        return self.network.size

    @property
    def input_layer(self) -> 'StaticLayer':
        return self.network.input_layer

    def get_values(self) -> np.ndarray:
        return self.network.get_values()

    def clone(self) -> 'Individual':
        """
        Create a new Individual from a deep copy of this network.

        The copy shares only the static input register with the original.
        """
        return Individual(self.network.copy())

    def mutate(self, rarity: int, rng: 'Generator') -> None:
        self.network.mutate(rarity, rng)

    def __str__(self):
        return f"ID={self.ID}, score={self.score}"

    def __repr__(self):
        return f"Individual(network={self.network!r}, score={self.score})"
