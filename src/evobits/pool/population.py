"""
Population Module

This module implements the Population class, which holds the networks being
evolved and implements selection and reproduction.

Classes:
    Population: The set of individuals, ranked and renewed every generation
"""

from typing import TYPE_CHECKING

from evobits.network.builder import build_network
from evobits.pool.individual import Individual

if TYPE_CHECKING:
    from numpy.random import Generator
    from evobits.run.config import Config
    from evobits.network import InferredLayer, StaticLayer

class Population:
    """
    A population of evolving networks.

    All networks are built over the same static input register. Reproduction is
    purely elitist: there is no crossover, only copying of the best-ranked
    networks and (optionally) mutation of the copies.

    Public Attributes:
        individuals: List of all Individual objects in the current generation

    Public Methods:
        new_network():            Build a fresh random network over the input register
        reset_scores():           Set every score to 0
        rank():                   Sort individuals by score, best first
        get_fittest_individual(): Return the individual with the highest score
        spawn_next_generation():  Replace the population with survivors, clones and newcomers
    """

    def __init__(self, config: 'Config', input_layer: 'StaticLayer', rng: 'Generator'):
        """
        Create 'population_size' random networks.

        Parameters:
            config:      Stores configuration parameters
            input_layer: The shared input register all networks read from
            rng:         Random number generator
        """
        self._config      = config
        self._input_layer = input_layer
        self._rng         = rng

        self.individuals: list[Individual] = [Individual(self.new_network())
                                              for _ in range(self._config.population_size)]

    @property
    def input_layer(self) -> 'StaticLayer':
        return self._input_layer

    def new_network(self) -> 'InferredLayer':
        return build_network(self._input_layer, self._config.layer_widths, self._rng)

    def reset_scores(self):
        for individual in self.individuals:
            individual.score = 0

    def rank(self) -> list[Individual]:
        """
        Sort the individuals by score, in descending order.
        The sort is stable: ties keep their current order.

        Returns:
            The ranked list of individuals
        """
        self.individuals.sort(key=lambda ind: ind.score, reverse=True)
        return self.individuals

    def get_fittest_individual(self) -> 'Individual | None':
        if not self.individuals:
            return None
        return max(self.individuals, key=lambda ind: ind.score)

    def spawn_next_generation(self):
        """
        Create the next generation from the scores of the current one.

        The generation process follows these steps:

        Step 1: Ranking
        - Sort the individuals by score, best first

        Step 2: Survival
        - The top 'elite_survivors' individuals are kept as they are

        Step 3: Elite tiers
        - Tier k is filled with clones of the individual ranked k, as ranked
          before any slot is overwritten (the parent need not survive)
        - In "deferred" mutation mode each clone is mutated with the rarity of
          its tier; in "online" mode mutation happens during evaluation instead

        Step 4: Replacement
        - Every remaining slot receives a freshly constructed random network
        """
        self.rank()

        # Parents are taken before any slot is overwritten
        tiers   = self._config.elite_tiers
        parents = self.individuals[:len(tiers)]

        slot = self._config.elite_survivors
        for parent, (tier_size, rarity) in zip(parents, tiers):
            for _ in range(tier_size):
                child = parent.clone()
                if self._config.mutation_mode == 'deferred':
                    child.mutate(rarity, self._rng)
                self.individuals[slot] = child
                slot += 1

        # Remaining bottom dies
        for i in range(slot, len(self.individuals)):
            self.individuals[i] = Individual(self.new_network())

    def __len__(self):
        return len(self.individuals)

    def __str__(self):
        return '\n'.join(str(individual) for individual in self.individuals)
