"""
evobits Pool Package

Population management: the scored individuals and elitist reproduction.

Modules:
    individual: Individual class
    population: Population class

Exported Classes:
    Individual: A network with the score accumulated in the current generation
    Population: The set of individuals, ranked and renewed every generation
"""

from evobits.pool.individual import Individual
from evobits.pool.population import Population

__all__ = ['Individual',
           'Population']
