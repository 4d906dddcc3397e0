"""
evobits - evolving bitwise networks for a single-choice action task.

This package evolves a population of small feed-forward networks whose
connections carry AND/XOR byte masks instead of numeric weights. The networks
learn to pick exactly one free cell among nine (a tic-tac-toe-like turn) with
no gradients at all: improvement comes only from selection, elitist copying
and bit-level mutation.

Main components:
- network: Layers, edges and nodes; random construction; visualization
- pool:    Scored individuals and elitist reproduction
- fitness: Random boards and the scoring function
- run:     Configuration and the evolutionary loop

Example:
    >>> from evobits import Config, Trial
    >>> config = Config("config_tictactoe.ini")
    >>> trial = Trial(config)
    >>> trial.run()
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from evobits.run.config      import Config
from evobits.run.trial       import Trial
from evobits.network.layers  import Edge, Node, StaticLayer, InferredLayer
from evobits.network.builder import build_network, new_fully_connected_layer
from evobits.pool.individual import Individual
from evobits.pool.population import Population
from evobits.fitness.step    import LengthMismatchError, step

__all__ = [
    "Config",
    "Trial",
    "Edge",
    "Node",
    "StaticLayer",
    "InferredLayer",
    "build_network",
    "new_fully_connected_layer",
    "Individual",
    "Population",
    "LengthMismatchError",
    "step",
]
