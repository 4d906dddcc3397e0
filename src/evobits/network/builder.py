"""
Network Construction Module

Functions for building randomly initialized, fully-connected bitwise networks.

Functions:
    new_fully_connected_layer: Build one inferred layer on top of another layer
    build_network:             Chain several fully-connected layers over an input register
"""

from typing import Sequence, TYPE_CHECKING

from evobits.network.layers import Edge, InferredLayer, Layer, Node, StaticLayer

if TYPE_CHECKING:
    from numpy.random import Generator

def new_fully_connected_layer(left: Layer, size: int, rng: 'Generator') -> InferredLayer:
    """
    Create an inferred layer of 'size' nodes, each connected to every element of 'left'.

    The masks of all edges come from a single bulk draw of random bytes,
    two bytes per edge (AND mask first, XOR mask second).

    Parameters:
        left: The previous layer
        size: Number of nodes in the new layer
        rng:  Random number generator

    Returns:
        The new layer, sharing no edge state with any other layer
    """
    if size < 1:
        raise ValueError(f"Layer size must be at least 1, got {size}")

    left_size = left.size
    r  = rng.bytes(size * left_size * 2)
    ri = 0
    nodes = []
    for _ in range(size):
        edges = []
        for j in range(left_size):
            edges.append(Edge(j, r[ri], r[ri + 1]))
            ri += 2
        nodes.append(Node(edges))
    return InferredLayer(nodes, left)

def build_network(input_layer: StaticLayer, layer_widths: Sequence[int], rng: 'Generator') -> InferredLayer:
    """
    Build a network as a chain of fully-connected layers over a shared input register.

    Parameters:
        input_layer:  The static layer at the bottom of the chain (shared, not copied)
        layer_widths: Widths of the inferred layers, from the input side to the output
        rng:          Random number generator

    Returns:
        The outermost layer; its size is the width of the network output
    """
    if not layer_widths:
        raise ValueError("A network needs at least one inferred layer")

    layer: Layer = input_layer
    for width in layer_widths:
        layer = new_fully_connected_layer(layer, width, rng)
    return layer
