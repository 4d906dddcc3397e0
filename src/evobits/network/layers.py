"""
Bitwise Network Layers Module

This module implements the building blocks of the bitwise feed-forward networks
evolved by evobits. Unlike a conventional neural network, a connection carries
no numeric weight: it carries an AND mask and an XOR mask, and a node combines
its inputs by XOR-ing together the masked values of the previous layer.

Classes:
    Edge:          A connection from one element of the previous layer to a node
    Node:          One output element of an inferred layer
    Layer:         Abstract interface shared by the two layer kinds
    StaticLayer:   Non-trainable byte buffer acting as the network input register
    InferredLayer: Layer whose output is derived from the previous layer
"""

from abc    import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.random import Generator

class Edge:
    """
    A single connection between a node and one element of the previous layer.

    Public Attributes:
        source_index: Index into the previous layer's output vector (never mutated)
        and_mask:     Byte AND-ed with the source value
        xor_mask:     Byte XOR-ed with the masked source value
    """

    def __init__(self, source_index: int, and_mask: int, xor_mask: int):
        self.source_index: int = source_index
        self.and_mask    : int = and_mask
        self.xor_mask    : int = xor_mask

    def copy(self) -> 'Edge':
        return Edge(self.source_index, self.and_mask, self.xor_mask)

    def __repr__(self):
        return f"Edge(source_index={self.source_index}, and_mask=0x{self.and_mask:02x}, xor_mask=0x{self.xor_mask:02x})"

class Node:
    """
    A node that accumulates a value from its connections to the previous layer.

    Public Attributes:
        inputs: Ordered list of incoming edges
    """

    def __init__(self, inputs: list[Edge]):
        self.inputs: list[Edge] = inputs

    def copy(self) -> 'Node':
        return Node([edge.copy() for edge in self.inputs])

    def __repr__(self):
        return f"Node(inputs={len(self.inputs)})"

class Layer(ABC):
    """
    Abstract interface of a layer.

    Exactly two concrete kinds exist: StaticLayer (the input register) and
    InferredLayer (computed from the layer to its left).
    """

    @abstractmethod
    def copy(self) -> 'Layer':
        pass

    @abstractmethod
    def get_values(self) -> np.ndarray:
        pass

    @property
    @abstractmethod
    def size(self) -> int:
        pass

class StaticLayer(Layer):
    """
    Non-trainable layer, used as the input register of a network.

    The buffer is written by whoever drives the evaluation (once per evaluation
    round) and is shared by every network built on top of it, including clones.

    Public Attributes:
        values: The uint8 buffer holding the current input
    """

    def __init__(self, values):
        self.values: np.ndarray = np.array(values, dtype=np.uint8)

    def load(self, values) -> None:
        """
        Overwrite the register contents in place.

        Parameters:
            values: New contents; must have the same length as the register
        """
        values = np.asarray(values, dtype=np.uint8)
        if values.shape != self.values.shape:
            raise ValueError(f"Cannot load {values.shape[0]} values into a register of size {self.size}")
        self.values[:] = values

    def copy(self) -> 'StaticLayer':
        # Holds no trainable state, so clones share it.
        return self

    def get_values(self) -> np.ndarray:
        return self.values

    @property
    def size(self) -> int:
        return len(self.values)

    def __repr__(self):
        return f"StaticLayer({self.values.tolist()})"

class InferredLayer(Layer):
    """
    A layer whose output is inferred from the previous layer ("left").

    Each node XOR-combines, over all of its edges, the value
    (left[source_index] & and_mask) ^ xor_mask. There is no activation
    function: the output responds to bit patterns rather than magnitudes.

    The 'left' layer is owned exclusively by this layer; copying recursively
    copies the whole chain of inferred layers down to the shared static leaf.

    Public Attributes:
        nodes: One Node per output element
        left:  The previous layer

    Public Properties:
        size:        Number of output elements
        depth:       Number of inferred layers in the chain, this one included
        input_layer: The static layer terminating the chain

    Public Methods:
        get_values():           Forward-evaluate the chain
        copy():                 Deep copy sharing the static leaf
        mutate(rarity, rng):    Perturb edge masks in place
        attach(input_layer):    Replace the static leaf of the chain
    """

    def __init__(self, nodes: list[Node], left: Layer):
        self.nodes: list[Node] = nodes
        self.left : Layer      = left

    @property
    def size(self) -> int:
        return len(self.nodes)

    @property
    def depth(self) -> int:
        if isinstance(self.left, InferredLayer):
            return self.left.depth + 1
        return 1

    @property
    def input_layer(self) -> StaticLayer:
        layer = self.left
        while isinstance(layer, InferredLayer):
            layer = layer.left
        return layer

    def get_values(self) -> np.ndarray:
        left_values = self.left.get_values()
        values = np.zeros(self.size, dtype=np.uint8)
        for i, node in enumerate(self.nodes):
            v = 0
            for edge in node.inputs:
                v ^= (int(left_values[edge.source_index]) & edge.and_mask) ^ edge.xor_mask
            values[i] = v
        return values

    def copy(self) -> 'InferredLayer':
        return InferredLayer([node.copy() for node in self.nodes], self.left.copy())

    def mutate(self, rarity: int, rng: 'Generator') -> None:
        """
        Stochastically perturb the masks of every edge in the chain.

        Each mask of each edge is mutated with probability 1/rarity. A mutation
        ORs in a sparse byte (AND of 8 random bytes, so most bits are 0) and then
        ANDs with a dense byte (OR of 8 random bytes, so most bits are 1). Most
        mutation events therefore flip few or no bits at all.

        Parameters:
            rarity: Inverse mutation probability (>= 1)
            rng:    Random number generator
        """
        if rarity < 1:
            raise ValueError(f"Mutation rarity must be a positive integer, got {rarity}")

        # One draw per mask; column 0 is the AND mask, column 1 the XOR mask
        edge_count = sum(len(node.inputs) for node in self.nodes)
        hits = rng.integers(rarity, size=(edge_count, 2)) == 0
        if hits.any():
            edges = [edge for node in self.nodes for edge in node.inputs]
            for edge_index, mask_index in zip(*np.nonzero(hits)):
                edge = edges[edge_index]
                if mask_index == 0:
                    edge.and_mask = _perturb_mask(edge.and_mask, rng)
                else:
                    edge.xor_mask = _perturb_mask(edge.xor_mask, rng)

        # The static leaf is never mutated
        if isinstance(self.left, InferredLayer):
            self.left.mutate(rarity, rng)

    def attach(self, input_layer: StaticLayer) -> None:
        """
        Make 'input_layer' the static leaf of this chain.

        Used when a network comes back from another process carrying its own
        copy of the input register.
        """
        layer = self
        while isinstance(layer.left, InferredLayer):
            layer = layer.left
        if input_layer.size != layer.left.size:
            raise ValueError(f"Input layer of size {input_layer.size} does not match size {layer.left.size}")
        layer.left = input_layer

    def __repr__(self):
        return f"InferredLayer(size={self.size}, depth={self.depth})"

def _perturb_mask(mask: int, rng: 'Generator') -> int:
    sparse_set = int(np.bitwise_and.reduce(rng.integers(0, 256, size=8, dtype=np.uint8)))
    dense_keep = int(np.bitwise_or.reduce(rng.integers(0, 256, size=8, dtype=np.uint8)))
    return (mask | sparse_set) & dense_keep
