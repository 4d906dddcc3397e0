"""
evobits Network Package

This package implements the bitwise feed-forward networks evolved by evobits.
A network is a chain of inferred layers terminating in a static input register.
Connections carry an AND mask and an XOR mask instead of a numeric weight.

Modules:
    layers:    Edge, Node and the two layer kinds
    builder:   Random fully-connected construction
    visualize: Graphviz rendering

Exported Classes:
    Edge:          A masked connection to one element of the previous layer
    Node:          One output element of an inferred layer
    Layer:         Abstract layer interface
    StaticLayer:   The input register
    InferredLayer: A layer computed from the previous one

Exported Functions:
    new_fully_connected_layer: Build one random fully-connected layer
    build_network:             Build a chain of random fully-connected layers
    visualize_network:         Render a network with Graphviz
"""

from evobits.network.layers    import Edge, Node, Layer, StaticLayer, InferredLayer
from evobits.network.builder   import new_fully_connected_layer, build_network
from evobits.network.visualize import visualize_network

__all__ = ['Edge',
           'Node',
           'Layer',
           'StaticLayer',
           'InferredLayer',
           'new_fully_connected_layer',
           'build_network',
           'visualize_network']
