"""
Unit tests for evobits.network.visualize module.
"""

import graphviz  # type: ignore
import numpy as np

from evobits.network.builder   import build_network
from evobits.network.layers    import Edge, InferredLayer, Node, StaticLayer
from evobits.network.visualize import visualize_network


class TestVisualizeNetwork:
    """Test the Graphviz rendering (without opening a viewer)."""

    def test_returns_digraph(self, rng):
        network = build_network(StaticLayer(np.zeros(3, dtype=np.uint8)), [2], rng)

        dot = visualize_network(network)

        assert isinstance(dot, graphviz.Digraph)

    def test_one_graph_node_per_element(self, rng):
        network = build_network(StaticLayer(np.zeros(3, dtype=np.uint8)), [4, 2], rng)

        source = visualize_network(network).source

        for name in ["L0_0", "L0_2", "L1_0", "L1_3", "L2_0", "L2_1"]:
            assert name in source
        assert "L2_2" not in source

    def test_one_graph_edge_per_connection(self, rng):
        network = build_network(StaticLayer(np.zeros(3, dtype=np.uint8)), [4, 2], rng)

        source = visualize_network(network).source

        assert source.count("->") == 3 * 4 + 4 * 2

    def test_edge_labels_show_masks(self):
        input_layer = StaticLayer([5])
        network = InferredLayer([Node([Edge(0, 0xFF, 0x0A)])], input_layer)

        source = visualize_network(network).source

        assert "&ff ^0a" in source
        assert "v=5" in source

    def test_masks_can_be_hidden(self):
        network = InferredLayer([Node([Edge(0, 0xFF, 0x0A)])], StaticLayer([5]))

        source = visualize_network(network, show_masks=False).source

        assert "&ff" not in source
