"""
Network Visualization Module

Renders a bitwise network with Graphviz.

Functions:
    visualize_network: Build a graphviz.Digraph describing a network
"""

import graphviz  # type: ignore

from evobits.network.layers import InferredLayer

_NODE_ATTRS = {
    'INPUT':  {'fillcolor': 'lightgrey', 'color': 'black', 'style': 'filled', 'shape': 'circle', 'penwidth': '0.5', 'fontsize': '5', 'width': '0.5', 'height': '0.5', 'fixedsize': 'true'},
    'HIDDEN': {'fillcolor': 'lightblue', 'color': 'black', 'style': 'filled', 'shape': 'circle', 'penwidth': '0.5', 'fontsize': '5', 'width': '0.5', 'height': '0.5', 'fixedsize': 'true'},
    'OUTPUT': {'fillcolor': 'white'    , 'color': 'black', 'style': 'filled', 'shape': 'circle', 'penwidth': '0.5', 'fontsize': '5', 'width': '0.5', 'height': '0.5', 'fixedsize': 'true'}
}

def visualize_network(network: InferredLayer, view: bool = False, show_masks: bool = True) -> graphviz.Digraph:
    """
    Visualize a network using Graphviz.

    Graph node "L{k}_{i}" stands for element i of layer k, layer 0 being the
    input register. Each edge is labelled with its AND and XOR masks.

    Parameters:
        network:    The outermost layer of the network
        view:       If True, automatically open the visualization after rendering
        show_masks: If False, edges are drawn without labels (large networks)

    Returns:
        graphviz.Digraph object representing the network
    """
    # Layers ordered from the input register to the output
    layers = []
    layer = network
    while isinstance(layer, InferredLayer):
        layers.append(layer)
        layer = layer.left
    layers.append(layer)
    layers.reverse()

    dot = graphviz.Digraph()
    dot.attr(rankdir='LR')  # Left to right layout
    dot.attr('graph', labelloc='t')

    last = len(layers) - 1
    input_values = layers[0].get_values()
    for k, layer in enumerate(layers):
        if k == 0:
            kind, label = 'INPUT', 'Inputs'
        elif k == last:
            kind, label = 'OUTPUT', 'Outputs'
        else:
            kind, label = 'HIDDEN', f'Hidden {k}'

        with dot.subgraph(name=f'cluster_{k}') as cluster:
            cluster.attr(rank='same', label=label, style='invisible')
            for i in range(layer.size):
                attrs = _NODE_ATTRS[kind].copy()
                if k == 0:
                    attrs['label'] = f"in={i}\\nv={int(input_values[i])}"
                else:
                    attrs['label'] = f"L{k}\\nn={i}"
                cluster.node(f"L{k}_{i}", **attrs)

        if k == 0:
            continue
        for i, node in enumerate(layer.nodes):
            for edge in node.inputs:
                edge_attrs = {
                    'fontsize' : '5',
                    'penwidth' : '0.5',
                    'arrowsize': '0.5',
                    'color'    : 'black' if edge.and_mask else 'lightgray',
                }
                if show_masks:
                    edge_attrs['label'] = f"&{edge.and_mask:02x} ^{edge.xor_mask:02x}"
                dot.edge(f"L{k - 1}_{edge.source_index}", f"L{k}_{i}", **edge_attrs)

    if view:
        dot.view(cleanup=True)

    return dot
