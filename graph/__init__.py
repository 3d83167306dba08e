"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, GraphError
    from graph import build_adjacency, build_transposed, WeightedNeighbour
"""

from graph.errors    import GraphError
from graph.node      import Node
from graph.edge      import Edge
from graph.graph     import Graph
from graph.adjacency import build_adjacency, build_transposed, WeightedNeighbour

__all__ = [
    "GraphError",
    "Node",
    "Edge",
    "Graph",
    "build_adjacency",
    "build_transposed",
    "WeightedNeighbour",
]
