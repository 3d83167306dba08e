"""
graph.py — Graph Container
===========================
The editor's graph, as handed to the algorithm engines.

Responsibilities:
  1. CRUD on nodes & edges                  (add / remove / get)
  2. Lookup helpers                         (has_node, edges_between, …)
  3. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes live in a dict keyed by id (insertion-ordered, O(1) lookup);
    node ids are unique, a duplicate id is an error.
  - Edges live in a plain list: parallel edges and self-loops are legal
    and the traversal order of every engine follows this list.
  - Adjacency is NOT cached here.  Each algorithm run builds its own
    lookup through graph.adjacency, so an edit can never leave a stale
    neighbour list behind.
"""

from typing import Dict, List, Optional

from graph.node import Node
from graph.edge import Edge
from graph.errors import GraphError


class Graph:
    """
    Attributes:
        nodes    : {node_id: Node}
        edges    : [Edge, …] in insertion order
        directed : bool – graph-level directedness chosen in the editor
    """

    def __init__(self, directed: bool = False):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    List[Edge]      = []
        self.directed: bool            = directed

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise GraphError(f"Node '{node.id}' already exists")
        self.nodes[node.id] = node
        return node

    def create_node(self, x: float = 0.0, y: float = 0.0, label: Optional[str] = None, node_id: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(x=x, y=y, label=label, node_id=node_id))

    def remove_node(self, node_id: str) -> None:
        if node_id not in self.nodes:
            return
        # remove every edge touching this node
        self.edges = [e for e in self.edges if e.source != node_id and e.target != node_id]
        del self.nodes[node_id]

    def has_node(self, node_id: Optional[str]) -> bool:
        return node_id is not None and node_id in self.nodes

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        self.edges.append(edge)
        return edge

    def create_edge(self, source: str, target: str, weight: float = 1.0, edge_id: Optional[str] = None) -> Edge:
        return self.add_edge(Edge(source=source, target=target, weight=weight, edge_id=edge_id))

    def remove_edge(self, edge_id: str) -> None:
        self.edges = [e for e in self.edges if e.id != edge_id]

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        for e in self.edges:
            if e.id == edge_id:
                return e
        return None

    def edges_between(self, a: str, b: str) -> List[Edge]:
        """Every edge usable to step from a to b (direction-aware)."""
        return [e for e in self.edges if e.connects(a, b, self.directed)]

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "isDirected": self.directed,
            "nodes":      [n.to_dict() for n in self.nodes.values()],
            "edges":      [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        if not isinstance(data, dict):
            raise GraphError(f"Graph must be an object: {data!r}")
        nodes = data.get("nodes") or []
        edges = data.get("edges") or []
        if not isinstance(nodes, list) or not isinstance(edges, list):
            raise GraphError("Graph nodes and edges must be lists")

        directed = data.get("isDirected", data.get("directed", False))
        g = cls(directed=bool(directed))
        for nd in nodes:
            g.add_node(Node.from_dict(nd))
        for ed in edges:
            g.add_edge(Edge.from_dict(ed))
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_list(self) -> List[Node]:
        return list(self.nodes.values())

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def labels(self) -> Dict[str, str]:
        return {nid: n.label for nid, n in self.nodes.items()}

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges)

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"
