"""
adjacency.py — Adjacency Builder
=================================
Turns the editor's node / edge lists into neighbour lookups for one run.

    adj  = build_adjacency(nodes, edges, directed=False)
    wadj = build_adjacency(nodes, edges, directed=True, weighted=True)
    radj = build_transposed(nodes, edges)

Guarantees:
  - Every declared node has an entry, even with no edges, so
    `adj[node_id]` never raises for a node that exists.
  - An edge whose endpoint is not a declared node is dropped silently.
  - Neighbour lists keep edge-insertion order; parallel edges and
    self-loops are kept as-is.
  - Undirected graphs get every edge inserted in both directions
    (a self-loop therefore appears twice in its own list).
"""

from typing import Dict, Iterable, List, NamedTuple, Union

from graph.node import Node
from graph.edge import Edge


class WeightedNeighbour(NamedTuple):
    node:   str
    weight: float


Neighbour = Union[str, WeightedNeighbour]
Adjacency = Dict[str, List[Neighbour]]


def build_adjacency(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    directed: bool = False,
    weighted: bool = False,
) -> Adjacency:
    adj: Adjacency = {n.id: [] for n in nodes}

    for e in edges:
        if e.source not in adj or e.target not in adj:
            continue
        if weighted:
            adj[e.source].append(WeightedNeighbour(e.target, e.weight))
            if not directed:
                adj[e.target].append(WeightedNeighbour(e.source, e.weight))
        else:
            adj[e.source].append(e.target)
            if not directed:
                adj[e.target].append(e.source)

    return adj


def build_transposed(nodes: Iterable[Node], edges: Iterable[Edge]) -> Dict[str, List[str]]:
    """Reverse adjacency (every edge flipped), always treated as directed."""
    radj: Dict[str, List[str]] = {n.id: [] for n in nodes}
    for e in edges:
        if e.source in radj and e.target in radj:
            radj[e.target].append(e.source)
    return radj
