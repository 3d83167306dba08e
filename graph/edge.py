"""
edge.py — Graph Edge
====================
Connects two nodes and carries a weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and lets an edge point at a node that
    was deleted in the editor; the adjacency builder drops such edges.
  - Weight defaults to 1; algorithms that ignore weights never read it.
  - Directedness is NOT stored per edge.  It is a property of the run
    (`AlgorithmOptions.is_directed`), so the same edge list can be
    traversed both ways without being rebuilt.
  - On the wire the endpoints are spelled `from` / `to` (the editor's
    format); `source` / `target` are accepted too.
"""

from typing import Optional
import uuid

from graph.errors import GraphError


class Edge:
    """
    Attributes:
        id     : Unique identifier.
        source : ID of the tail node.
        target : ID of the head node.
        weight : Numeric cost (default 1). Can be negative for Bellman-Ford demos.
    """

    __slots__ = ("id", "source", "target", "weight")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1.0,
        edge_id: Optional[str] = None,
    ):
        self.id:     str   = edge_id or str(uuid.uuid4())[:8]
        self.source: str   = source
        self.target: str   = target
        self.weight: float = 1.0 if weight is None else weight

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def connects(self, node_a: str, node_b: str, directed: bool) -> bool:
        """True if this edge links node_a → node_b (either way when undirected)."""
        if self.source == node_a and self.target == node_b:
            return True
        return not directed and self.source == node_b and self.target == node_a

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "from":   self.source,
            "to":     self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        if not isinstance(data, dict):
            raise GraphError(f"Edge must be an object: {data!r}")
        source = data.get("from", data.get("source"))
        target = data.get("to", data.get("target"))
        if source is None or target is None:
            raise GraphError(f"Edge is missing an endpoint: {data!r}")

        weight = data.get("weight")
        if weight is None:
            weight = 1.0
        else:
            try:
                weight = float(weight)
            except (TypeError, ValueError):
                raise GraphError(f"Edge {source}→{target} has a non-numeric weight: {weight!r}")

        return cls(
            source=str(source),
            target=str(target),
            weight=weight,
            edge_id=data.get("id"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
