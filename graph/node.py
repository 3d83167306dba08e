from typing import Optional
import uuid

from graph.errors import GraphError


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    A vertex placed by the graph editor.  Read-only to the algorithms.

    Attributes:
        id    : Unique identifier (short uuid by default, or user-supplied).
        label : Human-readable name shown on the canvas.
        x, y  : Canvas coordinates, only carried through for the renderer.
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        node_id: Optional[str] = None,
    ):
        self.id: str    = node_id or str(uuid.uuid4())[:8]
        self.label: str = label or self.id
        self.x: float   = x
        self.y: float   = y

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        if not isinstance(data, dict):
            raise GraphError(f"Node must be an object: {data!r}")
        if "id" not in data or data["id"] in (None, ""):
            raise GraphError(f"Node is missing an id: {data!r}")
        try:
            x = float(data.get("x", 0.0))
            y = float(data.get("y", 0.0))
        except (TypeError, ValueError):
            raise GraphError(f"Node '{data['id']}' has non-numeric coordinates")
        return cls(x=x, y=y, label=data.get("label"), node_id=str(data["id"]))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label}, pos=({self.x:.2f},{self.y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
