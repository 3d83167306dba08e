from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AlgorithmOptions:
    """
    Per-run options, fixed for the duration of one algorithm run.

    Attributes:
        is_directed : Traverse edges one way only.
        start_node  : Source node id (None when the user has not picked one).
        end_node    : Optional target node id.
    """

    is_directed: bool          = False
    start_node:  Optional[str] = None
    end_node:    Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlgorithmOptions":
        return cls(
            is_directed=bool(data.get("isDirected", False)),
            start_node=data.get("startNode") or None,
            end_node=data.get("endNode") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isDirected": self.is_directed,
            "startNode":  self.start_node,
            "endNode":    self.end_node,
        }
