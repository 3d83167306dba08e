"""
validation.py — Topological Order Check
========================================
Checks a finished topological order against the edge list.  A violation
is any directed edge u→v with position(u) >= position(v).

Only meaningful for a complete, cycle-free order on a directed graph:
  - undirected graphs produce no violations,
  - edges whose endpoints are missing from the order are skipped.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from graph import Edge
from algorithms.step import Step


@dataclass(frozen=True)
class OrderViolation:
    edge_id:    str
    source:     str
    target:     str
    from_index: int
    to_index:   int

    def to_dict(self) -> dict:
        d = asdict(self)
        return {
            "edgeId":    d["edge_id"],
            "from":      d["source"],
            "to":        d["target"],
            "fromIndex": d["from_index"],
            "toIndex":   d["to_index"],
        }


def topological_violations(
    order: Optional[Sequence[str]],
    edges: Iterable[Edge],
    directed: bool,
) -> List[OrderViolation]:
    if not directed or not order:
        return []

    position: Dict[str, int] = {nid: idx for idx, nid in enumerate(order)}
    violations: List[OrderViolation] = []
    for e in edges:
        from_pos = position.get(e.source)
        to_pos   = position.get(e.target)
        if from_pos is None or to_pos is None:
            continue
        if from_pos >= to_pos:
            violations.append(OrderViolation(
                edge_id=e.id or f"{e.source}->{e.target}",
                source=e.source,
                target=e.target,
                from_index=from_pos,
                to_index=to_pos,
            ))
    return violations


def final_order(steps: Sequence[Step]) -> List[str]:
    """The order to validate: last step with a non-empty order, else the last step's."""
    for step in reversed(steps):
        if step.has("order") and step.order:
            return list(step.order)
    if steps and steps[-1].has("order"):
        return list(steps[-1].order or [])
    return []
