"""
state.py — Visualization State
===============================
The fully merged, renderer-facing picture after N played steps.

Lifecycle: one default (empty) state per algorithm run, replaced by a
new state on every played Step (states are frozen, merging never edits
in place), and left alone once `finished` is True.

Canonical container shapes (the normalizer guarantees these):
    visited            frozenset of node ids
    queue, path        list of node ids
    distances          {node_id: float}
    previous           {node_id: node_id | None}
    scc_colors         {node_id: colour}
    order              list of node ids, or None while no step set it
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional


@dataclass(frozen=True)
class MergeContext:
    """Run-wide hints the normalizer needs but no single step carries."""

    end_node: Optional[str]     = None
    labels:   Mapping[str, str] = field(default_factory=dict)

    def label(self, node_id: str) -> str:
        return self.labels.get(node_id) or node_id


@dataclass(frozen=True)
class VisualizationState:
    visited:            FrozenSet[str]           = frozenset()
    current:            Optional[str]            = None
    path:               List[str]                = field(default_factory=list)
    distances:          Dict[str, float]         = field(default_factory=dict)
    previous:           Dict[str, Optional[str]] = field(default_factory=dict)
    queue:              List[str]                = field(default_factory=list)
    order:              Optional[List[str]]      = None
    # SCC
    phase:              Optional[str]            = None
    finish_order_stack: List[str]                = field(default_factory=list)
    found_sccs:         List[List[str]]          = field(default_factory=list)
    scc_colors:         Dict[str, str]           = field(default_factory=dict)
    show_transposed:    bool                     = False
    # DFS / SCC
    discovery_times:    Dict[str, int]           = field(default_factory=dict)
    finish_times:       Dict[str, int]           = field(default_factory=dict)
    # Kahn
    indegree:           Dict[str, int]           = field(default_factory=dict)
    order_violations:   List[Any]                = field(default_factory=list)
    # progress
    finished:           bool                     = False
    result:             Optional[str]            = None
    step:               int                      = 0

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view: camelCase keys, sorted sets, ∞ as a string."""
        return {
            "visited":          sorted(self.visited),
            "current":          self.current,
            "path":             list(self.path),
            "distances":        {k: _json_number(v) for k, v in self.distances.items()},
            "previous":         dict(self.previous),
            "queue":            list(self.queue),
            "order":            list(self.order) if self.order is not None else None,
            "phase":            self.phase,
            "finishOrderStack": list(self.finish_order_stack),
            "foundSccs":        [list(b) for b in self.found_sccs],
            "sccColors":        dict(self.scc_colors),
            "showTransposed":   self.show_transposed,
            "discoveryTimes":   dict(self.discovery_times),
            "finishTimes":      dict(self.finish_times),
            "indegree":         dict(self.indegree),
            "orderViolations":  [v.to_dict() if hasattr(v, "to_dict") else v for v in self.order_violations],
            "finished":         self.finished,
            "result":           self.result,
            "step":             self.step,
        }


def _json_number(value: Any) -> Any:
    if isinstance(value, float) and math.isinf(value):
        return "∞" if value > 0 else "-∞"
    return value
