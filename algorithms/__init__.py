"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for the six engines the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, run_algorithm

REGISTRY is a dict keyed by the editor's algorithm names:
    {
        "bfs": AlgoInfo(key, label, fn, description, complexity, requires_*…),
        …
    }

Every engine has the same shape:

    fn(nodes, edges, options: AlgorithmOptions) -> Generator[Step]

run_algorithm() is the call boundary: it drains the generator into a
list, and turns ANY failure inside an engine into the degenerate trace
[Step(finished=True)] plus a logged traceback, so a caller never gets a
half-built step list.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from graph import Graph, Node, Edge
from algorithms.errors import AlgorithmError, AlgorithmRequestError, UnknownAlgorithmError
from algorithms.options import AlgorithmOptions
from algorithms.path import build_path
from algorithms.step import Step, StepBuilder, UNSET, finished_only
from algorithms.validation import OrderViolation, topological_violations, final_order

from algorithms.bfs              import bfs              as _bfs
from algorithms.dfs              import dfs              as _dfs
from algorithms.dijkstra         import dijkstra         as _dijkstra
from algorithms.bellman_ford     import bellman_ford     as _bellman_ford
from algorithms.scc              import scc              as _scc, describe_phase
from algorithms.topological_sort import topological_sort as _topological_sort

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:               str                    # registry key, e.g. "bellmanFord"
    label:             str                    # human label, e.g. "Bellman-Ford"
    fn:                Callable               # the step generator
    description:       str  = ""              # one-liner for the UI card
    complexity_time:   str  = ""              # e.g. "O(V + E)"
    complexity_space:  str  = ""
    requires_start:    bool = True            # caller must pick a start node
    requires_end:      bool = False           # caller must pick an end node
    requires_directed: bool = False           # caller must enable directed mode
    uses_weights:      bool = False

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "description":      self.description,
            "complexityTime":   self.complexity_time,
            "complexitySpace":  self.complexity_space,
            "requiresStart":    self.requires_start,
            "requiresEnd":      self.requires_end,
            "requiresDirected": self.requires_directed,
            "usesWeights":      self.uses_weights,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs,
        description="Explores nodes level by level. Finds shortest unweighted path.",
        complexity_time="O(V + E)", complexity_space="O(V)",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs,
        description="Explores as far as possible first. Useful for connectivity, cycles and discovery/finish times.",
        complexity_time="O(V + E)", complexity_space="O(V)",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra,
        description="Finds shortest weighted path (non-negative weights).",
        complexity_time="O(V²)", complexity_space="O(V)",
        requires_end=True, uses_weights=True,
    ),

    "bellmanFord": AlgoInfo(
        key="bellmanFord", label="Bellman-Ford", fn=_bellman_ford,
        description="Shortest paths allowing negative edge weights; detects negative cycles.",
        complexity_time="O(V · E)", complexity_space="O(V)",
        requires_end=True, uses_weights=True,
    ),

    "scc": AlgoInfo(
        key="scc", label="Strongly Connected Components", fn=_scc,
        description="Kosaraju's algorithm: two DFS passes around a transpose phase.",
        complexity_time="O(V + E)", complexity_space="O(V)",
        requires_start=False, requires_directed=True,
    ),

    "topologicalSort": AlgoInfo(
        key="topologicalSort", label="Topological Sort", fn=_topological_sort,
        description="Kahn's algorithm. If a cycle exists, topological sorting is not possible.",
        complexity_time="O(V + E)", complexity_space="O(V)",
        requires_start=False,
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


# ---------------------------------------------------------------------------
# Caller-side preconditions
# ---------------------------------------------------------------------------
def validate_request(key: str, graph: Graph, options: AlgorithmOptions) -> AlgoInfo:
    """Reject a run the UI should never start.  Returns the AlgoInfo on success."""
    info = get_algorithm(key)
    if info is None:
        raise UnknownAlgorithmError(key)
    if graph.node_count() == 0:
        raise AlgorithmRequestError("The graph has no nodes.")
    if info.requires_start and not graph.has_node(options.start_node):
        raise AlgorithmRequestError(f"Please select a start node for {info.label}.")
    if info.requires_end and not graph.has_node(options.end_node):
        raise AlgorithmRequestError(f"Please select an end node for {info.label}.")
    if info.requires_directed and not options.is_directed:
        raise AlgorithmRequestError(
            f"{info.label} is designed for directed graphs. Please enable 'Directed Graph' mode."
        )
    return info


# ---------------------------------------------------------------------------
# Call boundary
# ---------------------------------------------------------------------------
def run_algorithm(
    key: str,
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    options: AlgorithmOptions,
) -> List[Step]:
    """Run one engine to completion.  Always returns >= 1 step, the last one finished."""
    info = get_algorithm(key)
    if info is None:
        logger.warning("Algorithm not found: %s", key)
        return finished_only()

    try:
        steps = list(info.fn(list(nodes), list(edges), options))
    except Exception:
        logger.exception("Algorithm execution error in %s", key)
        return finished_only()

    if not steps or not steps[-1].is_final:
        logger.warning("%s ended without a finished step; closing the trace", key)
        steps.append(Step(finished=True))

    logger.info("%s produced %d steps", key, len(steps))
    return steps


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "validate_request",
    "run_algorithm",
    "AlgorithmOptions",
    "AlgorithmError",
    "AlgorithmRequestError",
    "UnknownAlgorithmError",
    "Step",
    "StepBuilder",
    "UNSET",
    "build_path",
    "describe_phase",
    "OrderViolation",
    "topological_violations",
    "final_order",
]
