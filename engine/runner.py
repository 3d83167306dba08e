"""
runner.py — Algorithm Run
==========================
Ties one run together: check the request, compute the whole trace up
front, hand it to a StepPlayer, and summarise the outcome.

Usage:
    run = AlgorithmRun()
    run.start("dijkstra", graph, start_node="A", end_node="C")
    run.player.next_step()           # one merge per timer tick
    run.summary()                    # outcome card, from the full trace

Starting a new run on the same object throws the previous trace and
merged state away first.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from graph import Graph
from algorithms import (
    AlgoInfo,
    AlgorithmOptions,
    OrderViolation,
    Step,
    final_order,
    run_algorithm,
    topological_violations,
    validate_request,
)
from engine.normalize import iter_states
from engine.player import StepPlayer
from engine.state import MergeContext, VisualizationState

logger = logging.getLogger(__name__)

NEGATIVE_CYCLE_RESULT = "Negative cycle detected"


# ---------------------------------------------------------------------------
# Summary dataclass: what the results panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunSummary:
    algo_key:        str            = ""
    algo_label:      str            = ""
    start_node:      Optional[str]  = None
    end_node:        Optional[str]  = None
    total_steps:     int            = 0
    visited_count:   int            = 0
    path:            List[str]      = field(default_factory=list)
    path_cost:       float          = 0.0
    negative_cycle:  bool           = False
    scc_count:       int            = 0
    violation_count: int            = 0
    result:          Optional[str]  = None
    wall_time_ms:    float          = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algoKey":        self.algo_key,
            "algoLabel":      self.algo_label,
            "startNode":      self.start_node,
            "endNode":        self.end_node,
            "totalSteps":     self.total_steps,
            "visitedCount":   self.visited_count,
            "path":           list(self.path),
            "pathCost":       self.path_cost,
            "negativeCycle":  self.negative_cycle,
            "sccCount":       self.scc_count,
            "violationCount": self.violation_count,
            "result":         self.result,
            "wallTimeMs":     self.wall_time_ms,
        }


# ---------------------------------------------------------------------------
# AlgorithmRun
# ---------------------------------------------------------------------------
class AlgorithmRun:
    """
    Attributes:
        steps      : Full trace of the current run.
        violations : Topological order violations (topologicalSort only).
        player     : The StepPlayer playing `steps`.
    """

    def __init__(self, player: Optional[StepPlayer] = None):
        self.player:     StepPlayer           = player or StepPlayer()
        self.steps:      List[Step]           = []
        self.violations: List[OrderViolation] = []

        self._info:      Optional[AlgoInfo]         = None
        self._graph:     Optional[Graph]            = None
        self._options:   Optional[AlgorithmOptions] = None
        self._context:   MergeContext               = MergeContext()
        self._wall_ms:   float                      = 0.0

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(
        self,
        algo_key: str,
        graph: Graph,
        start_node: Optional[str] = None,
        end_node: Optional[str] = None,
    ) -> List[Step]:
        """Validate, compute the full trace and load it into the player."""
        options = AlgorithmOptions(
            is_directed=graph.directed,
            start_node=start_node,
            end_node=end_node,
        )
        info = validate_request(algo_key, graph, options)

        # a new run never reuses anything from the previous one
        self.player.reset()
        self._info    = info
        self._graph   = graph
        self._options = options
        self._context = MergeContext(end_node=end_node, labels=graph.labels())

        started = time.monotonic()
        self.steps = run_algorithm(algo_key, graph.node_list(), graph.edges, options)
        self._wall_ms = (time.monotonic() - started) * 1000

        self.violations = []
        if algo_key == "topologicalSort":
            self.violations = topological_violations(final_order(self.steps), graph.edges, graph.directed)
            if self.violations:
                logger.warning("topological order has %d violating edge(s)", len(self.violations))

        self.player.start(
            self.steps,
            self._context,
            VisualizationState(order_violations=list(self.violations)),
        )
        return self.steps

    # ------------------------------------------------------------------
    # Outcome
    # ------------------------------------------------------------------
    def final_state(self) -> VisualizationState:
        """Merged state after the whole trace, independent of playback position."""
        state = VisualizationState(order_violations=list(self.violations))
        for state in iter_states(self.steps, state, self._context):
            pass
        return state

    def summary(self) -> RunSummary:
        last = self.final_state()
        opts = self._options or AlgorithmOptions()
        return RunSummary(
            algo_key=self._info.key if self._info else "",
            algo_label=self._info.label if self._info else "",
            start_node=opts.start_node,
            end_node=opts.end_node,
            total_steps=len(self.steps),
            visited_count=len(last.visited),
            path=list(last.path),
            path_cost=self._path_cost(last.path),
            negative_cycle=last.result == NEGATIVE_CYCLE_RESULT,
            scc_count=len(last.found_sccs),
            violation_count=len(self.violations),
            result=last.result,
            wall_time_ms=round(self._wall_ms, 2),
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _path_cost(self, path: List[str]) -> float:
        """Cheapest edge between each consecutive pair on the path."""
        if self._graph is None or len(path) < 2:
            return 0.0
        cost = 0.0
        for a, b in zip(path, path[1:]):
            candidates = self._graph.edges_between(a, b)
            if candidates:
                cost += min(e.weight for e in candidates)
        return cost
