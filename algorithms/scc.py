"""
scc.py — Strongly Connected Components (Kosaraju)
==================================================
Always runs on the DIRECTED reading of the edge list, whatever
`is_directed` says; rejecting undirected graphs is the caller's job
(see algorithms.validate_request).

Phases (the `phase` field of each step):
  dfs1      – DFS forest over the original graph in node order.  A node
              is pushed on the finish-order stack once its subtree is
              exhausted.  One step on entry, one on exit.
  transpose – single marker step: switch to the reversed graph
              (`show_transposed`), carrying the full finish-order stack.
  dfs2      – pop the stack (latest finish first); every pop that hits an
              unvisited node roots a new SCC bucket, filled by DFS over the
              reversed graph.  Each bucket gets one palette colour.
  finished  – final step, "Found N SCCs."

Every node ends up in exactly one bucket: the buckets partition the
node set.
"""

from typing import Dict, Generator, Iterable, Iterator, List, Set, Tuple

from graph import Node, Edge, build_adjacency, build_transposed
from algorithms.options import AlgorithmOptions
from algorithms.step import Step, StepBuilder


SCC_PALETTE: List[str] = [
    "#f87171",
    "#fb923c",
    "#a3e635",
    "#4ade80",
    "#34d399",
    "#22d3ee",
    "#818cf8",
    "#a78bfa",
    "#f472b6",
    "#fb7185",
    "#e879f9",
    "#60a5fa",
    "#d946ef",
]

PHASE_LABELS: Dict[str, str] = {
    "dfs1":      "Phase: First DFS (Original Graph)",
    "transpose": "Phase: Transpose Graph",
    "dfs2":      "Phase: Second DFS (Transposed Graph)",
    "finished":  "Phase: Finished",
}

ENTER = "enter"
LEAVE = "leave"


def describe_phase(phase) -> str:
    return PHASE_LABELS.get(phase, "")


def scc_color(index: int) -> str:
    return SCC_PALETTE[index % len(SCC_PALETTE)]


def _depth_first(adj: Dict[str, List[str]], root: str, visited: Set[str]) -> Iterator[Tuple[str, str]]:
    """Explicit-stack DFS yielding (ENTER, u) / (LEAVE, u) in recursive order."""
    visited.add(root)
    yield ENTER, root
    stack = [(root, iter(adj[root]))]
    while stack:
        u, neighbours = stack[-1]
        child = next((v for v in neighbours if v not in visited), None)
        if child is None:
            stack.pop()
            yield LEAVE, u
        else:
            visited.add(child)
            stack.append((child, iter(adj[child])))
            yield ENTER, child


def _first_pass(
    node_ids: List[str],
    adj: Dict[str, List[str]],
    sb: StepBuilder,
    finish_order: List[str],
) -> Generator[Step, None, None]:
    visited: Set[str] = set()
    discovery_times: Dict[str, int] = {}
    finish_times:    Dict[str, int] = {}
    time = 0

    for root in node_ids:
        if root in visited:
            continue
        for event, u in _depth_first(adj, root, visited):
            time += 1
            if event == ENTER:
                discovery_times[u] = time
            else:
                finish_times[u] = time
                finish_order.append(u)
            yield sb.emit(
                phase="dfs1",
                visited=visited,
                current=u,
                finish_order_stack=finish_order,
                found_sccs=[],
                scc_colors={},
                show_transposed=False,
                discovery_times=discovery_times,
                finish_times=finish_times,
            )


def _second_pass(
    radj: Dict[str, List[str]],
    sb: StepBuilder,
    finish_order: List[str],
    found_sccs: List[List[str]],
    scc_colors: Dict[str, str],
    visited: Set[str],
    discovery_times: Dict[str, int],
    finish_times: Dict[str, int],
) -> Generator[Step, None, None]:
    time = 0
    pending = list(finish_order)

    while pending:
        root = pending.pop()
        if root in visited:
            continue

        bucket: List[str] = []
        found_sccs.append(bucket)
        colour = scc_color(len(found_sccs) - 1)

        for event, u in _depth_first(radj, root, visited):
            time += 1
            if event == ENTER:
                discovery_times[u] = time
                bucket.append(u)
                scc_colors[u] = colour
                yield sb.emit(
                    phase="dfs2",
                    visited=visited,
                    current=u,
                    found_sccs=found_sccs,
                    scc_colors=scc_colors,
                    show_transposed=True,
                    finish_order_stack=pending,
                    discovery_times=discovery_times,
                    finish_times=finish_times,
                )
            else:
                finish_times[u] = time
                yield sb.extend_last(finish_times=finish_times)


def scc(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    options: AlgorithmOptions,
) -> Generator[Step, None, None]:
    nodes = list(nodes)
    edges = list(edges)
    adj   = build_adjacency(nodes, edges, directed=True)
    radj  = build_transposed(nodes, edges)

    sb = StepBuilder()
    finish_order: List[str] = []

    # ---- phase 1: finish order on the original graph ----
    yield from _first_pass([n.id for n in nodes], adj, sb, finish_order)

    # ---- phase 2: switch to the transposed graph ----
    yield sb.emit(
        phase="transpose",
        show_transposed=True,
        finish_order_stack=finish_order,
        visited=set(),
        current=None,
        found_sccs=[],
        scc_colors={},
        discovery_times={},
        finish_times={},
    )

    # ---- phase 3: peel SCCs in reverse finish order ----
    found_sccs: List[List[str]] = []
    scc_colors: Dict[str, str]  = {}
    visited:    Set[str]        = set()
    discovery_times: Dict[str, int] = {}
    finish_times:    Dict[str, int] = {}
    yield from _second_pass(
        radj, sb, finish_order, found_sccs, scc_colors, visited, discovery_times, finish_times,
    )

    yield sb.emit(
        phase="finished",
        visited=visited,
        current=None,
        found_sccs=found_sccs,
        scc_colors=scc_colors,
        show_transposed=False,
        finish_order_stack=[],
        finished=True,
        result=f"Found {len(found_sccs)} SCCs.",
        discovery_times=discovery_times,
        finish_times=finish_times,
    )
