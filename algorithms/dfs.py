"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit
issues) that reproduces recursive DFS exactly: each stack frame holds a
node and an iterator over its neighbours, so children are entered in
adjacency order and a node is closed only after its whole subtree.

Yields a Step at:
  1. Entering a node   →  CURRENT, discovery time recorded
  2. Leaving a node    →  finish time recorded
  3. Reaching the end node  →  finish time recorded, finished step,
     traversal halts (ancestors never get their closing step)
  4. Stack empty  →  trailing finished step

One shared clock ticks on every enter and every leave, so
discovery / finish times nest like parentheses.
"""

from typing import Dict, Generator, Iterable, Iterator, List, Optional, Tuple

from graph import Node, Edge, build_adjacency
from algorithms.options import AlgorithmOptions
from algorithms.path import build_path
from algorithms.step import Step, StepBuilder


def dfs(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    options: AlgorithmOptions,
) -> Generator[Step, None, None]:
    adj   = build_adjacency(nodes, edges, options.is_directed)
    start = options.start_node
    end   = options.end_node

    if start not in adj:
        yield Step(finished=True)
        return

    sb = StepBuilder()
    visited: set = set()
    previous:        Dict[str, Optional[str]] = {start: None}
    discovery_times: Dict[str, int]           = {}
    finish_times:    Dict[str, int]           = {}
    time = 0

    def snapshot(u: str) -> Step:
        return sb.emit(
            visited=visited,
            current=u,
            path=build_path(previous, u),
            discovery_times=discovery_times,
            finish_times=finish_times,
            previous=previous,
        )

    # frame = (node, iterator over its remaining neighbours)
    stack: List[Tuple[str, Iterator[str]]] = []
    stop_requested = False

    def enter(u: str) -> Step:
        nonlocal time
        time += 1
        discovery_times[u] = time
        visited.add(u)
        stack.append((u, iter(adj[u])))
        return snapshot(u)

    yield enter(start)
    if start == end:
        stop_requested = True

    while stack and not stop_requested:
        u, neighbours = stack[-1]

        child = next((v for v in neighbours if v not in visited), None)
        if child is not None:
            previous[child] = u
            yield enter(child)
            if child == end:
                stop_requested = True
            continue

        # subtree exhausted: close u
        stack.pop()
        time += 1
        finish_times[u] = time
        yield snapshot(u)

    if stop_requested:
        time += 1
        finish_times[end] = time
        yield sb.finish(finish_times=finish_times, previous=previous)
        return

    yield sb.finish(previous=previous)
