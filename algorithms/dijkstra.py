"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Simple O(V²) Dijkstra: every iteration scans for the unvisited node with
the smallest finite distance.  No heap: graphs here are tens of nodes,
and the linear scan gives a deterministic tie-break (first minimum in
node order).

Yields a Step at:
  1. Selecting the closest unvisited node  →  CURRENT, now final
  2. Each successful relaxation  →  updated distances, path-so-far
  3. Final step  →  finished, "Distance to X: d" (or "Finished")

The path shown follows the end node when one is chosen, otherwise the
node most recently touched.

Correctness note: Dijkstra requires non-negative weights.
The caller (or the UI) should warn / block if negative edges exist.
"""

import math
from typing import Dict, Generator, Iterable, Optional

from graph import Node, Edge, build_adjacency
from algorithms.options import AlgorithmOptions
from algorithms.path import build_path
from algorithms.step import Step, StepBuilder


INF = math.inf


def distance_text(value: float) -> str:
    """Render a distance for result text: ∞ for unreachable, 3 rather than 3.0."""
    if value is None or value == INF:
        return "∞"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def dijkstra(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    options: AlgorithmOptions,
) -> Generator[Step, None, None]:
    nodes = list(nodes)
    adj   = build_adjacency(nodes, edges, options.is_directed, weighted=True)
    start = options.start_node
    end   = options.end_node

    if start not in adj:
        yield Step(finished=True)
        return

    sb = StepBuilder()
    distances: Dict[str, float]         = {n.id: (0 if n.id == start else INF) for n in nodes}
    previous:  Dict[str, Optional[str]] = {n.id: None for n in nodes}
    visited: set = set()

    while len(visited) < len(distances):
        # linear scan; strict < keeps the first minimum in node order
        current: Optional[str] = None
        best = INF
        for nid, d in distances.items():
            if nid not in visited and d < best:
                best = d
                current = nid

        if current is None:
            break   # only unreachable nodes remain

        visited.add(current)
        yield sb.emit(
            visited=visited,
            current=current,
            distances=distances,
            path=build_path(previous, end or current),
            previous=previous,
        )

        if current == end:
            break

        for v, weight in adj[current]:
            if v in visited:
                continue
            candidate = distances[current] + weight
            if candidate < distances[v]:
                distances[v] = candidate
                previous[v] = current
                yield sb.emit(
                    visited=visited,
                    current=v,
                    distances=distances,
                    path=build_path(previous, end or v),
                )

    if end:
        result = f"Distance to {end}: {distance_text(distances.get(end, INF))}"
    else:
        result = "Finished"
    yield sb.finish(result=result, previous=previous)
