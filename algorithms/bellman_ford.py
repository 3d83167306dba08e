"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
The only single-source shortest-path engine here that handles NEGATIVE
edge weights, and detects negative cycles.

Structure:
  • Up to |V|-1 rounds relaxing every edge in edge-list order; an
    undirected edge is relaxed u→v and then v→u inside the same round.
  • A round with zero updates is a fixed point: stop early.
  • One extra detector scan over all edges: any remaining strict
    improvement means a negative cycle reachable from the start.

Yields a Step for:
  1. The initial distances (start = 0, all others ∞)
  2. Each successful relaxation (distance decrease)
  3. Final step: distances, path, and the outcome text

Without an end node the path follows the node updated last during
relaxation, so something meaningful is still highlighted.
"""

from typing import Dict, Generator, Iterable, List, Optional, Set, Tuple

from graph import Node, Edge
from algorithms.dijkstra import INF, distance_text
from algorithms.options import AlgorithmOptions
from algorithms.path import build_path
from algorithms.step import Step, StepBuilder


def _reached(distances: Dict[str, float]) -> Set[str]:
    return {nid for nid, d in distances.items() if d != INF}


def _directions(edge_list: List[Tuple[str, str, float]], directed: bool):
    """Every (u, v, w) to relax, reverse direction right after forward when undirected."""
    for u, v, w in edge_list:
        yield u, v, w
        if not directed:
            yield v, u, w


def bellman_ford(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    options: AlgorithmOptions,
) -> Generator[Step, None, None]:
    nodes = list(nodes)
    start = options.start_node
    end   = options.end_node
    ids   = {n.id for n in nodes}

    if start not in ids:
        yield Step(finished=True)
        return

    sb = StepBuilder()
    distances: Dict[str, float]         = {n.id: (0 if n.id == start else INF) for n in nodes}
    previous:  Dict[str, Optional[str]] = {n.id: None for n in nodes}

    # dangling endpoints are ignored, same as the adjacency builder
    edge_list = [
        (e.source, e.target, 1 if e.weight is None else e.weight)
        for e in edges
        if e.source in ids and e.target in ids
    ]

    yield sb.emit(
        distances=distances,
        visited=_reached(distances),
        current=start,
        path=[],
        previous=previous,
    )

    last_updated: Optional[str] = None

    # ==============================================================
    # MAIN ROUNDS
    # ==============================================================
    for _ in range(1, len(nodes)):
        updated = False
        for u, v, w in _directions(edge_list, options.is_directed):
            if distances[u] == INF or distances[u] + w >= distances[v]:
                continue
            distances[v] = distances[u] + w
            previous[v] = u
            updated = True
            last_updated = v
            yield sb.emit(
                distances=distances,
                visited=_reached(distances),
                current=v,
                path=build_path(previous, end or v),
                previous=previous,
            )
        if not updated:
            break

    # ==============================================================
    # NEGATIVE-CYCLE DETECTOR
    # ==============================================================
    negative_cycle = any(
        distances[u] != INF and distances[u] + w < distances[v]
        for u, v, w in _directions(edge_list, options.is_directed)
    )

    target = end or last_updated
    if negative_cycle:
        result = "Negative cycle detected"
    elif target:
        result = f"Distance to {target}: {distance_text(distances.get(target, INF))}"
    else:
        result = "Finished"

    yield sb.emit(
        distances=distances,
        visited=_reached(distances),
        finished=True,
        result=result,
        path=build_path(previous, target),
        previous=previous,
    )
