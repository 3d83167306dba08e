"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS.  Yields a Step at every queue change:
  1. Initialise  →  start node queued, visited, CURRENT
  2. Discover an unseen neighbour  →  enqueue it, path-so-far to it
  3. Dequeue the end node  →  mark discovery, stop early (queue NOT drained)
  4. Final step  →  finished, path to the end node (or last path shown)

Neighbours are examined in edge-insertion order, so on an unweighted
graph the final path is a shortest path by hop count.
"""

from collections import deque
from typing import Dict, Generator, Iterable, Optional

from graph import Node, Edge, build_adjacency
from algorithms.options import AlgorithmOptions
from algorithms.path import build_path
from algorithms.step import Step, StepBuilder


def bfs(
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

    sb       = StepBuilder()
    queue    = deque([start])
    visited  = {start}
    previous: Dict[str, Optional[str]] = {start: None}

    # --- initialisation step ---
    yield sb.emit(
        visited=visited,
        current=start,
        queue=list(queue),
        path=build_path(previous, start),
        previous=previous,
    )

    found = False
    while queue:
        u = queue.popleft()

        if u == end:
            found = True
            yield sb.emit(
                visited=visited,
                current=u,
                queue=list(queue),
                path=build_path(previous, u),
                previous=previous,
            )
            break

        for v in adj[u]:
            if v in visited:
                continue
            visited.add(v)
            previous[v] = u
            queue.append(v)
            yield sb.emit(
                visited=visited,
                current=v,
                queue=list(queue),
                path=build_path(previous, v),
                previous=previous,
            )

    if found:
        yield sb.finish(path=build_path(previous, end), previous=previous)
    else:
        # end not given or unreachable: keep the last path on screen
        yield sb.finish(previous=previous)
