"""
topological_sort.py — Topological Sort (Kahn's algorithm)
==========================================================
Only meaningful on a directed graph: with `is_directed` off the engine
returns a single explanatory finished step and does no work.

Yields a Step for:
  1. The initial in-degrees and zero-in-degree queue
  2. Each dequeue (node appended to the order)
  3. Each in-degree decrement of a successor
  4. Each successor enqueued because its in-degree reached 0
  5. Final step: complete order, or a cycle report with the partial order

Candidates leave the queue in FIFO order, so the output is fully
determined by node order and edge-insertion order.
"""

from collections import deque
from typing import Dict, Generator, Iterable, List

from graph import Node, Edge, build_adjacency
from algorithms.options import AlgorithmOptions
from algorithms.step import Step, StepBuilder


UNDIRECTED_MESSAGE = "Topological sort requires a directed graph. Enable 'Directed Graph' mode."
CYCLE_MESSAGE      = "Graph has at least one cycle (topological sort not possible)"
SUCCESS_MESSAGE    = "Topological order computed"


def topological_sort(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    options: AlgorithmOptions,
) -> Generator[Step, None, None]:
    if not options.is_directed:
        yield Step(finished=True, result=UNDIRECTED_MESSAGE, order=[])
        return

    nodes = list(nodes)
    adj   = build_adjacency(nodes, edges, directed=True)

    # count from the adjacency so dangling edges never contribute
    indegree: Dict[str, int] = {n.id: 0 for n in nodes}
    for successors in adj.values():
        for v in successors:
            indegree[v] += 1

    sb    = StepBuilder()
    queue = deque(nid for nid, d in indegree.items() if d == 0)
    order: List[str] = []

    yield sb.emit(queue=list(queue), indegree=indegree, order=[])

    while queue:
        u = queue.popleft()
        order.append(u)
        yield sb.emit(queue=list(queue), indegree=indegree, current=u, order=order)

        for v in adj[u]:
            indegree[v] -= 1
            yield sb.emit(queue=list(queue), indegree=indegree, current=u, order=order)
            if indegree[v] == 0:
                queue.append(v)
                yield sb.emit(queue=list(queue), indegree=indegree, current=v, order=order)

    result = CYCLE_MESSAGE if len(order) < len(nodes) else SUCCESS_MESSAGE
    yield sb.emit(finished=True, result=result, order=order)
