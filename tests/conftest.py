# tests/conftest.py
"""
Shared test fixtures.

Graphs are built from compact tuples so each test module can describe
exactly the shape it needs:

    make_graph("ABC", [("A", "B", 1), ("B", "C", 2)], directed=True)
"""
import pytest

from graph import Graph, Node, Edge
from algorithms import AlgorithmOptions, run_algorithm


def make_graph(node_ids, edges, directed=False) -> Graph:
    """Build a Graph; edges are (from, to) or (from, to, weight)."""
    g = Graph(directed=directed)
    for nid in node_ids:
        g.add_node(Node(node_id=nid, label=nid))
    for idx, e in enumerate(edges):
        weight = e[2] if len(e) > 2 else 1.0
        g.add_edge(Edge(e[0], e[1], weight=weight, edge_id=f"e{idx + 1}"))
    return g


def run(key, graph: Graph, start=None, end=None):
    """Run one engine over a Graph the way the run layer does."""
    options = AlgorithmOptions(is_directed=graph.directed, start_node=start, end_node=end)
    return run_algorithm(key, graph.node_list(), graph.edges, options)


# ═════════════════════════════════════════════════════════════════
#  FIXTURE GRAPHS
# ═════════════════════════════════════════════════════════════════

@pytest.fixture
def weighted_chain() -> Graph:
    """
    Directed, the end-to-end scenario:

        A --1--> B --2--> C
    """
    return make_graph("ABC", [("A", "B", 1), ("B", "C", 2)], directed=True)


@pytest.fixture
def diamond() -> Graph:
    """
    Undirected, two shortest routes plus a long tail:

        A - B - D - E
        A - C - D
    """
    return make_graph(
        "ABCDE",
        [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("D", "E")],
    )


@pytest.fixture
def three_cycle() -> Graph:
    """Directed A→B→C→A."""
    return make_graph("ABC", [("A", "B"), ("B", "C"), ("C", "A")], directed=True)


@pytest.fixture
def two_component_digraph() -> Graph:
    """
    Directed, three SCCs:

        {A, B, C} cycle  →  {D, E} cycle  →  {F}
    """
    return make_graph(
        "ABCDEF",
        [
            ("A", "B"), ("B", "C"), ("C", "A"),
            ("C", "D"),
            ("D", "E"), ("E", "D"),
            ("E", "F"),
        ],
        directed=True,
    )


@pytest.fixture
def dag() -> Graph:
    """
    Directed acyclic:

        A → C, B → C, C → D, B → D, D → E
    """
    return make_graph(
        "ABCDE",
        [("A", "C"), ("B", "C"), ("C", "D"), ("B", "D"), ("D", "E")],
        directed=True,
    )


@pytest.fixture
def negative_cycle() -> Graph:
    """Directed, S → A, and A ⇄ B with total cycle weight -1."""
    return make_graph(
        "SAB",
        [("S", "A", 1), ("A", "B", 1), ("B", "A", -2)],
        directed=True,
    )


@pytest.fixture
def weighted_mesh() -> Graph:
    """
    Undirected, non-negative weights where the direct edge is not cheapest:

        A -4- B, A -1- C, C -2- B, B -5- D, C -8- D, D -3- E
    """
    return make_graph(
        "ABCDE",
        [("A", "B", 4), ("A", "C", 1), ("C", "B", 2), ("B", "D", 5), ("C", "D", 8), ("D", "E", 3)],
    )
