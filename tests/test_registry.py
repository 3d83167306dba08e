# tests/test_registry.py
"""
Tests for the algorithm registry and call boundary (algorithms/__init__.py).

Covers:
    • The six registry keys and their metadata
    • Every engine, every fixture graph: ≥ 1 step, last one finished
    • Engine failures and unknown keys → [Step(finished=True)] + log
    • Caller-side request validation
"""
import logging

import pytest

from algorithms import (
    REGISTRY,
    AlgoInfo,
    AlgorithmOptions,
    AlgorithmRequestError,
    Step,
    UnknownAlgorithmError,
    get_algorithm,
    list_algorithms,
    run_algorithm,
    validate_request,
)
from graph import Graph
from tests.conftest import make_graph, run

FIXTURES = ["weighted_chain", "diamond", "three_cycle", "two_component_digraph", "dag", "negative_cycle", "weighted_mesh"]


# ═════════════════════════════════════════════════════════════════
#  REGISTRY
# ═════════════════════════════════════════════════════════════════

class TestRegistry:

    def test_keys(self):
        assert list(REGISTRY) == ["bfs", "dfs", "dijkstra", "bellmanFord", "scc", "topologicalSort"]

    def test_list_matches_registry(self):
        assert [info.key for info in list_algorithms()] == list(REGISTRY)

    def test_get_missing(self):
        assert get_algorithm("astar") is None

    def test_requirements(self):
        assert REGISTRY["dijkstra"].requires_end and REGISTRY["bellmanFord"].requires_end
        assert REGISTRY["scc"].requires_directed
        assert not REGISTRY["scc"].requires_start
        assert not REGISTRY["topologicalSort"].requires_start

    def test_to_dict_excludes_callable(self):
        out = REGISTRY["bellmanFord"].to_dict()
        assert out["key"] == "bellmanFord"
        assert out["usesWeights"] is True
        assert "fn" not in out


# ═════════════════════════════════════════════════════════════════
#  CALL BOUNDARY
# ═════════════════════════════════════════════════════════════════

class TestRunAlgorithm:

    @pytest.mark.parametrize("key", list(REGISTRY))
    @pytest.mark.parametrize("fixture", FIXTURES)
    def test_always_ends_finished(self, request, key, fixture):
        g = request.getfixturevalue(fixture)
        ids = g.node_ids()
        steps = run(key, g, start=ids[0], end=ids[-1])
        assert len(steps) >= 1
        assert steps[-1].finished is True
        assert all(isinstance(s, Step) for s in steps)

    def test_empty_graph(self):
        for key in REGISTRY:
            steps = run(key, Graph(directed=True))
            assert steps[-1].finished is True

    def test_unknown_key(self, diamond, caplog):
        with caplog.at_level(logging.WARNING, logger="algorithms"):
            steps = run("astar", diamond, start="A")
        assert steps == [Step(finished=True)]
        assert "Algorithm not found: astar" in caplog.text

    def test_engine_exception_is_contained(self, diamond, monkeypatch, caplog):
        def broken(nodes, edges, options):
            yield Step(current="A")
            raise RuntimeError("boom")

        monkeypatch.setitem(REGISTRY, "broken", AlgoInfo(key="broken", label="Broken", fn=broken))
        with caplog.at_level(logging.ERROR, logger="algorithms"):
            steps = run("broken", diamond, start="A")
        assert steps == [Step(finished=True)]
        assert "Algorithm execution error in broken" in caplog.text
        assert "RuntimeError" in caplog.text

    def test_unfinished_trace_is_closed(self, diamond, monkeypatch):
        def open_ended(nodes, edges, options):
            yield Step(current="A")

        monkeypatch.setitem(REGISTRY, "openEnded", AlgoInfo(key="openEnded", label="Open", fn=open_ended))
        steps = run("openEnded", diamond, start="A")
        assert steps == [Step(current="A"), Step(finished=True)]

    def test_accepts_iterables(self, diamond):
        options = AlgorithmOptions(start_node="A")
        steps = run_algorithm("bfs", iter(diamond.node_list()), iter(diamond.edges), options)
        assert steps[-1].finished is True


# ═════════════════════════════════════════════════════════════════
#  REQUEST VALIDATION
# ═════════════════════════════════════════════════════════════════

class TestValidateRequest:

    def test_ok(self, weighted_chain):
        opts = AlgorithmOptions(is_directed=True, start_node="A", end_node="C")
        assert validate_request("dijkstra", weighted_chain, opts).key == "dijkstra"

    def test_unknown(self, weighted_chain):
        with pytest.raises(UnknownAlgorithmError, match="Unknown algorithm: nope"):
            validate_request("nope", weighted_chain, AlgorithmOptions())

    def test_empty_graph(self):
        with pytest.raises(AlgorithmRequestError, match="no nodes"):
            validate_request("topologicalSort", Graph(directed=True), AlgorithmOptions(is_directed=True))

    def test_start_required(self, diamond):
        with pytest.raises(AlgorithmRequestError, match="start node"):
            validate_request("bfs", diamond, AlgorithmOptions(start_node="Z"))

    def test_end_required(self, weighted_chain):
        with pytest.raises(AlgorithmRequestError, match="end node"):
            validate_request("bellmanFord", weighted_chain, AlgorithmOptions(is_directed=True, start_node="A"))

    def test_scc_needs_directed(self, diamond):
        with pytest.raises(AlgorithmRequestError, match="directed graphs"):
            validate_request("scc", diamond, AlgorithmOptions(is_directed=False))

    def test_topological_sort_undirected_allowed(self, diamond):
        # the engine itself explains why it cannot run
        assert validate_request("topologicalSort", diamond, AlgorithmOptions()).key == "topologicalSort"

    def test_scc_without_start(self):
        g = make_graph("AB", [("A", "B")], directed=True)
        assert validate_request("scc", g, AlgorithmOptions(is_directed=True)).key == "scc"


# ═════════════════════════════════════════════════════════════════
#  OPTIONS
# ═════════════════════════════════════════════════════════════════

class TestOptions:

    def test_from_dict(self):
        opts = AlgorithmOptions.from_dict({"isDirected": True, "startNode": "A", "endNode": ""})
        assert opts == AlgorithmOptions(is_directed=True, start_node="A", end_node=None)

    def test_to_dict(self):
        assert AlgorithmOptions(start_node="A").to_dict() == {"isDirected": False, "startNode": "A", "endNode": None}
