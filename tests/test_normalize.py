# tests/test_normalize.py
"""
Tests for the step normalizer (engine/normalize.py) and the state it
produces (engine/state.py).

Covers:
    • Idempotence: merging an empty step changes nothing
    • Container coercion (set / list / keyed mapping)
    • Carry-forward of absent fields, pass-through of present ones
    • Path fallback from a predecessor map
    • Order display text
    • Deterministic replay
    • JSON view of the state
"""
import math

import pytest

from algorithms import Step
from engine import MergeContext, VisualizationState, iter_states, merge_step
from tests.conftest import run


@pytest.fixture
def busy_state() -> VisualizationState:
    """A state with most fields populated."""
    state = VisualizationState()
    state = merge_step(Step(
        visited={"A", "B"},
        current="B",
        queue=["C"],
        path=["A", "B"],
        distances={"A": 0, "B": 1},
        previous={"A": None, "B": "A"},
        phase="dfs1",
        found_sccs=[["A"]],
        scc_colors={"A": "#f87171"},
        discovery_times={"A": 1},
        finish_times={"A": 2},
        result="halfway",
    ), state)
    return state


# ═════════════════════════════════════════════════════════════════
#  IDEMPOTENCE & CARRY-FORWARD
# ═════════════════════════════════════════════════════════════════

class TestMergeBasics:

    def test_empty_step_on_default(self):
        state = VisualizationState()
        assert merge_step(Step(), state) == state

    def test_empty_step_on_busy_state(self, busy_state):
        assert merge_step(Step(), busy_state) == busy_state

    def test_empty_dict_step(self, busy_state):
        assert merge_step({}, busy_state) == busy_state

    def test_none_step(self, busy_state):
        assert merge_step(None, busy_state) == busy_state

    def test_absent_fields_carried(self, busy_state):
        nxt = merge_step(Step(current="C"), busy_state)
        assert nxt.current == "C"
        assert nxt.visited == busy_state.visited
        assert nxt.path == ["A", "B"]
        assert nxt.result == "halfway"

    def test_none_is_a_real_value(self, busy_state):
        assert merge_step(Step(current=None), busy_state).current is None

    def test_inputs_not_mutated(self, busy_state):
        before = busy_state.distances.copy()
        nxt = merge_step(Step(distances={"A": 0, "B": 0.5}), busy_state)
        assert busy_state.distances == before
        assert nxt.distances == {"A": 0, "B": 0.5}

    def test_camel_case_dict_step(self, busy_state):
        nxt = merge_step({"foundSccs": [["A", "B"]], "showTransposed": True, "bogus": 1}, busy_state)
        assert nxt.found_sccs == [["A", "B"]]
        assert nxt.show_transposed is True


# ═════════════════════════════════════════════════════════════════
#  COERCION
# ═════════════════════════════════════════════════════════════════

class TestCoercion:

    @pytest.mark.parametrize("raw", [
        {"A", "B"},
        ["A", "B"],
        ("B", "A"),
        {"A": True, "B": True},
    ])
    def test_visited_shapes(self, raw):
        assert merge_step(Step(visited=raw), VisualizationState()).visited == frozenset({"A", "B"})

    def test_queue_from_keyed_mapping_keeps_order(self):
        nxt = merge_step(Step(queue={"C": 1, "A": 1}), VisualizationState())
        assert nxt.queue == ["C", "A"]

    def test_path_from_set_is_sorted(self):
        nxt = merge_step(Step(path={"B", "A"}), VisualizationState())
        assert nxt.path == ["A", "B"]

    def test_none_becomes_empty(self, busy_state):
        nxt = merge_step(Step(visited=None, queue=None), busy_state)
        assert nxt.visited == frozenset()
        assert nxt.queue == []

    def test_non_mapping_distances_become_empty(self, busy_state):
        assert merge_step(Step(distances=["A"]), busy_state).distances == {}


# ═════════════════════════════════════════════════════════════════
#  PATH FALLBACK
# ═════════════════════════════════════════════════════════════════

class TestPathFallback:

    PREV = {"A": None, "B": "A", "C": "B"}

    def test_uses_end_node(self):
        nxt = merge_step(Step(previous=self.PREV, current="B"), VisualizationState(), MergeContext(end_node="C"))
        assert nxt.path == ["A", "B", "C"]

    def test_uses_current(self):
        nxt = merge_step(Step(previous=self.PREV, current="B"), VisualizationState())
        assert nxt.path == ["A", "B"]

    def test_uses_newest_key(self):
        nxt = merge_step(Step(previous=self.PREV), VisualizationState())
        assert nxt.path == ["A", "B", "C"]

    def test_inherited_path_wins(self, busy_state):
        nxt = merge_step(Step(previous=self.PREV, current="C"), busy_state)
        assert nxt.path == ["A", "B"]

    def test_no_previous_no_fallback(self):
        state = VisualizationState(previous=dict(self.PREV))
        assert merge_step(Step(current="C"), state).path == []


# ═════════════════════════════════════════════════════════════════
#  ORDER DISPLAY
# ═════════════════════════════════════════════════════════════════

class TestOrderDisplay:

    def test_order_without_result_is_described(self):
        ctx = MergeContext(labels={"A": "Alpha", "B": ""})
        nxt = merge_step(Step(order=["A", "B"]), VisualizationState(), ctx)
        assert nxt.result == "Order: Alpha, B"
        assert nxt.visited == frozenset({"A", "B"})
        assert nxt.order == ["A", "B"]

    def test_explicit_result_kept(self):
        nxt = merge_step(Step(order=["A"], result="done", finished=True), VisualizationState())
        assert nxt.result == "done"

    def test_order_absent_by_default(self):
        assert VisualizationState().order is None


# ═════════════════════════════════════════════════════════════════
#  REPLAY
# ═════════════════════════════════════════════════════════════════

class TestReplay:

    @pytest.mark.parametrize("key, start, end", [
        ("bfs", "A", "E"),
        ("dfs", "A", None),
        ("dijkstra", "A", "E"),
        ("bellmanFord", "A", "E"),
    ])
    def test_replay_is_deterministic(self, diamond, key, start, end):
        steps = run(key, diamond, start=start, end=end)
        ctx = MergeContext(end_node=end)
        assert list(iter_states(steps, context=ctx)) == list(iter_states(steps, context=ctx))

    def test_step_counter(self, diamond):
        steps = run("bfs", diamond, start="A")
        states = list(iter_states(steps))
        assert [s.step for s in states] == list(range(1, len(steps) + 1))
        assert states[-1].finished is True

    def test_scc_states_reset_between_passes(self, three_cycle):
        states = list(iter_states(run("scc", three_cycle)))
        transposed = next(s for s in states if s.phase == "transpose")
        assert transposed.visited == frozenset()
        assert transposed.current is None


# ═════════════════════════════════════════════════════════════════
#  JSON VIEW
# ═════════════════════════════════════════════════════════════════

class TestStateToDict:

    def test_camel_case_and_infinity(self):
        state = VisualizationState(
            visited=frozenset({"B", "A"}),
            distances={"A": 0, "B": math.inf},
            found_sccs=[["A"]],
        )
        out = state.to_dict()
        assert out["visited"] == ["A", "B"]
        assert out["distances"] == {"A": 0, "B": "∞"}
        assert out["foundSccs"] == [["A"]]
        assert "finishOrderStack" in out and "discoveryTimes" in out

    def test_step_to_dict_only_defined(self):
        assert Step(visited={"B", "A"}, finished=True).to_dict() == {"visited": ["A", "B"], "finished": True}
