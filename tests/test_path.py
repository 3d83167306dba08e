# tests/test_path.py
"""
Tests for the path reconstructor (algorithms/path.py) and the
normalizer's target selection (engine/normalize.py).
"""
from algorithms import build_path
from engine import choose_path_target, reconstruct_path


class TestBuildPath:

    def test_empty_map_no_target(self):
        assert build_path({}, None) == []

    def test_two_nodes(self):
        assert build_path({"B": "A", "A": None}, "B") == ["A", "B"]

    def test_empty_string_target(self):
        assert build_path({"A": None}, "") == []

    def test_target_missing_from_map(self):
        assert build_path({"B": "A"}, "Z") == ["Z"]

    def test_cycle_guard(self):
        # A ← B ← A ... must terminate
        assert build_path({"A": "B", "B": "A"}, "A") == ["B", "A"]

    def test_none_map(self):
        assert build_path(None, "A") == ["A"]


class TestPathTarget:

    def test_end_node_wins(self):
        assert choose_path_target({"B": "A"}, "C", "B") == "C"

    def test_current_next(self):
        assert choose_path_target({"B": "A"}, None, "B") == "B"

    def test_newest_previous_key_last(self):
        assert choose_path_target({"A": None, "B": "A", "C": "B"}, None, None) == "C"

    def test_nothing_to_choose(self):
        assert choose_path_target({}, None, None) is None

    def test_reconstruct(self):
        assert reconstruct_path({"A": None, "B": "A", "C": "B"}) == ["A", "B", "C"]
