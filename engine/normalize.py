"""
normalize.py — Step Normalizer
===============================
Folds one raw Step (a partial delta) into the running VisualizationState.

    state = merge_step(step, state, context)

This is the ONLY place that looks at runtime container types.  A field a
step defines may arrive as a set, a list / tuple, or a keyed mapping whose
keys are the members; each normalizer turns it into one canonical shape.
A field the step leaves UNSET is carried over from the previous state.

merge_step is pure: no globals, no mutation of its inputs, so replaying
the same steps from the same initial state always gives the same states.
Merging an empty Step returns a state equal to its input.
"""

from collections.abc import Mapping as MappingABC
from dataclasses import replace
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Union

from algorithms.path import build_path
from algorithms.step import Step, UNSET
from engine.state import MergeContext, VisualizationState


RawStep = Union[Step, Mapping[str, Any], None]

# copied verbatim when the step defines them
PASSTHROUGH_FIELDS = (
    "current",
    "phase",
    "finish_order_stack",
    "found_sccs",
    "show_transposed",
    "discovery_times",
    "finish_times",
    "indegree",
    "finished",
    "result",
)


# ---------------------------------------------------------------------------
# Per-field normalizers
# ---------------------------------------------------------------------------
def _members(value: Any) -> List[Any]:
    """Set / sequence / keyed mapping → list of members, order kept."""
    if value is None:
        return []
    if isinstance(value, MappingABC):
        return list(value.keys())
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if isinstance(value, str):
        return [value]
    return list(value)


def normalize_visited(value: Any, prev: FrozenSet[str]) -> FrozenSet[str]:
    if value is UNSET:
        return prev
    return frozenset(_members(value))


def normalize_sequence(value: Any, prev: List[str]) -> List[str]:
    """queue / path / order."""
    if value is UNSET:
        return list(prev)
    return _members(value)


def normalize_mapping(value: Any, prev: Mapping[str, Any]) -> Dict[str, Any]:
    """distances / previous / scc_colors."""
    if value is UNSET:
        return dict(prev)
    if isinstance(value, MappingABC):
        return dict(value)
    return {}


def _copy_passthrough(value: Any) -> Any:
    if isinstance(value, MappingABC):
        return dict(value)
    if isinstance(value, list):
        return [list(v) if isinstance(v, (list, tuple)) else v for v in value]
    return value


# ---------------------------------------------------------------------------
# Path fallback
# ---------------------------------------------------------------------------
def choose_path_target(
    previous: Mapping[str, Optional[str]],
    end_node: Optional[str],
    current: Optional[str],
) -> Optional[str]:
    """end node > current node > newest key of the predecessor map."""
    if end_node:
        return end_node
    if current:
        return current
    if previous:
        return list(previous.keys())[-1]
    return None


def reconstruct_path(
    previous: Mapping[str, Optional[str]],
    end_node: Optional[str] = None,
    current: Optional[str] = None,
) -> List[str]:
    return build_path(previous, choose_path_target(previous, end_node, current))


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------
def as_step(raw: RawStep) -> Step:
    if isinstance(raw, Step):
        return raw
    return Step.from_dict(raw)


def merge_step(
    raw: RawStep,
    prev: VisualizationState,
    context: Optional[MergeContext] = None,
) -> VisualizationState:
    step = as_step(raw)
    context = context or MergeContext()

    visited    = normalize_visited(step.visited, prev.visited)
    queue      = normalize_sequence(step.queue, prev.queue)
    distances  = normalize_mapping(step.distances, prev.distances)
    scc_colors = normalize_mapping(step.scc_colors, prev.scc_colors)
    previous   = normalize_mapping(step.previous, prev.previous)

    path = normalize_sequence(step.path, prev.path)
    if not path and step.has("previous"):
        current = step.current if step.has("current") else prev.current
        path = reconstruct_path(previous, context.end_node, current)

    changes: Dict[str, Any] = dict(
        visited=visited,
        queue=queue,
        path=path,
        distances=distances,
        scc_colors=scc_colors,
        previous=previous,
    )

    if step.has("order"):
        order = _members(step.order)
        changes["order"] = order
        if not step.result:
            changes["result"] = "Order: " + ", ".join(context.label(nid) for nid in order)
            changes["visited"] = frozenset(order)

    for name in PASSTHROUGH_FIELDS:
        if step.has(name):
            changes[name] = _copy_passthrough(getattr(step, name))

    return replace(prev, **changes)


def iter_states(
    steps: Iterable[RawStep],
    initial: Optional[VisualizationState] = None,
    context: Optional[MergeContext] = None,
) -> Iterator[VisualizationState]:
    """Replay a trace, yielding the merged state after each step (step counter set)."""
    state = initial or VisualizationState()
    for idx, raw in enumerate(steps):
        state = replace(merge_step(raw, state, context), step=idx + 1)
        yield state
