"""
step.py — Algorithm Step Delta
===============================
Every algorithm is a generator that yields Step objects.
A Step is a POINT-IN-TIME DELTA: it only carries the fields that changed
at one micro-event (a discovery, a relaxation, a finish).  Any field it
leaves UNSET is inherited from the previously merged visualization state
(see engine.normalize.merge_step).

Fields (wire name in brackets when it differs):
    visited            : set of node ids seen so far
    current            : node id being processed (None is a real value: "nothing")
    queue              : FIFO contents (BFS / Kahn)
    path               : path-so-far, ordered node ids
    distances          : {node_id: float} tentative distances
    previous           : {node_id: node_id | None} predecessor map
    discovery_times    : {node_id: int}            [discoveryTimes]
    finish_times       : {node_id: int}            [finishTimes]
    phase              : SCC phase name
    finish_order_stack : Kosaraju post-order       [finishOrderStack]
    found_sccs         : list of SCC buckets        [foundSccs]
    scc_colors         : {node_id: colour}         [sccColors]
    show_transposed    : bool                      [showTransposed]
    order              : topological order so far
    indegree           : {node_id: int} Kahn in-degrees
    finished           : True on the last step
    result             : human-readable outcome text

Design decisions:
  - `UNSET` (not None) marks an absent field, because None is a legal
    value for `current` and `result`.
  - Step is frozen.  The StepBuilder copies every container when it
    emits, so later mutation inside the algorithm can never leak into
    an already-emitted step.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional


class _Unset:
    """Singleton marker for "this step does not define the field"."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET: Any = _Unset()


# python attribute → wire key used by the editor / renderer
WIRE_NAMES: Dict[str, str] = {
    "discovery_times":    "discoveryTimes",
    "finish_times":       "finishTimes",
    "finish_order_stack": "finishOrderStack",
    "found_sccs":         "foundSccs",
    "scc_colors":         "sccColors",
    "show_transposed":    "showTransposed",
}


@dataclass(frozen=True)
class Step:
    visited:            Any = UNSET
    current:            Any = UNSET
    queue:              Any = UNSET
    path:               Any = UNSET
    distances:          Any = UNSET
    previous:           Any = UNSET
    discovery_times:    Any = UNSET
    finish_times:       Any = UNSET
    phase:              Any = UNSET
    finish_order_stack: Any = UNSET
    found_sccs:         Any = UNSET
    scc_colors:         Any = UNSET
    show_transposed:    Any = UNSET
    order:              Any = UNSET
    indegree:           Any = UNSET
    finished:           Any = UNSET
    result:             Any = UNSET

    def has(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    def defined(self) -> Dict[str, Any]:
        """Only the fields this step actually sets."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    @property
    def is_final(self) -> bool:
        return self.finished is True

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name, value in self.defined().items():
            if isinstance(value, (set, frozenset)):
                value = sorted(value)
            out[WIRE_NAMES.get(name, name)] = value
        return out

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Step":
        """Accepts wire (camelCase) or attribute names; unknown keys are ignored."""
        if not data:
            return cls()
        by_wire = {wire: attr for attr, wire in WIRE_NAMES.items()}
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            attr = by_wire.get(key, key)
            if attr in known:
                kwargs[attr] = value
        return cls(**kwargs)


def _snapshot(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return frozenset(value)
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return [list(v) if isinstance(v, (list, tuple)) else v for v in value]
    return value


# ---------------------------------------------------------------------------
# Builder owned by exactly one algorithm run
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Snapshots working structures into Steps and remembers the last one.

    Usage inside an algorithm generator:
        sb = StepBuilder()
        yield sb.emit(visited=visited, current=u, queue=queue)
        ...
        yield sb.finish(path=build_path(previous, end))

    `finish` copies the last emitted step and marks it finished, which is
    how every engine closes its trace.  The builder is created per run and
    passed explicitly into any phase helper, never shared between runs.
    """

    def __init__(self):
        self.last:  Optional[Step] = None
        self.count: int            = 0

    def emit(self, **changes: Any) -> Step:
        step = Step(**{k: _snapshot(v) for k, v in changes.items()})
        return self._record(step)

    def extend_last(self, **changes: Any) -> Step:
        """Repeat the previous step with some fields overridden."""
        base = self.last or Step()
        step = replace(base, **{k: _snapshot(v) for k, v in changes.items()})
        return self._record(step)

    def finish(self, **changes: Any) -> Step:
        return self.extend_last(finished=True, **changes)

    def _record(self, step: Step) -> Step:
        self.last = step
        self.count += 1
        return step


def finished_only(result: Any = UNSET, **extra: Any) -> List[Step]:
    """The degenerate single-step trace used for every early exit."""
    return [Step(finished=True, result=result, **extra)]
