"""
path.py — Path Reconstructor
=============================
Walks a predecessor map backwards from a target:

    build_path({"B": "A", "A": None}, "B")  ->  ["A", "B"]
    build_path({}, None)                    ->  []

Shared by every shortest-path style engine (path-so-far on each step)
and by the normalizer when a step supplies `previous` but no path.
"""

from typing import List, Mapping, Optional


def build_path(previous: Optional[Mapping[str, Optional[str]]], target: Optional[str]) -> List[str]:
    if target is None or target == "":
        return []
    previous = previous or {}

    path: List[str] = []
    seen = set()
    cur: Optional[str] = target
    # stop at a missing / None predecessor, or when the walk loops
    while cur is not None and cur not in seen:
        path.append(cur)
        seen.add(cur)
        cur = previous.get(cur)
    path.reverse()
    return path
