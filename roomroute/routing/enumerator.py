"""Bounded enumeration of simple paths between two rooms.

All-simple-paths is exponential on dense graphs, so the search is bounded
twice: a branch stops once it would exceed ``max_depth`` edges, and the whole
search stops once ``max_paths`` paths have been collected. Those two bounds
are the only backpressure a query has.

No quality ordering happens here. Paths come out in depth-first discovery
order (neighbor insertion order); ranking is a separate step.
"""

from __future__ import annotations

from typing import Iterator, List, Set

from ..config import Config
from .graph import RoomGraph

Path = List[int]

_EXHAUSTED = object()


def enumerate_paths(
    graph: RoomGraph,
    start: int,
    target: int,
    *,
    max_paths: int | None = None,
    max_depth: int | None = None,
) -> List[Path]:
    """Return up to ``max_paths`` simple paths from ``start`` to ``target``.

    Depth-first search with an explicit stack of neighbor iterators. A room is
    added to the on-path set when the search descends into it and removed on
    backtrack, so it may reappear on a different branch but never twice in one
    path. Every returned path starts at ``start``, ends at ``target`` and has
    at most ``max_depth`` edges.

    Returns an empty list when either endpoint is not in the graph or when no
    path exists within the bounds. ``start == target`` is rejected by the
    service before enumeration is reached.
    """

    max_paths = Config.MAX_PATHS if max_paths is None else max_paths
    max_depth = Config.MAX_DEPTH if max_depth is None else max_depth

    if max_paths < 1 or max_depth < 1:
        return []
    if not graph.has_room(start) or not graph.has_room(target):
        return []

    paths: List[Path] = []
    trail: Path = [start]
    on_trail: Set[int] = {start}
    stack: List[Iterator[int]] = [iter(graph.neighbors(start))]

    while stack and len(paths) < max_paths:
        neighbor = next(stack[-1], _EXHAUSTED)
        if neighbor is _EXHAUSTED:
            # Backtrack: this room's neighbors are exhausted
            stack.pop()
            on_trail.discard(trail.pop())
            continue

        if neighbor in on_trail:
            continue

        # Edges the path would have after stepping onto ``neighbor``. The
        # trail never grows past max_depth rooms, so this is <= max_depth.
        steps = len(trail)

        if neighbor == target:
            paths.append(trail + [neighbor])
            continue

        # A path through ``neighbor`` needs at least one more edge
        if steps >= max_depth:
            continue

        trail.append(neighbor)
        on_trail.add(neighbor)
        stack.append(iter(graph.neighbors(neighbor)))

    return paths
