"""
PathfindingService: answers "what is the best route to X, and is it passable?"

The service runs one query as a fixed sequence of stages over an in-memory
snapshot of rooms and connections:

    validating_input → building_graph → resolving_endpoints → enumerating
    → scoring → ranking → evaluating_capacity → done

Any stage may end the query with ``failed`` by raising a ``PathfindingError``
subclass. A ``blocked`` route is a successful result, not a failure.

Queries are synchronous and keep no state between calls: every call builds its
own graph from the snapshot it was given, so one service instance can be
shared by concurrent callers. Fetching the snapshot is the caller's job;
``find_path_from_source`` does it for callers holding a ``RoomSource``.

Tracing is opt-in. Listeners passed to the service receive
``(stage, details)`` for every transition; ``PathfindingService`` never prints.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from .config import Config
from .logging_utils import log_warning
from .errors import (
    InternalInconsistencyError,
    InvalidInputError,
    NoPathFoundError,
    NotFoundError,
    PathfindingError,
    SourceUnavailableError,
)
from .routing import (
    CapacityEvaluator,
    RoomGraph,
    RouteScorer,
    enumerate_paths,
    rank_routes,
)
from .schemas import Connection, HealthReport, Room, RouteResult
from .sources import RoomSource


class PathfindingStage(str, Enum):
    VALIDATING_INPUT = "validating_input"
    BUILDING_GRAPH = "building_graph"
    RESOLVING_ENDPOINTS = "resolving_endpoints"
    ENUMERATING = "enumerating"
    SCORING = "scoring"
    RANKING = "ranking"
    EVALUATING_CAPACITY = "evaluating_capacity"
    DONE = "done"
    FAILED = "failed"


StageListener = Callable[[PathfindingStage, Dict[str, Any]], None]

_WHITESPACE = re.compile(r"\s+")


def normalize_name(text: str) -> str:
    """Trim, lowercase and collapse internal whitespace."""
    return _WHITESPACE.sub(" ", text.strip()).lower()


def resolve_target(rooms: Iterable[Room], query: str) -> Room:
    """Resolve a free-text destination to exactly one room.

    An exact match on normalized names wins. Otherwise the normalized query is
    matched as a substring of normalized names; a single hit resolves, while
    zero or several hits raise ``NotFoundError`` (ambiguous matches are never
    settled by picking the first).
    """

    wanted = normalize_name(query)
    candidates = list(rooms)

    exact = [room for room in candidates if normalize_name(room.name) == wanted]
    if len(exact) == 1:
        return exact[0]

    partial = [room for room in candidates if wanted in normalize_name(room.name)]
    if len(partial) == 1:
        return partial[0]
    if not partial:
        raise NotFoundError(f'Target room "{query}" not found', details={"query": query})
    raise NotFoundError(
        f'Target room "{query}" is ambiguous',
        candidates=[room.name for room in partial],
        details={"query": query},
    )


class PathfindingService:
    """Orchestrates graph build, enumeration, scoring, ranking and capacity checks.

    Collaborators are injected; anything omitted falls back to defaults
    derived from ``Config``.
    """

    def __init__(
        self,
        *,
        max_paths: Optional[int] = None,
        max_depth: Optional[int] = None,
        scorer: Optional[RouteScorer] = None,
        capacity: Optional[CapacityEvaluator] = None,
        listeners: Optional[Sequence[StageListener]] = None,
    ):
        self.max_paths = Config.MAX_PATHS if max_paths is None else max_paths
        self.max_depth = Config.MAX_DEPTH if max_depth is None else max_depth
        self.scorer = scorer or RouteScorer()
        self.capacity = capacity or CapacityEvaluator()
        self.listeners: List[StageListener] = list(listeners or [])

    def _emit(self, stage: PathfindingStage, details: Dict[str, Any]) -> None:
        for listener in self.listeners:
            listener(stage, details)

    def find_path(
        self,
        rooms: Sequence[Room],
        connections: Sequence[Connection],
        start_id: int,
        target_query: str,
        *,
        max_paths: Optional[int] = None,
        max_depth: Optional[int] = None,
    ) -> RouteResult:
        """Find, rank and capacity-check routes from ``start_id`` to ``target_query``.

        Args:
            rooms: Snapshot of every room
            connections: Snapshot of every connection
            start_id: Id of the starting room
            target_query: Destination name (see ``resolve_target``)
            max_paths: Override for the enumeration path cap
            max_depth: Override for the enumeration depth cap

        Returns:
            RouteResult with status ``"safe"`` or ``"blocked"``

        Raises:
            InvalidInputError: Blank target, same start/target room, bad bounds
            NotFoundError: Start id or target query unresolvable
            NoPathFoundError: No path within the bounds
            InternalInconsistencyError: Enumerated path contradicts the endpoints
        """

        stage = PathfindingStage.VALIDATING_INPUT
        try:
            max_paths = self.max_paths if max_paths is None else max_paths
            max_depth = self.max_depth if max_depth is None else max_depth
            self._emit(stage, {"start_id": start_id, "target": target_query})
            self._validate_input(start_id, target_query, max_paths, max_depth)

            stage = PathfindingStage.BUILDING_GRAPH
            rooms_by_id = {room.id: room for room in rooms}
            graph = RoomGraph.build(rooms, connections)
            self._emit(stage, {"rooms": len(rooms_by_id), "edges": graph.edge_count})

            stage = PathfindingStage.RESOLVING_ENDPOINTS
            start_room = rooms_by_id.get(start_id)
            if start_room is None:
                raise NotFoundError(
                    f"Start room with ID {start_id} not found", details={"start_id": start_id}
                )
            target_room = resolve_target(rooms_by_id.values(), target_query)
            if target_room.id == start_room.id:
                raise InvalidInputError(
                    f"Start and target resolve to the same room '{start_room.name}'",
                    details={"room_id": start_room.id},
                )
            self._emit(stage, {"origin": start_room.name, "target": target_room.name})

            stage = PathfindingStage.ENUMERATING
            paths = enumerate_paths(
                graph, start_room.id, target_room.id, max_paths=max_paths, max_depth=max_depth
            )
            if not paths:
                raise NoPathFoundError(
                    origin=start_room.name, target=target_room.name, max_depth=max_depth
                )
            self._check_paths(paths, start_room.id, target_room.id, rooms_by_id)
            self._emit(stage, {"paths": len(paths)})

            stage = PathfindingStage.SCORING
            scored = self.scorer.score_all(paths, rooms_by_id)
            self._emit(stage, {"scores": [route.efficiency_score for route in scored]})

            stage = PathfindingStage.RANKING
            ranked = rank_routes(scored)
            optimal = ranked[0]
            self._emit(stage, {"optimal_score": optimal.efficiency_score, "steps": optimal.step_count})

            stage = PathfindingStage.EVALUATING_CAPACITY
            verdict = self.capacity.evaluate(optimal.path, rooms_by_id)
            self._emit(stage, {"policy": self.capacity.policy, "blocking": verdict.blocked_names})
        except PathfindingError as exc:
            self._emit(
                PathfindingStage.FAILED,
                {"stage": stage.value, "kind": exc.kind, "reason": str(exc).splitlines()[0]},
            )
            raise

        result = RouteResult(
            status=verdict.status,
            optimal_route=list(optimal.room_names),
            all_routes=[route.summary() for route in ranked],
            origin_room=start_room.name,
            target_room=target_room.name,
            target_occupancy=target_room.occupancy_label(),
            blocked_rooms=verdict.blocked_names if verdict.blocked else None,
            blocked_occupancy=verdict.blocked_occupancy if verdict.blocked else None,
            start_id=start_room.id,
            target_id=target_room.id,
            routes=ranked,
        )
        self._emit(PathfindingStage.DONE, {"status": result.status, "routes": len(ranked)})
        return result

    @staticmethod
    def _validate_input(start_id: Any, target_query: Any, max_paths: int, max_depth: int) -> None:
        if start_id is None:
            raise InvalidInputError("Missing required field: start")
        if not isinstance(target_query, str) or not target_query.strip():
            raise InvalidInputError("Missing required field: target")
        if max_paths < 1 or max_depth < 1:
            raise InvalidInputError(
                "max_paths and max_depth must be positive",
                details={"max_paths": max_paths, "max_depth": max_depth},
            )

    @staticmethod
    def _check_paths(
        paths: List[List[int]], start_id: int, target_id: int, rooms_by_id: Dict[int, Room]
    ) -> None:
        for path in paths:
            if path[0] != start_id or path[-1] != target_id:
                raise InternalInconsistencyError(
                    f"Enumerated path {path} does not run from {start_id} to {target_id}",
                    details={"path": path},
                )
            missing = [room_id for room_id in path if room_id not in rooms_by_id]
            if missing:
                raise InternalInconsistencyError(
                    f"Enumerated path {path} references rooms missing from the snapshot: {missing}",
                    details={"path": path, "missing": missing},
                )


def find_path(
    rooms: Sequence[Room],
    connections: Sequence[Connection],
    start_id: int,
    target_query: str,
    *,
    max_paths: Optional[int] = None,
    max_depth: Optional[int] = None,
    listeners: Optional[Sequence[StageListener]] = None,
) -> RouteResult:
    """Run one query with a default-configured ``PathfindingService``."""

    service = PathfindingService(listeners=listeners)
    return service.find_path(
        rooms, connections, start_id, target_query, max_paths=max_paths, max_depth=max_depth
    )


async def find_path_from_source(
    source: RoomSource,
    start_id: int,
    target_query: str,
    *,
    service: Optional[PathfindingService] = None,
    max_paths: Optional[int] = None,
    max_depth: Optional[int] = None,
    max_attempts: Optional[int] = None,
) -> RouteResult:
    """Fetch a fresh snapshot from ``source`` and run ``find_path`` on it.

    Only the snapshot read is retried, on ``SourceUnavailableError``. The
    computation is a pure function of the snapshot, so its failures are final.
    """

    service = service or PathfindingService()
    attempts = max_attempts or Config.SOURCE_RETRY_ATTEMPTS

    attempt_number = 0
    async for attempt in AsyncRetrying(
        retry=retry_if_exception_type(SourceUnavailableError),
        stop=stop_after_attempt(attempts),
        reraise=True,
    ):
        with attempt:
            attempt_number += 1
            if attempt_number > 1:
                log_warning(f"Room source retry {attempt_number}/{attempts}; re-reading snapshot.")
            rooms, connections = await source.fetch_snapshot()

    return service.find_path(
        rooms, connections, start_id, target_query, max_paths=max_paths, max_depth=max_depth
    )


async def check_health(source: RoomSource) -> HealthReport:
    """Report whether ``source`` can currently serve a snapshot."""

    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        rooms, connections = await source.fetch_snapshot()
    except (SourceUnavailableError, OSError, ValidationError) as exc:
        return HealthReport(status="degraded", timestamp=timestamp, error=str(exc))

    return HealthReport(
        status="operational",
        rooms_count=len(rooms),
        connections_count=len(connections),
        timestamp=timestamp,
    )
