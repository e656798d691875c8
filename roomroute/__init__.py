"""
Roomroute - occupancy-aware route finding between connected rooms.

Given a snapshot of rooms (with live occupancy) and the connections between
them, answers "what is the best route from here to there, and is it
passable right now?"

No storage required. No global state. Snapshots are passed in per query.
"""

__version__ = "0.1.0"

from .config import Config

# Snapshot and result schemas
from .schemas import (
    Room,
    Connection,
    ScoredRoute,
    RouteSummary,
    RouteResult,
    GraphStructure,
    HealthReport,
)

# Failures
from .errors import (
    PathfindingError,
    InvalidInputError,
    NotFoundError,
    NoPathFoundError,
    InternalInconsistencyError,
    SourceUnavailableError,
)

# Routing engine
from .routing import (
    RoomGraph,
    describe_graph,
    enumerate_paths,
    RouteScorer,
    ScoringPolicy,
    rank_routes,
    CapacityEvaluator,
    CapacityVerdict,
    occupancy_band,
)

# Snapshot sources
from .sources import (
    RoomSource,
    InMemoryRoomSource,
    JsonRoomSource,
    PostgresRoomSource,
)

# Orchestration
from .service import (
    PathfindingService,
    PathfindingStage,
    find_path,
    find_path_from_source,
    check_health,
    resolve_target,
    normalize_name,
)

__all__ = [
    "Config",
    # Schemas
    "Room",
    "Connection",
    "ScoredRoute",
    "RouteSummary",
    "RouteResult",
    "GraphStructure",
    "HealthReport",
    # Failures
    "PathfindingError",
    "InvalidInputError",
    "NotFoundError",
    "NoPathFoundError",
    "InternalInconsistencyError",
    "SourceUnavailableError",
    # Routing engine
    "RoomGraph",
    "describe_graph",
    "enumerate_paths",
    "RouteScorer",
    "ScoringPolicy",
    "rank_routes",
    "CapacityEvaluator",
    "CapacityVerdict",
    "occupancy_band",
    # Sources
    "RoomSource",
    "InMemoryRoomSource",
    "JsonRoomSource",
    "PostgresRoomSource",
    # Orchestration
    "PathfindingService",
    "PathfindingStage",
    "find_path",
    "find_path_from_source",
    "check_health",
    "resolve_target",
    "normalize_name",
]
