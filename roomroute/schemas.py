"""
Pydantic schemas for the room routing system.

All records that cross a boundary (snapshot in, route analysis out) are
defined here.

Design Philosophy:
- Room and Connection are immutable snapshot records (frozen models)
- Field names accept the Python name, the camelCase wire name, and the room
  store's column names so snapshots load from any of them
- Output models serialize to the camelCase JSON contract via ``to_payload()``
"""

from typing import Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


# ============================================================================
# Snapshot Schemas
# ============================================================================


class Room(BaseModel):
    """A node in the building graph with a fixed capacity and live occupancy.

    Rooms are owned by the external room store; the router only reads them.
    Validation mirrors the store's rules so a malformed snapshot fails loudly
    at load time rather than producing nonsense scores.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., gt=0, description="Unique positive room identifier")
    name: str = Field(
        ...,
        validation_alias=AliasChoices("name", "nama_ruangan"),
        description="Unique, non-empty display name",
    )
    area: float = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("area", "luas"),
        description="Floor area (m²)",
    )
    capacity_max: int = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("capacity_max", "capacityMax", "kapasitas_max"),
        description="Maximum number of occupants",
    )
    occupancy: int = Field(0, ge=0, description="Current number of occupants")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Room name is required")
        return value

    @model_validator(mode="after")
    def _occupancy_within_capacity(self) -> "Room":
        if self.occupancy > self.capacity_max:
            raise ValueError(
                f"Occupancy cannot exceed maximum capacity of {self.capacity_max}"
            )
        return self

    @property
    def occupancy_ratio(self) -> float:
        """Occupancy as a fraction of capacity (0.0-1.0)."""
        return self.occupancy / self.capacity_max

    def occupancy_label(self, *, with_percent: bool = True) -> str:
        """Render occupancy as ``"12/15 (80.0%)"`` or ``"12/15"``."""
        label = f"{self.occupancy}/{self.capacity_max}"
        if with_percent:
            label += f" ({self.occupancy * 100 / self.capacity_max:.1f}%)"
        return label


class Connection(BaseModel):
    """An undirected edge between two rooms.

    Self-loops are not rejected here; the store enforces ``room_from != room_to``
    and the graph builder drops any that slip through.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Connection identifier")
    room_from: int = Field(..., validation_alias=AliasChoices("room_from", "roomFrom"))
    room_to: int = Field(..., validation_alias=AliasChoices("room_to", "roomTo"))


# ============================================================================
# Route Analysis Schemas
# ============================================================================


class ScoredRoute(BaseModel):
    """A candidate path together with its score and ranking annotations.

    ``is_optimal`` and ``relative_to_optimal`` are filled in by the ranker;
    freshly scored routes carry the defaults.
    """

    model_config = ConfigDict(frozen=True)

    path: List[int] = Field(..., description="Room ids from start to target")
    room_names: List[str] = Field(default_factory=list)
    step_count: int = Field(..., ge=0, description="Number of edges traversed")
    avg_occupancy_ratio: float = Field(..., ge=0.0, le=1.0)
    efficiency_score: int = Field(..., ge=0, le=100)
    is_optimal: bool = False
    relative_to_optimal: int = Field(0, ge=0, description="Percentage of the optimal score")

    def summary(self) -> "RouteSummary":
        """Project onto the ``allRoutes`` entry of the JSON contract."""
        return RouteSummary(
            route=list(self.room_names),
            steps=self.step_count,
            score=self.efficiency_score,
            avg_occupancy=f"{self.avg_occupancy_ratio * 100:.1f}%",
            relative_to_optimal=f"{self.relative_to_optimal}%",
            is_optimal=self.is_optimal,
        )


class RouteSummary(BaseModel):
    """Serializable view of one ranked route."""

    route: List[str]
    steps: int
    score: int
    avg_occupancy: str = Field(..., serialization_alias="avgOccupancy")
    relative_to_optimal: str = Field(..., serialization_alias="relativeToOptimal")
    is_optimal: bool = Field(..., serialization_alias="isOptimal")


class RouteResult(BaseModel):
    """Outcome of one ``find_path`` query.

    ``status`` is ``"blocked"`` when a room on the optimal route meets the
    blocking threshold; the blocked lists are ``None`` otherwise. ``routes``,
    ``start_id`` and ``target_id`` are diagnostics kept out of the payload.
    """

    status: Literal["safe", "blocked"]
    optimal_route: List[str] = Field(..., serialization_alias="optimalRoute")
    all_routes: List[RouteSummary] = Field(..., serialization_alias="allRoutes")
    origin_room: str = Field(..., serialization_alias="originRoom")
    target_room: str = Field(..., serialization_alias="targetRoom")
    target_occupancy: str = Field(..., serialization_alias="targetOccupancy")
    blocked_rooms: Optional[List[str]] = Field(None, serialization_alias="blockedRooms")
    blocked_occupancy: Optional[List[str]] = Field(None, serialization_alias="blockedOccupancy")

    start_id: int = Field(..., exclude=True)
    target_id: int = Field(..., exclude=True)
    routes: List[ScoredRoute] = Field(default_factory=list, exclude=True)

    @property
    def optimal(self) -> ScoredRoute:
        """The top-ranked scored route."""
        return self.routes[0]

    def to_payload(self) -> dict:
        """Render the camelCase JSON contract consumed downstream."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============================================================================
# Graph Introspection Schemas
# ============================================================================


class GraphNodeSummary(BaseModel):
    """Per-room adjacency entry for debugging views."""

    name: str
    neighbors: List[int] = Field(default_factory=list)
    band: Literal["green", "yellow", "red"]


class GraphCounts(BaseModel):
    total_nodes: int = Field(..., serialization_alias="totalNodes")
    total_edges: int = Field(..., serialization_alias="totalEdges")


class GraphStructure(BaseModel):
    """Snapshot of rooms, connections and the adjacency derived from them."""

    nodes: List[Room]
    edges: List[Connection]
    graph_structure: Dict[int, GraphNodeSummary] = Field(
        default_factory=dict, serialization_alias="graphStructure"
    )
    summary: GraphCounts

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class HealthReport(BaseModel):
    """Liveness report for a room source backing the pathfinding service."""

    service: str = "Pathfinding"
    status: Literal["operational", "degraded"]
    rooms_count: Optional[int] = Field(None, serialization_alias="roomsCount")
    connections_count: Optional[int] = Field(None, serialization_alias="connectionsCount")
    timestamp: str
    error: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
