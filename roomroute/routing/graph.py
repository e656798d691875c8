"""Undirected room adjacency built from a room/connection snapshot.

Each connection is stored once upstream but is traversable both ways, so the
builder inserts both directions. Neighbor lists keep insertion order (which
fixes the enumeration order downstream) and never hold duplicates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ..schemas import Connection, GraphCounts, GraphNodeSummary, GraphStructure, Room
from .capacity import occupancy_band


@dataclass
class RoomGraph:
    """Adjacency map from room id to neighbor ids."""

    adjacency: Dict[int, List[int]] = field(default_factory=dict)

    @classmethod
    def build(cls, rooms: Iterable[Room], connections: Iterable[Connection]) -> "RoomGraph":
        """Build a symmetric graph from snapshot records.

        Every room gets an entry, so isolated rooms are valid neighborless
        nodes. Connections that reference unknown room ids or loop back to the
        same room are skipped instead of failing the whole build.
        """

        graph = cls()
        for room in rooms:
            graph.adjacency.setdefault(room.id, [])

        for conn in connections:
            if conn.room_from == conn.room_to:
                continue
            if conn.room_from not in graph.adjacency or conn.room_to not in graph.adjacency:
                continue
            graph._link(conn.room_from, conn.room_to)
            graph._link(conn.room_to, conn.room_from)
        return graph

    def _link(self, source: int, target: int) -> None:
        neighbors = self.adjacency[source]
        # Duplicate connections between the same pair collapse to one edge
        if target not in neighbors:
            neighbors.append(target)

    def neighbors(self, room_id: int) -> List[int]:
        return self.adjacency.get(room_id, [])

    def has_room(self, room_id: int) -> bool:
        return room_id in self.adjacency

    @property
    def edge_count(self) -> int:
        """Number of distinct undirected edges."""
        return sum(len(neighbors) for neighbors in self.adjacency.values()) // 2


def describe_graph(rooms: List[Room], connections: List[Connection]) -> GraphStructure:
    """Summarize a snapshot for debugging views.

    Nodes and edges are reported as stored (ordered by id); ``graph_structure``
    shows the normalized adjacency the router actually traverses.
    """

    ordered_rooms = sorted(rooms, key=lambda room: room.id)
    ordered_connections = sorted(connections, key=lambda conn: conn.id)
    graph = RoomGraph.build(ordered_rooms, ordered_connections)

    structure = {
        room.id: GraphNodeSummary(
            name=room.name,
            neighbors=list(graph.neighbors(room.id)),
            band=occupancy_band(room),
        )
        for room in ordered_rooms
    }

    return GraphStructure(
        nodes=ordered_rooms,
        edges=ordered_connections,
        graph_structure=structure,
        summary=GraphCounts(
            total_nodes=len(ordered_rooms),
            total_edges=len(ordered_connections),
        ),
    )
