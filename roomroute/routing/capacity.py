"""Capacity checks for the chosen route.

Two blocking policies exist. ``"full"`` treats a room as blocking once its
occupancy reaches ``capacity_max``; ``"ratio"`` blocks once occupancy reaches
a fraction of capacity (0.9 by default). The policy is configuration, so it is
passed in rather than hard-coded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Mapping, Sequence

from ..config import BLOCKING_POLICIES, Config
from ..schemas import Room

OccupancyBand = Literal["green", "yellow", "red"]


def occupancy_band(room: Room) -> OccupancyBand:
    """Traffic-light band for a room: green < 70%, yellow < 90%, red otherwise."""
    percentage = room.occupancy * 100 / room.capacity_max
    if percentage < 70:
        return "green"
    if percentage < 90:
        return "yellow"
    return "red"


@dataclass
class CapacityVerdict:
    status: Literal["safe", "blocked"]
    blocking_rooms: List[Room] = field(default_factory=list)

    @property
    def blocked(self) -> bool:
        return self.status == "blocked"

    @property
    def blocked_names(self) -> List[str]:
        return [room.name for room in self.blocking_rooms]

    @property
    def blocked_occupancy(self) -> List[str]:
        return [room.occupancy_label(with_percent=False) for room in self.blocking_rooms]


class CapacityEvaluator:
    """Decides whether a route is currently passable."""

    def __init__(self, policy: str | None = None, ratio: float | None = None):
        self.policy = policy or Config.BLOCKING_POLICY
        self.ratio = Config.BLOCKING_RATIO if ratio is None else ratio
        if self.policy not in BLOCKING_POLICIES:
            raise ValueError(
                f"Unknown blocking policy '{self.policy}'. Expected one of {', '.join(BLOCKING_POLICIES)}"
            )
        if not 0 < self.ratio <= 1:
            raise ValueError("Blocking ratio must be in the range (0, 1]")

    def is_blocking(self, room: Room) -> bool:
        if self.policy == "full":
            return room.occupancy >= room.capacity_max
        return room.occupancy_ratio >= self.ratio

    def evaluate(self, path: Sequence[int], rooms: Mapping[int, Room]) -> CapacityVerdict:
        """Collect blocking rooms along ``path`` in path order.

        Ids missing from the snapshot are skipped. Any blocking room makes the
        whole route ``"blocked"``.
        """

        blocking = [
            rooms[room_id]
            for room_id in path
            if room_id in rooms and self.is_blocking(rooms[room_id])
        ]
        return CapacityVerdict(status="blocked" if blocking else "safe", blocking_rooms=blocking)
