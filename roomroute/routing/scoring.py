"""Route scoring: one comparable 0-100 number per candidate path.

The score blends path length and crowding::

    length_score    = max(0, 1 - step_penalty * steps)
    occupancy_score = 1 - mean(occupancy / capacity_max over rooms on the path)
    efficiency      = round(100 * (length_weight * length_score
                                   + occupancy_weight * occupancy_score))

With the default 40/60 weights a slightly longer but much emptier route
usually outranks a short crowded one. The weights and the 10-point step
penalty are empirical policy constants kept for behavioral parity; they are
tunable through ``ScoringPolicy`` or ``Config``, not derived.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Mapping, Sequence

from ..config import Config
from ..schemas import Room, ScoredRoute


def round_half_up(value: float) -> int:
    """Round non-negative values with .5 going up (``round`` would go to even)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ScoringPolicy:
    length_weight: float = 0.4
    occupancy_weight: float = 0.6
    step_penalty: float = 0.1

    @classmethod
    def from_config(cls) -> "ScoringPolicy":
        return cls(
            length_weight=Config.LENGTH_WEIGHT,
            occupancy_weight=Config.OCCUPANCY_WEIGHT,
            step_penalty=Config.STEP_PENALTY,
        )


@dataclass(frozen=True)
class RouteScore:
    """Raw scoring output before names and ranking are attached."""

    efficiency_score: int
    avg_occupancy_ratio: float
    step_count: int


class RouteScorer:
    """Scores paths against a room snapshot indexed by id."""

    def __init__(self, policy: ScoringPolicy | None = None):
        self.policy = policy or ScoringPolicy.from_config()

    def score(self, path: Sequence[int], rooms: Mapping[int, Room]) -> RouteScore:
        """Score one path.

        Rooms missing from the snapshot are skipped when averaging occupancy.
        If none of the path's rooms are known the ratio defaults to 0 and the
        score to 0.
        """

        step_count = max(len(path) - 1, 0)
        known = [rooms[room_id] for room_id in path if room_id in rooms]
        if not known:
            return RouteScore(efficiency_score=0, avg_occupancy_ratio=0.0, step_count=step_count)

        avg_ratio = sum(room.occupancy_ratio for room in known) / len(known)
        # Snapshot validation keeps occupancy <= capacity; clamp float drift
        avg_ratio = min(max(avg_ratio, 0.0), 1.0)

        length_score = max(0.0, 1.0 - self.policy.step_penalty * step_count)
        occupancy_score = 1.0 - avg_ratio
        blended = (
            self.policy.length_weight * length_score
            + self.policy.occupancy_weight * occupancy_score
        )
        efficiency = min(max(round_half_up(100 * blended), 0), 100)

        return RouteScore(
            efficiency_score=efficiency,
            avg_occupancy_ratio=avg_ratio,
            step_count=step_count,
        )

    def score_route(self, path: Sequence[int], rooms: Mapping[int, Room]) -> ScoredRoute:
        """Score a path and attach room names, producing an unranked ``ScoredRoute``."""
        result = self.score(path, rooms)
        return ScoredRoute(
            path=list(path),
            room_names=[rooms[room_id].name for room_id in path if room_id in rooms],
            step_count=result.step_count,
            avg_occupancy_ratio=result.avg_occupancy_ratio,
            efficiency_score=result.efficiency_score,
        )

    def score_all(self, paths: Sequence[Sequence[int]], rooms: Mapping[int, Room]) -> List[ScoredRoute]:
        return [self.score_route(path, rooms) for path in paths]
