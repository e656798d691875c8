"""Routing engine: graph construction, path enumeration, scoring, ranking, capacity."""

from .capacity import CapacityEvaluator, CapacityVerdict, occupancy_band
from .enumerator import enumerate_paths
from .graph import RoomGraph, describe_graph
from .ranking import rank_routes
from .scoring import RouteScore, RouteScorer, ScoringPolicy, round_half_up

__all__ = [
    "RoomGraph",
    "describe_graph",
    "enumerate_paths",
    "RouteScorer",
    "RouteScore",
    "ScoringPolicy",
    "round_half_up",
    "rank_routes",
    "CapacityEvaluator",
    "CapacityVerdict",
    "occupancy_band",
]
