"""Ranking of scored routes."""

from __future__ import annotations

from typing import List, Sequence

from ..schemas import ScoredRoute
from .scoring import round_half_up


def rank_routes(scored: Sequence[ScoredRoute]) -> List[ScoredRoute]:
    """Order routes by efficiency score, best first, and annotate them.

    ``sorted`` is stable, so routes with equal scores keep enumeration order
    and the first-found route wins ties. The top route is marked optimal and
    every route gets ``relative_to_optimal = round(100 * score / best)``. When
    the best score is 0 every route, including the optimal one, reports 0%.
    """

    if not scored:
        return []

    ordered = sorted(scored, key=lambda route: route.efficiency_score, reverse=True)
    best = ordered[0].efficiency_score

    ranked: List[ScoredRoute] = []
    for index, route in enumerate(ordered):
        relative = round_half_up(100 * route.efficiency_score / best) if best > 0 else 0
        ranked.append(
            route.model_copy(
                update={"is_optimal": index == 0, "relative_to_optimal": relative}
            )
        )
    return ranked
