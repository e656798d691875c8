"""Tests for route ranking and relative efficiency."""

from roomroute.routing import rank_routes
from roomroute.schemas import ScoredRoute


def make_route(path: list[int], score: int) -> ScoredRoute:
    return ScoredRoute(
        path=path,
        room_names=[f"Room {room_id}" for room_id in path],
        step_count=len(path) - 1,
        avg_occupancy_ratio=0.1,
        efficiency_score=score,
    )


def test_routes_sorted_best_first_with_relative_scores():
    ranked = rank_routes([make_route([1, 2, 4], 76), make_route([1, 3, 4], 90)])

    assert [route.path for route in ranked] == [[1, 3, 4], [1, 2, 4]]
    assert [route.is_optimal for route in ranked] == [True, False]
    assert ranked[0].relative_to_optimal == 100
    # round(100 * 76 / 90) = round(84.4)
    assert ranked[1].relative_to_optimal == 84


def test_ties_keep_enumeration_order():
    first = make_route([1, 2, 4], 50)
    second = make_route([1, 3, 4], 50)

    ranked = rank_routes([first, second])

    assert [route.path for route in ranked] == [[1, 2, 4], [1, 3, 4]]
    assert ranked[0].is_optimal is True
    assert ranked[1].relative_to_optimal == 100


def test_zero_optimal_score_reports_zero_percent_everywhere():
    ranked = rank_routes([make_route([1, 2], 0), make_route([1, 3, 2], 0)])

    assert ranked[0].is_optimal is True
    assert [route.relative_to_optimal for route in ranked] == [0, 0]


def test_empty_input():
    assert rank_routes([]) == []


def test_inputs_are_not_mutated():
    unranked = make_route([1, 2], 40)
    ranked = rank_routes([unranked])

    assert ranked[0].is_optimal is True
    assert unranked.is_optimal is False
    assert unranked.relative_to_optimal == 0
