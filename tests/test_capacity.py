"""Tests for capacity blocking policies and occupancy bands."""

import pytest

from roomroute.config import Config
from roomroute.routing import CapacityEvaluator, occupancy_band
from roomroute.schemas import Room


def make_room(room_id: int, name: str, *, capacity: int = 10, occupancy: int = 0) -> Room:
    return Room(id=room_id, name=name, area=20.0, capacity_max=capacity, occupancy=occupancy)


def test_full_policy_blocks_only_at_capacity():
    evaluator = CapacityEvaluator(policy="full")

    assert evaluator.is_blocking(make_room(1, "A", occupancy=10)) is True
    assert evaluator.is_blocking(make_room(2, "B", occupancy=9)) is False


def test_ratio_policy_blocks_at_ninety_percent():
    evaluator = CapacityEvaluator(policy="ratio", ratio=0.9)

    assert evaluator.is_blocking(make_room(1, "A", occupancy=9)) is True
    assert evaluator.is_blocking(make_room(2, "B", occupancy=8)) is False


def test_evaluate_lists_blocking_rooms_in_path_order():
    rooms = {
        1: make_room(1, "Lobby", occupancy=2),
        2: make_room(2, "Hall", occupancy=10),
        3: make_room(3, "Lab", capacity=5, occupancy=5),
    }

    verdict = CapacityEvaluator(policy="full").evaluate([1, 2, 99, 3], rooms)

    assert verdict.status == "blocked"
    assert verdict.blocked is True
    assert verdict.blocked_names == ["Hall", "Lab"]
    assert verdict.blocked_occupancy == ["10/10", "5/5"]


def test_evaluate_safe_route():
    rooms = {1: make_room(1, "Lobby", occupancy=2), 2: make_room(2, "Hall", occupancy=9)}

    verdict = CapacityEvaluator(policy="full").evaluate([1, 2], rooms)

    assert verdict.status == "safe"
    assert verdict.blocking_rooms == []


def test_invalid_policy_settings_raise():
    with pytest.raises(ValueError):
        CapacityEvaluator(policy="sometimes")
    with pytest.raises(ValueError):
        CapacityEvaluator(policy="ratio", ratio=1.5)


def test_defaults_follow_config(monkeypatch):
    monkeypatch.setattr(Config, "BLOCKING_POLICY", "ratio")
    monkeypatch.setattr(Config, "BLOCKING_RATIO", 0.75)

    evaluator = CapacityEvaluator()

    assert evaluator.policy == "ratio"
    assert evaluator.ratio == 0.75


@pytest.mark.parametrize(
    "occupancy, expected",
    [(0, "green"), (69, "green"), (70, "yellow"), (89, "yellow"), (90, "red"), (100, "red")],
)
def test_occupancy_band_thresholds(occupancy, expected):
    room = make_room(1, "Hall", capacity=100, occupancy=occupancy)
    assert occupancy_band(room) == expected
