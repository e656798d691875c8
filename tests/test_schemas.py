"""Unit tests for snapshot and result schemas."""

import pytest
from pydantic import ValidationError

from roomroute.schemas import Connection, Room, RouteResult, ScoredRoute


def test_room_accepts_store_and_wire_field_names():
    from_store = Room.model_validate(
        {"id": 1, "nama_ruangan": " Lobby ", "luas": 30, "kapasitas_max": 15, "occupancy": 12}
    )
    from_wire = Room.model_validate(
        {"id": 1, "name": "Lobby", "area": 30, "capacityMax": 15, "occupancy": 12}
    )

    assert from_store == from_wire
    assert from_store.name == "Lobby"
    assert from_store.occupancy_label() == "12/15 (80.0%)"
    assert from_store.occupancy_label(with_percent=False) == "12/15"
    assert from_store.occupancy_ratio == pytest.approx(0.8)


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"area": 0},
        {"capacity_max": 0},
        {"occupancy": -1},
        {"occupancy": 11},
        {"id": 0},
    ],
)
def test_room_validation_rejects_bad_records(overrides):
    record = {"id": 1, "name": "Hall", "area": 50.0, "capacity_max": 10, "occupancy": 0}
    record.update(overrides)

    with pytest.raises(ValidationError):
        Room.model_validate(record)


def test_room_is_immutable():
    room = Room(id=1, name="Hall", area=50.0, capacity_max=10, occupancy=3)

    with pytest.raises(ValidationError):
        room.occupancy = 4


def test_connection_aliases():
    conn = Connection.model_validate({"id": 7, "roomFrom": 1, "roomTo": 2})
    assert (conn.room_from, conn.room_to) == (1, 2)


def test_scored_route_summary_formatting():
    route = ScoredRoute(
        path=[1, 2],
        room_names=["Lobby", "Hall"],
        step_count=1,
        avg_occupancy_ratio=0.3333333,
        efficiency_score=76,
        is_optimal=False,
        relative_to_optimal=84,
    )

    summary = route.summary().model_dump(by_alias=True)

    assert summary == {
        "route": ["Lobby", "Hall"],
        "steps": 1,
        "score": 76,
        "avgOccupancy": "33.3%",
        "relativeToOptimal": "84%",
        "isOptimal": False,
    }


def test_route_result_payload_hides_diagnostics():
    route = ScoredRoute(
        path=[1, 2],
        room_names=["Lobby", "Hall"],
        step_count=1,
        avg_occupancy_ratio=1.0,
        efficiency_score=36,
        is_optimal=True,
        relative_to_optimal=100,
    )
    result = RouteResult(
        status="blocked",
        optimal_route=["Lobby", "Hall"],
        all_routes=[route.summary()],
        origin_room="Lobby",
        target_room="Hall",
        target_occupancy="10/10 (100.0%)",
        blocked_rooms=["Lobby", "Hall"],
        blocked_occupancy=["10/10", "10/10"],
        start_id=1,
        target_id=2,
        routes=[route],
    )

    payload = result.to_payload()

    assert "startId" not in payload and "start_id" not in payload
    assert "routes" not in payload
    assert payload["status"] == "blocked"
    assert payload["blockedOccupancy"] == ["10/10", "10/10"]
    assert result.optimal == route
