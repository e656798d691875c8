"""Tests for bounded simple-path enumeration."""

from itertools import combinations

from roomroute.routing import RoomGraph, enumerate_paths
from roomroute.schemas import Connection, Room


def build_graph(room_ids, pairs) -> RoomGraph:
    rooms = [
        Room(id=room_id, name=f"Room {room_id}", area=20.0, capacity_max=10, occupancy=0)
        for room_id in room_ids
    ]
    connections = [
        Connection(id=index, room_from=a, room_to=b)
        for index, (a, b) in enumerate(pairs, start=1)
    ]
    return RoomGraph.build(rooms, connections)


def complete_graph(size: int) -> RoomGraph:
    ids = list(range(1, size + 1))
    return build_graph(ids, list(combinations(ids, 2)))


def test_single_chain_path():
    graph = build_graph([1, 2, 3], [(1, 2), (2, 3)])
    assert enumerate_paths(graph, 1, 3) == [[1, 2, 3]]


def test_parallel_paths_follow_neighbor_insertion_order():
    graph = build_graph([1, 2, 3, 4], [(1, 2), (1, 3), (2, 4), (3, 4)])
    assert enumerate_paths(graph, 1, 4) == [[1, 2, 4], [1, 3, 4]]


def test_paths_are_simple_and_anchored():
    graph = complete_graph(5)
    paths = enumerate_paths(graph, 1, 5, max_paths=100, max_depth=8)

    # K5 has 1 + 3 + 6 + 6 simple paths between two fixed nodes
    assert len(paths) == 16
    for path in paths:
        assert path[0] == 1
        assert path[-1] == 5
        assert len(set(path)) == len(path)
    assert len({tuple(path) for path in paths}) == len(paths)


def test_max_paths_caps_collection():
    graph = complete_graph(6)
    paths = enumerate_paths(graph, 1, 6, max_paths=3, max_depth=8)

    assert len(paths) == 3
    # Depth-first order: the direct edge is found after exploring via room 2
    assert paths[0][:2] == [1, 2]


def test_max_depth_limits_edges_per_path():
    graph = build_graph([1, 2, 3, 4], [(1, 2), (2, 3), (3, 4)])

    assert enumerate_paths(graph, 1, 4, max_depth=2) == []
    assert enumerate_paths(graph, 1, 4, max_depth=3) == [[1, 2, 3, 4]]


def test_depth_bound_applies_to_every_returned_path():
    graph = complete_graph(6)
    paths = enumerate_paths(graph, 1, 6, max_paths=1000, max_depth=2)

    assert paths
    assert all(len(path) - 1 <= 2 for path in paths)
    # Direct edge plus one path through each of the four other rooms
    assert len(paths) == 5


def test_missing_endpoints_return_empty():
    graph = build_graph([1, 2], [(1, 2)])

    assert enumerate_paths(graph, 1, 99) == []
    assert enumerate_paths(graph, 99, 1) == []


def test_disconnected_components_return_empty():
    graph = build_graph([1, 2, 3, 4], [(1, 2), (3, 4)])
    assert enumerate_paths(graph, 1, 4) == []


def test_reverse_query_yields_reversed_paths():
    graph = build_graph(
        [1, 2, 3, 4, 5],
        [(1, 2), (1, 3), (2, 4), (3, 4), (2, 3), (4, 5)],
    )

    forward = enumerate_paths(graph, 1, 5, max_paths=100)
    backward = enumerate_paths(graph, 5, 1, max_paths=100)

    assert {tuple(path) for path in forward} == {tuple(reversed(path)) for path in backward}
