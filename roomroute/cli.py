"""Command line front-end for route queries against a JSON snapshot.

    python -m roomroute examples/campus/campus.json --target "Lab" --start 1
    python -m roomroute examples/campus/campus.json --target lab --json
    python -m roomroute examples/campus/campus.json --graph
    python -m roomroute examples/campus/campus.json --rooms
    python -m roomroute examples/campus/campus.json --health

Exit codes: 0 when a route was found (safe or blocked), 2 for invalid input,
3 when a room cannot be resolved, 4 when no path exists, 1 otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import List, Optional

from pydantic import ValidationError

from .config import BLOCKING_POLICIES, Config
from .errors import PathfindingError
from .logging_utils import (
    LOG_TAG_ERROR,
    LOG_TAG_INFO,
    LOG_TAG_SUCCESS,
    LOG_TAG_WARNING,
    Color,
    colored,
    console_trace,
    log_error,
    log_info,
)
from .routing import CapacityEvaluator, describe_graph, occupancy_band
from .schemas import Room, RouteResult
from .service import PathfindingService, check_health, find_path_from_source
from .sources import JsonRoomSource

EXIT_CODES = {
    "invalid_input": 2,
    "not_found": 3,
    "no_path": 4,
}

_BAND_COLORS = {"green": Color.GREEN, "yellow": Color.YELLOW, "red": Color.RED}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roomroute",
        description="Find the best occupancy-aware route between two rooms.",
    )
    parser.add_argument(
        "snapshot",
        nargs="?",
        default=Config.SNAPSHOT_PATH,
        help="JSON snapshot with 'rooms' and 'connections' (default: $ROOMROUTE_SNAPSHOT)",
    )
    parser.add_argument("--target", "-t", help="Destination room name (exact or unique partial match)")
    parser.add_argument(
        "--start", "-s", type=int, default=Config.DEFAULT_START_ID, help="Start room id"
    )
    parser.add_argument("--max-paths", type=int, default=Config.MAX_PATHS)
    parser.add_argument("--max-depth", type=int, default=Config.MAX_DEPTH)
    parser.add_argument(
        "--policy",
        choices=BLOCKING_POLICIES,
        default=Config.BLOCKING_POLICY,
        help="Capacity blocking policy",
    )
    parser.add_argument("--json", action="store_true", help="Print the JSON payload")
    parser.add_argument("--verbose", "-v", action="store_true", help="Trace pipeline stages")

    modes = parser.add_mutually_exclusive_group()
    modes.add_argument("--graph", action="store_true", help="Print the graph structure")
    modes.add_argument("--rooms", action="store_true", help="List rooms with occupancy")
    modes.add_argument("--health", action="store_true", help="Check the snapshot source")
    return parser


def format_route_result(result: RouteResult) -> str:
    """Render a route result as a short human-readable report."""

    if result.status == "blocked":
        header = colored(f"{LOG_TAG_WARNING} Route BLOCKED", Color.YELLOW, bold=True)
    else:
        header = colored(f"{LOG_TAG_SUCCESS} Route safe", Color.GREEN, bold=True)

    lines = [
        header,
        f"  From: {result.origin_room}",
        f"  To:   {result.target_room} ({result.target_occupancy})",
        f"  Optimal: {' -> '.join(result.optimal_route)}",
    ]
    if result.blocked_rooms:
        blocked = ", ".join(
            f"{name} {occupancy}"
            for name, occupancy in zip(result.blocked_rooms, result.blocked_occupancy or [])
        )
        lines.append(colored(f"  Full rooms on route: {blocked}", Color.YELLOW))

    lines.append("")
    lines.append(f"  {'#':>2}  {'score':>5}  {'steps':>5}  {'avg occ':>7}  {'vs best':>7}  route")
    for index, route in enumerate(result.all_routes, start=1):
        marker = "*" if route.is_optimal else " "
        lines.append(
            f"{marker} {index:>2}  {route.score:>5}  {route.steps:>5}  {route.avg_occupancy:>7}"
            f"  {route.relative_to_optimal:>7}  {' -> '.join(route.route)}"
        )
    return "\n".join(lines)


def format_room_table(rooms: List[Room]) -> str:
    lines = [f"{'id':>4}  {'name':<24} {'occupancy':<16} band"]
    for room in rooms:
        band = occupancy_band(room)
        lines.append(
            f"{room.id:>4}  {room.name:<24} {room.occupancy_label():<16} "
            + colored(band, _BAND_COLORS[band])
        )
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        Config.validate()
        source = JsonRoomSource(args.snapshot)

        if args.health:
            report = asyncio.run(check_health(source))
            print(json.dumps(report.to_payload(), indent=2))
            return 0 if report.status == "operational" else 1

        if args.graph or args.rooms:
            rooms, connections = asyncio.run(source.fetch_snapshot())
            if args.graph:
                print(json.dumps(describe_graph(rooms, connections).to_payload(), indent=2))
            else:
                print(format_room_table(rooms))
            return 0

        service = PathfindingService(
            max_paths=args.max_paths,
            max_depth=args.max_depth,
            capacity=CapacityEvaluator(policy=args.policy),
            listeners=[console_trace] if args.verbose else None,
        )
        if args.verbose:
            log_info(f"  {LOG_TAG_INFO} Loading snapshot from {source.path}")
        result = asyncio.run(
            find_path_from_source(source, args.start, args.target or "", service=service)
        )
    except PathfindingError as exc:
        log_error(f"{LOG_TAG_ERROR} {exc}")
        return EXIT_CODES.get(exc.kind, 1)
    except (ValidationError, ValueError) as exc:
        log_error(f"{LOG_TAG_ERROR} Invalid snapshot or configuration: {exc}")
        return 1

    if args.json:
        print(json.dumps(result.to_payload(), indent=2))
    else:
        print(format_route_result(result))
    return 0
