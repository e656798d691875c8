"""Campus walkthrough: route queries against the bundled snapshot.

    python examples/campus/run.py
    python examples/campus/run.py --policy ratio --verbose

Runs a handful of queries (a safe route, a blocked route, an ambiguous name
and an unreachable room) to show each outcome of the pathfinding pipeline.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from roomroute import (
    CapacityEvaluator,
    JsonRoomSource,
    PathfindingError,
    PathfindingService,
    check_health,
    find_path_from_source,
)
from roomroute.cli import format_route_result
from roomroute.config import Config
from roomroute.logging_utils import LOG_TAG_ERROR, console_trace, log_error, log_info

SNAPSHOT = Path(__file__).with_name("campus.json")

QUERIES = [
    (1, "library"),
    (1, "Lab 2"),
    (1, "cafeteria"),
    (1, "lab"),
    (1, "annex"),
]


async def main(policy: str, verbose: bool) -> None:
    source = JsonRoomSource(SNAPSHOT)
    await source.initialize()

    health = await check_health(source)
    log_info(f"Snapshot: {health.rooms_count} rooms, {health.connections_count} connections")

    service = PathfindingService(
        capacity=CapacityEvaluator(policy=policy),
        listeners=[console_trace] if verbose else None,
    )

    for start_id, target in QUERIES:
        print(f"\n=== start={start_id} target={target!r} ===")
        try:
            result = await find_path_from_source(source, start_id, target, service=service)
        except PathfindingError as exc:
            log_error(f"{LOG_TAG_ERROR} [{exc.kind}] {exc}")
            continue
        print(format_route_result(result))

    await source.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--policy", choices=("full", "ratio"), default="full")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    Config.validate()
    asyncio.run(main(args.policy, args.verbose))
