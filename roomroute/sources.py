"""
RoomSource interface for pluggable room/connection snapshot providers.

The routing core never touches storage: it receives an already-loaded list of
rooms and connections. A RoomSource is what callers use to get that snapshot
from wherever the room store lives.

Three included implementations:
1. InMemoryRoomSource - Lists held in memory (testing, embedding, demos)
2. JsonRoomSource - A JSON snapshot file (CLI, fixtures, offline use)
3. PostgresRoomSource - Read-only queries against the room store tables

Snapshot file structure:
```json
{
  "rooms": [
    {"id": 1, "name": "Lobby", "area": 40.0, "capacity_max": 10, "occupancy": 2}
  ],
  "connections": [
    {"id": 1, "room_from": 1, "room_to": 2}
  ]
}
```

Usage pattern:
    source = JsonRoomSource("examples/campus/campus.json")
    await source.initialize()
    rooms, connections = await source.fetch_snapshot()
    await source.close()

Sources raise ``SourceUnavailableError`` for conditions worth retrying (store
unreachable or connection dropped, snapshot file missing or unreadable) and
let pydantic ``ValidationError`` propagate for malformed records.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import Config
from .errors import SourceUnavailableError
from .schemas import Connection, Room

try:  # Optional dependency (only needed for PostgresRoomSource)
    import asyncpg
except ImportError:  # pragma: no cover - asyncpg may not be installed for json/memory usage
    asyncpg = None

# Errors that mean the store could not be reached or dropped the connection
if asyncpg is None:  # pragma: no cover
    _CONNECTION_ERRORS: Tuple[type, ...] = (OSError,)
else:
    _CONNECTION_ERRORS = (
        OSError,
        asyncpg.InterfaceError,
        asyncpg.exceptions.ConnectionDoesNotExistError,
        asyncpg.exceptions.CannotConnectNowError,
    )


Snapshot = Tuple[List[Room], List[Connection]]


class RoomSource(ABC):
    """Abstract base class for room/connection snapshot providers.

    All methods are async so database-backed sources do not block the caller;
    the in-memory source simply returns immediately.
    """

    async def initialize(self) -> None:
        """Open connections, pools or files. Default is a no-op."""
        return None

    async def close(self) -> None:
        """Release whatever ``initialize`` acquired. Default is a no-op."""
        return None

    @abstractmethod
    async def fetch_rooms(self) -> List[Room]:
        """Return every room, ordered by id."""

    @abstractmethod
    async def fetch_connections(self) -> List[Connection]:
        """Return every connection, ordered by id."""

    async def fetch_snapshot(self) -> Snapshot:
        """Return rooms and connections read for one query."""
        rooms = await self.fetch_rooms()
        connections = await self.fetch_connections()
        return rooms, connections


class InMemoryRoomSource(RoomSource):
    """Serves a snapshot from lists held in memory.

    Records may be ``Room``/``Connection`` models or plain dicts; dicts are
    validated on construction.
    """

    def __init__(
        self,
        rooms: Sequence[Room | Dict[str, Any]] = (),
        connections: Sequence[Connection | Dict[str, Any]] = (),
    ):
        self.rooms: List[Room] = [Room.model_validate(room) for room in rooms]
        self.connections: List[Connection] = [
            Connection.model_validate(conn) for conn in connections
        ]

    async def fetch_rooms(self) -> List[Room]:
        return sorted(self.rooms, key=lambda room: room.id)

    async def fetch_connections(self) -> List[Connection]:
        return sorted(self.connections, key=lambda conn: conn.id)


class JsonRoomSource(RoomSource):
    """Reads a snapshot from a JSON file on every fetch.

    Re-reading per fetch keeps the snapshot current when another process
    rewrites the file between queries. File I/O runs in a worker thread.
    """

    def __init__(self, path: Path | str | None = None):
        resolved = path or Config.SNAPSHOT_PATH
        if resolved is None:
            raise ValueError("JsonRoomSource needs a path (or ROOMROUTE_SNAPSHOT set)")
        self.path = Path(resolved)

    async def _read(self) -> Dict[str, Any]:
        path = self.path

        def _load() -> Dict[str, Any]:
            try:
                payload = json.loads(path.read_text("utf-8"))
            except FileNotFoundError as exc:
                raise SourceUnavailableError(
                    f"Snapshot file not found at {path}", details={"path": str(path)}
                ) from exc
            except json.JSONDecodeError as exc:
                raise SourceUnavailableError(
                    f"Snapshot file {path} is not valid JSON: {exc}", details={"path": str(path)}
                ) from exc
            if not isinstance(payload, dict) or not isinstance(payload.get("rooms"), list):
                raise SourceUnavailableError(
                    f"Snapshot file {path} must contain a 'rooms' list", details={"path": str(path)}
                )
            return payload

        return await asyncio.to_thread(_load)

    async def fetch_rooms(self) -> List[Room]:
        payload = await self._read()
        return self._parse_rooms(payload)

    async def fetch_connections(self) -> List[Connection]:
        payload = await self._read()
        return self._parse_connections(payload)

    async def fetch_snapshot(self) -> Snapshot:
        # Single read so rooms and connections come from the same file version
        payload = await self._read()
        return self._parse_rooms(payload), self._parse_connections(payload)

    @staticmethod
    def _parse_rooms(payload: Dict[str, Any]) -> List[Room]:
        rooms = [Room.model_validate(item) for item in payload.get("rooms", [])]
        return sorted(rooms, key=lambda room: room.id)

    @staticmethod
    def _parse_connections(payload: Dict[str, Any]) -> List[Connection]:
        connections = [Connection.model_validate(item) for item in payload.get("connections", [])]
        return sorted(connections, key=lambda conn: conn.id)


class PostgresRoomSource(RoomSource):
    """Read-only access to the room store's PostgreSQL tables.

    Expects the store's ``rooms`` table (``id, nama_ruangan, luas,
    kapasitas_max, occupancy``) and ``connections`` table (``id, room_from,
    room_to``). Column names are mapped by the ``Room``/``Connection`` field
    aliases, so extra columns such as timestamps are ignored.
    """

    ROOMS_QUERY = "SELECT * FROM rooms ORDER BY id"
    CONNECTIONS_QUERY = "SELECT * FROM connections ORDER BY id"

    def __init__(self, database_url: Optional[str] = None, *, pool: Any = None):
        if asyncpg is None and pool is None:  # pragma: no cover - handled during runtime when dependency missing
            raise ImportError(
                "asyncpg is required for PostgresRoomSource. Install with `pip install asyncpg`."
            )

        self.database_url = database_url or Config.DATABASE_URL
        self.pool = pool

    async def initialize(self) -> None:
        if self.pool is None:
            try:
                self.pool = await asyncpg.create_pool(self.database_url)
            except _CONNECTION_ERRORS as exc:
                raise SourceUnavailableError(f"Room store unreachable: {exc}") from exc

    async def close(self) -> None:
        if self.pool is not None:
            await self.pool.close()
            self.pool = None

    async def _fetch(self, query: str) -> List[Dict[str, Any]]:
        assert self.pool is not None, "Room source not initialized"
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(query)
        except _CONNECTION_ERRORS as exc:
            raise SourceUnavailableError(f"Room store unreachable: {exc}") from exc
        return [dict(row) for row in rows]

    async def fetch_rooms(self) -> List[Room]:
        return [Room.model_validate(row) for row in await self._fetch(self.ROOMS_QUERY)]

    async def fetch_connections(self) -> List[Connection]:
        return [Connection.model_validate(row) for row in await self._fetch(self.CONNECTIONS_QUERY)]
