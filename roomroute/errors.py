"""Typed failures raised by the pathfinding pipeline.

Every failure carries a ``kind`` string so transport layers (HTTP handlers,
the CLI) can map it to a status or exit code without string matching. A
``blocked`` capacity verdict is a normal result and never raised.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class PathfindingError(Exception):
    """Base class for all terminal pathfinding failures."""

    kind: str = "pathfinding_error"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        self.details: Dict[str, Any] = dict(details or {})
        super().__init__(message)


class InvalidInputError(PathfindingError):
    """Raised when the query itself is malformed (blank target, same endpoints, bad bounds)."""

    kind = "invalid_input"


class NotFoundError(PathfindingError):
    """Raised when the start id or target query does not resolve to exactly one room."""

    kind = "not_found"

    def __init__(
        self,
        message: str,
        *,
        candidates: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.candidates: List[str] = list(candidates or [])
        if self.candidates:
            message_lines = [message, "Matching rooms:"]
            message_lines.extend(f"  - {name}" for name in self.candidates)
            message = "\n".join(message_lines)
        super().__init__(message, details=details)


class NoPathFoundError(PathfindingError):
    """Raised when no simple path connects start and target within the search bounds."""

    kind = "no_path"

    def __init__(self, *, origin: str, target: str, max_depth: int) -> None:
        self.origin = origin
        self.target = target
        message = (
            f"No path found from '{origin}' to '{target}' within {max_depth} steps.\n\n"
            "Remediation tips:\n"
            "  - Check that a connection chain links both rooms\n"
            "  - Raise max_depth if the rooms are far apart"
        )
        super().__init__(message, details={"max_depth": max_depth})


class InternalInconsistencyError(PathfindingError):
    """Raised when an enumerated path contradicts the resolved endpoints or snapshot.

    This indicates a graph-construction or lookup bug and is never corrected
    silently.
    """

    kind = "internal_inconsistency"


class SourceUnavailableError(PathfindingError):
    """Raised by a room source that cannot deliver a snapshot right now."""

    kind = "source_unavailable"
