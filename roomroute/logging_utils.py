"""Logging utilities for Roomroute.

Provides color-coded console output and a ready-made trace listener for
``PathfindingService``. The routing core itself never prints; callers opt in
by passing ``console_trace`` as a listener.
"""

import os
from enum import Enum
from typing import Any, Dict


class Color(Enum):
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"      # Deterministic pipeline stages
    YELLOW = "\033[93m"    # Warnings (blocked routes)
    RED = "\033[91m"       # Errors
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if ROOMROUTE_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("ROOMROUTE_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def log_deterministic(message: str) -> None:
    """Log a pipeline stage (blue)."""
    print(colored(message, Color.BLUE))


def log_warning(message: str) -> None:
    """Log a warning (yellow)."""
    print(colored(message, Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error (red)."""
    print(colored(message, Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(message, Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(message, Color.CYAN))


# Markers for message types (color-blind accessible)
LOG_TAG_STAGE = "[•]"
LOG_TAG_WARNING = "[!]"
LOG_TAG_ERROR = "[x]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"


def _format_details(details: Dict[str, Any]) -> str:
    if not details:
        return ""
    parts = [f"{key}={value}" for key, value in details.items()]
    return " (" + ", ".join(parts) + ")"


def console_trace(stage: Any, details: Dict[str, Any]) -> None:
    """Print one colored line per pipeline stage.

    Matches the listener signature accepted by ``PathfindingService``:
    ``(stage, details)``. ``stage`` is a ``PathfindingStage``; only its
    ``value`` is used so this module stays free of service imports.
    """

    name = getattr(stage, "value", str(stage))
    suffix = _format_details(details)

    if name == "failed":
        log_error(f"  {LOG_TAG_ERROR} [Pathfinding] {name}{suffix}")
    elif name == "done" and details.get("status") == "blocked":
        log_warning(f"  {LOG_TAG_WARNING} [Pathfinding] {name}{suffix}")
    elif name == "done":
        log_success(f"  {LOG_TAG_SUCCESS} [Pathfinding] {name}{suffix}")
    else:
        log_deterministic(f"  {LOG_TAG_STAGE} [Pathfinding] {name}{suffix}")
