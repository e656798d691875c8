"""
Roomroute Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


BLOCKING_POLICIES = ("full", "ratio")


class Config:
    """Application configuration loaded from environment variables."""

    # Enumeration bounds
    MAX_PATHS: int = int(os.getenv("ROOMROUTE_MAX_PATHS", "10"))
    MAX_DEPTH: int = int(os.getenv("ROOMROUTE_MAX_DEPTH", "8"))

    # Capacity policy
    # "full" blocks a room once occupancy reaches capacity_max,
    # "ratio" blocks once occupancy / capacity_max reaches BLOCKING_RATIO.
    BLOCKING_POLICY: str = os.getenv("ROOMROUTE_BLOCKING_POLICY", "full")
    BLOCKING_RATIO: float = float(os.getenv("ROOMROUTE_BLOCKING_RATIO", "0.9"))

    # Scoring policy (empirical constants, tunable)
    LENGTH_WEIGHT: float = float(os.getenv("ROOMROUTE_LENGTH_WEIGHT", "0.4"))
    OCCUPANCY_WEIGHT: float = float(os.getenv("ROOMROUTE_OCCUPANCY_WEIGHT", "0.6"))
    STEP_PENALTY: float = float(os.getenv("ROOMROUTE_STEP_PENALTY", "0.1"))

    # Query defaults
    DEFAULT_START_ID: int = int(os.getenv("ROOMROUTE_DEFAULT_START_ID", "1"))
    SOURCE_RETRY_ATTEMPTS: int = int(os.getenv("ROOMROUTE_SOURCE_RETRY_ATTEMPTS", "3"))

    # Room store
    DATABASE_URL: str = os.getenv("DATABASE_URL", "postgresql://localhost/roomroute")
    SNAPSHOT_PATH: str | None = os.getenv("ROOMROUTE_SNAPSHOT")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are inconsistent."""
        if cls.BLOCKING_POLICY not in BLOCKING_POLICIES:
            raise ValueError(
                f"ROOMROUTE_BLOCKING_POLICY must be one of {', '.join(BLOCKING_POLICIES)}; "
                f"got '{cls.BLOCKING_POLICY}'"
            )

        if not 0 < cls.BLOCKING_RATIO <= 1:
            raise ValueError("ROOMROUTE_BLOCKING_RATIO must be in the range (0, 1]")

        if cls.MAX_PATHS < 1 or cls.MAX_DEPTH < 1:
            raise ValueError("ROOMROUTE_MAX_PATHS and ROOMROUTE_MAX_DEPTH must be positive")

        if cls.LENGTH_WEIGHT < 0 or cls.OCCUPANCY_WEIGHT < 0:
            raise ValueError("Scoring weights cannot be negative")

        if abs(cls.LENGTH_WEIGHT + cls.OCCUPANCY_WEIGHT - 1.0) > 1e-9:
            raise ValueError(
                "ROOMROUTE_LENGTH_WEIGHT and ROOMROUTE_OCCUPANCY_WEIGHT must sum to 1.0 "
                "so efficiency scores stay within 0-100"
            )

        if not 0 <= cls.STEP_PENALTY <= 1:
            raise ValueError("ROOMROUTE_STEP_PENALTY must be in the range [0, 1]")

        if cls.SOURCE_RETRY_ATTEMPTS < 1:
            raise ValueError("ROOMROUTE_SOURCE_RETRY_ATTEMPTS must be at least 1")

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Roomroute Configuration:",
            f"  Max Paths: {cls.MAX_PATHS}",
            f"  Max Depth: {cls.MAX_DEPTH}",
            f"  Blocking Policy: {cls.BLOCKING_POLICY}"
            + (f" ({cls.BLOCKING_RATIO:.0%})" if cls.BLOCKING_POLICY == "ratio" else ""),
            f"  Weights: length={cls.LENGTH_WEIGHT}, occupancy={cls.OCCUPANCY_WEIGHT}",
            f"  Step Penalty: {cls.STEP_PENALTY}",
            f"  Database: {cls.DATABASE_URL}",
        ]
        return "\n".join(lines)
