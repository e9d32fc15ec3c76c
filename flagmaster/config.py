"""Configuration management for Flagmaster."""

# This module centralizes all environment variable loading and configuration
# for Flagmaster, including storage paths, session sizing and retry spacing.

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv

# Session sizing - tunable, the larger pool gets the larger new-item allotment
DEFAULT_NEW_PER_SESSION = 5
DEFAULT_CATEGORY_NEW_PER_SESSION = 3
DEFAULT_MAX_QUEUE_SIZE = 20  # New items stop being added once the queue is this long

# In-session retry spacing, in questions
DEFAULT_RETRY_GAPS = (2, 5, 9)


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Storage
    database_path: str = "data/flagmaster.db"
    catalog_path: str = ""  # Empty = built-in seed catalog

    # Session queue
    new_per_session: int = DEFAULT_NEW_PER_SESSION
    category_new_per_session: int = DEFAULT_CATEGORY_NEW_PER_SESSION
    max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE
    count_new_as_due: bool = False

    # Retry queue
    retry_gaps: tuple[int, ...] = DEFAULT_RETRY_GAPS

    # Multiple choice
    distractor_count: int = 3

    # Timed mode
    timed_seconds: int = 60

    # Randomness (None = OS entropy)
    random_seed: int | None = None

    log_level: str = "WARNING"

    @staticmethod
    def _safe_int(value: str, default: int = 0) -> int:
        """Safely parse an integer, returning default if invalid."""
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    @staticmethod
    def _safe_bool(value: str | None, default: bool = False) -> bool:
        """Parse 1/0, true/false, yes/no style flags."""
        if value is None or not value.strip():
            return default
        return value.strip().lower() in ("1", "true", "yes", "on")

    @classmethod
    def _safe_gaps(cls, value: str | None) -> tuple[int, ...]:
        """Parse a comma separated gap schedule like "2,5,9"."""
        if not value:
            return DEFAULT_RETRY_GAPS
        gaps = tuple(cls._safe_int(part.strip(), -1) for part in value.split(","))
        if not gaps or any(gap <= 0 for gap in gaps):
            return DEFAULT_RETRY_GAPS
        return gaps

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "Config":
        """Load configuration from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        seed = os.environ.get("RANDOM_SEED", "")

        return cls(
            database_path=os.environ.get("DATABASE_PATH", "data/flagmaster.db"),
            catalog_path=os.environ.get("CATALOG_PATH", ""),
            new_per_session=cls._safe_int(
                os.environ.get("NEW_PER_SESSION", ""), DEFAULT_NEW_PER_SESSION
            ),
            category_new_per_session=cls._safe_int(
                os.environ.get("CATEGORY_NEW_PER_SESSION", ""), DEFAULT_CATEGORY_NEW_PER_SESSION
            ),
            max_queue_size=cls._safe_int(os.environ.get("MAX_QUEUE_SIZE", ""), DEFAULT_MAX_QUEUE_SIZE),
            count_new_as_due=cls._safe_bool(os.environ.get("COUNT_NEW_AS_DUE")),
            retry_gaps=cls._safe_gaps(os.environ.get("RETRY_GAPS")),
            distractor_count=cls._safe_int(os.environ.get("DISTRACTOR_COUNT", ""), 3),
            timed_seconds=cls._safe_int(os.environ.get("TIMED_SECONDS", ""), 60),
            random_seed=cls._safe_int(seed, 0) if seed.strip() else None,
            log_level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
        )

    def ensure_database_dir(self) -> None:
        """Ensure the database directory exists."""
        Path(self.database_path).parent.mkdir(parents=True, exist_ok=True)
