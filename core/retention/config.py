"""
Configuration for the retention wave model.

Values come from environment variables (optionally via a .env file).
"""

from __future__ import annotations
import os
from pathlib import Path

from dotenv import load_dotenv

from core.retention.constants import (
    DEFAULT_DECAY_ALPHA,
    PING_MAX_SECONDS,
    PING_MIN_SECONDS,
)

load_dotenv()


# Local fallback database
DB_DIR = Path(__file__).parent.parent.parent / "logs"


def is_test_mode() -> bool:
    """Check if running in test mode."""
    return os.getenv("TEST_MODE", "false").lower() == "true"


def get_database_url() -> str:
    """
    Get the database URL for the memory link store.

    Uses DATABASE_URL when set. In test mode 'retention_db' is replaced by
    'test_retention_db' in that URL. Without DATABASE_URL, falls back to a
    SQLite file under logs/.

    Returns:
        SQLAlchemy database URL
    """
    base_url = os.getenv("DATABASE_URL")
    if not base_url:
        db_name = "test_retention.db" if is_test_mode() else "retention.db"
        DB_DIR.mkdir(exist_ok=True)
        return f"sqlite:///{DB_DIR / db_name}"

    if is_test_mode():
        return base_url.replace("retention_db", "test_retention_db")

    return base_url


def get_default_decay_alpha() -> float:
    """
    Decay constant for newly created links (RETENTION_DECAY_ALPHA).

    Raises:
        ValueError: if the configured value is not a number in (0, 1]
    """
    raw = os.getenv("RETENTION_DECAY_ALPHA")
    if raw is None or raw.strip() == "":
        return DEFAULT_DECAY_ALPHA

    alpha = float(raw)
    if not 0.0 < alpha <= 1.0:
        raise ValueError(
            f"RETENTION_DECAY_ALPHA must lie in (0, 1], got {raw!r}"
        )
    return alpha


def get_ping_bounds() -> tuple[float, float]:
    """
    Ping delay bounds in seconds (RETENTION_PING_MIN_SECONDS, RETENTION_PING_MAX_SECONDS).

    Returns:
        (min_sec, max_sec)
    """
    min_sec = float(os.getenv("RETENTION_PING_MIN_SECONDS", PING_MIN_SECONDS))
    max_sec = float(os.getenv("RETENTION_PING_MAX_SECONDS", PING_MAX_SECONDS))
    return min_sec, max_sec
