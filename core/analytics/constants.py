"""
Constants for retention analytics.
"""

from __future__ import annotations

from typing import Final


# Projected wave at or above this counts as a strong memory
STRONG_WAVE_THRESHOLD: Final[float] = 0.7

SNAPSHOT_COLUMNS: Final[list[str]] = [
    "link_id",
    "phrase",
    "script_id",
    "wave",
    "projected_wave",
    "priority",
    "days_since_seen",
    "use_in_wild_count",
]
