"""
Service layer to assemble the retention dashboard.
"""

from __future__ import annotations

from typing import Iterable, Optional

from core import retention
from core.analytics.constants import STRONG_WAVE_THRESHOLD
from core.analytics.metrics import (
    compute_fading_count,
    compute_mean_projected_wave,
    compute_mean_wave_by_script,
    compute_strong_count,
)
from core.analytics.queries import load_link_snapshots_df
from core.analytics.types import RetentionDashboardData


def build_retention_dashboard(
    links: Iterable[retention.MemoryLink],
    now: Optional[int] = None,
    threshold: float = STRONG_WAVE_THRESHOLD
) -> RetentionDashboardData:
    """
    Build all figures for a retention overview at a single instant.
    """
    if now is None:
        now = retention.now_ms()

    snapshots_df = load_link_snapshots_df(links, now)

    return RetentionDashboardData(
        total_links=len(snapshots_df),
        strong_current=compute_strong_count(snapshots_df, threshold),
        fading_current=compute_fading_count(snapshots_df, threshold),
        mean_projected_wave=compute_mean_projected_wave(snapshots_df),
        mean_projected_wave_by_script=compute_mean_wave_by_script(snapshots_df),
    )
