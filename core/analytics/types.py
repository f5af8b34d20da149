"""
Types for retention dashboards.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class RetentionDashboardData:
    """
    Precomputed retention figures for a set of memory links.
    """
    total_links: int
    strong_current: int
    fading_current: int
    mean_projected_wave: float
    mean_projected_wave_by_script: pd.Series
