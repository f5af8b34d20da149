"""
Analytics package exports.
"""

from core.analytics.constants import STRONG_WAVE_THRESHOLD
from core.analytics.queries import load_link_snapshots_df
from core.analytics.service import build_retention_dashboard
from core.analytics.types import RetentionDashboardData

__all__ = [
    "STRONG_WAVE_THRESHOLD",
    "load_link_snapshots_df",
    "build_retention_dashboard",
    "RetentionDashboardData",
]
