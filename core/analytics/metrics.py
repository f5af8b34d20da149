"""
Metric computations for retention dashboards.
"""

from __future__ import annotations

import pandas as pd


def compute_strong_count(snapshots_df: pd.DataFrame, threshold: float) -> int:
    """
    Links whose projected wave is at or above the threshold.
    """
    if snapshots_df.empty:
        return 0
    return int((snapshots_df["projected_wave"] >= threshold).sum())


def compute_fading_count(snapshots_df: pd.DataFrame, threshold: float) -> int:
    """
    Links whose projected wave has dropped below the threshold.
    """
    if snapshots_df.empty:
        return 0
    return int((snapshots_df["projected_wave"] < threshold).sum())


def compute_mean_projected_wave(snapshots_df: pd.DataFrame) -> float:
    if snapshots_df.empty:
        return 0.0
    return float(snapshots_df["projected_wave"].mean())


def compute_mean_wave_by_script(snapshots_df: pd.DataFrame) -> pd.Series:
    """
    Mean projected wave per originating scenario, weakest scenario first.
    """
    if snapshots_df.empty:
        return pd.Series(dtype="float64")
    return (
        snapshots_df.groupby("script_id")["projected_wave"]
        .mean()
        .sort_values()
        .astype("float64")
    )
