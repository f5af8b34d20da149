"""
Data-loading helpers for analytics.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from core import retention
from core.analytics.constants import SNAPSHOT_COLUMNS


def load_link_snapshots_df(links: Iterable[retention.MemoryLink], now: int) -> pd.DataFrame:
    """
    Project every link to `now` and collect the results in a dataframe.
    """
    rows = [
        {
            "link_id": link.link_id,
            "phrase": link.phrase,
            "script_id": link.script_id,
            "wave": link.wave,
            "projected_wave": retention.calculate_decay(link, now),
            "priority": retention.calculate_priority(link, now),
            "days_since_seen": retention.days_since_seen(link, now),
            "use_in_wild_count": link.use_in_wild_count,
        }
        for link in links
    ]
    if not rows:
        return pd.DataFrame(columns=SNAPSHOT_COLUMNS)

    df = pd.DataFrame(rows, columns=SNAPSHOT_COLUMNS)
    return df.sort_values("priority", ascending=False).reset_index(drop=True)
