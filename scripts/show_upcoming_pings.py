"""
Show the phrases that most need a ping right now.

Reads every stored memory link, ranks them by priority, and prints the top
entries with their scheduled ping time plus a short retention summary.

Usage:
    python -m scripts.show_upcoming_pings [--limit N] [--window-minutes M]
"""

from __future__ import annotations

import argparse
from datetime import datetime, timezone

from core import retention
from core.analytics import build_retention_dashboard
from core.ping_planner import get_upcoming_pings
from core.retention.database import SqlMemoryStore


def format_ts(ts_ms: int) -> str:
    return datetime.fromtimestamp(ts_ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def main():
    parser = argparse.ArgumentParser(description="List upcoming phrase pings")
    parser.add_argument("--limit", type=int, default=5, help="Number of pings to show")
    parser.add_argument(
        "--window-minutes",
        type=int,
        default=None,
        help="Only show pings scheduled within this many minutes"
    )
    args = parser.parse_args()

    store = SqlMemoryStore.from_url()
    store.init_db()

    now = retention.now_ms()
    window_ms = args.window_minutes * 60 * 1000 if args.window_minutes is not None else None
    pings = get_upcoming_pings(store, limit=args.limit, now=now, window_ms=window_ms)

    print("=" * 60)
    print("Upcoming pings")
    print("=" * 60)
    if not pings:
        print("Nothing to ping.")
    for ping in pings:
        print(f"{ping.priority:.2f}  {format_ts(ping.scheduled_for)}  {ping.link_id}")

    dashboard = build_retention_dashboard(store.list_all(), now)
    print()
    print(f"Links: {dashboard.total_links}  "
          f"strong: {dashboard.strong_current}  "
          f"fading: {dashboard.fading_current}  "
          f"mean wave: {dashboard.mean_projected_wave:.2f}")


if __name__ == "__main__":
    main()
