"""
Ping planner for choosing which phrases to resurface.

This is the caller side of the retention wave model: it loads links from a
store, runs them through core.retention, writes the results back, and ranks
links by priority. The algorithm itself never enumerates or ranks links.

A notification job would call get_upcoming_pings() periodically and present
the top entries to the learner.
"""

from __future__ import annotations

from typing import Iterable, Optional
import random

from core import retention
from core.retention.config import get_ping_bounds
from core.retention.database import MemoryStore
from core.retention.scheduling import PingSchedule, RandomSource


def register_phrase(
    store: MemoryStore,
    phrase: str,
    script_id: str,
    step_index: int,
    decay_alpha: Optional[float] = None,
    context_tags: Optional[list[str]] = None,
    now: Optional[int] = None
) -> retention.MemoryLink:
    """
    Create a link the first time a phrase is encountered in a scenario.

    Returns the stored link unchanged if the phrase was already registered.
    """
    link_id = retention.make_link_id(script_id, step_index, phrase)
    existing = store.get(link_id)
    if existing is not None:
        return existing

    link = retention.initialize_new_link(
        phrase,
        script_id,
        step_index,
        decay_alpha=decay_alpha,
        now=now,
        context_tags=context_tags
    )
    store.put(link)
    return link


def record_practice(
    store: MemoryStore,
    link_id: str,
    outcome: retention.PracticeOutcome | str,
    now: Optional[int] = None
) -> retention.MemoryLink:
    """
    Apply a practice outcome to a stored link and save the result.

    Raises:
        KeyError: if no link is stored under link_id
    """
    link = _load(store, link_id)
    updated = retention.update_wave(link, outcome, now)
    store.put(updated)
    return updated


def record_used_in_wild(
    store: MemoryStore,
    link_id: str,
    now: Optional[int] = None
) -> retention.MemoryLink:
    """
    Record a real-world use of a stored phrase and save the result.

    Raises:
        KeyError: if no link is stored under link_id
    """
    link = _load(store, link_id)
    updated = retention.mark_used_in_wild(link, now)
    store.put(updated)
    return updated


def plan_pings(
    links: Iterable[retention.MemoryLink],
    now: Optional[int] = None,
    min_sec: Optional[float] = None,
    max_sec: Optional[float] = None,
    rand: RandomSource = random.random,
    window_ms: Optional[int] = None,
    context: Optional[str] = None
) -> list[PingSchedule]:
    """
    Compute a ping for every link and rank them.

    Ordering: highest priority first, then earliest scheduled time.

    Args:
        links: Links to plan for
        now: Planning time in ms (default: current time)
        min_sec: Minimum ping delay (default: configured bound)
        max_sec: Maximum ping delay (default: configured bound)
        rand: Uniform [0, 1) generator for jitter
        window_ms: If set, drop pings scheduled later than now + window_ms
        context: Suggested context attached to every entry

    Returns:
        List of PingSchedule entries
    """
    if now is None:
        now = retention.now_ms()
    if min_sec is None or max_sec is None:
        default_min, default_max = get_ping_bounds()
        min_sec = default_min if min_sec is None else min_sec
        max_sec = default_max if max_sec is None else max_sec

    schedules = [
        retention.build_ping_schedule(link, now, min_sec, max_sec, rand, context)
        for link in links
    ]

    if window_ms is not None:
        horizon = now + window_ms
        schedules = [s for s in schedules if s.scheduled_for <= horizon]

    schedules.sort(key=lambda s: (-s.priority, s.scheduled_for))
    return schedules


def get_upcoming_pings(
    store: MemoryStore,
    limit: int = 5,
    now: Optional[int] = None,
    min_sec: Optional[float] = None,
    max_sec: Optional[float] = None,
    rand: RandomSource = random.random,
    window_ms: Optional[int] = None
) -> list[PingSchedule]:
    """
    Top-N pings across every stored link.

    Args:
        store: Memory link store
        limit: Maximum number of pings to return
        now: Planning time in ms (default: current time)
        min_sec: Minimum ping delay (default: configured bound)
        max_sec: Maximum ping delay (default: configured bound)
        rand: Uniform [0, 1) generator for jitter
        window_ms: Only consider pings due within this many ms

    Returns:
        Up to `limit` PingSchedule entries, most urgent first
    """
    links = store.list_all()
    print(f"[PING PLANNER] Planning pings for {len(links)} links")

    schedules = plan_pings(
        links,
        now=now,
        min_sec=min_sec,
        max_sec=max_sec,
        rand=rand,
        window_ms=window_ms
    )

    if limit <= 0:
        return []
    return schedules[:limit]


def _load(store: MemoryStore, link_id: str) -> retention.MemoryLink:
    link = store.get(link_id)
    if link is None:
        raise KeyError(f"No memory link stored under {link_id!r}")
    return link
