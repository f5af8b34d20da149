"""
Ping Scheduling

Decides when a link should be resurfaced next.

Strategy:
- Lower projected wave -> sooner ping (needs reinforcement)
- Higher projected wave -> later ping (already strong)
- Multiplicative jitter so many links don't ping at the same moment
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional
import random

from core.retention.constants import (
    JITTER_LOW,
    JITTER_SPAN,
    PING_MAX_SECONDS,
    PING_MIN_SECONDS,
)
from core.retention.decay import calculate_decay
from core.retention.memory_state import MemoryLink, resolve_now
from core.retention.priority import calculate_priority


RandomSource = Callable[[], float]


@dataclass(frozen=True)
class PingSchedule:
    """A computed reminder for one link. Not persisted."""
    link_id: str
    scheduled_for: int  # Timestamp in ms
    priority: float  # 0-1, higher = more urgent
    context: Optional[str] = None  # Suggested context, passed through untouched


def base_ping_delay(wave: float, min_sec: float, max_sec: float) -> float:
    """
    Linear delay in seconds: wave=0 -> min_sec, wave=1 -> max_sec.
    """
    return min_sec + (max_sec - min_sec) * wave


def next_ping_time(
    link: MemoryLink,
    now: Optional[int] = None,
    min_sec: float = PING_MIN_SECONDS,
    max_sec: float = PING_MAX_SECONDS,
    rand: RandomSource = random.random
) -> int:
    """
    Schedule the next ping for a link.

    Example:
        next_ping_time(link, now, 90, 3600)  # somewhere 72s to ~72min from now

    Args:
        link: Memory link
        now: Current time in ms (default: current time)
        min_sec: Delay for a fully forgotten link
        max_sec: Delay for a maximally strong link
        rand: Uniform [0, 1) generator used for jitter

    Returns:
        Timestamp (ms) for the next ping
    """
    now = resolve_now(now)

    current_wave = calculate_decay(link, now)
    base_delay = base_ping_delay(current_wave, min_sec, max_sec)

    # +/-20% jitter
    jitter = JITTER_LOW + rand() * JITTER_SPAN

    return round(now + base_delay * jitter * 1000)


def build_ping_schedule(
    link: MemoryLink,
    now: Optional[int] = None,
    min_sec: float = PING_MIN_SECONDS,
    max_sec: float = PING_MAX_SECONDS,
    rand: RandomSource = random.random,
    context: Optional[str] = None
) -> PingSchedule:
    """
    Compute next ping time and priority for a link at the same instant.
    """
    now = resolve_now(now)

    return PingSchedule(
        link_id=link.link_id,
        scheduled_for=next_ping_time(link, now, min_sec, max_sec, rand),
        priority=calculate_priority(link, now),
        context=context
    )
