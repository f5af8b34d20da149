"""
Priority Scoring

Urgency score used to rank which links most need attention.

Priority factors:
- Projected wave (lower = higher priority)
- Time since last seen (longer = higher priority, saturates at 7 days)
- Emotional resonance (higher = higher priority)
- Use-in-wild count (more = higher priority, saturates at 5 uses)

The four terms are summed and clamped once. The sum can pass 1, so links
with different strengths may tie at the ceiling.
"""

from __future__ import annotations
from typing import Optional

from core.retention.constants import (
    RECENCY_SATURATION_DAYS,
    RECENCY_WEIGHT,
    RESONANCE_WEIGHT,
    WILD_SATURATION_COUNT,
    WILD_WEIGHT,
)
from core.retention.decay import calculate_decay, days_since_seen
from core.retention.memory_state import MemoryLink, clamp_unit, resolve_now


def recency_boost(days: float) -> float:
    return min(days / RECENCY_SATURATION_DAYS, 1.0) * RECENCY_WEIGHT


def resonance_boost(emotional_resonance: Optional[float]) -> float:
    if emotional_resonance is None:
        return 0.0
    return emotional_resonance * RESONANCE_WEIGHT


def wild_boost(use_in_wild_count: int) -> float:
    return min(use_in_wild_count / WILD_SATURATION_COUNT, 1.0) * WILD_WEIGHT


def calculate_priority(link: MemoryLink, now: Optional[int] = None) -> float:
    """
    Get priority for resurfacing a link.

    Args:
        link: Memory link
        now: Time to score at in ms (default: current time)

    Returns:
        Priority score 0-1 (higher = more urgent)
    """
    now = resolve_now(now)

    current_wave = calculate_decay(link, now)

    # Base priority from inverse of wave (weak memories = high priority)
    priority = 1.0 - current_wave
    priority += recency_boost(days_since_seen(link, now))
    priority += resonance_boost(link.emotional_resonance)
    priority += wild_boost(link.use_in_wild_count)

    return clamp_unit(priority)
