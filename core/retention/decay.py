"""
Decay Projection

Continuous forgetting between practice events.

Formula: wave(t) = wave(last_seen) * exp(-lambda * dt)
where lambda = -ln(decay_alpha) / ms_per_day

With this lambda the wave is multiplied by exactly decay_alpha over one day
without practice, matching the per-failure factor used by wave updates.
"""

from __future__ import annotations
from typing import Optional
import math

from core.retention.constants import MS_PER_DAY
from core.retention.memory_state import (
    InvalidMemoryLinkError,
    MemoryLink,
    clamp_unit,
    resolve_now,
    validate_link,
)


def decay_rate(decay_alpha: float) -> float:
    """
    Continuous decay rate (per ms) for a per-day decay constant.

    Raises:
        InvalidMemoryLinkError: if decay_alpha <= 0 (ln is undefined there)
    """
    if decay_alpha <= 0:
        raise InvalidMemoryLinkError(
            f"decay_alpha must be positive to project decay, got {decay_alpha!r}"
        )
    return -math.log(decay_alpha) / MS_PER_DAY


def calculate_decay(link: MemoryLink, now: Optional[int] = None) -> float:
    """
    Project the wave forward to a point in time without changing the link.

    A timestamp earlier than last_seen projects the wave upward; callers are
    expected to pass non-decreasing times. The result is clamped to [0, 1].

    Args:
        link: Memory link
        now: Time to project to in ms (default: current time)

    Returns:
        Projected wave amplitude
    """
    validate_link(link)
    lam = decay_rate(link.decay_alpha)

    now = resolve_now(now)

    time_diff = now - link.last_seen
    return clamp_unit(link.wave * math.exp(-lam * time_diff))


def days_since_seen(link: MemoryLink, now: int) -> float:
    """Fractional days elapsed since the link was last seen."""
    return (now - link.last_seen) / MS_PER_DAY
