"""
Wave Updates

Event-driven reinforcement: how a single practice outcome or a real-world
use changes a link.

Key principles:
- Boosts approach 1 asymptotically: wave += (1 - wave) * gain
- Failures and skips shrink the wave multiplicatively, so it never goes negative
- Real-world use is a flat jump, the strongest signal the model knows
"""

from __future__ import annotations
from dataclasses import replace
from typing import Optional

from core.retention.constants import (
    PracticeOutcome,
    SUCCESS_GAIN,
    PARTIAL_GAIN,
    PARTIAL_CREDIT,
    SKIP_DECAY,
    WILD_WAVE_BOOST,
    WILD_RESONANCE_STEP,
    DEFAULT_RESONANCE,
)
from core.retention.memory_state import (
    MemoryLink,
    clamp_unit,
    coerce_outcome,
    copy_tags,
    resolve_now,
    validate_link,
)


def update_wave(
    link: MemoryLink,
    outcome: PracticeOutcome | str,
    now: Optional[int] = None
) -> MemoryLink:
    """
    Update wave amplitude based on a practice outcome.

    Algorithm:
    - Success: wave += (1 - wave) * 0.3   (boost towards 1)
    - Fail:    wave *= decay_alpha         (decay)
    - Partial: wave += (1 - wave) * 0.15  (small boost, half credit)
    - Skip:    wave *= 0.95                (slight decay)

    Example:
        link.wave == 0.5, outcome "success"  ->  new wave 0.65

    Args:
        link: Link to update (not modified)
        outcome: Result of practice
        now: Time of the practice in ms (default: current time)

    Returns:
        New MemoryLink with last_seen set to now
    """
    validate_link(link)
    outcome = coerce_outcome(outcome)

    wave = link.wave
    success_count = link.success_count
    fail_count = link.fail_count

    if outcome == PracticeOutcome.SUCCESS:
        wave += (1.0 - wave) * SUCCESS_GAIN
        success_count += 1
    elif outcome == PracticeOutcome.FAIL:
        wave *= link.decay_alpha
        fail_count += 1
    elif outcome == PracticeOutcome.PARTIAL:
        wave += (1.0 - wave) * PARTIAL_GAIN
        success_count += PARTIAL_CREDIT
    else:
        wave *= SKIP_DECAY

    return replace(
        link,
        wave=clamp_unit(wave),
        success_count=success_count,
        fail_count=fail_count,
        last_seen=resolve_now(now),
        context_tags=copy_tags(link.context_tags)
    )


def mark_used_in_wild(link: MemoryLink, now: Optional[int] = None) -> MemoryLink:
    """
    Mark a phrase as used in real life.

    Boosts the wave by a flat 0.2 (capped at 1) and raises emotional
    resonance by 0.1 from a 0.5 baseline when it was never set, so the first
    real-world use always lands resonance at 0.6 or above.

    Args:
        link: Link to update (not modified)
        now: Time of the report in ms (default: current time)

    Returns:
        New MemoryLink
    """
    validate_link(link)

    resonance = link.emotional_resonance
    if resonance is None:
        resonance = DEFAULT_RESONANCE

    return replace(
        link,
        use_in_wild_count=link.use_in_wild_count + 1,
        wave=clamp_unit(link.wave + WILD_WAVE_BOOST),
        emotional_resonance=min(1.0, resonance + WILD_RESONANCE_STEP),
        last_seen=resolve_now(now),
        context_tags=copy_tags(link.context_tags)
    )
