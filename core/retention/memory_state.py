"""
Memory State - Retention Wave Link and Validation

Defines the memory link record and the checks every wave operation runs
before touching it.

Key concepts:
- Wave: current memory amplitude, 0 (forgotten) to 1 (strong)
- Decay alpha: fraction of the wave left after one day without practice
- Link id: stable key a storage layer files the link under
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import math
import time

from core.retention.constants import INITIAL_WAVE, PracticeOutcome


class InvalidMemoryLinkError(ValueError):
    """Raised when a link or outcome falls outside the documented ranges."""


@dataclass
class MemoryLink:
    """
    One learner's memory of one phrase from one scenario step.

    Identity is (script_id, step_index, phrase). The wave functions never
    modify a link in place; they return a new one.
    """
    phrase: str
    script_id: str
    step_index: int

    # Wave state
    last_seen: int  # Milliseconds since epoch of the last interaction
    wave: float  # Amplitude, 0..1
    decay_alpha: float  # Decay constant, (0, 1]; configuration, never updated

    # Counters
    success_count: float = 0.0  # Fractional because of partial credit
    fail_count: int = 0
    use_in_wild_count: int = 0

    # Optional signals
    emotional_resonance: Optional[float] = None  # 0..1, unset until first real-world use
    context_tags: Optional[list[str]] = field(default=None)  # Informational only

    @property
    def link_id(self) -> str:
        return make_link_id(self.script_id, self.step_index, self.phrase)


def make_link_id(script_id: str, step_index: int, phrase: str) -> str:
    """Build the storage key for a (script, step, phrase) triple."""
    return f"{script_id}:{step_index}:{phrase}"


def now_ms() -> int:
    """Current wall-clock time in milliseconds since epoch."""
    return int(time.time() * 1000)


def validate_link(link: MemoryLink) -> None:
    """
    Fail fast on a malformed link.

    Raises:
        InvalidMemoryLinkError: if wave is outside [0, 1], decay_alpha is
            outside (0, 1], last_seen is not a finite number, or a set
            emotional_resonance is outside [0, 1]
    """
    if not _is_finite(link.wave) or not 0.0 <= link.wave <= 1.0:
        raise InvalidMemoryLinkError(
            f"wave must lie in [0, 1], got {link.wave!r} for {link.link_id!r}"
        )
    if not _is_finite(link.decay_alpha) or not 0.0 < link.decay_alpha <= 1.0:
        raise InvalidMemoryLinkError(
            f"decay_alpha must lie in (0, 1], got {link.decay_alpha!r} for {link.link_id!r}"
        )
    if not _is_finite(link.last_seen):
        raise InvalidMemoryLinkError(
            f"last_seen must be a finite timestamp, got {link.last_seen!r} for {link.link_id!r}"
        )
    resonance = link.emotional_resonance
    if resonance is not None and (not _is_finite(resonance) or not 0.0 <= resonance <= 1.0):
        raise InvalidMemoryLinkError(
            f"emotional_resonance must lie in [0, 1], got {resonance!r} for {link.link_id!r}"
        )


def validate_timestamp(now) -> None:
    """
    Raises:
        InvalidMemoryLinkError: if now is not a finite number
    """
    if not _is_finite(now):
        raise InvalidMemoryLinkError(f"now must be a finite timestamp, got {now!r}")


def resolve_now(now: Optional[int] = None) -> int:
    """Read the clock when now is omitted, otherwise check the given time."""
    if now is None:
        return now_ms()
    validate_timestamp(now)
    return now


def copy_tags(tags: Optional[list[str]]) -> Optional[list[str]]:
    return list(tags) if tags is not None else None


def coerce_outcome(outcome: PracticeOutcome | str) -> PracticeOutcome:
    """Accept either the enum or its string value."""
    try:
        return PracticeOutcome(outcome)
    except ValueError:
        raise InvalidMemoryLinkError(f"Unknown practice outcome: {outcome!r}") from None


def clamp_unit(value: float) -> float:
    """Clamp a value to [0, 1]."""
    return max(0.0, min(1.0, value))


def _is_finite(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def initialize_new_link(
    phrase: str,
    script_id: str,
    step_index: int,
    decay_alpha: Optional[float] = None,
    now: Optional[int] = None,
    context_tags: Optional[list[str]] = None
) -> MemoryLink:
    """
    Initialize a link for a phrase encountered for the first time.

    Args:
        phrase: Phrase text
        script_id: Scenario the phrase came from
        step_index: Step inside the scenario
        decay_alpha: Decay constant (default: configured RETENTION_DECAY_ALPHA)
        now: Creation time in ms (default: current time)
        context_tags: Optional situational labels

    Returns:
        New MemoryLink at full amplitude with zeroed counters
    """
    if decay_alpha is None:
        # Deferred: config loads .env on import
        from core.retention.config import get_default_decay_alpha
        decay_alpha = get_default_decay_alpha()

    link = MemoryLink(
        phrase=phrase,
        script_id=script_id,
        step_index=step_index,
        last_seen=resolve_now(now),
        wave=INITIAL_WAVE,
        decay_alpha=decay_alpha,
        context_tags=copy_tags(context_tags)
    )
    validate_link(link)
    return link
