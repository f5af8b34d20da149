"""
Retention Wave - spaced repetition memory model for phrases

Tracks how strongly a learner remembers a phrase, updates that strength
after practice, and decides when and how urgently to resurface it:
- Wave updates for practice outcomes and real-world use
- Continuous exponential decay between events
- Priority scoring and jittered ping scheduling

Quick start:
    from core import retention

    link = retention.initialize_new_link("in an hour", "cafe_order", 2)
    link = retention.update_wave(link, "success")
    priority = retention.calculate_priority(link)
    ping_at = retention.next_ping_time(link, min_sec=90, max_sec=3600)

All functions are pure apart from reading the clock when `now` is omitted.
Storage lives in core.retention.database and is wired by the caller.
"""

# Core algorithm
from core.retention.wave_updates import update_wave, mark_used_in_wild
from core.retention.decay import calculate_decay, decay_rate, days_since_seen
from core.retention.priority import calculate_priority
from core.retention.scheduling import (
    PingSchedule,
    base_ping_delay,
    build_ping_schedule,
    next_ping_time,
)

# Memory state
from core.retention.memory_state import (
    InvalidMemoryLinkError,
    MemoryLink,
    initialize_new_link,
    make_link_id,
    now_ms,
    validate_link,
)

# Constants and parameters
from core.retention.constants import (
    PracticeOutcome,
    MS_PER_DAY,
    INITIAL_WAVE,
    DEFAULT_DECAY_ALPHA,
    PING_MIN_SECONDS,
    PING_MAX_SECONDS,
)


__all__ = [
    # Core algorithm
    "update_wave",
    "mark_used_in_wild",
    "calculate_decay",
    "decay_rate",
    "days_since_seen",
    "calculate_priority",
    "next_ping_time",
    "base_ping_delay",
    "build_ping_schedule",
    "PingSchedule",

    # Memory state
    "InvalidMemoryLinkError",
    "MemoryLink",
    "initialize_new_link",
    "make_link_id",
    "now_ms",
    "validate_link",

    # Enums and parameters
    "PracticeOutcome",
    "MS_PER_DAY",
    "INITIAL_WAVE",
    "DEFAULT_DECAY_ALPHA",
    "PING_MIN_SECONDS",
    "PING_MAX_SECONDS",
]
