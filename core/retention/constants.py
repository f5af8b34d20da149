"""
Retention Wave Constants and Parameters

All tunable numbers of the wave memory model in one place.
"""

from enum import Enum


# ---- Practice Outcomes ----

class PracticeOutcome(str, Enum):
    """Result of a single practice attempt."""
    SUCCESS = "success"  # Got it right
    FAIL = "fail"        # Got it wrong
    PARTIAL = "partial"  # Partially correct
    SKIP = "skip"        # User skipped


# ---- Time ----

MS_PER_DAY = 24 * 60 * 60 * 1000


# ---- Link Defaults ----

INITIAL_WAVE = 1.0           # A freshly encountered phrase starts at full amplitude
DEFAULT_DECAY_ALPHA = 0.8    # Typical range is 0.7 (fast) to 0.9 (slow)


# ---- Wave Update Factors ----
# Boosts move wave a fraction of the remaining distance toward 1.

SUCCESS_GAIN = 0.3
PARTIAL_GAIN = 0.15
PARTIAL_CREDIT = 0.5         # Added to success_count on a partial outcome
SKIP_DECAY = 0.95


# ---- Used In The Wild ----

WILD_WAVE_BOOST = 0.2        # Flat jump, not proportional
WILD_RESONANCE_STEP = 0.1
DEFAULT_RESONANCE = 0.5      # Baseline when resonance was never set


# ---- Priority Weights ----

RECENCY_SATURATION_DAYS = 7.0
RECENCY_WEIGHT = 0.3
RESONANCE_WEIGHT = 0.2
WILD_SATURATION_COUNT = 5.0
WILD_WEIGHT = 0.2


# ---- Ping Scheduling ----

PING_MIN_SECONDS = 90
PING_MAX_SECONDS = 3600
JITTER_LOW = 0.8             # Jitter is drawn uniformly from [0.8, 1.2)
JITTER_SPAN = 0.4
