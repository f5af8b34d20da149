"""
Tests for decay projection and priority scoring.
"""

import math

import pytest

from core import retention
from core.retention import MS_PER_DAY, InvalidMemoryLinkError, MemoryLink


T0 = 1_700_000_000_000


def make_link(**overrides) -> MemoryLink:
    fields = dict(
        phrase="could I get the bill",
        script_id="restaurant",
        step_index=5,
        last_seen=T0,
        wave=0.5,
        decay_alpha=0.85,
    )
    fields.update(overrides)
    return MemoryLink(**fields)


# ---- Decay ----

def test_one_day_of_decay_equals_decay_alpha():
    link = make_link(wave=0.425)
    projected = retention.calculate_decay(link, T0 + MS_PER_DAY)
    assert projected == pytest.approx(0.36125)


def test_no_elapsed_time_means_no_decay():
    assert retention.calculate_decay(make_link(), T0) == pytest.approx(0.5)


def test_decay_is_non_increasing_over_time():
    link = make_link(wave=0.9)
    times = [T0 + int(d * MS_PER_DAY) for d in (0, 0.01, 0.5, 1, 2, 7, 30, 365)]
    projections = [retention.calculate_decay(link, t) for t in times]

    assert all(later <= earlier for earlier, later in zip(projections, projections[1:]))
    assert all(0.0 <= p <= 1.0 for p in projections)


def test_alpha_one_never_decays():
    link = make_link(wave=0.42, decay_alpha=1.0)
    for days in (0, 1, 30, 1000):
        assert retention.calculate_decay(link, T0 + days * MS_PER_DAY) == pytest.approx(0.42)


def test_projection_does_not_modify_link():
    link = make_link()
    retention.calculate_decay(link, T0 + 3 * MS_PER_DAY)
    assert link.wave == 0.5
    assert link.last_seen == T0


def test_earlier_time_projects_upward_and_is_clamped():
    link = make_link(wave=0.9)
    projected = retention.calculate_decay(link, T0 - 10 * MS_PER_DAY)
    assert projected == 1.0


@pytest.mark.parametrize("alpha", [0.0, -0.5])
def test_non_positive_alpha_is_an_error(alpha):
    with pytest.raises(InvalidMemoryLinkError):
        retention.calculate_decay(make_link(decay_alpha=alpha), T0 + MS_PER_DAY)
    with pytest.raises(InvalidMemoryLinkError):
        retention.decay_rate(alpha)


def test_decay_rate_zero_for_alpha_one():
    assert retention.decay_rate(1.0) == 0.0


# ---- Priority ----

def test_fresh_strong_link_has_zero_priority():
    link = make_link(wave=1.0, decay_alpha=1.0)
    assert retention.calculate_priority(link, T0) == 0.0


def test_weak_link_has_high_priority():
    weak = make_link(wave=0.1, decay_alpha=1.0)
    strong = make_link(wave=0.9, decay_alpha=1.0)
    assert retention.calculate_priority(weak, T0) > retention.calculate_priority(strong, T0)


@pytest.mark.parametrize("days, expected", [
    (0, 0.0),
    (3.5, 0.15),
    (7, 0.3),
    (14, 0.3),
    (100, 0.3),
])
def test_recency_boost_saturates_at_seven_days(days, expected):
    link = make_link(wave=1.0, decay_alpha=1.0)
    now = T0 + int(days * MS_PER_DAY)
    assert retention.calculate_priority(link, now) == pytest.approx(expected)


@pytest.mark.parametrize("uses, expected", [
    (0, 0.0),
    (1, 0.04),
    (5, 0.2),
    (12, 0.2),
])
def test_wild_boost_saturates_at_five_uses(uses, expected):
    link = make_link(wave=1.0, decay_alpha=1.0, use_in_wild_count=uses)
    assert retention.calculate_priority(link, T0) == pytest.approx(expected)


def test_resonance_boost():
    link = make_link(wave=1.0, decay_alpha=1.0, emotional_resonance=0.5)
    assert retention.calculate_priority(link, T0) == pytest.approx(0.1)


def test_unset_resonance_adds_nothing():
    link = make_link(wave=1.0, decay_alpha=1.0, emotional_resonance=None)
    assert retention.calculate_priority(link, T0) == 0.0


def test_priority_combines_terms_and_clamps_at_one():
    link = make_link(
        wave=0.2,
        emotional_resonance=1.0,
        use_in_wild_count=10,
        last_seen=T0 - 30 * MS_PER_DAY,
    )
    assert retention.calculate_priority(link, T0) == 1.0


def test_different_links_can_tie_at_ceiling():
    a = make_link(wave=0.1, decay_alpha=1.0, emotional_resonance=1.0, use_in_wild_count=5)
    b = make_link(wave=0.3, decay_alpha=1.0, emotional_resonance=1.0, use_in_wild_count=5)
    assert retention.calculate_priority(a, T0) == retention.calculate_priority(b, T0) == 1.0


def test_priority_uses_projected_wave():
    link = make_link(wave=0.8, decay_alpha=0.5)
    now = T0 + MS_PER_DAY
    expected = (1 - 0.4) + (1 / 7) * 0.3
    assert retention.calculate_priority(link, now) == pytest.approx(expected)


# ---- Time and resonance checks ----

@pytest.mark.parametrize("bad_now", [math.nan, math.inf, -math.inf])
def test_non_finite_now_rejected(bad_now):
    link = make_link(wave=0.1)
    with pytest.raises(InvalidMemoryLinkError):
        retention.calculate_decay(link, bad_now)
    with pytest.raises(InvalidMemoryLinkError):
        retention.calculate_priority(link, bad_now)


def test_alpha_one_rejects_infinite_now_instead_of_jumping():
    link = make_link(wave=0.1, decay_alpha=1.0)
    with pytest.raises(InvalidMemoryLinkError):
        retention.calculate_decay(link, math.inf)


@pytest.mark.parametrize("resonance", [-5.0, 1.5, math.nan])
def test_out_of_range_resonance_rejected(resonance):
    link = make_link(emotional_resonance=resonance)
    with pytest.raises(InvalidMemoryLinkError):
        retention.calculate_priority(link, T0)


@pytest.mark.parametrize("resonance", [0.0, 1.0])
def test_resonance_bounds_accepted(resonance):
    link = make_link(wave=1.0, decay_alpha=1.0, emotional_resonance=resonance)
    assert retention.calculate_priority(link, T0) == pytest.approx(resonance * 0.2)
