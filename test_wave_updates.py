"""
Tests for wave updates: practice outcomes and real-world use.
"""

import math

import pytest

from core import retention
from core.retention import InvalidMemoryLinkError, MemoryLink, PracticeOutcome


T0 = 1_700_000_000_000
LATER = T0 + 5_000


def make_link(**overrides) -> MemoryLink:
    fields = dict(
        phrase="in an hour",
        script_id="cafe_order",
        step_index=2,
        last_seen=T0,
        wave=0.5,
        decay_alpha=0.85,
    )
    fields.update(overrides)
    return MemoryLink(**fields)


def test_success_boosts_toward_one():
    updated = retention.update_wave(make_link(), "success", now=LATER)

    assert updated.wave == pytest.approx(0.65)
    assert updated.success_count == 1
    assert updated.fail_count == 0
    assert updated.last_seen == LATER


def test_fail_multiplies_by_decay_alpha():
    updated = retention.update_wave(make_link(), PracticeOutcome.FAIL, now=LATER)

    assert updated.wave == pytest.approx(0.425)
    assert updated.fail_count == 1
    assert updated.success_count == 0
    assert updated.last_seen == LATER


def test_partial_gives_half_credit():
    updated = retention.update_wave(make_link(), "partial", now=LATER)

    assert updated.wave == pytest.approx(0.575)
    assert updated.success_count == pytest.approx(0.5)
    assert updated.fail_count == 0


def test_skip_decays_slightly_without_counting():
    updated = retention.update_wave(make_link(), "skip", now=LATER)

    assert updated.wave == pytest.approx(0.475)
    assert updated.success_count == 0
    assert updated.fail_count == 0
    assert updated.last_seen == LATER


def test_skip_at_zero_stays_zero():
    updated = retention.update_wave(make_link(wave=0.0), "skip", now=LATER)
    assert updated.wave == 0.0


def test_successive_successes_have_diminishing_gains():
    link = make_link(wave=0.2)
    gains = []
    for _ in range(5):
        updated = retention.update_wave(link, "success", now=LATER)
        gains.append(updated.wave - link.wave)
        link = updated

    assert all(later < earlier for earlier, later in zip(gains, gains[1:]))
    assert link.wave < 1.0
    assert link.success_count == 5


@pytest.mark.parametrize("outcome", list(PracticeOutcome))
@pytest.mark.parametrize("wave", [0.0, 0.001, 0.3, 0.999, 1.0])
def test_wave_stays_in_unit_interval(outcome, wave):
    updated = retention.update_wave(make_link(wave=wave), outcome, now=LATER)
    assert 0.0 <= updated.wave <= 1.0


def test_update_does_not_modify_input():
    link = make_link()
    retention.update_wave(link, "success", now=LATER)

    assert link.wave == 0.5
    assert link.success_count == 0
    assert link.last_seen == T0


def test_update_reads_clock_when_now_omitted(monkeypatch):
    monkeypatch.setattr("core.retention.memory_state.now_ms", lambda: T0 + 42)
    updated = retention.update_wave(make_link(), "success")
    assert updated.last_seen == T0 + 42


def test_unknown_outcome_rejected():
    with pytest.raises(InvalidMemoryLinkError):
        retention.update_wave(make_link(), "maybe", now=LATER)


@pytest.mark.parametrize("overrides", [
    {"wave": 1.5},
    {"wave": -0.1},
    {"wave": math.nan},
    {"decay_alpha": 0.0},
    {"decay_alpha": 1.2},
    {"last_seen": math.inf},
])
def test_malformed_link_rejected(overrides):
    with pytest.raises(InvalidMemoryLinkError):
        retention.update_wave(make_link(**overrides), "success", now=LATER)


def test_invalid_link_error_is_value_error():
    assert issubclass(InvalidMemoryLinkError, ValueError)


def test_mark_used_in_wild_first_use():
    link = make_link(wave=0.7, emotional_resonance=None)
    updated = retention.mark_used_in_wild(link, now=LATER)

    assert updated.wave == pytest.approx(0.9)
    assert updated.emotional_resonance == pytest.approx(0.6)
    assert updated.use_in_wild_count == 1
    assert updated.last_seen == LATER
    assert link.use_in_wild_count == 0


def test_mark_used_in_wild_caps_wave_and_resonance():
    link = make_link(wave=0.95, emotional_resonance=0.97, use_in_wild_count=3)
    updated = retention.mark_used_in_wild(link, now=LATER)

    assert updated.wave == 1.0
    assert updated.emotional_resonance == 1.0
    assert updated.use_in_wild_count == 4


def test_mark_used_in_wild_builds_on_existing_resonance():
    updated = retention.mark_used_in_wild(make_link(emotional_resonance=0.2), now=LATER)
    assert updated.emotional_resonance == pytest.approx(0.3)


def test_context_tags_pass_through():
    link = make_link(context_tags=["cafe", "morning"])
    updated = retention.update_wave(link, "fail", now=LATER)
    updated = retention.mark_used_in_wild(updated, now=LATER)
    assert updated.context_tags == ["cafe", "morning"]


def test_initialize_new_link_defaults(monkeypatch):
    monkeypatch.delenv("RETENTION_DECAY_ALPHA", raising=False)
    link = retention.initialize_new_link("in an hour", "cafe_order", 2, now=T0)

    assert link.wave == retention.INITIAL_WAVE
    assert link.decay_alpha == retention.DEFAULT_DECAY_ALPHA
    assert link.last_seen == T0
    assert link.success_count == 0
    assert link.fail_count == 0
    assert link.use_in_wild_count == 0
    assert link.emotional_resonance is None
    assert link.link_id == "cafe_order:2:in an hour"


def test_initialize_new_link_uses_configured_alpha(monkeypatch):
    monkeypatch.setenv("RETENTION_DECAY_ALPHA", "0.75")
    link = retention.initialize_new_link("see you", "farewell", 0, now=T0)
    assert link.decay_alpha == 0.75


def test_configured_alpha_out_of_range(monkeypatch):
    monkeypatch.setenv("RETENTION_DECAY_ALPHA", "1.5")
    with pytest.raises(ValueError):
        retention.initialize_new_link("see you", "farewell", 0, now=T0)


@pytest.mark.parametrize("bad_now", [math.nan, math.inf])
def test_non_finite_now_rejected(bad_now):
    with pytest.raises(InvalidMemoryLinkError):
        retention.update_wave(make_link(), "success", now=bad_now)
    with pytest.raises(InvalidMemoryLinkError):
        retention.mark_used_in_wild(make_link(), now=bad_now)
    with pytest.raises(InvalidMemoryLinkError):
        retention.initialize_new_link("see you", "farewell", 0, decay_alpha=0.8, now=bad_now)


def test_out_of_range_resonance_rejected():
    with pytest.raises(InvalidMemoryLinkError):
        retention.mark_used_in_wild(make_link(emotional_resonance=-5.0), now=LATER)


def test_updated_link_does_not_share_tags():
    link = make_link(context_tags=["cafe"])

    updated = retention.update_wave(link, "success", now=LATER)
    updated.context_tags.append("work")
    wild = retention.mark_used_in_wild(link, now=LATER)
    wild.context_tags.append("home")

    assert link.context_tags == ["cafe"]
    assert updated.context_tags == ["cafe", "work"]
    assert wild.context_tags == ["cafe", "home"]


def test_mark_used_in_wild_keeps_explicit_zero_resonance():
    updated = retention.mark_used_in_wild(make_link(emotional_resonance=0.0), now=LATER)
    assert updated.emotional_resonance == pytest.approx(0.1)
