"""
Tests for the RestDayAdvisor end to end.

Test scenarios:
1. Empty history falls back to defaults and normal training
2. A poor night plus a stressful day forces active recovery
3. A doubled training week triggers a deload
4. A five-day streak always forces complete rest
5. Output is deterministic and independent of input order
"""

import json
from datetime import datetime, timezone

import pytest

from rest_advisor.config import RecoveryThresholds
from rest_advisor.engine import RestDayAdvisor, calculate_rest_day_recommendation
from rest_advisor.narrative import DEFAULT_TRAINING_PLAN, REST_PLANS, TRAINING_PLANS
from rest_advisor.schemas import (
    Confidence,
    RestType,
    RuleStatus,
    TrainingPhase,
    UserProfile,
)

from conftest import daily, exercise


# Fixtures

@pytest.fixture
def advisor():
    return RestDayAdvisor()


@pytest.fixture
def poor_recovery_logs():
    """Yesterday: 4h sleep, quality 3. Today: energy 3, stress 9. Trained both days."""
    return [
        daily(0, workout_completed=True, energy_level=3, stress_level=9),
        daily(1, workout_completed=True, sleep_hours=4, sleep_quality=3),
    ]


@pytest.fixture
def typical_week():
    return [
        daily(0, workout_completed=False, energy_level=8, stress_level=3),
        daily(1, workout_completed=True, energy_level=8, sleep_hours=8,
              sleep_quality=8, stress_level=3),
        daily(2, workout_completed=False, energy_level=7, sleep_hours=7.5,
              sleep_quality=8, stress_level=4),
        daily(3, workout_completed=True, energy_level=7, sleep_hours=7,
              sleep_quality=7, stress_level=4),
        daily(4, workout_completed=True, energy_level=8, sleep_hours=8,
              sleep_quality=8, stress_level=2),
    ]


# Scenarios

def test_empty_history(advisor, now):
    rec = advisor.recommend([], [], now=now)

    assert rec.should_rest is False
    assert rec.suggested_rest_type == RestType.NORMAL_TRAINING
    assert rec.confidence == Confidence.LOW
    assert rec.reasons == ()
    assert rec.alternative_activity is None
    assert rec.todays_plan == DEFAULT_TRAINING_PLAN
    assert rec.metrics.consecutive_workout_days == 0
    assert rec.metrics.recovery_score == 63
    assert rec.metrics.avg_energy_last_3_days is None
    assert rec.metrics.avg_sleep_quality_last_3_days is None
    assert rec.metrics.avg_stress_last_3_days is None
    assert rec.metrics.weekly_volume_vs_baseline is None


def test_poor_recovery_forces_active_recovery(advisor, now, poor_recovery_logs):
    rec = advisor.recommend(poor_recovery_logs, [], now=now)

    assert rec.metrics.consecutive_workout_days == 2
    assert rec.metrics.recovery_score == 24
    assert rec.should_rest is True
    assert rec.suggested_rest_type == RestType.ACTIVE_RECOVERY
    assert rec.confidence == Confidence.HIGH
    assert rec.reason_texts == ["Your recovery score is low (24/100)"]
    assert rec.alternative_activity == "Light stretching, yoga, or a 20-minute walk"
    assert rec.todays_plan == REST_PLANS[RestType.ACTIVE_RECOVERY]


def test_volume_spike_triggers_deload(advisor, now, spike_exercise_logs):
    rec = advisor.recommend([], spike_exercise_logs, now=now)

    assert rec.metrics.weekly_volume_vs_baseline == pytest.approx(2.0)
    assert rec.should_rest is True
    assert rec.suggested_rest_type == RestType.DELOAD
    assert rec.confidence == Confidence.MEDIUM
    assert rec.reason_texts == ["Training volume is 200% of your baseline - time to deload"]
    assert rec.alternative_activity == (
        "Reduce weights by 40-50% and focus on form and movement quality"
    )


def test_five_day_streak_forces_complete_rest(advisor, now, five_day_streak):
    rec = advisor.recommend(five_day_streak, [], now=now)

    assert rec.metrics.consecutive_workout_days == 5
    assert rec.should_rest is True
    assert rec.suggested_rest_type == RestType.COMPLETE
    assert rec.confidence == Confidence.HIGH
    assert rec.reason_texts[0] == (
        "You've worked out 5 consecutive days - your body needs full rest"
    )
    assert rec.alternative_activity == (
        "Complete rest - focus on sleep, hydration, and nutrition"
    )


def test_five_day_streak_outranks_other_signals(advisor, now, spike_exercise_logs):
    """Low recovery, declining trends, high stress and a volume spike don't matter."""
    logs = [
        daily(i, workout_completed=True, energy_level=e, sleep_hours=4,
              sleep_quality=q, stress_level=9)
        for i, (e, q) in enumerate([(2, 2), (2, 2), (8, 8), (8, 8), (8, 8)])
    ]
    rec = advisor.recommend(logs, spike_exercise_logs, now=now)

    assert rec.should_rest is True
    assert rec.suggested_rest_type == RestType.COMPLETE
    assert rec.confidence == Confidence.HIGH


def test_moderate_recovery_is_advisory_only(advisor, now):
    logs = [
        daily(0, energy_level=4, stress_level=6),
        daily(1, sleep_hours=6, sleep_quality=5),
    ]
    rec = advisor.recommend(logs, [], now=now)

    # 22.5 + 10 + 10 + 12.5
    assert rec.metrics.recovery_score == 55
    assert rec.should_rest is False
    assert rec.suggested_rest_type == RestType.NORMAL_TRAINING
    assert rec.confidence == Confidence.LOW
    assert rec.reason_texts == ["Recovery score is moderate (55/100) - listen to your body"]
    assert rec.alternative_activity is None


def test_supplementary_reasons_follow_primary(advisor, now):
    logs = [
        daily(i, workout_completed=True, energy_level=energy, sleep_hours=8,
              sleep_quality=7, stress_level=2)
        for i, energy in enumerate([3, 3, 8, 8])
    ]
    rec = advisor.recommend(logs, [], now=now)

    assert rec.suggested_rest_type == RestType.ACTIVE_RECOVERY
    assert rec.confidence == Confidence.LOW
    assert rec.reason_texts == [
        "You've worked out 4 days in a row - consider active recovery",
        "Recovery score is 44/100",
        "Energy levels have been declining",
    ]


# Narrative

@pytest.mark.parametrize(
    "phase,expected",
    [
        ("cutting", TRAINING_PLANS[TrainingPhase.CUTTING]),
        ("recomp", TRAINING_PLANS[TrainingPhase.RECOMP]),
        ("recovery", DEFAULT_TRAINING_PLAN),
        ("bulking", DEFAULT_TRAINING_PLAN),
    ],
)
def test_training_plan_depends_on_phase(advisor, now, phase, expected):
    rec = advisor.recommend([], [], UserProfile(current_phase=phase), now=now)
    assert rec.todays_plan == expected


def test_phase_does_not_change_rest_plan(advisor, now, five_day_streak):
    rec = advisor.recommend(five_day_streak, [], UserProfile(current_phase="cutting"), now=now)
    assert rec.todays_plan == REST_PLANS[RestType.COMPLETE]


# Metrics

def test_three_day_averages(advisor, now, typical_week):
    rec = advisor.recommend(typical_week, [], now=now)

    assert rec.metrics.avg_energy_last_3_days == 7.7
    assert rec.metrics.avg_sleep_quality_last_3_days == 8.0
    assert rec.metrics.avg_stress_last_3_days == 3.3
    assert rec.should_rest is False


def test_no_volume_ratio_without_history(advisor, now):
    rec = advisor.recommend([], [exercise(1) for _ in range(13)], now=now)
    assert rec.metrics.weekly_volume_vs_baseline is None


def test_stale_streak_reports_zero(advisor, now):
    logs = [daily(i, workout_completed=True) for i in range(2, 9)]
    rec = advisor.recommend(logs, [], now=now)
    assert rec.metrics.consecutive_workout_days == 0


# Determinism and input handling

def test_identical_inputs_give_identical_output(advisor, now, typical_week, spike_exercise_logs):
    first = advisor.recommend(typical_week, spike_exercise_logs, now=now)
    second = advisor.recommend(typical_week, spike_exercise_logs, now=now)

    assert json.dumps(first.to_json_dict()) == json.dumps(second.to_json_dict())


def test_input_order_does_not_matter(advisor, now, typical_week, spike_exercise_logs):
    ordered = advisor.recommend(typical_week, spike_exercise_logs, now=now)
    shuffled = advisor.recommend(
        list(reversed(typical_week)), list(reversed(spike_exercise_logs)), now=now
    )
    assert ordered == shuffled


def test_aware_reference_time_is_read_as_wall_clock(advisor, now, poor_recovery_logs):
    naive = advisor.recommend(poor_recovery_logs, [], now=now)
    aware = advisor.recommend(poor_recovery_logs, [], now=now.replace(tzinfo=timezone.utc))
    assert naive == aware


def test_reference_time_drives_windows(advisor, poor_recovery_logs):
    """The same logs a week later no longer describe a current streak."""
    later = datetime(2026, 3, 21, 9, 0)
    rec = advisor.recommend(poor_recovery_logs, [], now=later)
    assert rec.metrics.consecutive_workout_days == 0


# Trace

def test_trace_records_fired_rule(advisor, now, five_day_streak):
    rec, trace = advisor.recommend_with_trace(five_day_streak, [], now=now)

    assert trace.reference_time == now
    assert trace.fired_rule == "streak_full_rest"
    assert trace.evaluations[0].status == RuleStatus.FIRED
    assert trace.factors.consecutive_workout_days == 5
    assert trace.should_rest is True
    assert trace.suggested_rest_type == RestType.COMPLETE
    assert trace.supplementary_reasons == rec.reason_texts[1:]


def test_default_outcome_trace(advisor, now):
    _, trace = advisor.recommend_with_trace([], [], now=now)
    assert trace.fired_rule is None
    assert trace.confidence == Confidence.LOW


# Entry point

def test_entry_point_matches_advisor(now, poor_recovery_logs):
    rec = calculate_rest_day_recommendation(poor_recovery_logs, [], now=now)
    assert rec == RestDayAdvisor().recommend(poor_recovery_logs, [], now=now)


def test_entry_point_accepts_thresholds(now, poor_recovery_logs):
    lenient = RecoveryThresholds(low_recovery_score=20, moderate_recovery_score=30)
    rec = calculate_rest_day_recommendation(poor_recovery_logs, [], now=now, thresholds=lenient)
    # 24 is no longer low, and stress 9 is now the deciding signal
    assert rec.suggested_rest_type == RestType.ACTIVE_RECOVERY
    assert rec.confidence == Confidence.MEDIUM
    assert rec.reason_texts[0] == "Elevated stress levels detected over the past few days"
