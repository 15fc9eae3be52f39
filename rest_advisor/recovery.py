"""
Recovery score calculation module.

Combines last night's sleep with today's subjective energy and stress into
a 0-100 composite, penalized by how many days in a row the user has trained.
"""

from typing import Optional, Sequence

from rest_advisor.schemas import DailyLog
from rest_advisor.stats import clamp, round_half_up

# Component weights; they sum to 1.0
SLEEP_HOURS_WEIGHT = 0.3
SLEEP_QUALITY_WEIGHT = 0.2
ENERGY_WEIGHT = 0.25
STRESS_WEIGHT = 0.25

# Component scores used when the underlying value was not logged
DEFAULT_SLEEP_HOURS_SCORE = 70.0
DEFAULT_SLEEP_QUALITY_SCORE = 60.0
DEFAULT_ENERGY_SCORE = 60.0
DEFAULT_STRESS_SCORE = 60.0

TARGET_SLEEP_HOURS = 8.0
FATIGUE_PENALTY_PER_DAY = 10.0


def _sleep_hours_score(log: Optional[DailyLog]) -> float:
    if log is None or log.sleep_hours is None:
        return DEFAULT_SLEEP_HOURS_SCORE
    return min(100.0, log.sleep_hours / TARGET_SLEEP_HOURS * 100)


def _sleep_quality_score(log: Optional[DailyLog]) -> float:
    if log is None or log.sleep_quality is None:
        return DEFAULT_SLEEP_QUALITY_SCORE
    return log.sleep_quality * 10.0


def _energy_score(log: Optional[DailyLog]) -> float:
    if log is None or log.energy_level is None:
        return DEFAULT_ENERGY_SCORE
    return log.energy_level * 10.0


def _stress_score(log: Optional[DailyLog]) -> float:
    # stress inverted
    if log is None or log.stress_level is None:
        return DEFAULT_STRESS_SCORE
    return (11 - log.stress_level) * 10.0


def fatigue_penalty(consecutive_workout_days: int) -> float:
    """Ten points per training day beyond the first in the current streak."""
    return max(0.0, (consecutive_workout_days - 1) * FATIGUE_PENALTY_PER_DAY)


def calculate_recovery_score(
    recent_logs: Sequence[DailyLog],
    consecutive_workout_days: int,
) -> int:
    """
    Calculate today's recovery score.

    Sleep is read from yesterday's log (the night leading into today);
    energy and stress from today's log. Missing logs or missing values
    fall back to neutral component scores.

    Args:
        recent_logs: Daily logs ordered most recent first (index 0 is today)
        consecutive_workout_days: Current training streak length

    Returns:
        Integer score in [0, 100]
    """
    today = recent_logs[0] if len(recent_logs) > 0 else None
    yesterday = recent_logs[1] if len(recent_logs) > 1 else None

    raw_score = (
        _sleep_hours_score(yesterday) * SLEEP_HOURS_WEIGHT
        + _sleep_quality_score(yesterday) * SLEEP_QUALITY_WEIGHT
        + _energy_score(today) * ENERGY_WEIGHT
        + _stress_score(today) * STRESS_WEIGHT
    ) - fatigue_penalty(consecutive_workout_days)

    return int(round_half_up(clamp(raw_score, 0.0, 100.0)))
