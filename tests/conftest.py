"""Shared fixtures and log builders for the rest advisor tests."""

from datetime import datetime, timedelta
from pathlib import Path

import pytest

from rest_advisor.schemas import DailyLog, ExerciseLog

NOW = datetime(2026, 3, 14, 9, 0, 0)
FIXTURES_DIR = Path(__file__).parent / "fixtures"


def day(days_ago: int, now: datetime = NOW) -> datetime:
    """Midnight of the day `days_ago` days before `now`."""
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=days_ago)


def daily(days_ago: int, **fields) -> DailyLog:
    return DailyLog(log_date=day(days_ago), **fields)


def exercise(days_ago: float, sets=4, reps="10") -> ExerciseLog:
    return ExerciseLog(
        log_date=NOW - timedelta(days=days_ago),
        completed_sets=sets,
        prescribed_reps=reps,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def five_day_streak():
    """Five consecutive training days ending today, otherwise healthy."""
    return [
        daily(i, workout_completed=True, energy_level=8, sleep_hours=8,
              sleep_quality=8, stress_level=2)
        for i in range(5)
    ]


@pytest.fixture
def spike_exercise_logs():
    """
    Exactly 14 exercise logs: 7 this week and 7 in the 2-4 week baseline.

    Every entry is 4 sets x 10 reps, so this week holds 280 reps against a
    weekly baseline rate of 140 -> ratio 2.0.
    """
    this_week = [exercise(d + 0.5) for d in range(7)]
    baseline = [exercise(15 + d) for d in range(7)]
    return this_week + baseline
