"""
Training volume ratio module.

Compares this week's training volume (sets x reps) with a weekly baseline
rate taken from a two-week window 2-4 weeks back. A ratio well above 1.0
is a sign the load has been ramped too quickly.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Optional, Sequence

from rest_advisor.schemas import ExerciseLog

logger = logging.getLogger(__name__)

DEFAULT_REPS = 10
MIN_EXERCISE_LOGS = 14

THIS_WEEK_DAYS = 7
BASELINE_START_DAYS = 28
BASELINE_END_DAYS = 14
BASELINE_WEEKS = 2

_LEADING_INT = re.compile(r"^\s*(\d+)")


def parse_reps(prescribed_reps: Optional[str]) -> int:
    """
    Leading integer of a rep prescription.

    "8-12" -> 8, "10" -> 10, "12 reps" -> 12. Missing or unparsable
    prescriptions (e.g. "AMRAP") fall back to 10.
    """
    if not prescribed_reps:
        return DEFAULT_REPS
    match = _LEADING_INT.match(prescribed_reps)
    if match is None:
        return DEFAULT_REPS
    return int(match.group(1))


def log_volume(log: ExerciseLog) -> int:
    sets = log.completed_sets or 0
    return sets * parse_reps(log.prescribed_reps)


def calculate_volume_ratio(
    exercise_logs: Sequence[ExerciseLog],
    now: datetime,
    min_logs: int = MIN_EXERCISE_LOGS,
) -> Optional[float]:
    """
    Ratio of this week's volume to the weekly baseline rate.

    Windows relative to `now`:
    - this week: [now - 7d, now]
    - baseline:  [now - 28d, now - 14d), halved to a weekly rate

    Args:
        exercise_logs: Exercise entries in any order
        now: Reference instant
        min_logs: Entries required before comparing against a baseline

    Returns:
        The ratio, or None when there is too little history, the baseline
        window is empty, or the baseline volume is zero
    """
    if len(exercise_logs) < min_logs:
        logger.debug("Volume ratio skipped: %d exercise logs < %d", len(exercise_logs), min_logs)
        return None

    week_start = now - timedelta(days=THIS_WEEK_DAYS)
    baseline_start = now - timedelta(days=BASELINE_START_DAYS)
    baseline_end = now - timedelta(days=BASELINE_END_DAYS)

    this_week_logs = [log for log in exercise_logs if week_start <= log.log_date <= now]
    baseline_logs = [
        log for log in exercise_logs if baseline_start <= log.log_date < baseline_end
    ]

    if not baseline_logs:
        logger.debug("Volume ratio skipped: baseline window is empty")
        return None

    this_week_volume = sum(log_volume(log) for log in this_week_logs)
    baseline_volume = sum(log_volume(log) for log in baseline_logs) / BASELINE_WEEKS

    if baseline_volume == 0:
        return None

    return this_week_volume / baseline_volume
