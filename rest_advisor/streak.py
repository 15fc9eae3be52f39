"""
Training streak calculation module.

Counts consecutive calendar days with a completed workout. A streak is
only "current" if its most recent workout was today or yesterday relative
to the reference instant; an older streak has already been broken by rest.
"""

from datetime import date, datetime
from typing import Optional, Sequence

from rest_advisor.schemas import DailyLog

# Most recent workout may be at most this many days before today
MAX_DAYS_SINCE_LAST_WORKOUT = 1


def get_consecutive_workout_days(daily_logs: Sequence[DailyLog], now: datetime) -> int:
    """
    Count the current run of consecutive workout days.

    Logs are sorted most recent first and reduced to calendar days. Walking
    back from the latest completed workout, each further completed workout
    must fall exactly one day before the previously counted one. The walk
    stops at the first larger gap, which includes a day logged without a
    workout. Several completed logs on the same day count once.

    Args:
        daily_logs: Daily logs in any order
        now: Reference instant defining "today"

    Returns:
        Length of the current streak, 0 when the last workout is stale
    """
    today = now.date()
    completed_days = [
        log.log_date.date()
        for log in sorted(daily_logs, key=lambda log: log.log_date, reverse=True)
        if log.workout_completed
    ]

    consecutive = 0
    last_day: Optional[date] = None

    for day in completed_days:
        if last_day is None:
            if (today - day).days > MAX_DAYS_SINCE_LAST_WORKOUT:
                break
            consecutive = 1
            last_day = day
            continue

        gap = (last_day - day).days
        if gap == 0:
            continue
        if gap != 1:
            break
        consecutive += 1
        last_day = day

    return consecutive
