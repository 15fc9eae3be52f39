"""Bucket recent self-reported stress into high / moderate / low."""

from typing import Sequence

from rest_advisor.schemas import DailyLog, StressCategory

HIGH_STRESS_MIN = 7.0
MODERATE_STRESS_MIN = 4.0


def classify_stress(recent_logs: Sequence[DailyLog], window: int = 3) -> StressCategory:
    """
    Average the `window` most recent logged stress values and bucket them.

    Days without a stress entry are skipped rather than counted as calm.
    No stress data at all is treated as moderate.
    """
    values = [log.stress_level for log in recent_logs if log.stress_level is not None]
    values = values[:window]
    if not values:
        return StressCategory.MODERATE

    avg_stress = sum(values) / len(values)
    if avg_stress >= HIGH_STRESS_MIN:
        return StressCategory.HIGH
    if avg_stress >= MODERATE_STRESS_MIN:
        return StressCategory.MODERATE
    return StressCategory.LOW
