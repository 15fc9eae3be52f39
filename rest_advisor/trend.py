"""Direction of a short, most-recent-first metric series."""

from typing import Optional, Sequence

from rest_advisor.schemas import Trend
from rest_advisor.stats import present

# Average difference (in 1-10 scale points) that counts as a real change
TREND_DEADBAND = 1.0


def calculate_trend(values: Sequence[Optional[float]]) -> Trend:
    """
    Classify a metric series as declining, stable or improving.

    The valid samples are split in half; the first (more recent) half is
    compared with the older half. Fewer than two valid samples is stable.

    Args:
        values: Samples ordered most recent first; None marks a missing day

    Returns:
        Trend of the series
    """
    valid = present(values)
    if len(valid) < 2:
        return Trend.STABLE

    midpoint = len(valid) // 2
    recent = valid[:midpoint]
    older = valid[midpoint:]
    diff = sum(recent) / len(recent) - sum(older) / len(older)

    if diff < -TREND_DEADBAND:
        return Trend.DECLINING
    if diff > TREND_DEADBAND:
        return Trend.IMPROVING
    return Trend.STABLE
