"""Render a rest day recommendation as context for a coaching prompt."""

from typing import List

from rest_advisor.narrative import CONFIDENCE_LABELS, REST_TYPE_LABELS
from rest_advisor.schemas import RestDayRecommendation


def _fmt(value, suffix: str = "") -> str:
    if value is None:
        return "not logged"
    return f"{value}{suffix}"


def build_coaching_context(recommendation: RestDayRecommendation) -> str:
    """
    Build a plain-text block describing today's recovery status.

    The coaching assistant gets this folded into its context so its advice
    agrees with the dashboard card.

    Args:
        recommendation: Output of the rest day advisor

    Returns:
        Formatted context string
    """
    metrics = recommendation.metrics
    parts: List[str] = []

    parts.append("RECOVERY STATUS:")
    headline = "Rest recommended" if recommendation.should_rest else "Ready to train"
    parts.append(
        f"  Today: {headline} - {REST_TYPE_LABELS[recommendation.suggested_rest_type]} "
        f"({CONFIDENCE_LABELS[recommendation.confidence]})"
    )
    parts.append(f"  Plan: {recommendation.todays_plan}")
    if recommendation.alternative_activity:
        parts.append(f"  Instead: {recommendation.alternative_activity}")
    parts.append("")

    if recommendation.reasons:
        parts.append("WHY:")
        for reason in recommendation.reasons:
            parts.append(f"  - {reason.text}")
        parts.append("")

    volume = metrics.weekly_volume_vs_baseline
    parts.append("RECOVERY METRICS:")
    parts.append(f"  Consecutive workout days: {metrics.consecutive_workout_days}")
    parts.append(f"  Recovery score: {metrics.recovery_score}/100")
    parts.append(f"  Avg energy (3 days): {_fmt(metrics.avg_energy_last_3_days, '/10')}")
    parts.append(
        f"  Avg sleep quality (3 days): {_fmt(metrics.avg_sleep_quality_last_3_days, '/10')}"
    )
    parts.append(f"  Avg stress (3 days): {_fmt(metrics.avg_stress_last_3_days, '/10')}")
    parts.append(
        "  Weekly volume vs baseline: "
        + (f"{volume:.0%}" if volume is not None else "not enough history")
    )

    return "\n".join(parts)
