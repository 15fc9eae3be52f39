"""
Rest day recommendation engine.

This module ties the analytical components together. For one invocation it
computes the training streak, recovery score, energy/sleep trends, stress
category and volume ratio, runs the rule cascade, and assembles the
recommendation with its reasons, narrative and metrics snapshot.

The engine is a pure function of its inputs: the reference instant is
always passed in and nothing is read from the clock or the environment.
"""

import logging
from datetime import datetime
from typing import Optional, Sequence, Tuple

from rest_advisor.config import DEFAULT_THRESHOLDS, RecoveryThresholds
from rest_advisor.narrative import alternative_activity, generate_todays_plan
from rest_advisor.recovery import calculate_recovery_score
from rest_advisor.rules import RULES, RestRule, evaluate_rules, supplementary_reasons
from rest_advisor.schemas import (
    DailyLog,
    DecisionTrace,
    ExerciseLog,
    RecommendationMetrics,
    RecoveryFactors,
    RestDayRecommendation,
    UserProfile,
)
from rest_advisor.stats import mean_or_none, round_half_up
from rest_advisor.streak import get_consecutive_workout_days
from rest_advisor.stress import classify_stress
from rest_advisor.trace import DecisionTraceBuilder
from rest_advisor.trend import calculate_trend
from rest_advisor.volume import calculate_volume_ratio

logger = logging.getLogger(__name__)


def _rounded(value: Optional[float], digits: int) -> Optional[float]:
    if value is None:
        return None
    return round_half_up(value, digits)


class RestDayAdvisor:
    """
    Advises whether to rest, deload or train today.

    Holds only immutable configuration, so one advisor can serve any number
    of concurrent requests.
    """

    def __init__(
        self,
        thresholds: RecoveryThresholds = DEFAULT_THRESHOLDS,
        rules: Sequence[RestRule] = RULES,
    ):
        """
        Initialize advisor.

        Args:
            thresholds: Boundary values for the components and the cascade
            rules: Rule cascade in priority order
        """
        self.thresholds = thresholds
        self.rules = tuple(rules)

    def compute_factors(
        self,
        recent_logs: Sequence[DailyLog],
        exercise_logs: Sequence[ExerciseLog],
        now: datetime,
    ) -> RecoveryFactors:
        """
        Run each analytical component once.

        Args:
            recent_logs: Daily logs sorted most recent first
            exercise_logs: Exercise logs in any order
            now: Naive reference instant

        Returns:
            RecoveryFactors for the rule cascade
        """
        window = self.thresholds.trend_window_days
        consecutive = get_consecutive_workout_days(recent_logs, now)

        return RecoveryFactors(
            consecutive_workout_days=consecutive,
            recovery_score=calculate_recovery_score(recent_logs, consecutive),
            energy_trend=calculate_trend([log.energy_level for log in recent_logs[:window]]),
            sleep_trend=calculate_trend([log.sleep_quality for log in recent_logs[:window]]),
            stress_level=classify_stress(recent_logs, self.thresholds.averages_window_days),
            volume_ratio=calculate_volume_ratio(
                exercise_logs, now, self.thresholds.min_exercise_logs
            ),
        )

    def recommend_with_trace(
        self,
        daily_logs: Sequence[DailyLog],
        exercise_logs: Sequence[ExerciseLog],
        profile: Optional[UserProfile] = None,
        *,
        now: datetime,
    ) -> Tuple[RestDayRecommendation, DecisionTrace]:
        """
        Compute today's recommendation and the trace explaining it.

        Args:
            daily_logs: Daily logs covering roughly the last 5-30 days, any order
            exercise_logs: Exercise logs covering at least the last 28 days
            profile: Optional user profile, used only for narrative wording
            now: Reference instant; aware values are read as wall-clock time

        Returns:
            Tuple of (recommendation, decision trace)
        """
        now = now.replace(tzinfo=None)
        builder = DecisionTraceBuilder(reference_time=now)

        recent_logs = sorted(daily_logs, key=lambda log: log.log_date, reverse=True)
        factors = self.compute_factors(recent_logs, exercise_logs, now)
        builder.set_factors(factors)
        logger.debug("Recovery factors: %s", factors.model_dump(mode="json"))

        fired, outcome, evaluations = evaluate_rules(factors, self.thresholds, self.rules)
        builder.add_evaluations(evaluations)
        logger.debug("Rule fired: %s", fired.rule_id if fired else "default")

        reasons = [outcome.reason] if outcome.reason is not None else []
        if outcome.should_rest:
            extra = supplementary_reasons(factors, self.thresholds, reasons)
            builder.add_supplementary_reasons(extra)
            reasons.extend(extra)

        averages_window = recent_logs[: self.thresholds.averages_window_days]
        metrics = RecommendationMetrics(
            consecutive_workout_days=factors.consecutive_workout_days,
            recovery_score=factors.recovery_score,
            avg_energy_last_3_days=_rounded(
                mean_or_none([log.energy_level for log in averages_window]), 1
            ),
            avg_sleep_quality_last_3_days=_rounded(
                mean_or_none([log.sleep_quality for log in averages_window]), 1
            ),
            avg_stress_last_3_days=_rounded(
                mean_or_none([log.stress_level for log in averages_window]), 1
            ),
            weekly_volume_vs_baseline=_rounded(factors.volume_ratio, 2),
        )

        recommendation = RestDayRecommendation(
            should_rest=outcome.should_rest,
            confidence=outcome.confidence,
            reasons=tuple(reasons),
            suggested_rest_type=outcome.rest_type,
            alternative_activity=alternative_activity(outcome.should_rest, outcome.rest_type),
            todays_plan=generate_todays_plan(outcome.should_rest, outcome.rest_type, profile),
            metrics=metrics,
        )
        builder.set_result(recommendation)

        return recommendation, builder.trace

    def recommend(
        self,
        daily_logs: Sequence[DailyLog],
        exercise_logs: Sequence[ExerciseLog],
        profile: Optional[UserProfile] = None,
        *,
        now: datetime,
    ) -> RestDayRecommendation:
        recommendation, _ = self.recommend_with_trace(
            daily_logs, exercise_logs, profile, now=now
        )
        return recommendation


def calculate_rest_day_recommendation(
    daily_logs: Sequence[DailyLog],
    exercise_logs: Sequence[ExerciseLog],
    profile: Optional[UserProfile] = None,
    *,
    now: datetime,
    thresholds: Optional[RecoveryThresholds] = None,
) -> RestDayRecommendation:
    """
    Recommend whether to rest, deload or train today.

    Convenience wrapper around RestDayAdvisor for one-off calls.

    Args:
        daily_logs: Daily wellness logs, any order
        exercise_logs: Exercise logs, any order
        profile: Optional user profile
        now: Reference instant
        thresholds: Alternative thresholds, defaults when omitted

    Returns:
        RestDayRecommendation
    """
    advisor = RestDayAdvisor(thresholds or DEFAULT_THRESHOLDS)
    return advisor.recommend(daily_logs, exercise_logs, profile, now=now)
