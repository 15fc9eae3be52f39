"""Rest day advisor: rest, deload or train today, from recent wellness and volume logs."""

from rest_advisor.config import RecoveryThresholds
from rest_advisor.engine import RestDayAdvisor, calculate_rest_day_recommendation
from rest_advisor.schemas import (
    DailyLog,
    ExerciseLog,
    RestDayRecommendation,
    UserProfile,
)

__all__ = [
    "DailyLog",
    "ExerciseLog",
    "RecoveryThresholds",
    "RestDayAdvisor",
    "RestDayRecommendation",
    "UserProfile",
    "calculate_rest_day_recommendation",
]
