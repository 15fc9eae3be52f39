"""
User-facing text for rest day recommendations.

Holds the alternative-activity table, the "today's plan" templates and the
display labels the dashboard card shows for each rest type and confidence.
"""

from typing import Dict, Optional

from rest_advisor.schemas import Confidence, RestType, TrainingPhase, UserProfile

ALTERNATIVE_ACTIVITIES: Dict[RestType, Optional[str]] = {
    RestType.COMPLETE: "Complete rest - focus on sleep, hydration, and nutrition",
    RestType.ACTIVE_RECOVERY: "Light stretching, yoga, or a 20-minute walk",
    RestType.DELOAD: "Reduce weights by 40-50% and focus on form and movement quality",
    RestType.NORMAL_TRAINING: None,
}

TRAINING_PLANS: Dict[TrainingPhase, str] = {
    TrainingPhase.CUTTING: (
        "You're recovered and ready for training. "
        "Focus on maintaining strength during your cut."
    ),
    TrainingPhase.RECOMP: (
        "Good recovery status! Push your workout today to build muscle and burn fat."
    ),
}

DEFAULT_TRAINING_PLAN = (
    "You're ready for a productive workout today. "
    "Focus on progressive overload within your capacity."
)

REST_PLANS: Dict[RestType, str] = {
    RestType.COMPLETE: (
        "Your body needs complete rest today. Muscles grow during recovery, "
        "not during training. Take the day off!"
    ),
    RestType.ACTIVE_RECOVERY: (
        "Light movement will help you recover faster. "
        "Skip the weights and focus on mobility work."
    ),
    RestType.DELOAD: (
        "Time for a deload session. Reduce intensity to let your nervous system "
        "recover while maintaining movement patterns."
    ),
}

DEFAULT_REST_PLAN = "Consider taking it easy today based on your recovery metrics."

REST_TYPE_LABELS: Dict[RestType, str] = {
    RestType.COMPLETE: "Complete Rest",
    RestType.ACTIVE_RECOVERY: "Active Recovery",
    RestType.DELOAD: "Deload Day",
    RestType.NORMAL_TRAINING: "Ready to Train",
}

CONFIDENCE_LABELS: Dict[Confidence, str] = {
    Confidence.HIGH: "High Confidence",
    Confidence.MEDIUM: "Moderate",
    Confidence.LOW: "Suggestion",
}


def alternative_activity(should_rest: bool, rest_type: RestType) -> Optional[str]:
    if not should_rest:
        return None
    return ALTERNATIVE_ACTIVITIES.get(rest_type)


def generate_todays_plan(
    should_rest: bool,
    rest_type: RestType,
    profile: Optional[UserProfile] = None,
) -> str:
    """
    Pick the narrative for today.

    Training days are worded by the user's phase; rest days by rest type.
    A missing profile gets the default wording.
    """
    if not should_rest:
        phase = profile.current_phase if profile is not None else None
        return TRAINING_PLANS.get(phase, DEFAULT_TRAINING_PLAN)
    return REST_PLANS.get(rest_type, DEFAULT_REST_PLAN)
