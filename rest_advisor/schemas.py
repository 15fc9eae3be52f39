"""
Pydantic models for the rest day advisor.

This module defines the core data structures for:
- Input Logs: Daily wellness self-reports and completed exercise entries
- User Profile: Training phase used to flavor narrative text
- Recommendations: The structured rest/train advice and its metrics snapshot
- Decision Traces: Rule-by-rule record of how a recommendation was reached
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, FrozenSet, List, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel


# ============================================================================
# Enumerations
# ============================================================================

class Trend(str, Enum):
    """Direction of a recent metric series."""
    DECLINING = "declining"
    STABLE = "stable"
    IMPROVING = "improving"


class StressCategory(str, Enum):
    """Bucketed recent average stress."""
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


class RestType(str, Enum):
    """Kind of rest (or training) suggested for today."""
    COMPLETE = "complete"
    ACTIVE_RECOVERY = "active_recovery"
    DELOAD = "deload"
    NORMAL_TRAINING = "normal_training"


class Confidence(str, Enum):
    """How strongly the matched rule supports the recommendation."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TrainingPhase(str, Enum):
    """Nutrition/training phase the user is currently in."""
    ASSESSMENT = "assessment"
    RECOVERY = "recovery"
    RECOMP = "recomp"
    CUTTING = "cutting"
    OTHER = "other"


class ReasonKind(str, Enum):
    """Topic a reason talks about. Supplementary reasons are de-duplicated by kind."""
    RECOVERY_SCORE = "recovery_score"
    ENERGY = "energy"
    SLEEP = "sleep"
    STREAK = "streak"
    VOLUME = "volume"
    STRESS = "stress"


class RuleStatus(str, Enum):
    """Outcome of a single rule during cascade evaluation."""
    FIRED = "fired"
    NOT_MATCHED = "not_matched"
    NOT_EVALUATED = "not_evaluated"


# ============================================================================
# Shared helpers
# ============================================================================

def coerce_log_date(value: Any) -> Any:
    """
    Normalize a log date to a naive datetime.

    Plain dates and date-only ISO strings ("2026-03-14") become midnight
    of that day.
    Aware datetimes keep their wall-clock time and lose their tzinfo so
    they compare cleanly with naive reference instants.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            # Left for pydantic to report
            return value
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return value


class _LogModel(BaseModel):
    """Base for store rows: immutable, accepts snake_case or camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# Input Logs
# ============================================================================

class DailyLog(_LogModel):
    """One calendar day's wellness self-report."""

    log_date: datetime = Field(
        ...,
        description="Day this log describes"
    )

    workout_completed: bool = Field(
        default=False,
        description="Whether a workout was completed on this day"
    )

    energy_level: Optional[int] = Field(
        default=None,
        ge=1,
        le=10,
        description="Subjective energy, 1 (exhausted) to 10 (excellent)"
    )

    sleep_hours: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=24.0,
        description="Hours slept the night before"
    )

    sleep_quality: Optional[int] = Field(
        default=None,
        ge=1,
        le=10,
        description="Subjective sleep quality, 1-10"
    )

    stress_level: Optional[int] = Field(
        default=None,
        ge=1,
        le=10,
        description="Subjective stress, 1 (calm) to 10 (very stressed)"
    )

    @field_validator("log_date", mode="before")
    @classmethod
    def normalize_log_date(cls, v):
        return coerce_log_date(v)


class ExerciseLog(_LogModel):
    """One completed exercise entry."""

    log_date: datetime = Field(
        ...,
        description="When the exercise was performed"
    )

    completed_sets: Optional[int] = Field(
        default=None,
        ge=0,
        description="Number of sets actually completed"
    )

    prescribed_reps: Optional[str] = Field(
        default=None,
        description="Prescribed repetitions, e.g. '8-12' or '10'"
    )

    @field_validator("log_date", mode="before")
    @classmethod
    def normalize_log_date(cls, v):
        return coerce_log_date(v)

    @field_validator("prescribed_reps", mode="before")
    @classmethod
    def stringify_reps(cls, v):
        """Stores sometimes hand back a bare integer for fixed rep counts."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class UserProfile(_LogModel):
    """The slice of the user's profile the advisor reads."""

    current_phase: TrainingPhase = Field(
        default=TrainingPhase.ASSESSMENT,
        description="Current training phase; only affects narrative wording"
    )

    @field_validator("current_phase", mode="before")
    @classmethod
    def unknown_phase_is_other(cls, v):
        if v is None:
            return TrainingPhase.ASSESSMENT
        if isinstance(v, str) and v not in {p.value for p in TrainingPhase}:
            return TrainingPhase.OTHER
        return v


# ============================================================================
# Recommendation
# ============================================================================

class Reason(BaseModel):
    """A human-readable reason, tagged with the topics it covers."""

    model_config = ConfigDict(frozen=True)

    kinds: FrozenSet[ReasonKind] = Field(
        ...,
        description="Topics this reason mentions"
    )

    text: str = Field(
        ...,
        description="Rendered reason shown to the user"
    )


class RecommendationMetrics(_LogModel):
    """Snapshot of the numbers behind a recommendation."""

    consecutive_workout_days: int = Field(..., ge=0)
    recovery_score: int = Field(..., ge=0, le=100)
    avg_energy_last_3_days: Optional[float] = Field(
        default=None,
        alias="avgEnergyLast3Days",
    )
    avg_sleep_quality_last_3_days: Optional[float] = Field(
        default=None,
        alias="avgSleepQualityLast3Days",
    )
    avg_stress_last_3_days: Optional[float] = Field(
        default=None,
        alias="avgStressLast3Days",
    )
    weekly_volume_vs_baseline: Optional[float] = Field(
        default=None,
        description="This week's volume over the weekly baseline rate, 2 decimals"
    )


class RestDayRecommendation(_LogModel):
    """
    Complete advice for today.

    Returned by the RestDayAdvisor. `to_json_dict()` gives the camelCase
    shape consumed by the dashboard and the coaching prompt assembler.
    """

    should_rest: bool = Field(
        ...,
        description="Whether the user should rest or reduce load today"
    )

    confidence: Confidence = Field(
        ...,
        description="Strength of the recommendation"
    )

    reasons: Tuple[Reason, ...] = Field(
        default_factory=tuple,
        description="Primary reason first, then supplementary reasons"
    )

    suggested_rest_type: RestType = Field(
        ...,
        description="Kind of rest suggested"
    )

    alternative_activity: Optional[str] = Field(
        default=None,
        description="What to do instead of a normal session, when resting"
    )

    todays_plan: str = Field(
        ...,
        description="Narrative plan for today"
    )

    metrics: RecommendationMetrics = Field(
        ...,
        description="Numbers behind the decision"
    )

    @field_serializer("reasons")
    def serialize_reasons(self, reasons: Tuple[Reason, ...]) -> List[str]:
        return [reason.text for reason in reasons]

    @property
    def reason_texts(self) -> List[str]:
        return [reason.text for reason in self.reasons]

    def to_json_dict(self) -> dict:
        """Export to a JSON-serializable dictionary with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


# ============================================================================
# Decision Trace
# ============================================================================

class RecoveryFactors(BaseModel):
    """Every derived input the rule cascade looks at."""

    model_config = ConfigDict(frozen=True)

    consecutive_workout_days: int = Field(..., ge=0)
    recovery_score: int = Field(..., ge=0, le=100)
    energy_trend: Trend
    sleep_trend: Trend
    stress_level: StressCategory
    volume_ratio: Optional[float] = Field(
        default=None,
        description="Unrounded volume ratio, None when history is insufficient"
    )


class RuleEvaluation(BaseModel):
    """Record of one rule during a cascade evaluation."""

    rule_id: str = Field(..., description="Stable identifier of the rule")
    description: str = Field(..., description="Condition the rule tests")
    status: RuleStatus


class DecisionTrace(BaseModel):
    """
    Complete decision trace from input logs to recommendation.

    Documents the computed factors, every rule in priority order with its
    outcome, and any supplementary reasons that were appended.
    """

    reference_time: datetime = Field(
        ...,
        description="The 'now' the recommendation was computed for"
    )

    factors: Optional[RecoveryFactors] = Field(
        default=None,
        description="Derived inputs to the rule cascade"
    )

    evaluations: List[RuleEvaluation] = Field(
        default_factory=list,
        description="All rules in priority order"
    )

    fired_rule: Optional[str] = Field(
        default=None,
        description="Rule that decided the outcome, None for the default"
    )

    supplementary_reasons: List[str] = Field(
        default_factory=list,
        description="Supporting reasons added after the primary match"
    )

    should_rest: Optional[bool] = None
    suggested_rest_type: Optional[RestType] = None
    confidence: Optional[Confidence] = None


# ============================================================================
# Snapshot
# ============================================================================

class RecoverySnapshot(_LogModel):
    """
    Everything one recommendation needs, as exported by the log store.

    Used by the command line tool to replay a user's day from a JSON file.
    """

    now: datetime = Field(
        ...,
        description="Reference instant for the recommendation"
    )

    daily_logs: List[DailyLog] = Field(
        default_factory=list,
        description="Recent daily wellness logs"
    )

    exercise_logs: List[ExerciseLog] = Field(
        default_factory=list,
        description="Exercise logs covering the last four weeks"
    )

    profile: Optional[UserProfile] = Field(
        default=None,
        description="User profile, if one exists"
    )

    @field_validator("now", mode="before")
    @classmethod
    def normalize_now(cls, v):
        return coerce_log_date(v)
