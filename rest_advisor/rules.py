"""
Rest day rule cascade.

Rules are listed in priority order and evaluated top to bottom; the first
rule whose predicate holds decides the outcome. Each rule pairs a predicate
over the computed RecoveryFactors with a builder for its outcome, so every
rule can be tested on its own and priority lives in the RULES tuple.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from rest_advisor.config import RecoveryThresholds
from rest_advisor.schemas import (
    Confidence,
    Reason,
    ReasonKind,
    RecoveryFactors,
    RestType,
    RuleEvaluation,
    RuleStatus,
    StressCategory,
    Trend,
)


@dataclass(frozen=True)
class RuleOutcome:
    """Decision produced by a rule (or the default when none fires)."""

    should_rest: bool
    rest_type: RestType
    confidence: Confidence
    reason: Optional[Reason] = None


@dataclass(frozen=True)
class RestRule:
    """A single entry of the cascade."""

    rule_id: str
    description: str
    predicate: Callable[[RecoveryFactors, RecoveryThresholds], bool]
    build: Callable[[RecoveryFactors, RecoveryThresholds], RuleOutcome]

    def matches(self, factors: RecoveryFactors, thresholds: RecoveryThresholds) -> bool:
        return self.predicate(factors, thresholds)


def _reason(text: str, *kinds: ReasonKind) -> Reason:
    return Reason(kinds=frozenset(kinds), text=text)


# ============================================================================
# Rules
# ============================================================================

STREAK_FULL_REST = RestRule(
    rule_id="streak_full_rest",
    description="consecutive workout days >= full rest streak",
    predicate=lambda f, t: f.consecutive_workout_days >= t.full_rest_streak_days,
    build=lambda f, t: RuleOutcome(
        should_rest=True,
        rest_type=RestType.COMPLETE,
        confidence=Confidence.HIGH,
        reason=_reason(
            f"You've worked out {f.consecutive_workout_days} consecutive days "
            "- your body needs full rest",
            ReasonKind.STREAK,
        ),
    ),
)

LOW_RECOVERY = RestRule(
    rule_id="low_recovery",
    description="recovery score < low recovery score",
    predicate=lambda f, t: f.recovery_score < t.low_recovery_score,
    build=lambda f, t: RuleOutcome(
        should_rest=True,
        rest_type=RestType.ACTIVE_RECOVERY,
        confidence=Confidence.HIGH,
        reason=_reason(
            f"Your recovery score is low ({f.recovery_score}/100)",
            ReasonKind.RECOVERY_SCORE,
        ),
    ),
)

DECLINING_ENERGY_AND_SLEEP = RestRule(
    rule_id="declining_energy_and_sleep",
    description="energy trend and sleep trend both declining",
    predicate=lambda f, t: (
        f.energy_trend == Trend.DECLINING and f.sleep_trend == Trend.DECLINING
    ),
    build=lambda f, t: RuleOutcome(
        should_rest=True,
        rest_type=RestType.ACTIVE_RECOVERY,
        confidence=Confidence.MEDIUM,
        reason=_reason(
            "Both energy and sleep quality have been declining",
            ReasonKind.ENERGY,
            ReasonKind.SLEEP,
        ),
    ),
)

VOLUME_SPIKE = RestRule(
    rule_id="volume_spike",
    description="weekly volume ratio > deload volume ratio",
    predicate=lambda f, t: (
        f.volume_ratio is not None and f.volume_ratio > t.deload_volume_ratio
    ),
    build=lambda f, t: RuleOutcome(
        should_rest=True,
        rest_type=RestType.DELOAD,
        confidence=Confidence.MEDIUM,
        reason=_reason(
            f"Training volume is {_percent(f.volume_ratio)}% of your baseline "
            "- time to deload",
            ReasonKind.VOLUME,
        ),
    ),
)

HIGH_STRESS = RestRule(
    rule_id="high_stress",
    description="recent stress classified high",
    predicate=lambda f, t: f.stress_level == StressCategory.HIGH,
    build=lambda f, t: RuleOutcome(
        should_rest=True,
        rest_type=RestType.ACTIVE_RECOVERY,
        confidence=Confidence.MEDIUM,
        reason=_reason(
            "Elevated stress levels detected over the past few days",
            ReasonKind.STRESS,
        ),
    ),
)

STREAK_ACTIVE_RECOVERY = RestRule(
    rule_id="streak_active_recovery",
    description="consecutive workout days >= active recovery streak",
    predicate=lambda f, t: f.consecutive_workout_days >= t.active_recovery_streak_days,
    build=lambda f, t: RuleOutcome(
        should_rest=True,
        rest_type=RestType.ACTIVE_RECOVERY,
        confidence=Confidence.LOW,
        reason=_reason(
            f"You've worked out {f.consecutive_workout_days} days in a row "
            "- consider active recovery",
            ReasonKind.STREAK,
        ),
    ),
)

# Advisory only: training goes ahead, but with a cautionary reason
MODERATE_RECOVERY = RestRule(
    rule_id="moderate_recovery",
    description="recovery score < moderate recovery score",
    predicate=lambda f, t: f.recovery_score < t.moderate_recovery_score,
    build=lambda f, t: RuleOutcome(
        should_rest=False,
        rest_type=RestType.NORMAL_TRAINING,
        confidence=Confidence.LOW,
        reason=_reason(
            f"Recovery score is moderate ({f.recovery_score}/100) - listen to your body",
            ReasonKind.RECOVERY_SCORE,
        ),
    ),
)

RULES: Tuple[RestRule, ...] = (
    STREAK_FULL_REST,
    LOW_RECOVERY,
    DECLINING_ENERGY_AND_SLEEP,
    VOLUME_SPIKE,
    HIGH_STRESS,
    STREAK_ACTIVE_RECOVERY,
    MODERATE_RECOVERY,
)

DEFAULT_OUTCOME = RuleOutcome(
    should_rest=False,
    rest_type=RestType.NORMAL_TRAINING,
    confidence=Confidence.LOW,
)


def _percent(ratio: float) -> int:
    # int(x + 0.5) rounds half up for the positive ratios seen here
    return int(ratio * 100 + 0.5)


# ============================================================================
# Evaluation
# ============================================================================

def evaluate_rules(
    factors: RecoveryFactors,
    thresholds: RecoveryThresholds,
    rules: Sequence[RestRule] = RULES,
) -> Tuple[Optional[RestRule], RuleOutcome, List[RuleEvaluation]]:
    """
    Run the cascade with first-match-wins semantics.

    Args:
        factors: Computed recovery factors
        thresholds: Boundary values for the predicates
        rules: Rules in priority order

    Returns:
        Tuple of (fired rule or None, outcome, one evaluation per rule).
        Rules after the fired one are reported as not evaluated.
    """
    evaluations: List[RuleEvaluation] = []
    fired: Optional[RestRule] = None
    outcome = DEFAULT_OUTCOME

    for rule in rules:
        if fired is not None:
            status = RuleStatus.NOT_EVALUATED
        elif rule.matches(factors, thresholds):
            fired = rule
            outcome = rule.build(factors, thresholds)
            status = RuleStatus.FIRED
        else:
            status = RuleStatus.NOT_MATCHED
        evaluations.append(
            RuleEvaluation(rule_id=rule.rule_id, description=rule.description, status=status)
        )

    return fired, outcome, evaluations


def supplementary_reasons(
    factors: RecoveryFactors,
    thresholds: RecoveryThresholds,
    existing: Sequence[Reason],
) -> List[Reason]:
    """
    Supporting reasons appended after the primary match.

    Each candidate is added only if no reason already covers its kind.
    """
    candidates = []
    if factors.recovery_score < thresholds.moderate_recovery_score:
        candidates.append(
            _reason(f"Recovery score is {factors.recovery_score}/100", ReasonKind.RECOVERY_SCORE)
        )
    if factors.energy_trend == Trend.DECLINING:
        candidates.append(_reason("Energy levels have been declining", ReasonKind.ENERGY))
    if factors.sleep_trend == Trend.DECLINING:
        candidates.append(_reason("Sleep quality has been declining", ReasonKind.SLEEP))

    covered = set()
    for reason in existing:
        covered.update(reason.kinds)

    added = []
    for candidate in candidates:
        if candidate.kinds & covered:
            continue
        added.append(candidate)
        covered.update(candidate.kinds)
    return added
