"""
Decision trace generation and export.

This module documents how a rest day recommendation was reached: the
computed recovery factors, every rule of the cascade in priority order,
and the supporting reasons appended afterwards. Traces export to a JSON
dictionary or to Markdown for human review.
"""

from datetime import datetime
from typing import Iterable, List

from rest_advisor.narrative import CONFIDENCE_LABELS, REST_TYPE_LABELS
from rest_advisor.schemas import (
    DecisionTrace,
    Reason,
    RecoveryFactors,
    RestDayRecommendation,
    RuleEvaluation,
    RuleStatus,
)

_STATUS_ICONS = {
    RuleStatus.FIRED: "✅",
    RuleStatus.NOT_MATCHED: "➖",
    RuleStatus.NOT_EVALUATED: "⏭️",
}


class DecisionTraceBuilder:
    """
    Builds and exports decision traces for rest day recommendations.

    The trace is the audit trail showing:
    - What factors were computed from the logs
    - Which rules were checked, and which one fired
    - Which supporting reasons were added
    - What the final recommendation was
    """

    def __init__(self, reference_time: datetime):
        """
        Initialize trace builder.

        Args:
            reference_time: The instant the recommendation is computed for
        """
        self.trace = DecisionTrace(reference_time=reference_time)

    def set_factors(self, factors: RecoveryFactors) -> None:
        self.trace.factors = factors

    def add_evaluations(self, evaluations: Iterable[RuleEvaluation]) -> None:
        """
        Add rule evaluations to the trace, in priority order.

        Args:
            evaluations: One evaluation per rule of the cascade
        """
        for evaluation in evaluations:
            self.trace.evaluations.append(evaluation)
            if evaluation.status == RuleStatus.FIRED:
                self.trace.fired_rule = evaluation.rule_id

    def add_supplementary_reasons(self, reasons: Iterable[Reason]) -> None:
        self.trace.supplementary_reasons.extend(reason.text for reason in reasons)

    def set_result(self, recommendation: RestDayRecommendation) -> None:
        """
        Record the final recommendation.

        Args:
            recommendation: The recommendation returned to the caller
        """
        self.trace.should_rest = recommendation.should_rest
        self.trace.suggested_rest_type = recommendation.suggested_rest_type
        self.trace.confidence = recommendation.confidence

    def export_to_json(self) -> dict:
        """
        Export trace to JSON-serializable dictionary.

        Returns:
            Dictionary representation of the trace
        """
        return self.trace.model_dump(mode="json")

    def export_to_markdown(self) -> str:
        """
        Export trace to human-readable Markdown format.

        Returns:
            Markdown-formatted trace report
        """
        lines: List[str] = []

        # Header
        lines.append("# Rest Day Decision Trace")
        lines.append("")
        lines.append(
            f"**Reference Time:** {self.trace.reference_time.strftime('%Y-%m-%d %H:%M:%S')}"
        )
        lines.append("")
        lines.append("---")
        lines.append("")

        # Factors
        lines.append("## Recovery Factors")
        lines.append("")
        factors = self.trace.factors
        if factors is None:
            lines.append("*No factors computed*")
        else:
            ratio = (
                f"{factors.volume_ratio:.2f}" if factors.volume_ratio is not None else "n/a"
            )
            lines.append("| Factor | Value |")
            lines.append("|--------|-------|")
            lines.append(f"| Consecutive Workout Days | {factors.consecutive_workout_days} |")
            lines.append(f"| Recovery Score | {factors.recovery_score}/100 |")
            lines.append(f"| Energy Trend | {factors.energy_trend.value} |")
            lines.append(f"| Sleep Trend | {factors.sleep_trend.value} |")
            lines.append(f"| Stress Level | {factors.stress_level.value} |")
            lines.append(f"| Volume Ratio | {ratio} |")
        lines.append("")
        lines.append("---")
        lines.append("")

        # Rule cascade
        lines.append("## Rule Cascade")
        lines.append("")
        if not self.trace.evaluations:
            lines.append("*No rules evaluated*")
        else:
            for i, evaluation in enumerate(self.trace.evaluations, 1):
                icon = _STATUS_ICONS[evaluation.status]
                lines.append(
                    f"{i}. {icon} `{evaluation.rule_id}` - {evaluation.description} "
                    f"({evaluation.status.value.replace('_', ' ')})"
                )
            if self.trace.fired_rule is None:
                lines.append("")
                lines.append("No rule fired; default recommendation applies.")
        lines.append("")

        if self.trace.supplementary_reasons:
            lines.append("**Supporting Reasons:**")
            for reason in self.trace.supplementary_reasons:
                lines.append(f"- {reason}")
            lines.append("")

        lines.append("---")
        lines.append("")

        # Final decision
        lines.append("## Final Decision")
        lines.append("")
        if self.trace.suggested_rest_type is None:
            lines.append("*No decision recorded*")
        else:
            headline = "REST RECOMMENDED" if self.trace.should_rest else "READY TO TRAIN"
            lines.append(f"**{headline}**")
            lines.append("")
            lines.append(f"- **Type:** {REST_TYPE_LABELS[self.trace.suggested_rest_type]}")
            lines.append(f"- **Confidence:** {CONFIDENCE_LABELS[self.trace.confidence]}")
        lines.append("")

        return "\n".join(lines)
