"""
Command-line interface for the rest advisor.

Provides commands for:
- Replaying a recommendation from a JSON snapshot of a user's logs
- Viewing the active thresholds
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from rest_advisor.config import DEFAULT_THRESHOLDS, RecoveryThresholds
from rest_advisor.engine import RestDayAdvisor
from rest_advisor.logging_config import get_logger, setup_logging
from rest_advisor.narrative import CONFIDENCE_LABELS, REST_TYPE_LABELS
from rest_advisor.schemas import RecoverySnapshot, RestDayRecommendation, RestType
from rest_advisor.trace import DecisionTraceBuilder

# Initialize Typer app and Rich console
app = typer.Typer(
    help="Rest Advisor - should you rest, deload or train today?"
)
console = Console()
logger = get_logger(__name__)

_REST_TYPE_COLORS = {
    RestType.COMPLETE: "red",
    RestType.ACTIVE_RECOVERY: "yellow",
    RestType.DELOAD: "blue",
    RestType.NORMAL_TRAINING: "green",
}


# ===== DISPLAY HELPER FUNCTIONS =====


def _display_recommendation(recommendation: RestDayRecommendation):
    """
    Display a recommendation as a color-coded panel plus a metrics table.

    Args:
        recommendation: Recommendation returned by the advisor
    """
    color = _REST_TYPE_COLORS[recommendation.suggested_rest_type]
    headline = "Rest Recommended" if recommendation.should_rest else "Ready to Train"

    body = [f"[bold]{recommendation.todays_plan}[/bold]"]
    if recommendation.alternative_activity:
        body.append(f"\n[dim]Instead:[/dim] {recommendation.alternative_activity}")
    if recommendation.reasons:
        body.append("")
        body.extend(f"• {reason.text}" for reason in recommendation.reasons)

    title = (
        f"[bold {color}]{headline}[/bold {color}] - "
        f"{REST_TYPE_LABELS[recommendation.suggested_rest_type]} "
        f"({CONFIDENCE_LABELS[recommendation.confidence]})"
    )
    console.print(Panel("\n".join(body), title=title, border_style=color, padding=(1, 2)))

    metrics = recommendation.metrics
    table = Table(title="Recovery Metrics", box=box.ROUNDED)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="yellow")

    def _show(value, suffix=""):
        return "N/A" if value is None else f"{value}{suffix}"

    table.add_row("Consecutive Workout Days", str(metrics.consecutive_workout_days))
    table.add_row("Recovery Score", f"{metrics.recovery_score}/100")
    table.add_row("Avg Energy (3 days)", _show(metrics.avg_energy_last_3_days))
    table.add_row("Avg Sleep Quality (3 days)", _show(metrics.avg_sleep_quality_last_3_days))
    table.add_row("Avg Stress (3 days)", _show(metrics.avg_stress_last_3_days))
    table.add_row("Weekly Volume vs Baseline", _show(metrics.weekly_volume_vs_baseline, "x"))
    console.print(table)


def _load_thresholds(path: Optional[Path]) -> RecoveryThresholds:
    if path is None:
        return DEFAULT_THRESHOLDS
    try:
        return RecoveryThresholds.from_file(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]✗ Failed to load thresholds: {e}[/red]")
        raise typer.Exit(1)


# ===== COMMANDS =====


@app.command()
def recommend(
    snapshot: Path = typer.Option(
        ...,
        "--snapshot",
        "-s",
        help="Path to a JSON snapshot of the user's logs",
        exists=True,
    ),
    thresholds: Optional[Path] = typer.Option(
        None,
        "--thresholds",
        "-t",
        help="Path to a thresholds JSON file (defaults when omitted)",
    ),
    show_trace: bool = typer.Option(
        False,
        "--trace",
        help="Show the rule-by-rule decision trace",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the recommendation as JSON instead of a panel",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Log level for diagnostics written to stderr",
    ),
):
    """
    Recommend whether to rest, deload or train for the snapshot's day.
    """
    setup_logging(log_level)

    try:
        with open(snapshot, "r") as f:
            data = RecoverySnapshot(**json.load(f))
    except Exception as e:
        console.print(f"[red]✗ Failed to load snapshot: {e}[/red]")
        raise typer.Exit(1)

    logger.info(
        "Loaded snapshot",
        extra={
            "ctx_daily_logs": len(data.daily_logs),
            "ctx_exercise_logs": len(data.exercise_logs),
        },
    )

    advisor = RestDayAdvisor(_load_thresholds(thresholds))
    recommendation, trace = advisor.recommend_with_trace(
        data.daily_logs, data.exercise_logs, data.profile, now=data.now
    )

    if as_json:
        payload = recommendation.to_json_dict()
        if show_trace:
            payload = {"recommendation": payload, "trace": trace.model_dump(mode="json")}
        console.print_json(json.dumps(payload))
        return

    _display_recommendation(recommendation)

    if show_trace:
        builder = DecisionTraceBuilder(reference_time=trace.reference_time)
        builder.trace = trace
        console.print()
        console.print(Markdown(builder.export_to_markdown()))


@app.command("thresholds")
def show_thresholds(
    path: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Thresholds JSON file to inspect (defaults when omitted)",
    ),
):
    """
    View the thresholds the advisor would use.
    """
    active = _load_thresholds(path)

    table = Table(title="Rest Advisor Thresholds", box=box.ROUNDED)
    table.add_column("Threshold", style="cyan")
    table.add_column("Value", justify="right", style="yellow")
    table.add_column("Description")

    for name, field in RecoveryThresholds.model_fields.items():
        table.add_row(
            name.replace("_", " ").title(),
            str(getattr(active, name)),
            field.description or "",
        )

    console.print(table)


if __name__ == "__main__":
    app()
