"""
Tuned thresholds for the rest day advisor.

The boundaries encode coaching heuristics (40/60 recovery bands, the 120%
deload trigger, 4- and 5-day streak limits). They are bundled in an
immutable model so callers can pass an alternative set explicitly; the
advisor never reads them from the environment.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RecoveryThresholds(BaseModel):
    """Boundary values used by the analytical components and the rule cascade."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    full_rest_streak_days: int = Field(
        default=5,
        ge=1,
        description="Consecutive workout days that force a complete rest day"
    )

    active_recovery_streak_days: int = Field(
        default=4,
        ge=1,
        description="Consecutive workout days that suggest active recovery"
    )

    low_recovery_score: int = Field(
        default=40,
        ge=0,
        le=100,
        description="Recovery score below which active recovery is prescribed"
    )

    moderate_recovery_score: int = Field(
        default=60,
        ge=0,
        le=100,
        description="Recovery score below which training is advisory only"
    )

    deload_volume_ratio: float = Field(
        default=1.2,
        gt=0.0,
        description="This-week/baseline volume ratio above which a deload is due"
    )

    trend_window_days: int = Field(
        default=5,
        ge=2,
        description="Most recent days fed to the trend analyzer"
    )

    averages_window_days: int = Field(
        default=3,
        ge=1,
        description="Most recent days averaged for stress and the metrics snapshot"
    )

    min_exercise_logs: int = Field(
        default=14,
        ge=1,
        description="Exercise entries required before a volume ratio is computed"
    )

    @model_validator(mode="after")
    def validate_ordering(self) -> "RecoveryThresholds":
        if self.active_recovery_streak_days > self.full_rest_streak_days:
            raise ValueError(
                "active_recovery_streak_days must not exceed full_rest_streak_days"
            )
        if self.low_recovery_score > self.moderate_recovery_score:
            raise ValueError(
                "low_recovery_score must not exceed moderate_recovery_score"
            )
        return self

    @classmethod
    def from_file(cls, path: Path) -> "RecoveryThresholds":
        """
        Load thresholds from a JSON file.

        Keys missing from the file keep their defaults.

        Args:
            path: Path to thresholds JSON file

        Returns:
            RecoveryThresholds instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the JSON is invalid or holds unknown keys
        """
        if not path.exists():
            raise FileNotFoundError(f"Thresholds file not found: {path}")

        with open(path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid thresholds file: {e}")

        try:
            return cls(**data)
        except Exception as e:
            raise ValueError(f"Invalid thresholds file: {e}")


DEFAULT_THRESHOLDS = RecoveryThresholds()
