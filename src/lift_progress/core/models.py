"""
Data models for lift-progress.

Source entities (WorkoutRecord, Goal) are owned by the document store and
arrive here already validated; derived entities (SessionSummary, TrendStats,
GoalProgress, ...) are recomputed on every call and never persisted.
All models are frozen; sequences are tuples.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal, get_args

SetType = Literal["normal", "warmup", "dropset", "superset", "rest-pause", "amrap"]
GoalType = Literal["strength", "volume", "frequency"]
GoalStatus = Literal[
    "not-started", "on-track", "ahead", "behind", "at-risk", "achieved", "expired"
]
TrendDirection = Literal["increasing", "decreasing", "stable"]
Period = Literal["week", "month"]
VolumeScope = Literal["total", "exercise", "muscle-group"]
SessionMetric = Literal["duration_minutes", "volume_kg", "exercise_count"]

SET_TYPES: tuple[str, ...] = get_args(SetType)
GOAL_TYPES: tuple[str, ...] = get_args(GoalType)
GOAL_STATUSES: tuple[str, ...] = get_args(GoalStatus)
PERIODS: tuple[str, ...] = get_args(Period)
VOLUME_SCOPES: tuple[str, ...] = get_args(VolumeScope)
SESSION_METRICS: tuple[str, ...] = get_args(SessionMetric)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_iso_date(date_str: str) -> None:
    """Validate date string is ISO format YYYY-MM-DD."""
    if not isinstance(date_str, str) or not _ISO_DATE.match(date_str):
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e


def parse_iso_date(date_str: str) -> date:
    """Convert a validated YYYY-MM-DD string to a date."""
    return datetime.strptime(date_str, "%Y-%m-%d").date()


# =============================================================================
# SOURCE RECORDS
# =============================================================================


@dataclass(frozen=True)
class SetEntry:
    """A single performed set. Weight is in kg (canonical storage unit)."""

    weight_kg: float
    reps: int
    set_type: SetType = "normal"

    def __post_init__(self) -> None:
        """Validate set data."""
        if self.weight_kg < 0:
            raise ValueError("weight_kg must be non-negative")
        if self.reps < 1:
            raise ValueError("reps must be positive")
        if self.set_type not in SET_TYPES:
            raise ValueError(f"Invalid set_type: {self.set_type}")

    @property
    def is_warmup(self) -> bool:
        return self.set_type == "warmup"


@dataclass(frozen=True)
class ExerciseEntry:
    """
    One exercise within a workout, with its sets in performed order.

    ``muscle_group`` is the primary muscle; ``secondary_muscles`` are the
    others the exercise library lists for it.
    """

    exercise_id: str
    sets: tuple[SetEntry, ...] = ()
    name: str = ""
    muscle_group: str | None = None
    secondary_muscles: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.exercise_id:
            raise ValueError("exercise_id must be non-empty")

    def targets_muscle(self, muscle_group: str) -> bool:
        """Return True if the exercise works ``muscle_group`` (primary or secondary)."""
        return muscle_group == self.muscle_group or muscle_group in self.secondary_muscles


@dataclass(frozen=True)
class WorkoutRecord:
    """A completed workout as stored by the document store."""

    id: str
    date: str  # ISO format: YYYY-MM-DD
    exercises: tuple[ExerciseEntry, ...] = ()
    duration_minutes: float = 0.0

    def __post_init__(self) -> None:
        """Validate record data."""
        validate_iso_date(self.date)
        if self.duration_minutes < 0:
            raise ValueError("duration_minutes must be non-negative")

    def find_exercise(self, exercise_id: str) -> ExerciseEntry | None:
        """Return the first entry for ``exercise_id``, or None."""
        for entry in self.exercises:
            if entry.exercise_id == exercise_id:
                return entry
        return None


@dataclass(frozen=True)
class Goal:
    """
    A user goal. Read-only to the engine.

    ``target_value`` is None while the user has not picked a target yet;
    progress then carries a recommended target instead.
    ``baseline_value`` is the metric captured when the goal was created and
    is the zero point of progress (0 when absent).
    """

    id: str
    goal_type: GoalType
    created_at: str  # ISO format: YYYY-MM-DD
    target_value: float | None = None
    deadline: str | None = None
    baseline_value: float | None = None
    exercise_id: str | None = None
    muscle_group: str | None = None
    period: Period | None = None
    volume_scope: VolumeScope = "total"
    milestones_reached: tuple[int, ...] = ()
    name: str = ""

    def __post_init__(self) -> None:
        """Validate goal definition and its type-specific scope."""
        if self.goal_type not in GOAL_TYPES:
            raise ValueError(f"Invalid goal_type: {self.goal_type}")
        validate_iso_date(self.created_at)
        if self.deadline is not None:
            validate_iso_date(self.deadline)
        if self.target_value is not None and self.target_value <= 0:
            raise ValueError("target_value must be positive")
        if self.baseline_value is not None and self.baseline_value < 0:
            raise ValueError("baseline_value must be non-negative")
        if self.period is not None and self.period not in PERIODS:
            raise ValueError(f"Invalid period: {self.period}")
        if self.volume_scope not in VOLUME_SCOPES:
            raise ValueError(f"Invalid volume_scope: {self.volume_scope}")

        if self.goal_type == "strength" and not self.exercise_id:
            raise ValueError("strength goals require exercise_id")
        if self.goal_type in ("volume", "frequency") and self.period is None:
            raise ValueError(f"{self.goal_type} goals require a period (week or month)")
        if self.goal_type == "volume" and self.volume_scope == "exercise" and not self.exercise_id:
            raise ValueError("exercise volume goals require exercise_id")
        if self.volume_scope == "muscle-group" and not self.muscle_group:
            raise ValueError("muscle-group goals require muscle_group")

    @property
    def label(self) -> str:
        """Human-readable name, falling back to the scope."""
        return self.name or self.exercise_id or self.muscle_group or self.goal_type


# =============================================================================
# DERIVED VALUES
# =============================================================================


@dataclass(frozen=True)
class SessionSummary:
    """Per-session aggregate, one per WorkoutRecord, in source order."""

    record_id: str
    date: str
    duration_minutes: float
    volume_kg: float
    exercise_count: int


@dataclass(frozen=True)
class SeriesPoint:
    """One dated value of an ordered series."""

    date: str
    value: float


@dataclass(frozen=True)
class SeriesDescription:
    """Mean and extremes of a series; all None for an empty series."""

    average: float | None
    minimum: SeriesPoint | None
    maximum: SeriesPoint | None


@dataclass(frozen=True)
class RegressionTrend:
    """
    Least-squares fit of value against 0-based index.

    ``magnitude`` is the percent change of the fitted line between the first
    and last index. ``line`` holds the fitted value per index and is empty
    when there were fewer than two points.
    """

    direction: TrendDirection
    slope: float
    intercept: float
    r_squared: float
    magnitude: float
    line: tuple[float, ...] = ()

    @property
    def is_drawable(self) -> bool:
        return len(self.line) >= 2


@dataclass(frozen=True)
class TrendStats:
    """Descriptive statistics plus the regression trend of one series."""

    average: float | None
    minimum: SeriesPoint | None
    maximum: SeriesPoint | None
    trend: RegressionTrend


@dataclass(frozen=True)
class RequiredPace:
    """Amount still needed to hit the target, spread over the days left."""

    per_day: float
    per_week: float
    total: float


@dataclass(frozen=True)
class GoalProgress:
    """Live state of one goal as of a given day."""

    goal_id: str
    goal_type: GoalType
    current_value: float
    target_value: float | None
    baseline_value: float
    progress_percent: float
    status: GoalStatus
    days_remaining: int | None = None
    expected_percent: float | None = None  # elapsed share of the goal window × 100
    recommended_target: int | None = None
    new_milestones: tuple[int, ...] = ()
    next_milestone: int | None = None
    required_pace: RequiredPace | None = None
    predicted_completion: str | None = None
    period_start: str | None = None
    period_end: str | None = None


@dataclass(frozen=True)
class GoalSummary:
    """Aggregate view across a set of goal progress results."""

    total: int
    achieved: int
    on_track: int  # on-track, ahead or achieved
    at_risk: int
    completion_rate: float  # mean progress_percent, capped at 100 per goal
    by_status: dict[str, int] = field(default_factory=dict)
