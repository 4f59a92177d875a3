"""
JSON serialization for analytics data models.

Parses workout and goal documents exported from the document store into
frozen dataclasses, and converts derived results back to JSON-compatible
dicts for the presentation layer.
"""

import json
import re
from datetime import datetime
from typing import Any

from ..core.models import (
    GOAL_TYPES,
    ExerciseEntry,
    Goal,
    GoalProgress,
    GoalSummary,
    RegressionTrend,
    SeriesPoint,
    SessionSummary,
    SetEntry,
    TrendStats,
    WorkoutRecord,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Full ISO timestamps ("2024-03-01T18:30:00Z") are cut to their date part.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str):
        raise ValidationError(f"Invalid date: {date_str!r}. Expected YYYY-MM-DD")

    if re.match(r"^\d{4}-\d{2}-\d{2}T", date_str):
        date_str = date_str[:10]

    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a non-negative number.

    Raises:
        ValidationError: If value is negative or not a number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_positive(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a positive number.

    Raises:
        ValidationError: If value is not positive
    """
    validate_non_negative(value, name)
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def validate_whole_number(value: int | float, name: str) -> int:
    """
    Validate that a numeric value has no fractional part.

    Raises:
        ValidationError: If value is a float with a fractional part
    """
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{name} must be a whole number, got {value}")
    return int(value)


def _list_field(data: dict[str, Any], key: str) -> list[Any]:
    """Return data[key] as a list; missing or null means empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{key} must be a list, got {type(value).__name__}")
    return value


# =============================================================================
# DOCUMENTS → MODELS
# =============================================================================


def dict_to_set_entry(data: dict[str, Any]) -> SetEntry:
    """
    Convert dict to SetEntry.

    Raises:
        ValidationError: If data is invalid
    """
    validate_non_negative(data.get("weight_kg", 0), "weight_kg")
    validate_positive(data.get("reps", 0), "reps")
    reps = validate_whole_number(data["reps"], "reps")

    try:
        return SetEntry(
            weight_kg=float(data.get("weight_kg", 0.0)),
            reps=reps,
            set_type=data.get("set_type", "normal"),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def dict_to_exercise_entry(data: dict[str, Any]) -> ExerciseEntry:
    """
    Convert dict to ExerciseEntry.

    Raises:
        ValidationError: If data is invalid
    """
    exercise_id = data.get("exercise_id")
    if not isinstance(exercise_id, str) or not exercise_id.strip():
        raise ValidationError(f"Invalid exercise_id: {exercise_id!r}. Must be a non-empty string.")

    return ExerciseEntry(
        exercise_id=exercise_id,
        sets=tuple(dict_to_set_entry(s) for s in _list_field(data, "sets")),
        name=data.get("name") or "",
        muscle_group=data.get("muscle_group"),
        secondary_muscles=tuple(_list_field(data, "secondary_muscles")),
    )


def dict_to_workout_record(data: dict[str, Any]) -> WorkoutRecord:
    """
    Convert dict to WorkoutRecord.

    Raises:
        ValidationError: If data is invalid
    """
    if "id" not in data:
        raise ValidationError("Workout record is missing 'id'")
    date = validate_date(data.get("date"))
    validate_non_negative(data.get("duration_minutes", 0), "duration_minutes")

    return WorkoutRecord(
        id=str(data["id"]),
        date=date,
        exercises=tuple(dict_to_exercise_entry(e) for e in _list_field(data, "exercises")),
        duration_minutes=float(data.get("duration_minutes", 0.0)),
    )


def json_line_to_workout(line: str) -> WorkoutRecord:
    """
    Deserialize a JSON line to a WorkoutRecord.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError(f"Expected a JSON object, got {type(data).__name__}")

    return dict_to_workout_record(data)


def dict_to_goal(data: dict[str, Any]) -> Goal:
    """
    Convert dict to Goal.

    Raises:
        ValidationError: If data is invalid
    """
    if "id" not in data:
        raise ValidationError("Goal is missing 'id'")
    goal_type = data.get("goal_type")
    if goal_type not in GOAL_TYPES:
        raise ValidationError(f"Invalid goal_type: {goal_type}. Must be one of {GOAL_TYPES}")

    created_at = validate_date(data.get("created_at"))
    deadline = validate_date(data["deadline"]) if data.get("deadline") else None

    target = data.get("target_value")
    if target is not None:
        validate_positive(target, "target_value")
    baseline = data.get("baseline_value")
    if baseline is not None:
        validate_non_negative(baseline, "baseline_value")

    try:
        return Goal(
            id=str(data["id"]),
            goal_type=goal_type,
            created_at=created_at,
            target_value=float(target) if target is not None else None,
            deadline=deadline,
            baseline_value=float(baseline) if baseline is not None else None,
            exercise_id=data.get("exercise_id"),
            muscle_group=data.get("muscle_group"),
            period=data.get("period"),
            volume_scope=data.get("volume_scope", "total"),
            milestones_reached=tuple(int(m) for m in _list_field(data, "milestones_reached")),
            name=data.get("name") or "",
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


# =============================================================================
# DERIVED VALUES → DICTS
# =============================================================================


def session_summary_to_dict(summary: SessionSummary) -> dict[str, Any]:
    """Convert SessionSummary to JSON-compatible dict."""
    return {
        "record_id": summary.record_id,
        "date": summary.date,
        "duration_minutes": summary.duration_minutes,
        "volume_kg": summary.volume_kg,
        "exercise_count": summary.exercise_count,
    }


def series_point_to_dict(point: SeriesPoint | None) -> dict[str, Any] | None:
    """Convert SeriesPoint to {"date", "value"}, passing None through."""
    if point is None:
        return None
    return {"date": point.date, "value": point.value}


def regression_trend_to_dict(trend: RegressionTrend) -> dict[str, Any]:
    """Convert RegressionTrend to JSON-compatible dict."""
    return {
        "direction": trend.direction,
        "magnitude": trend.magnitude,
        "slope": trend.slope,
        "intercept": trend.intercept,
        "r_squared": trend.r_squared,
        "line": list(trend.line),
    }


def trend_stats_to_dict(stats: TrendStats) -> dict[str, Any]:
    """Convert TrendStats to JSON-compatible dict."""
    return {
        "average": stats.average,
        "minimum": series_point_to_dict(stats.minimum),
        "maximum": series_point_to_dict(stats.maximum),
        "trend": regression_trend_to_dict(stats.trend),
    }


def goal_progress_to_dict(progress: GoalProgress) -> dict[str, Any]:
    """Convert GoalProgress to JSON-compatible dict."""
    pace = progress.required_pace
    return {
        "goal_id": progress.goal_id,
        "goal_type": progress.goal_type,
        "current_value": progress.current_value,
        "target_value": progress.target_value,
        "baseline_value": progress.baseline_value,
        "progress_percent": progress.progress_percent,
        "expected_percent": progress.expected_percent,
        "status": progress.status,
        "days_remaining": progress.days_remaining,
        "recommended_target": progress.recommended_target,
        "new_milestones": list(progress.new_milestones),
        "next_milestone": progress.next_milestone,
        "required_pace": (
            {"per_day": pace.per_day, "per_week": pace.per_week, "total": pace.total}
            if pace is not None else None
        ),
        "predicted_completion": progress.predicted_completion,
        "period_start": progress.period_start,
        "period_end": progress.period_end,
    }


def goal_summary_to_dict(summary: GoalSummary) -> dict[str, Any]:
    """Convert GoalSummary to JSON-compatible dict."""
    return {
        "total": summary.total,
        "achieved": summary.achieved,
        "on_track": summary.on_track,
        "at_risk": summary.at_risk,
        "completion_rate": summary.completion_rate,
        "by_status": dict(summary.by_status),
    }
