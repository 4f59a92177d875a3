"""
Session aggregation: workout records → per-session summaries.

All functions are pure. Input records are assumed to be in chronological
order (the caller guarantees it); output keeps that order one-to-one.
"""

from typing import Iterable, Sequence

from .models import (
    SESSION_METRICS,
    ExerciseEntry,
    SeriesPoint,
    SessionMetric,
    SessionSummary,
    SetEntry,
    WorkoutRecord,
)


def set_volume(set_entry: SetEntry) -> float:
    """
    Volume contributed by one set.

    volume = weight × reps, warmup sets contribute 0.

    Args:
        set_entry: Performed set

    Returns:
        Volume in kg
    """
    if set_entry.is_warmup:
        return 0.0
    return set_entry.weight_kg * set_entry.reps


def exercise_volume(entry: ExerciseEntry) -> float:
    """Sum of non-warmup set volume for one exercise entry."""
    return sum(set_volume(s) for s in entry.sets)


def workout_volume(record: WorkoutRecord) -> float:
    """Sum of non-warmup set volume across all exercises of a workout."""
    return sum(exercise_volume(e) for e in record.exercises)


def distinct_exercise_count(record: WorkoutRecord) -> int:
    """Number of distinct exercise ids in a workout."""
    return len({e.exercise_id for e in record.exercises})


def summarize_session(record: WorkoutRecord) -> SessionSummary:
    """
    Build the summary of a single workout.

    Duration passes through from the record; volume excludes warmups.

    Args:
        record: Source workout

    Returns:
        SessionSummary for the record
    """
    return SessionSummary(
        record_id=record.id,
        date=record.date,
        duration_minutes=record.duration_minutes,
        volume_kg=workout_volume(record),
        exercise_count=distinct_exercise_count(record),
    )


def summarize_sessions(records: Iterable[WorkoutRecord]) -> list[SessionSummary]:
    """
    Convert workout records into per-session summaries.

    One summary per record, same order. Records sharing a date stay
    separate sessions.

    Args:
        records: Chronologically ordered workouts

    Returns:
        List of SessionSummary (empty for empty input)
    """
    return [summarize_session(r) for r in records]


def session_series(
    summaries: Sequence[SessionSummary],
    metric: SessionMetric = "duration_minutes",
) -> list[SeriesPoint]:
    """
    Project summaries onto a dated series for trend analysis.

    Args:
        summaries: Ordered session summaries
        metric: "duration_minutes", "volume_kg" or "exercise_count"

    Returns:
        List of SeriesPoint in the same order

    Raises:
        ValueError: If metric is unknown
    """
    if metric not in SESSION_METRICS:
        raise ValueError(f"Unknown session metric: {metric}. Must be one of {SESSION_METRICS}")
    return [SeriesPoint(date=s.date, value=float(getattr(s, metric))) for s in summaries]


def records_between(
    records: Iterable[WorkoutRecord],
    start: str,
    end: str,
) -> list[WorkoutRecord]:
    """
    Filter records to the inclusive date window [start, end].

    ISO dates compare correctly as strings.
    """
    return [r for r in records if start <= r.date <= end]
