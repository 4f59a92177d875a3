"""
Strength estimation: Epley one-rep-max and best-set selection.
"""

from typing import Iterable, Sequence

from .config import EPLEY_REPS_DIVISOR
from .errors import ConfigurationError
from .models import SeriesPoint, SetEntry, WorkoutRecord


def estimate_one_rep_max(weight_kg: float, reps: int) -> float:
    """
    Estimate 1RM using the Epley formula.

    1RM = weight * (1 + reps/30)

    A single rep returns the weight itself.

    Args:
        weight_kg: Load lifted (>= 0)
        reps: Reps performed (>= 1)

    Returns:
        Estimated 1RM in kg

    Raises:
        ConfigurationError: If weight is negative or reps < 1
    """
    if weight_kg < 0:
        raise ConfigurationError(f"weight must be non-negative, got {weight_kg}")
    if reps < 1:
        raise ConfigurationError(f"reps must be at least 1, got {reps}")
    if reps == 1:
        return float(weight_kg)
    return weight_kg * (1 + reps / EPLEY_REPS_DIVISOR)


def find_best_set(sets: Iterable[SetEntry]) -> SetEntry | None:
    """
    Select the non-warmup set with the highest estimated 1RM.

    Ties keep the earliest set.

    Args:
        sets: Sets in performed order

    Returns:
        Best set, or None if there are no non-warmup sets
    """
    best: SetEntry | None = None
    best_1rm = 0.0
    for s in sets:
        if s.is_warmup:
            continue
        est = estimate_one_rep_max(s.weight_kg, s.reps)
        if best is None or est > best_1rm:
            best = s
            best_1rm = est
    return best


def one_rep_max_history(
    records: Iterable[WorkoutRecord],
    exercise_id: str,
) -> list[SeriesPoint]:
    """
    Per-session best estimated 1RM for one exercise.

    Sessions that don't include the exercise, or only have warmups for it,
    are skipped.

    Args:
        records: Chronologically ordered workouts
        exercise_id: Exercise to track

    Returns:
        Dated 1RM series in record order
    """
    points: list[SeriesPoint] = []
    for record in records:
        entry = record.find_exercise(exercise_id)
        if entry is None:
            continue
        best = find_best_set(entry.sets)
        if best is None:
            continue
        points.append(
            SeriesPoint(date=record.date, value=estimate_one_rep_max(best.weight_kg, best.reps))
        )
    return points


def personal_record(history: Sequence[SeriesPoint]) -> SeriesPoint | None:
    """
    Highest point of a 1RM history; the first occurrence wins ties.

    Args:
        history: Output of one_rep_max_history()

    Returns:
        Best point or None for an empty history
    """
    best: SeriesPoint | None = None
    for point in history:
        if best is None or point.value > best.value:
            best = point
    return best
