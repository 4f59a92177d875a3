"""
Volume goal definition.

Current value is the non-warmup volume lifted in the week or month that
contains the reference day, scoped to all exercises, one exercise, or the
exercises working one muscle group.
"""

from typing import Sequence

from ..config import MAX_VOLUME_INCREASE_PERCENT, VOLUME_RECOMMENDATION_UPLIFT
from ..dates import period_boundaries
from ..models import Goal, WorkoutRecord
from ..sessions import exercise_volume, records_between, workout_volume
from .base import GoalTypeDefinition


def measure_volume(goal: Goal, records: Sequence[WorkoutRecord], today: str) -> float:
    """Volume (kg) inside the goal's current period."""
    start, end = period_boundaries(goal.period or "week", today)
    in_period = records_between(records, start, end)

    if goal.volume_scope == "total":
        return sum(workout_volume(r) for r in in_period)

    total = 0.0
    for record in in_period:
        for entry in record.exercises:
            if goal.volume_scope == "exercise" and entry.exercise_id == goal.exercise_id:
                total += exercise_volume(entry)
            elif goal.volume_scope == "muscle-group" and entry.targets_muscle(goal.muscle_group or ""):
                total += exercise_volume(entry)
    return total


def check_volume_targets(goal: Goal, records: Sequence[WorkoutRecord], today: str) -> list[str]:
    """
    Warn when the target asks for more than MAX_VOLUME_INCREASE_PERCENT
    over the reference volume (the baseline, else this period's volume).
    """
    if goal.target_value is None:
        return []
    reference = goal.baseline_value or measure_volume(goal, records, today)
    if reference <= 0:
        return []

    increase_pct = (goal.target_value - reference) / reference * 100
    if increase_pct > MAX_VOLUME_INCREASE_PERCENT:
        return [
            f"Volume increase of {increase_pct:.0f}% may be too aggressive; "
            "10-15% is more sustainable."
        ]
    return []


VOLUME = GoalTypeDefinition(
    goal_type="volume",
    display_name="Volume",
    unit="kg",
    recommendation_uplift=VOLUME_RECOMMENDATION_UPLIFT,
    uses_period=True,
    measure=measure_volume,
    check_targets=check_volume_targets,
)
