"""
Frequency goal definition.

Current value is the number of sessions in the goal's current week or
month; with a muscle group set, only sessions that work that muscle count.
No uplift is defined for frequency, so it never gets a recommendation.
"""

from typing import Sequence

from ..config import MAX_WEEKLY_SESSIONS
from ..dates import period_boundaries
from ..models import Goal, WorkoutRecord
from ..sessions import records_between
from .base import GoalTypeDefinition


def measure_frequency(goal: Goal, records: Sequence[WorkoutRecord], today: str) -> float:
    """Session count inside the goal's current period."""
    start, end = period_boundaries(goal.period or "week", today)
    in_period = records_between(records, start, end)
    if goal.muscle_group:
        in_period = [
            r for r in in_period
            if any(e.targets_muscle(goal.muscle_group) for e in r.exercises)
        ]
    return float(len(in_period))


def check_frequency_targets(goal: Goal, records: Sequence[WorkoutRecord], today: str) -> list[str]:
    """Warn about weekly targets beyond MAX_WEEKLY_SESSIONS (overtraining)."""
    if goal.period == "week" and goal.target_value is not None and goal.target_value > MAX_WEEKLY_SESSIONS:
        return [
            f"{goal.target_value:g} sessions per week may lead to overtraining; "
            "ensure adequate recovery."
        ]
    return []


FREQUENCY = GoalTypeDefinition(
    goal_type="frequency",
    display_name="Frequency",
    unit="sessions",
    recommendation_uplift=None,
    uses_period=True,
    measure=measure_frequency,
    check_targets=check_frequency_targets,
)
