"""
Strength goal definition.

Current value is the personal record: the best estimated 1RM ever logged
for the goal's exercise, not the most recent one.
"""

from typing import Sequence

from ..config import (
    AMBITIOUS_TARGET_FACTOR,
    DAYS_PER_WEEK,
    MIN_STRENGTH_HISTORY_SESSIONS,
    REALISTIC_STRENGTH_GAIN_PER_MONTH,
    STRENGTH_RECOMMENDATION_UPLIFT,
)
from ..dates import days_between
from ..models import Goal, WorkoutRecord
from ..strength import one_rep_max_history, personal_record
from .base import GoalTypeDefinition


def measure_strength(goal: Goal, records: Sequence[WorkoutRecord], today: str) -> float:
    """Best estimated 1RM for ``goal.exercise_id`` on or before ``today``."""
    history = one_rep_max_history(
        (r for r in records if r.date <= today), goal.exercise_id or ""
    )
    best = personal_record(history)
    return best.value if best is not None else 0.0


def check_strength_targets(goal: Goal, records: Sequence[WorkoutRecord], today: str) -> list[str]:
    """
    Warn about thin history and unrealistic 1RM targets.

    A realistic gain is REALISTIC_STRENGTH_GAIN_PER_MONTH percent of the
    current 1RM per four weeks until the deadline; a target needing more
    than AMBITIOUS_TARGET_FACTOR times that is flagged.

    Args:
        goal: Strength goal
        records: Chronologically ordered workouts
        today: Reference date

    Returns:
        Warning messages, empty if the target looks reasonable
    """
    warnings: list[str] = []
    history = one_rep_max_history(
        (r for r in records if r.date <= today), goal.exercise_id or ""
    )
    if len(history) < MIN_STRENGTH_HISTORY_SESSIONS:
        warnings.append(
            f"Only {len(history)} sessions logged for {goal.exercise_id}; "
            "add more workouts for accurate progress tracking."
        )

    best = personal_record(history)
    target = goal.target_value
    if best is None or best.value <= 0 or target is None:
        return warnings

    current = best.value
    if target <= current:
        warnings.append(
            f"Target {target:g} kg must be higher than the current 1RM ({current:.1f} kg)."
        )
        return warnings

    if goal.deadline is not None:
        weeks = days_between(today, goal.deadline) / DAYS_PER_WEEK
        realistic_pct = weeks / 4 * REALISTIC_STRENGTH_GAIN_PER_MONTH
        increase_pct = (target - current) / current * 100
        if increase_pct > realistic_pct * AMBITIOUS_TARGET_FACTOR:
            suggestion = current * (1 + realistic_pct / 100)
            warnings.append(
                f"Target may be ambitious: {suggestion:.1f} kg in {max(weeks, 0):.0f} weeks "
                "is more realistic."
            )
    return warnings


STRENGTH = GoalTypeDefinition(
    goal_type="strength",
    display_name="Strength (1RM)",
    unit="kg",
    recommendation_uplift=STRENGTH_RECOMMENDATION_UPLIFT,
    uses_period=False,
    measure=measure_strength,
    check_targets=check_strength_targets,
)
