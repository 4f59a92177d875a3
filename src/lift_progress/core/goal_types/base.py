"""
Base type for goal-type definitions.

GoalTypeDefinition parameterises goal measurement, recommendation and
target checks for one member of the GoalType literal. The registry
dispatches on it instead of branching on type strings.
"""

from dataclasses import dataclass
from typing import Callable, Sequence

from ..models import Goal, WorkoutRecord

# (goal, chronologically ordered records, today) -> current metric value
MeasureFn = Callable[[Goal, Sequence[WorkoutRecord], str], float]

# (goal, chronologically ordered records, today) -> warning messages
TargetCheckFn = Callable[[Goal, Sequence[WorkoutRecord], str], list[str]]


@dataclass(frozen=True)
class GoalTypeDefinition:
    """Full configuration for one goal type."""

    goal_type: str            # e.g. "strength"
    display_name: str         # e.g. "Strength (1RM)"
    unit: str                 # "kg" | "sessions"

    # Multiplier applied to the current value to propose a target;
    # None = this goal type gets no recommendation.
    recommendation_uplift: float | None

    # Whether current value is measured within the goal's week/month window
    uses_period: bool

    measure: MeasureFn

    # Flags targets that are unrealistic given the history; advisory only
    check_targets: TargetCheckFn
