"""
Goal-type registry.

Every member of the GoalType literal must have exactly one definition
here; the check runs at import time so a newly added goal type without a
definition fails loudly instead of falling through.
"""

from ..models import GOAL_TYPES
from .base import GoalTypeDefinition
from .frequency import FREQUENCY
from .strength import STRENGTH
from .volume import VOLUME


def _build_registry() -> dict[str, GoalTypeDefinition]:
    registry = {d.goal_type: d for d in (STRENGTH, VOLUME, FREQUENCY)}
    missing = set(GOAL_TYPES) - set(registry)
    extra = set(registry) - set(GOAL_TYPES)
    if missing or extra:
        raise RuntimeError(
            "lift-progress: goal-type registry out of sync with GoalType. "
            f"Missing: {sorted(missing)}; unexpected: {sorted(extra)}"
        )
    return registry


GOAL_TYPE_REGISTRY: dict[str, GoalTypeDefinition] = _build_registry()


def get_goal_type(goal_type: str) -> GoalTypeDefinition:
    """
    Return the GoalTypeDefinition for the given goal type.

    Args:
        goal_type: One of "strength", "volume", "frequency"

    Returns:
        GoalTypeDefinition for the requested type

    Raises:
        ValueError: If goal_type is not in the registry
    """
    if goal_type not in GOAL_TYPE_REGISTRY:
        valid = ", ".join(GOAL_TYPE_REGISTRY)
        raise ValueError(f"Unknown goal type '{goal_type}'. Valid types: {valid}")
    return GOAL_TYPE_REGISTRY[goal_type]
