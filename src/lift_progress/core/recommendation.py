"""
Target recommendations: a fixed percentage uplift over the current value.

Advisory only; nothing here touches the Goal.
"""

import math

from .goal_types.registry import get_goal_type


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (107.5 → 108)."""
    # Snap float noise such as 107.49999999999999 before rounding.
    return math.floor(round(value, 6) + 0.5)


def recommend(goal_type: str, current_value: float | None) -> int | None:
    """
    Propose a target for a goal of ``goal_type``.

    strength → round(current × 1.075)
    volume   → round(current × 1.125)
    Goal types without an uplift (frequency) get no recommendation.

    Args:
        goal_type: "strength", "volume" or "frequency"
        current_value: Current metric value; None/0 means nothing to build on

    Returns:
        Recommended target, or None

    Raises:
        ValueError: If goal_type is unknown
    """
    definition = get_goal_type(goal_type)
    if definition.recommendation_uplift is None:
        return None
    if current_value is None or current_value <= 0:
        return None
    return round_half_up(current_value * definition.recommendation_uplift)
