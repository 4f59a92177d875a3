"""
Goal-type definitions for lift-progress.

Each goal type is described by a GoalTypeDefinition that tells the
progress engine how to measure it and how to recommend a target.
"""

from .base import GoalTypeDefinition
from .registry import GOAL_TYPE_REGISTRY, get_goal_type

__all__ = [
    "GoalTypeDefinition",
    "GOAL_TYPE_REGISTRY",
    "get_goal_type",
]
