"""Goal progress and trend analytics for workout history."""

__version__ = "0.1.0"
