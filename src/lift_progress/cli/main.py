"""
CLI entry point using Typer.

Provides commands over an exported workout/goal snapshot:
- sessions: Per-session summaries
- trend: Average, extremes and trend of a session metric
- one-rm: Estimated 1RM history and personal record
- goals: Live goal progress and status
- recommend: Suggested goal target
"""

from .app import app
from .commands import analysis, goals  # noqa: F401  registers commands on app

__all__ = ["app"]


if __name__ == "__main__":
    app()
