"""Shared Typer app object, shared option types, and store utility."""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.logging import RichHandler

from ..core.models import WorkoutRecord
from ..io.serializers import ValidationError, validate_date
from ..io.snapshot_store import SnapshotStore, get_default_workouts_path
from . import views

# Shared options used across all commands
WorkoutsOption = Annotated[
    Optional[Path],
    typer.Option("--workouts-path", "-p", help="Path to exported workouts JSONL file"),
]
GoalsOption = Annotated[
    Optional[Path],
    typer.Option("--goals-path", "-g", help="Path to goals.json (default: next to workouts)"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]
TodayOption = Annotated[
    Optional[str],
    typer.Option("--today", help="Reference date YYYY-MM-DD (default: today)"),
]

app = typer.Typer(
    name="lift-progress",
    help="Workout trend analytics and goal progress tracking.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Workout trend analytics and goal progress tracking.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
        force=True,
    )


def get_store(workouts_path: Path | None, goals_path: Path | None = None) -> SnapshotStore:
    """Get snapshot store from paths or the default location."""
    if workouts_path is None:
        workouts_path = get_default_workouts_path()
    return SnapshotStore(workouts_path, goals_path)


def resolve_today(today: str | None) -> str:
    """Validate --today, defaulting to the current local date."""
    if today is None:
        return date.today().isoformat()
    try:
        return validate_date(today)
    except ValidationError as e:
        raise typer.BadParameter(str(e), param_hint="--today") from e


def load_workouts_or_exit(store: SnapshotStore) -> list[WorkoutRecord]:
    """Load workouts, printing the error and exiting with 1 on failure."""
    if not store.exists():
        views.print_error(f"Workouts file not found: {store.workouts_path}")
        views.print_info("Export your workouts as JSONL first, or pass --workouts-path.")
        raise typer.Exit(1)

    try:
        return store.load_workouts()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)
