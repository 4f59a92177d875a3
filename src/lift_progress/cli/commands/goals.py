"""Goal commands: goals, recommend."""

import json
from typing import Annotated

import typer

from ...core.engine.config_loader import load_status_thresholds
from ...core.errors import ConfigurationError
from ...core.goal_types.registry import GOAL_TYPE_REGISTRY
from ...core.goals import evaluate_goal, summarize_goals, validate_goal_targets
from ...core.recommendation import recommend as recommend_target
from ...io.serializers import ValidationError, goal_progress_to_dict, goal_summary_to_dict
from .. import views
from ..app import (
    GoalsOption,
    JsonOption,
    TodayOption,
    WorkoutsOption,
    app,
    get_store,
    load_workouts_or_exit,
    resolve_today,
)


@app.command()
def goals(
    workouts_path: WorkoutsOption = None,
    goals_path: GoalsOption = None,
    today: TodayOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show live progress and status for every goal.
    """
    ref_date = resolve_today(today)
    store = get_store(workouts_path, goals_path)
    records = load_workouts_or_exit(store)

    try:
        goal_list = store.load_goals()
        thresholds = load_status_thresholds()
    except (ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    try:
        progress = [evaluate_goal(g, records, ref_date, thresholds) for g in goal_list]
    except ConfigurationError as e:
        views.print_error(f"Invalid goal configuration: {e}")
        raise typer.Exit(1)

    summary = summarize_goals(progress)
    target_warnings = {g.id: validate_goal_targets(g, records, ref_date) for g in goal_list}

    if json_out:
        print(json.dumps({
            "today": ref_date,
            "goals": [goal_progress_to_dict(p) for p in progress],
            "summary": goal_summary_to_dict(summary),
            "warnings": {gid: w for gid, w in target_warnings.items() if w},
        }, indent=2))
        return

    if not goal_list:
        views.console.print("[yellow]No goals defined yet.[/yellow]")
        return

    views.console.print(views.format_goal_table(goal_list, progress))
    views.console.print()
    views.console.print(views.format_goal_summary(summary))

    for goal in goal_list:
        for message in target_warnings[goal.id]:
            views.print_warning(f"{goal.label}: {message}")


@app.command()
def recommend(
    goal_type: Annotated[
        str,
        typer.Argument(help="Goal type: strength, volume or frequency"),
    ],
    current: Annotated[
        float,
        typer.Argument(help="Current value (1RM in kg, or period volume in kg)"),
    ],
    json_out: JsonOption = False,
) -> None:
    """
    Suggest a target as an uplift over the current value.
    """
    if goal_type not in GOAL_TYPE_REGISTRY:
        views.print_error(
            f"Unknown goal type '{goal_type}'. Valid types: {', '.join(GOAL_TYPE_REGISTRY)}"
        )
        raise typer.Exit(1)

    target = recommend_target(goal_type, current)

    if json_out:
        print(json.dumps({
            "goal_type": goal_type,
            "current_value": current,
            "recommended_target": target,
        }, indent=2))
        return

    if target is None:
        views.print_warning(f"No recommendation available for a {goal_type} goal at {current:g}.")
        return
    unit = GOAL_TYPE_REGISTRY[goal_type].unit
    views.print_success(f"Recommended {goal_type} target: {target} {unit}")
