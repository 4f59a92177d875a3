"""Analysis commands: sessions, trend, one-rm."""

import json
from typing import Annotated, Optional

import typer

from ...core.engine.config_loader import load_trend_threshold
from ...core.models import SESSION_METRICS
from ...core.sessions import session_series, summarize_sessions
from ...core.strength import one_rep_max_history, personal_record
from ...core.trends import analyze_series
from ...io.serializers import (
    series_point_to_dict,
    session_summary_to_dict,
    trend_stats_to_dict,
)
from .. import views
from ..app import JsonOption, WorkoutsOption, app, get_store, load_workouts_or_exit

METRIC_UNITS: dict[str, str] = {
    "duration_minutes": "min",
    "volume_kg": "kg",
    "exercise_count": "",
}

METRIC_TITLES: dict[str, str] = {
    "duration_minutes": "Session duration",
    "volume_kg": "Session volume",
    "exercise_count": "Exercises per session",
}


@app.command()
def sessions(
    workouts_path: WorkoutsOption = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", help="Only show the most recent N sessions"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show per-session summaries (duration, volume, exercise count).
    """
    store = get_store(workouts_path)
    records = load_workouts_or_exit(store)

    summaries = summarize_sessions(records)
    if limit is not None and limit > 0:
        summaries = summaries[-limit:]

    if json_out:
        print(json.dumps({"sessions": [session_summary_to_dict(s) for s in summaries]}, indent=2))
        return

    if not summaries:
        views.console.print("[yellow]No sessions recorded yet.[/yellow]")
        return
    views.console.print(views.format_sessions_table(summaries))


@app.command()
def trend(
    workouts_path: WorkoutsOption = None,
    metric: Annotated[
        str,
        typer.Option(
            "--metric", "-m",
            help="Session metric: duration_minutes (default), volume_kg, exercise_count",
        ),
    ] = "duration_minutes",
    json_out: JsonOption = False,
) -> None:
    """
    Show average, extremes and trend of a session metric.
    """
    if metric not in SESSION_METRICS:
        views.print_error(f"Unknown metric: {metric}. Valid: {', '.join(SESSION_METRICS)}")
        raise typer.Exit(1)

    store = get_store(workouts_path)
    records = load_workouts_or_exit(store)

    series = session_series(summarize_sessions(records), metric)  # type: ignore[arg-type]
    stats = analyze_series(series, threshold=load_trend_threshold())

    if json_out:
        print(json.dumps({"metric": metric, **trend_stats_to_dict(stats)}, indent=2))
        return

    views.console.print()
    views.console.print(
        views.format_trend_display(stats, METRIC_TITLES[metric], METRIC_UNITS[metric])
    )
    views.console.print()


@app.command("one-rm")
def one_rm(
    exercise_id: Annotated[
        str,
        typer.Option("--exercise", "-e", help="Exercise ID to track"),
    ],
    workouts_path: WorkoutsOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show estimated 1RM per session, personal record, and trend for an exercise.
    """
    store = get_store(workouts_path)
    records = load_workouts_or_exit(store)

    history = one_rep_max_history(records, exercise_id)
    best = personal_record(history)
    stats = analyze_series(history, threshold=load_trend_threshold())

    if json_out:
        print(json.dumps({
            "exercise_id": exercise_id,
            "history": [series_point_to_dict(p) for p in history],
            "personal_record": series_point_to_dict(best),
            "trend": trend_stats_to_dict(stats)["trend"],
        }, indent=2))
        return

    if not history:
        views.print_warning(f"No working sets logged for '{exercise_id}'.")
        return

    views.console.print(views.format_one_rm_table(history, exercise_id))
    views.console.print(
        views.format_trend_display(stats, f"{exercise_id} 1RM", "kg")
    )
