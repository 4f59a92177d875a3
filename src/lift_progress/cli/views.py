"""
CLI view formatters using Rich for pretty console output.

Unit and number formatting lives here; the core returns raw values.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.goal_types.registry import get_goal_type
from ..core.models import (
    Goal,
    GoalProgress,
    GoalSummary,
    SeriesPoint,
    SessionSummary,
    TrendStats,
)

console = Console()

STATUS_STYLES: dict[str, str] = {
    "achieved": "bold green",
    "ahead": "green",
    "on-track": "cyan",
    "not-started": "dim",
    "behind": "yellow",
    "at-risk": "red",
    "expired": "bold red",
}

TREND_ARROWS: dict[str, str] = {
    "increasing": "↑",
    "decreasing": "↓",
    "stable": "→",
}


def _fmt_number(value: float | None, unit: str = "", decimals: int = 1) -> str:
    if value is None:
        return "-"
    text = f"{value:,.{decimals}f}"
    return f"{text} {unit}".rstrip()


def _fmt_point(point: SeriesPoint | None, unit: str) -> str:
    if point is None:
        return "-"
    return f"{_fmt_number(point.value, unit)} ({point.date})"


def format_sessions_table(summaries: list[SessionSummary]) -> Table:
    """
    Create a Rich table of session summaries.

    Args:
        summaries: Summaries to display

    Returns:
        Rich Table object
    """
    table = Table(title="Sessions")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Duration", justify="right")
    table.add_column("Volume", justify="right", style="bold")
    table.add_column("Exercises", justify="right")

    for i, s in enumerate(summaries, 1):
        table.add_row(
            str(i),
            s.date,
            _fmt_number(s.duration_minutes, "min", 0) if s.duration_minutes > 0 else "-",
            _fmt_number(s.volume_kg, "kg", 0),
            str(s.exercise_count),
        )

    return table


def format_trend_display(stats: TrendStats, title: str, unit: str = "") -> str:
    """
    Format trend statistics as a text block.

    Args:
        stats: TrendStats to display
        title: Heading line
        unit: Unit suffix for values

    Returns:
        Formatted string
    """
    trend = stats.trend
    arrow = TREND_ARROWS[trend.direction]
    lines = [
        title,
        f"- Average:  {_fmt_number(stats.average, unit)}",
        f"- Lowest:   {_fmt_point(stats.minimum, unit)}",
        f"- Highest:  {_fmt_point(stats.maximum, unit)}",
        f"- Trend:    {arrow} {trend.direction} ({trend.magnitude:.1f}%)",
    ]
    if trend.is_drawable:
        lines.append(f"- Slope:    {trend.slope:+.2f} {unit}/session  (R² {trend.r_squared:.2f})".rstrip())
    return "\n".join(lines)


def format_one_rm_table(history: list[SeriesPoint], exercise_id: str) -> Table:
    """Rich table of per-session estimated 1RM."""
    table = Table(title=f"Estimated 1RM: {exercise_id}")
    table.add_column("Date", style="cyan")
    table.add_column("1RM", justify="right", style="bold")
    for point in history:
        table.add_row(point.date, _fmt_number(point.value, "kg"))
    return table


def format_goal_table(goals: list[Goal], progress: list[GoalProgress]) -> Table:
    """
    Create a Rich table of goal progress.

    Args:
        goals: Goal definitions (same order as progress)
        progress: Computed progress per goal

    Returns:
        Rich Table object
    """
    table = Table(title="Goals")

    table.add_column("Goal", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Current", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Progress", justify="right", style="bold")
    table.add_column("Status")
    table.add_column("Days left", justify="right")

    for goal, p in zip(goals, progress):
        definition = get_goal_type(goal.goal_type)
        unit = definition.unit
        decimals = 0 if unit == "sessions" else 1
        if p.target_value is None:
            target_cell = (
                f"[dim]suggest {p.recommended_target}[/dim]"
                if p.recommended_target is not None else "-"
            )
        else:
            target_cell = _fmt_number(p.target_value, unit, decimals)
        style = STATUS_STYLES.get(p.status, "")
        table.add_row(
            escape(goal.label),
            definition.display_name,
            _fmt_number(p.current_value, unit, decimals),
            target_cell,
            f"{p.progress_percent:.0f}%",
            f"[{style}]{p.status}[/{style}]" if style else p.status,
            str(p.days_remaining) if p.days_remaining is not None else "-",
        )

    return table


def format_goal_summary(summary: GoalSummary) -> str:
    """Format the goal summary as a text block."""
    return "\n".join([
        "Summary",
        f"- Goals:           {summary.total}",
        f"- Achieved:        {summary.achieved}",
        f"- On track:        {summary.on_track}",
        f"- At risk:         {summary.at_risk}",
        f"- Completion rate: {summary.completion_rate:.0f}%",
    ])


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{escape(message)}[/blue]")
