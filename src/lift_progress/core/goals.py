"""
Goal progress engine: progress percent, status classification, days left.

Given a goal, its current value, an optional baseline and today's date,
compute the goal's live state. Pure; recomputed on every call from the
snapshot the caller passes in.
"""

import logging
from collections import Counter
from dataclasses import replace
from typing import Iterable, Sequence

from .config import (
    DAYS_PER_WEEK,
    DEFAULT_STATUS_THRESHOLDS,
    MILESTONE_THRESHOLDS,
    NOT_STARTED_MAX_ELAPSED_PERCENT,
    PROGRESS_PERCENT_MAX,
    PROGRESS_PERCENT_MIN,
    StatusThresholds,
    safe_denominator,
)
from .dates import days_between, period_boundaries
from .errors import ConfigurationError
from .goal_types.registry import get_goal_type
from .models import (
    Goal,
    GoalProgress,
    GoalStatus,
    GoalSummary,
    RequiredPace,
    WorkoutRecord,
)
from .recommendation import recommend
from .strength import one_rep_max_history
from .trends import predict_completion

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def progress_percent(current: float, target: float, baseline: float = 0.0) -> float:
    """
    Share of the baseline→target distance covered so far.

    pct = clip((current - baseline) / (target - baseline) * 100, MIN, MAX)

    Args:
        current: Current metric value
        target: Goal target
        baseline: Value at goal creation (zero point)

    Returns:
        Progress percent, 0 to PROGRESS_PERCENT_MAX

    Raises:
        ConfigurationError: If target equals baseline
    """
    span = target - baseline
    if span == 0:
        raise ConfigurationError(
            f"goal target ({target}) equals its baseline; progress is undefined"
        )
    raw = (current - baseline) / span * 100
    return _clamp(raw, PROGRESS_PERCENT_MIN, PROGRESS_PERCENT_MAX)


def is_achieved(current: float, target: float, baseline: float = 0.0) -> bool:
    """
    Whether current has reached the target.

    Direction follows the goal: ``>=`` when the target is above the baseline,
    ``<=`` when the goal is to come down from it.
    """
    if target >= baseline:
        return current >= target
    return current <= target


def elapsed_ratio(start: str, end: str, today: str) -> float:
    """
    Fraction of the [start, end] window that has passed as of ``today``.

    A zero-length window divides by 1 instead of 0. Result is clipped to 0–1.
    """
    total_days = days_between(start, end)
    elapsed_days = days_between(start, today)
    return _clamp(elapsed_days / safe_denominator(total_days), 0.0, 1.0)


def derive_status(
    *,
    achieved: bool,
    progress: float,
    expected_percent: float | None,
    days_remaining: int | None,
    no_progress: bool = False,
    thresholds: StatusThresholds = DEFAULT_STATUS_THRESHOLDS,
) -> GoalStatus:
    """
    Classify a goal, in priority order.

    1. achieved
    2. expired: deadline passed (days_remaining < 0)
    3. not-started: no movement from baseline and little time elapsed
    4. delta = progress - expected_percent:
         delta >= ahead            → ahead
         behind < delta < ahead    → on-track
         at_risk <= delta <= behind → behind
         delta < at_risk           → at-risk

    Without a deadline (days_remaining / expected_percent None) only
    achieved vs on-track is distinguished.

    Args:
        achieved: Result of is_achieved()
        progress: Progress percent
        expected_percent: Elapsed share of the goal window × 100
        days_remaining: Signed days until deadline
        no_progress: Current value still equals the baseline
        thresholds: Status cutoffs

    Returns:
        GoalStatus
    """
    if achieved:
        return "achieved"
    if days_remaining is None or expected_percent is None:
        return "on-track"
    if days_remaining < 0:
        return "expired"
    if no_progress and expected_percent <= NOT_STARTED_MAX_ELAPSED_PERCENT:
        return "not-started"

    delta = progress - expected_percent
    if delta >= thresholds.ahead:
        return "ahead"
    if delta > thresholds.behind:
        return "on-track"
    if delta >= thresholds.at_risk:
        return "behind"
    return "at-risk"


def required_pace(current: float, target: float, days_remaining: int) -> RequiredPace | None:
    """
    Rate needed to close the gap before the deadline.

    Returns None once no days are left.
    """
    if days_remaining <= 0:
        return None
    remaining = target - current
    return RequiredPace(
        per_day=remaining / days_remaining,
        per_week=remaining / (days_remaining / DAYS_PER_WEEK),
        total=remaining,
    )


def detect_milestones(progress: float, reached: Iterable[int] = ()) -> tuple[int, ...]:
    """Milestone thresholds crossed by ``progress`` that are not in ``reached`` yet."""
    already = set(reached)
    return tuple(m for m in MILESTONE_THRESHOLDS if progress >= m and m not in already)


def next_milestone(progress: float, reached: Iterable[int] = ()) -> int | None:
    """First milestone threshold still ahead of ``progress``, or None."""
    already = set(reached)
    for m in MILESTONE_THRESHOLDS:
        if progress < m and m not in already:
            return m
    return None


def compute_goal_progress(
    goal: Goal,
    current_value: float,
    today: str,
    baseline: float | None = None,
    thresholds: StatusThresholds = DEFAULT_STATUS_THRESHOLDS,
) -> GoalProgress:
    """
    Compute the live progress state of one goal.

    While the goal has no target yet, progress is 0, status is
    "not-started" ("expired" once the deadline has passed) and a
    recommended target is attached instead.

    Args:
        goal: Goal definition
        current_value: Metric value measured by the caller
        today: Reference date (YYYY-MM-DD)
        baseline: Overrides goal.baseline_value; 0 when both are absent
        thresholds: Status cutoffs

    Returns:
        GoalProgress

    Raises:
        ConfigurationError: If the target equals the baseline
    """
    if baseline is None:
        baseline = goal.baseline_value if goal.baseline_value is not None else 0.0

    period_start = period_end = None
    if get_goal_type(goal.goal_type).uses_period and goal.period is not None:
        period_start, period_end = period_boundaries(goal.period, today)

    days_remaining: int | None = None
    expected: float | None = None
    if goal.deadline is not None:
        days_remaining = days_between(today, goal.deadline)
        expected = elapsed_ratio(goal.created_at, goal.deadline, today) * 100

    if goal.target_value is None:
        expired = days_remaining is not None and days_remaining < 0
        return GoalProgress(
            goal_id=goal.id,
            goal_type=goal.goal_type,
            current_value=current_value,
            target_value=None,
            baseline_value=baseline,
            progress_percent=0.0,
            status="expired" if expired else "not-started",
            days_remaining=days_remaining,
            expected_percent=expected,
            recommended_target=recommend(goal.goal_type, current_value),
            period_start=period_start,
            period_end=period_end,
        )

    target = goal.target_value
    pct = progress_percent(current_value, target, baseline)
    achieved = is_achieved(current_value, target, baseline)
    status = derive_status(
        achieved=achieved,
        progress=pct,
        expected_percent=expected,
        days_remaining=days_remaining,
        no_progress=current_value == baseline,
        thresholds=thresholds,
    )

    pace = None
    if not achieved and days_remaining is not None:
        pace = required_pace(current_value, target, days_remaining)

    return GoalProgress(
        goal_id=goal.id,
        goal_type=goal.goal_type,
        current_value=current_value,
        target_value=target,
        baseline_value=baseline,
        progress_percent=pct,
        status=status,
        days_remaining=days_remaining,
        expected_percent=expected,
        new_milestones=detect_milestones(pct, goal.milestones_reached),
        next_milestone=next_milestone(pct, goal.milestones_reached),
        required_pace=pace,
        period_start=period_start,
        period_end=period_end,
    )


def measure_current_value(goal: Goal, records: Sequence[WorkoutRecord], today: str) -> float:
    """Measure a goal's current value from workout history via its goal type."""
    return get_goal_type(goal.goal_type).measure(goal, records, today)


def validate_goal_targets(
    goal: Goal,
    records: Sequence[WorkoutRecord],
    today: str,
) -> list[str]:
    """
    Realism warnings for a goal's target, from its goal type.

    Advisory only: a goal with warnings is still evaluated normally.

    Args:
        goal: Goal definition
        records: Chronologically ordered workouts
        today: Reference date

    Returns:
        Warning messages (empty when nothing looks off)
    """
    warnings = get_goal_type(goal.goal_type).check_targets(goal, records, today)
    if warnings:
        logger.debug("goal %s: %d target warning(s)", goal.id, len(warnings))
    return warnings


def evaluate_goal(
    goal: Goal,
    records: Sequence[WorkoutRecord],
    today: str,
    thresholds: StatusThresholds = DEFAULT_STATUS_THRESHOLDS,
) -> GoalProgress:
    """
    Measure and evaluate a goal against a history snapshot.

    Strength goals with a target also get a projected completion date from
    the trend of their 1RM history.

    Args:
        goal: Goal definition
        records: Chronologically ordered workouts
        today: Reference date
        thresholds: Status cutoffs

    Returns:
        GoalProgress

    Raises:
        ConfigurationError: If the goal's target equals its baseline
    """
    current = measure_current_value(goal, records, today)
    progress = compute_goal_progress(goal, current, today, thresholds=thresholds)
    logger.debug(
        "goal %s (%s): current=%.2f progress=%.1f%% status=%s",
        goal.id, goal.goal_type, current, progress.progress_percent, progress.status,
    )

    if goal.goal_type == "strength" and goal.target_value is not None and progress.status != "achieved":
        history = one_rep_max_history(
            (r for r in records if r.date <= today), goal.exercise_id or ""
        )
        progress = replace(
            progress, predicted_completion=predict_completion(history, goal.target_value)
        )
    return progress


def summarize_goals(progress_list: Sequence[GoalProgress]) -> GoalSummary:
    """
    Aggregate counts across goals.

    completion_rate is the mean progress percent with each goal capped at
    100, so one overshooting goal cannot mask the rest.
    """
    counts = Counter(p.status for p in progress_list)
    total = len(progress_list)
    completion = (
        sum(min(p.progress_percent, 100.0) for p in progress_list) / total if total else 0.0
    )
    return GoalSummary(
        total=total,
        achieved=counts["achieved"],
        on_track=counts["on-track"] + counts["ahead"] + counts["achieved"],
        at_risk=counts["at-risk"],
        completion_rate=completion,
        by_status=dict(counts),
    )
