"""
Calendar helpers shared by goal measurement and progress.

Dates are ISO YYYY-MM-DD strings throughout the engine.
"""

import calendar
from datetime import timedelta

from .config import DAYS_PER_WEEK, WEEK_STARTS_ON
from .models import Period, parse_iso_date


def days_between(start: str, end: str) -> int:
    """
    Signed whole days from ``start`` to ``end``.

    Negative when ``end`` is before ``start``.
    """
    return (parse_iso_date(end) - parse_iso_date(start)).days


def period_boundaries(period: Period, today: str) -> tuple[str, str]:
    """
    Inclusive first and last day of the period containing ``today``.

    Weeks run Monday to Sunday; months are calendar months.

    Args:
        period: "week" or "month"
        today: Reference date

    Returns:
        Tuple (start, end) as ISO dates

    Raises:
        ValueError: If period is unknown
    """
    d = parse_iso_date(today)
    if period == "week":
        start = d - timedelta(days=(d.weekday() - WEEK_STARTS_ON) % DAYS_PER_WEEK)
        end = start + timedelta(days=DAYS_PER_WEEK - 1)
        return start.isoformat(), end.isoformat()
    if period == "month":
        last_day = calendar.monthrange(d.year, d.month)[1]
        return d.replace(day=1).isoformat(), d.replace(day=last_day).isoformat()
    raise ValueError(f"Unknown period: {period}")
