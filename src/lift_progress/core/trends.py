"""
Trend analysis over ordered, dated series.

Descriptive statistics (mean, min/max with their dates) and an ordinary
least-squares trend of value against the 0-based sequence index.
"""

from datetime import timedelta
from typing import Sequence

from .config import (
    MIN_TREND_POINTS,
    TREND_MAGNITUDE_DECIMALS,
    TREND_RELATIVE_SLOPE_THRESHOLD,
    safe_denominator,
)
from .models import (
    RegressionTrend,
    SeriesDescription,
    SeriesPoint,
    TrendDirection,
    TrendStats,
    parse_iso_date,
)


def describe(series: Sequence[SeriesPoint]) -> SeriesDescription:
    """
    Mean of the values plus minimum and maximum paired with their dates.

    The first occurrence wins ties for both extremes.

    Args:
        series: Ordered points

    Returns:
        SeriesDescription; all fields None for an empty series
    """
    if not series:
        return SeriesDescription(average=None, minimum=None, maximum=None)

    minimum = series[0]
    maximum = series[0]
    for point in series[1:]:
        if point.value < minimum.value:
            minimum = point
        if point.value > maximum.value:
            maximum = point

    average = sum(p.value for p in series) / len(series)
    return SeriesDescription(average=average, minimum=minimum, maximum=maximum)


def linear_regression(values: Sequence[float]) -> tuple[float, float, float]:
    """
    Least squares fit y = a + b*x where x is the 0-based index.

    R² is 1.0 for a perfectly flat series (nothing left to explain).

    Args:
        values: Ordered y values

    Returns:
        Tuple (intercept a, slope b, r_squared)
    """
    n = len(values)
    if n < MIN_TREND_POINTS:
        if n == 1:
            return (float(values[0]), 0.0, 0.0)
        return (0.0, 0.0, 0.0)

    sum_x = sum(range(n))
    sum_y = sum(values)
    sum_xy = sum(i * y for i, y in enumerate(values))
    sum_x2 = sum(i * i for i in range(n))

    # n >= 2 with distinct x keeps this positive; guard anyway
    denominator = n * sum_x2 - sum_x**2
    if abs(denominator) < 1e-10:
        return (sum_y / n, 0.0, 0.0)

    b = (n * sum_xy - sum_x * sum_y) / denominator
    a = (sum_y - b * sum_x) / n

    y_mean = sum_y / n
    ss_total = sum((y - y_mean) ** 2 for y in values)
    ss_residual = sum((y - (a + b * i)) ** 2 for i, y in enumerate(values))
    r_squared = 1.0 if ss_total == 0 else 1 - ss_residual / ss_total

    return (a, b, r_squared)


def classify_slope(
    slope: float,
    mean: float,
    threshold: float = TREND_RELATIVE_SLOPE_THRESHOLD,
) -> TrendDirection:
    """
    Classify a slope relative to the series mean.

    |slope| / |mean| < threshold → "stable". A zero mean is treated as 1.
    """
    relative = slope / safe_denominator(abs(mean))
    if abs(relative) < threshold:
        return "stable"
    return "increasing" if relative > 0 else "decreasing"


def regression_trend(
    series: Sequence[SeriesPoint],
    threshold: float = TREND_RELATIVE_SLOPE_THRESHOLD,
) -> RegressionTrend:
    """
    Fit a linear trend and classify its direction.

    Magnitude is the percent change of the fitted line from the first to the
    last index, rounded for display. With fewer than two points the trend is
    stable with slope 0 and an empty line.

    Args:
        series: Ordered points
        threshold: Relative slope below which the trend is "stable"

    Returns:
        RegressionTrend
    """
    if len(series) < MIN_TREND_POINTS:
        intercept = series[0].value if series else 0.0
        return RegressionTrend(
            direction="stable",
            slope=0.0,
            intercept=float(intercept),
            r_squared=0.0,
            magnitude=0.0,
        )

    values = [p.value for p in series]
    intercept, slope, r_squared = linear_regression(values)
    mean = sum(values) / len(values)

    line = tuple(intercept + slope * i for i in range(len(values)))
    start, end = line[0], line[-1]
    change_pct = (end - start) / safe_denominator(abs(start)) * 100

    return RegressionTrend(
        direction=classify_slope(slope, mean, threshold),
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
        magnitude=round(abs(change_pct), TREND_MAGNITUDE_DECIMALS),
        line=line,
    )


def analyze_series(
    series: Sequence[SeriesPoint],
    threshold: float = TREND_RELATIVE_SLOPE_THRESHOLD,
) -> TrendStats:
    """Descriptive statistics and regression trend of one series."""
    desc = describe(series)
    return TrendStats(
        average=desc.average,
        minimum=desc.minimum,
        maximum=desc.maximum,
        trend=regression_trend(series, threshold),
    )


def predict_completion(series: Sequence[SeriesPoint], target: float) -> str | None:
    """
    Project the date on which the fitted trend reaches ``target``.

    Steps along the regression line are converted to days using the average
    spacing between consecutive dates in the series.

    Args:
        series: Ordered points (e.g. a 1RM history)
        target: Value to reach

    Returns:
        ISO date, the last date if the line is already past the target, or
        None with fewer than two points, all points on one day, or a
        non-positive slope
    """
    if len(series) < MIN_TREND_POINTS:
        return None
    span_days = (parse_iso_date(series[-1].date) - parse_iso_date(series[0].date)).days
    if span_days <= 0:
        return None

    intercept, slope, _ = linear_regression([p.value for p in series])
    if slope <= 0:
        return None

    last_index = len(series) - 1
    last_date = parse_iso_date(series[-1].date)
    steps_remaining = (target - intercept) / slope - last_index
    if steps_remaining <= 0:
        return series[-1].date

    avg_days_between = span_days / last_index
    days_to_target = round(steps_remaining * avg_days_between)
    return (last_date + timedelta(days=days_to_target)).isoformat()
