"""
Configuration constants for the analytics engine.

All adjustable parameters are centralized here for easy tuning.
Status cutoffs can also be overridden from analytics.yaml, see
core/engine/config_loader.py.
"""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# ONE-REP-MAX ESTIMATION
# =============================================================================

EPLEY_REPS_DIVISOR: Final[float] = 30.0  # 1RM = w * (1 + reps / 30)

# =============================================================================
# TREND CLASSIFICATION
# =============================================================================

# |slope| / |mean| below this per-step ratio is reported as "stable"
TREND_RELATIVE_SLOPE_THRESHOLD: Final[float] = 0.02
TREND_MAGNITUDE_DECIMALS: Final[int] = 1  # Rounding of the reported % change
MIN_TREND_POINTS: Final[int] = 2

# =============================================================================
# GOAL PROGRESS
# =============================================================================

PROGRESS_PERCENT_MIN: Final[float] = 0.0
PROGRESS_PERCENT_MAX: Final[float] = 200.0  # Overshoot is kept up to 2x target

# No movement from baseline and no more than this share of the window elapsed
NOT_STARTED_MAX_ELAPSED_PERCENT: Final[float] = 10.0

# =============================================================================
# STATUS THRESHOLDS (percentage points of progress minus elapsed time)
# =============================================================================

STATUS_AHEAD_DELTA: Final[float] = 10.0
STATUS_BEHIND_DELTA: Final[float] = -10.0
STATUS_AT_RISK_DELTA: Final[float] = -30.0


@dataclass(frozen=True)
class StatusThresholds:
    """Cutoffs applied to ``delta = progress% - elapsed%``."""

    ahead: float = STATUS_AHEAD_DELTA      # delta >= ahead → "ahead"
    behind: float = STATUS_BEHIND_DELTA    # delta <= behind → "behind"
    at_risk: float = STATUS_AT_RISK_DELTA  # delta < at_risk → "at-risk"

    def __post_init__(self) -> None:
        if not self.at_risk <= self.behind < self.ahead:
            raise ValueError(
                "StatusThresholds must satisfy at_risk <= behind < ahead, "
                f"got at_risk={self.at_risk}, behind={self.behind}, ahead={self.ahead}"
            )


DEFAULT_STATUS_THRESHOLDS: Final[StatusThresholds] = StatusThresholds()

# =============================================================================
# MILESTONES
# =============================================================================

MILESTONE_THRESHOLDS: Final[tuple[int, ...]] = (25, 50, 75, 90, 100)

# =============================================================================
# RECOMMENDATIONS (uplift over the current value, by goal type)
# =============================================================================

STRENGTH_RECOMMENDATION_UPLIFT: Final[float] = 1.075
VOLUME_RECOMMENDATION_UPLIFT: Final[float] = 1.125

# =============================================================================
# TARGET REALISM CHECKS
# =============================================================================

MIN_STRENGTH_HISTORY_SESSIONS: Final[int] = 3  # Fewer sessions → unreliable 1RM
REALISTIC_STRENGTH_GAIN_PER_MONTH: Final[float] = 5.0  # % of 1RM per 4 weeks
AMBITIOUS_TARGET_FACTOR: Final[float] = 1.5  # Warn beyond 1.5x the realistic gain
MAX_VOLUME_INCREASE_PERCENT: Final[float] = 50.0
MAX_WEEKLY_SESSIONS: Final[int] = 7

# =============================================================================
# CALENDAR
# =============================================================================

DAYS_PER_WEEK: Final[int] = 7
WEEK_STARTS_ON: Final[int] = 0  # Monday (datetime.weekday())


def safe_denominator(value: float) -> float:
    """
    Return ``value`` unless it is zero, in which case return 1.

    Every ratio in the engine divides through this so that a zero
    maximum/mean/span never yields inf or nan.

    Args:
        value: Candidate denominator

    Returns:
        ``value`` or 1.0
    """
    return value if value != 0 else 1.0
