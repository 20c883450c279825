"""Non-parametric trend analysis: Mann-Kendall test and Sen's slope.

Both operate on a yearly series assumed to be in chronological order and
compare every pair of points, so cost grows as O(n^2).

Mann-Kendall uses the tie-free variance ``n(n-1)(2n+5)/18`` by default.
Real weather series often contain ties (e.g. repeated zero-precipitation
years), which makes the default variance slightly too large and the test
slightly conservative. Pass ``tie_correction=True`` for the standard
tie-adjusted variance.

The two-tailed p-value uses the Zelen & Severo (1964) polynomial
approximation of the normal CDF. The polynomial's own absolute error is
below 7.5e-8; the seven-digit coefficients used here add up to ~2e-7.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import math
from typing import Iterable

import numpy as np

from climate_stats.compute.series import PointLike, as_series
from climate_stats.config import MIN_TREND_POINTS, TREND_METHOD
from climate_stats.errors import (
    InsufficientDataError,
    InvalidSampleError,
    NonChronologicalSeriesError,
)

logger = logging.getLogger(__name__)


class TrendDirection(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    NO_TREND = "no trend"


@dataclass(frozen=True)
class MannKendallResult:
    statistic: int
    z_score: float
    p_value: float
    trend: TrendDirection

    def as_dict(self) -> dict:
        return {
            "statistic": self.statistic,
            "z_score": self.z_score,
            "p_value": self.p_value,
            "trend": self.trend.value,
        }


@dataclass(frozen=True)
class TrendSummary:
    """Sen's slope and Mann-Kendall significance as reported together."""

    slope: float
    p_value: float
    z_score: float
    statistic: int
    direction: TrendDirection
    method: str = TREND_METHOD

    def as_dict(self) -> dict:
        return {
            "slope": self.slope,
            "p_value": self.p_value,
            "method": self.method,
            "z_score": self.z_score,
            "statistic": self.statistic,
            "direction": self.direction.value,
        }


def mann_kendall(series: Iterable[PointLike], tie_correction: bool = False) -> MannKendallResult:
    """Mann-Kendall monotonic trend test with continuity correction.

    Args:
        series: Points in chronological order.
        tie_correction: Subtract the tie-group term from the variance of S.

    Returns:
        MannKendallResult with S, Z, two-tailed p-value and direction.

    Raises:
        InsufficientDataError: if fewer than 2 points are given.
    """
    points = as_series(series)
    n = len(points)
    if n < MIN_TREND_POINTS:
        raise InsufficientDataError(f"Mann-Kendall needs at least {MIN_TREND_POINTS} points, got {n}")

    values = np.array([p.value for p in points])
    upper = np.triu_indices(n, k=1)
    # diffs[i, j] = values[j] - values[i]
    diffs = values[np.newaxis, :] - values[:, np.newaxis]
    s = int(np.sign(diffs[upper]).sum())

    var_s = n * (n - 1) * (2 * n + 5) / 18
    if tie_correction:
        _, counts = np.unique(values, return_counts=True)
        ties = counts[counts > 1]
        var_s -= float(np.sum(ties * (ties - 1) * (2 * ties + 5))) / 18

    if s == 0 or var_s <= 0:
        z = 0.0
    elif s > 0:
        z = (s - 1) / math.sqrt(var_s)
    else:
        z = (s + 1) / math.sqrt(var_s)

    p_value = min(max(2 * (1 - normal_cdf(abs(z))), 0.0), 1.0)

    if s > 0:
        trend = TrendDirection.INCREASING
    elif s < 0:
        trend = TrendDirection.DECREASING
    else:
        trend = TrendDirection.NO_TREND

    return MannKendallResult(statistic=s, z_score=z, p_value=p_value, trend=trend)


def sens_slope(series: Iterable[PointLike]) -> float:
    """Theil-Sen slope: the median of all pairwise slopes, in units per year.

    Pairs that share a year have no defined slope and are skipped. The median
    is ``slopes[len // 2]`` of the sorted slopes, the same upper-middle
    convention as ``basic_stats``.

    Raises:
        InsufficientDataError: if fewer than 2 points, or no two distinct years.
        NonChronologicalSeriesError: if years decrease anywhere in the series.
        InvalidSampleError: if the median slope overflows the float range.
    """
    points = as_series(series)
    n = len(points)
    if n < MIN_TREND_POINTS:
        raise InsufficientDataError(f"Sen's slope needs at least {MIN_TREND_POINTS} points, got {n}")

    years = np.array([p.year for p in points], dtype=float)
    values = np.array([p.value for p in points])
    if np.any(np.diff(years) < 0):
        raise NonChronologicalSeriesError("Series years must be in ascending order")

    upper = np.triu_indices(n, k=1)
    d_years = (years[np.newaxis, :] - years[:, np.newaxis])[upper]
    d_values = (values[np.newaxis, :] - values[:, np.newaxis])[upper]

    distinct = d_years != 0
    if not np.any(distinct):
        raise InsufficientDataError("Sen's slope needs at least two distinct years")

    skipped = int(np.count_nonzero(~distinct))
    if skipped:
        logger.debug("Sen's slope skipped %d same-year pairs", skipped)

    slopes = np.sort(d_values[distinct] / d_years[distinct])
    slope = float(slopes[slopes.size // 2])
    if not math.isfinite(slope):
        raise InvalidSampleError("Sen's slope exceeds the floating point range")
    return slope


def trend_summary(series: Iterable[PointLike], tie_correction: bool = False) -> TrendSummary:
    """Run both trend estimators on the same series."""
    points = as_series(series)
    mk = mann_kendall(points, tie_correction=tie_correction)
    return TrendSummary(
        slope=sens_slope(points),
        p_value=mk.p_value,
        z_score=mk.z_score,
        statistic=mk.statistic,
        direction=mk.trend,
    )


def normal_cdf(z: float) -> float:
    """Standard normal CDF via the Zelen & Severo rational approximation."""
    t = 1 / (1 + 0.2316419 * abs(z))
    d = 0.3989423 * math.exp(-z * z / 2)
    tail = d * t * (0.3193815 + t * (-0.3565638 + t * (1.781478 + t * (-1.821256 + t * 1.330274))))
    return 1 - tail if z > 0 else tail
