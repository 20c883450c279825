"""Full statistics summary for one location/variable series.

Orchestrates: basic stats -> exceedance + bootstrap CI -> trend -> period
comparison, attaching units from the static variable table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable

import numpy as np

from climate_stats.compute.descriptive import BasicStats, basic_stats
from climate_stats.compute.exceedance import (
    ConfidenceInterval,
    bootstrap_ci,
    exceedance_probability,
)
from climate_stats.compute.periods import PeriodComparison, compare_periods, split_periods
from climate_stats.compute.series import PointLike, TimeSeriesPoint, YearRange, sort_by_year
from climate_stats.compute.trend import TrendSummary, trend_summary
from climate_stats.config import (
    DEFAULT_BOOTSTRAP_ITERATIONS,
    DEFAULT_CONFIDENCE_LEVEL,
    MIN_TREND_POINTS,
    units_for_variable,
)
from climate_stats.errors import InsufficientDataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatisticsSummary:
    variable: str
    units: str
    stats: BasicStats
    time_series: list[TimeSeriesPoint]
    p_exceed: float | None = None
    p_exceed_ci: ConfidenceInterval | None = None
    trend: TrendSummary | None = None
    baseline_vs_recent: PeriodComparison | None = None
    caveats: list[str] = field(default_factory=list)

    @property
    def n_years(self) -> int:
        return len({p.year for p in self.time_series})

    def as_dict(self) -> dict:
        result = {
            "variable": self.variable,
            "units": self.units,
            "n_years": self.n_years,
            "mean": self.stats.mean,
            "median": self.stats.median,
            "std": self.stats.std,
            "percentiles": self.stats.percentiles.as_dict(),
            "time_series": [p.as_dict() for p in self.time_series],
        }
        if self.p_exceed is not None:
            result["p_exceed"] = self.p_exceed
        if self.p_exceed_ci is not None:
            result["p_exceed_CI"] = self.p_exceed_ci.as_list()
        if self.trend is not None:
            result["trend"] = self.trend.as_dict()
        if self.baseline_vs_recent is not None:
            result["baseline_vs_recent"] = self.baseline_vs_recent.as_dict()
        if self.caveats:
            result["caveats"] = " ".join(self.caveats)
        return result


def compute_statistics(
    variable: str,
    series: Iterable[PointLike],
    threshold: float | None = None,
    baseline_period: YearRange | None = None,
    recent_period: YearRange | None = None,
    iterations: int = DEFAULT_BOOTSTRAP_ITERATIONS,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    tie_correction: bool = False,
) -> StatisticsSummary:
    """Compute the full statistics summary for a yearly series.

    Args:
        variable: Variable identifier, used only for the unit lookup.
        series: Yearly points, in any order (sorted by year here).
        threshold: If set, compute exceedance probability and its CI.
        baseline_period: Baseline year range for the period comparison.
        recent_period: Recent year range for the period comparison.
        iterations: Bootstrap resamples.
        confidence_level: Bootstrap confidence level.
        seed: Seed for the bootstrap when ``rng`` is not given.
        rng: Random generator for the bootstrap.
        tie_correction: Use the tie-adjusted Mann-Kendall variance.

    Returns:
        StatisticsSummary. Optional blocks are None when not requested or
        not computable; the reason is recorded in ``caveats``.

    Raises:
        InsufficientDataError: if the series is empty, or a requested period
            contains no observations.
    """
    points = sort_by_year(series)
    if not points:
        raise InsufficientDataError("Time series is empty")

    values = np.array([p.value for p in points])
    stats = basic_stats(values)
    caveats: list[str] = []

    p_exceed = None
    p_exceed_ci = None
    if threshold is not None:
        p_exceed = exceedance_probability(values, threshold)
        p_exceed_ci = bootstrap_ci(
            values, threshold,
            iterations=iterations,
            confidence_level=confidence_level,
            rng=rng,
            seed=seed,
        )

    trend = None
    if len(points) >= MIN_TREND_POINTS and len({p.year for p in points}) >= 2:
        trend = trend_summary(points, tie_correction=tie_correction)
    else:
        logger.warning("Trend omitted for %s: fewer than two distinct years", variable)
        caveats.append("Trend not computed: fewer than two distinct years of data.")

    baseline_vs_recent = None
    if threshold is not None and baseline_period is not None and recent_period is not None:
        baseline_values, recent_values = split_periods(points, baseline_period, recent_period)
        baseline_vs_recent = compare_periods(baseline_values, recent_values, threshold)
        if not baseline_vs_recent.is_computable:
            caveats.append(
                "Relative change not computable: no baseline year exceeded the threshold."
            )
    elif baseline_period is not None or recent_period is not None:
        caveats.append(
            "Baseline vs. recent comparison needs a threshold and both periods."
        )

    logger.info(
        "Computed statistics for %s: n=%d threshold=%s trend=%s",
        variable, stats.n, threshold, trend.direction.value if trend else None,
    )
    return StatisticsSummary(
        variable=variable,
        units=units_for_variable(variable),
        stats=stats,
        time_series=points,
        p_exceed=p_exceed,
        p_exceed_ci=p_exceed_ci,
        trend=trend,
        baseline_vs_recent=baseline_vs_recent,
        caveats=caveats,
    )
