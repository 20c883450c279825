"""Statistics engine: pure functions over in-memory yearly samples."""

from climate_stats.compute.descriptive import (
    BasicStats,
    PercentileLadder,
    basic_stats,
    percentile,
    percentile_ladder,
)
from climate_stats.compute.exceedance import (
    ConfidenceInterval,
    bootstrap_ci,
    exceedance_probability,
)
from climate_stats.compute.periods import (
    ComparisonStatus,
    PeriodComparison,
    compare_periods,
    split_periods,
)
from climate_stats.compute.samples import yearly_doy_series
from climate_stats.compute.series import TimeSeriesPoint, YearRange
from climate_stats.compute.summary import StatisticsSummary, compute_statistics
from climate_stats.compute.trend import (
    MannKendallResult,
    TrendDirection,
    TrendSummary,
    mann_kendall,
    normal_cdf,
    sens_slope,
    trend_summary,
)

__all__ = [
    "BasicStats",
    "ComparisonStatus",
    "ConfidenceInterval",
    "MannKendallResult",
    "PercentileLadder",
    "PeriodComparison",
    "StatisticsSummary",
    "TimeSeriesPoint",
    "TrendDirection",
    "TrendSummary",
    "YearRange",
    "basic_stats",
    "bootstrap_ci",
    "compare_periods",
    "compute_statistics",
    "exceedance_probability",
    "mann_kendall",
    "normal_cdf",
    "percentile",
    "percentile_ladder",
    "sens_slope",
    "split_periods",
    "trend_summary",
    "yearly_doy_series",
]
