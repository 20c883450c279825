"""Baseline vs. recent period comparison."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Iterable, Sequence

import numpy as np

from climate_stats.compute.exceedance import exceedance_probability
from climate_stats.compute.series import PointLike, YearRange, as_series
from climate_stats.errors import InsufficientDataError

logger = logging.getLogger(__name__)


class ComparisonStatus(str, Enum):
    OK = "ok"
    BASELINE_ZERO = "baseline_zero"


@dataclass(frozen=True)
class PeriodComparison:
    p_exceed_baseline: float
    p_exceed_recent: float
    delta_percent: float | None
    status: ComparisonStatus = ComparisonStatus.OK

    @property
    def is_computable(self) -> bool:
        return self.status == ComparisonStatus.OK

    def as_dict(self) -> dict:
        return {
            "p_exceed_baseline": self.p_exceed_baseline,
            "p_exceed_recent": self.p_exceed_recent,
            "delta_percent": self.delta_percent,
            "status": self.status.value,
        }


def compare_periods(
    baseline_values: Sequence[float] | np.ndarray,
    recent_values: Sequence[float] | np.ndarray,
    threshold: float,
) -> PeriodComparison:
    """Compare exceedance probability between a baseline and a recent sample.

    ``delta_percent`` is the relative change of the recent probability with
    respect to the baseline, in percent. When nothing in the baseline exceeds
    the threshold the relative change is undefined: the result then has
    ``status=BASELINE_ZERO`` and ``delta_percent=None``.
    """
    p_baseline = exceedance_probability(baseline_values, threshold)
    p_recent = exceedance_probability(recent_values, threshold)

    if p_baseline == 0:
        logger.warning(
            "Baseline exceedance is zero at threshold %s; relative change not computable",
            threshold,
        )
        return PeriodComparison(
            p_exceed_baseline=p_baseline,
            p_exceed_recent=p_recent,
            delta_percent=None,
            status=ComparisonStatus.BASELINE_ZERO,
        )

    return PeriodComparison(
        p_exceed_baseline=p_baseline,
        p_exceed_recent=p_recent,
        delta_percent=(p_recent - p_baseline) / p_baseline * 100,
    )


def split_periods(
    series: Iterable[PointLike],
    baseline: YearRange,
    recent: YearRange,
) -> tuple[list[float], list[float]]:
    """Partition a yearly series into baseline and recent value samples.

    Raises:
        ValueError: if the two year ranges overlap.
        InsufficientDataError: if either range selects no points.
    """
    if baseline.overlaps(recent):
        raise ValueError(
            f"Baseline {baseline.start_year}-{baseline.end_year} overlaps "
            f"recent {recent.start_year}-{recent.end_year}"
        )

    points = as_series(series)
    baseline_values = [p.value for p in points if baseline.contains(p.year)]
    recent_values = [p.value for p in points if recent.contains(p.year)]

    if not baseline_values:
        raise InsufficientDataError(
            f"No observations in baseline period {baseline.start_year}-{baseline.end_year}"
        )
    if not recent_values:
        raise InsufficientDataError(
            f"No observations in recent period {recent.start_year}-{recent.end_year}"
        )
    return baseline_values, recent_values
