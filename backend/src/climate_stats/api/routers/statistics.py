"""Statistics endpoint: climatological summary for one yearly series."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from climate_stats.api.schemas import StatisticsRequest, StatisticsResponse
from climate_stats.compute.series import YearRange
from climate_stats.compute.summary import compute_statistics

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/statistics", response_model=StatisticsResponse)
def post_statistics(body: StatisticsRequest) -> StatisticsResponse:
    """Compute descriptive stats, exceedance, trend and period comparison.

    The caller supplies the yearly series; nothing is fetched here.
    """
    try:
        baseline = _year_range(body.baseline_period)
        recent = _year_range(body.recent_period)
        summary = compute_statistics(
            variable=body.variable,
            series=[(p.year, p.value) for p in body.time_series],
            threshold=body.threshold,
            baseline_period=baseline,
            recent_period=recent,
            iterations=body.iterations,
            confidence_level=body.confidence_level,
            seed=body.seed,
            tie_correction=body.tie_correction,
        )
    except ValueError as e:
        logger.info("Rejected statistics request for %s: %s", body.variable, e)
        raise HTTPException(422, str(e))

    return StatisticsResponse(**summary.as_dict())


def _year_range(period) -> YearRange | None:
    if period is None:
        return None
    return YearRange(start_year=period.start_year, end_year=period.end_year)
