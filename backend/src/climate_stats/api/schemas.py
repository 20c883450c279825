"""Pydantic request/response models for the API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from climate_stats.config import (
    DEFAULT_BOOTSTRAP_ITERATIONS,
    DEFAULT_CONFIDENCE_LEVEL,
    MAX_SERIES_LENGTH,
)


class YearRangeModel(BaseModel):
    start_year: int
    end_year: int


class TimeSeriesPointModel(BaseModel):
    year: int
    value: float


class StatisticsRequest(BaseModel):
    variable: str
    time_series: list[TimeSeriesPointModel] = Field(
        ..., min_length=1, max_length=MAX_SERIES_LENGTH
    )
    threshold: float | None = None
    baseline_period: YearRangeModel | None = None
    recent_period: YearRangeModel | None = None
    iterations: int = Field(DEFAULT_BOOTSTRAP_ITERATIONS, ge=20, le=100_000)
    confidence_level: float = Field(DEFAULT_CONFIDENCE_LEVEL, ge=0.5, le=0.999)
    seed: int | None = None
    tie_correction: bool = False


class Percentiles(BaseModel):
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float
    p95: float


class TrendData(BaseModel):
    slope: float
    p_value: float
    method: str
    z_score: float
    statistic: int
    direction: str


class BaselineComparison(BaseModel):
    p_exceed_baseline: float
    p_exceed_recent: float
    delta_percent: float | None = None
    status: str


class StatisticsResponse(BaseModel):
    variable: str
    units: str
    n_years: int
    mean: float
    median: float
    std: float
    percentiles: Percentiles
    p_exceed: float | None = None
    p_exceed_CI: list[float] | None = None
    trend: TrendData | None = None
    baseline_vs_recent: BaselineComparison | None = None
    time_series: list[TimeSeriesPointModel]
    caveats: str | None = None
