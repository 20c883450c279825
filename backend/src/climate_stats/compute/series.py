"""Yearly time series value types."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import math
from collections.abc import Mapping
from typing import Iterable, Union

from climate_stats.errors import InvalidSampleError

PointLike = Union["TimeSeriesPoint", Mapping, tuple]


@dataclass(frozen=True)
class TimeSeriesPoint:
    year: int
    value: float

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class YearRange:
    """Inclusive range of years."""

    start_year: int
    end_year: int

    def __post_init__(self) -> None:
        if self.start_year > self.end_year:
            raise ValueError(
                f"start_year {self.start_year} is after end_year {self.end_year}"
            )

    def contains(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year

    def overlaps(self, other: YearRange) -> bool:
        return self.start_year <= other.end_year and other.start_year <= self.end_year


def as_series(points: Iterable[PointLike]) -> list[TimeSeriesPoint]:
    """Normalize points to TimeSeriesPoint, keeping the given order.

    Accepts TimeSeriesPoint instances, ``{"year": ..., "value": ...}``
    mappings, or ``(year, value)`` pairs. Years must be whole numbers;
    fractional years are rejected rather than truncated.
    """
    series = []
    for point in points:
        if isinstance(point, TimeSeriesPoint):
            year, value = point.year, point.value
        elif isinstance(point, Mapping):
            year, value = point["year"], point["value"]
        else:
            year, value = point
        value = float(value)
        if not math.isfinite(value):
            raise InvalidSampleError(f"Non-finite value for year {year}")
        if not float(year).is_integer():
            raise InvalidSampleError(f"Year must be a whole number, got {year}")
        series.append(TimeSeriesPoint(year=int(year), value=value))
    return series


def sort_by_year(series: Iterable[PointLike]) -> list[TimeSeriesPoint]:
    """Stable sort by year; points sharing a year keep their relative order."""
    return sorted(as_series(series), key=lambda p: p.year)
