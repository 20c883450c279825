"""Descriptive statistics for a yearly sample.

Percentiles use linear interpolation between closest ranks, the same
definition as numpy's default ``np.quantile``. The median reported by
``basic_stats`` is NOT the textbook median: it is the element at index
``n // 2`` of the sorted sample, i.e. the upper-middle value for even ``n``.
Downstream consumers are calibrated against this convention, so keep it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import math
from typing import Sequence

import numpy as np

from climate_stats.config import PERCENTILE_LADDER
from climate_stats.errors import InsufficientDataError, InvalidSampleError


@dataclass(frozen=True)
class PercentileLadder:
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float
    p95: float

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BasicStats:
    mean: float
    median: float
    std: float
    percentiles: PercentileLadder
    n: int

    def as_dict(self) -> dict:
        return {
            "mean": self.mean,
            "median": self.median,
            "std": self.std,
            "percentiles": self.percentiles.as_dict(),
            "n": self.n,
        }


def as_sample(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """Convert values to a 1-D float array, rejecting empty or non-finite input."""
    sample = np.asarray(values, dtype=float).ravel()
    if sample.size == 0:
        raise InsufficientDataError("Sample is empty")
    if not np.all(np.isfinite(sample)):
        raise InvalidSampleError("Sample contains NaN or infinite values")
    return sample


def percentile(sorted_values: Sequence[float] | np.ndarray, p: float) -> float:
    """Linearly interpolated value at rank ``(n - 1) * p`` of a sorted sample.

    Exact ranks return the stored element unchanged (no interpolation noise).

    Raises:
        InsufficientDataError: if the sample is empty.
        ValueError: if ``p`` is outside [0, 1].
    """
    if len(sorted_values) == 0:
        raise InsufficientDataError("Cannot take a percentile of an empty sample")
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Percentile fraction must be in [0, 1], got {p}")

    index = (len(sorted_values) - 1) * p
    lower = math.floor(index)
    upper = math.ceil(index)
    weight = index - lower

    if lower == upper:
        return float(sorted_values[lower])
    return float(sorted_values[lower] * (1 - weight) + sorted_values[upper] * weight)


def percentile_ladder(sorted_values: Sequence[float] | np.ndarray) -> PercentileLadder:
    """Compute the fixed p10..p95 ladder of a sorted sample."""
    return PercentileLadder(**{
        name: percentile(sorted_values, fraction)
        for name, fraction in PERCENTILE_LADDER.items()
    })


def basic_stats(values: Sequence[float] | np.ndarray) -> BasicStats:
    """Mean, upper-middle median, population std and percentile ladder.

    Args:
        values: One observation per year, in any order.

    Returns:
        BasicStats for the sample.

    Raises:
        InsufficientDataError: if the sample is empty.
        InvalidSampleError: if the sample has NaN or infinite values.
    """
    sample = as_sample(values)
    ordered = np.sort(sample)
    n = int(sample.size)

    mean, std = _mean_and_std(sample)

    return BasicStats(
        mean=mean,
        median=float(ordered[n // 2]),
        std=std,
        percentiles=percentile_ladder(ordered),
        n=n,
    )


def _mean_and_std(sample: np.ndarray) -> tuple[float, float]:
    """Mean and population std (divide by n).

    Magnitudes near the float limit overflow the plain sums, so those
    samples are rescaled by their largest absolute value first.
    """
    with np.errstate(over="ignore", invalid="ignore"):
        mean = float(sample.mean())
        std = float(np.sqrt(np.mean((sample - mean) ** 2)))
        if math.isfinite(mean) and math.isfinite(std):
            return mean, std

        scale = float(np.max(np.abs(sample)))
        scaled = sample / scale
        scaled_mean = float(scaled.mean())
        mean = scaled_mean * scale
        std = float(np.sqrt(np.mean((scaled - scaled_mean) ** 2))) * scale

    if not (math.isfinite(mean) and math.isfinite(std)):
        raise InvalidSampleError("Sample spread exceeds the floating point range")
    return mean, std
