"""Exceedance probability and its bootstrap confidence interval.

The bootstrap is the only random step in the engine. It draws from an
injected ``numpy.random.Generator`` (or one built from ``seed``), never from
numpy's global state, so concurrent calls stay independent and a fixed seed
reproduces the same interval. Without a seed or generator the interval
varies from call to call.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Iterator, Sequence

import numpy as np

from climate_stats.compute.descriptive import as_sample
from climate_stats.config import (
    BOOTSTRAP_CHUNK_CELLS,
    DEFAULT_BOOTSTRAP_ITERATIONS,
    DEFAULT_CONFIDENCE_LEVEL,
)
from climate_stats.errors import InvalidSampleError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfidenceInterval:
    low: float
    high: float
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL

    def __iter__(self) -> Iterator[float]:
        yield self.low
        yield self.high

    def as_list(self) -> list[float]:
        return [self.low, self.high]


def exceedance_probability(values: Sequence[float] | np.ndarray, threshold: float) -> float:
    """Fraction of values strictly greater than ``threshold``.

    Values equal to the threshold do not count as exceeding it.

    Raises:
        InvalidSampleError: if the sample or the threshold is NaN or infinite.
    """
    sample = as_sample(values)
    threshold = as_threshold(threshold)
    return float(np.count_nonzero(sample > threshold) / sample.size)


def as_threshold(threshold: float) -> float:
    """Return ``threshold`` as a float, rejecting NaN and infinities."""
    threshold = float(threshold)
    if not math.isfinite(threshold):
        raise InvalidSampleError(f"Threshold must be finite, got {threshold}")
    return threshold


def bootstrap_ci(
    values: Sequence[float] | np.ndarray,
    threshold: float,
    iterations: int = DEFAULT_BOOTSTRAP_ITERATIONS,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> ConfidenceInterval:
    """Empirical percentile bootstrap interval for the exceedance probability.

    Each iteration resamples ``n`` values with replacement and records the
    resample's exceedance probability. The interval bounds are the sorted
    probabilities at ``floor(iterations * alpha / 2)`` and
    ``floor(iterations * (1 - alpha / 2))``, clamped to valid indices.
    No bias correction is applied.

    Args:
        values: Observed sample.
        threshold: Exceedance threshold.
        iterations: Number of bootstrap resamples.
        confidence_level: Two-sided confidence level in (0, 1).
        rng: Random generator to draw from. Takes precedence over ``seed``.
        seed: Seed for a fresh generator when ``rng`` is not given.

    Returns:
        ConfidenceInterval with ``low <= high``.
    """
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")
    if not 0.0 < confidence_level < 1.0:
        raise ValueError(f"confidence_level must be in (0, 1), got {confidence_level}")

    sample = as_sample(values)
    threshold = as_threshold(threshold)
    if rng is None:
        rng = np.random.default_rng(seed)

    # Resample indices are drawn in blocks of whole iterations so the
    # index matrix stays bounded for long series or many iterations.
    rows_per_chunk = max(1, BOOTSTRAP_CHUNK_CELLS // sample.size)
    counts = []
    for start in range(0, iterations, rows_per_chunk):
        rows = min(rows_per_chunk, iterations - start)
        draws = rng.integers(0, sample.size, size=(rows, sample.size))
        counts.append(np.count_nonzero(sample[draws] > threshold, axis=1))
    probs = np.sort(np.concatenate(counts) / sample.size)

    alpha = 1.0 - confidence_level
    lower_index = _clamp_index(math.floor(iterations * (alpha / 2)), iterations)
    upper_index = _clamp_index(math.floor(iterations * (1 - alpha / 2)), iterations)

    logger.debug(
        "Bootstrap CI: n=%d iterations=%d level=%.3f indices=(%d, %d)",
        sample.size, iterations, confidence_level, lower_index, upper_index,
    )
    return ConfidenceInterval(
        low=float(probs[lower_index]),
        high=float(probs[upper_index]),
        confidence_level=confidence_level,
    )


def _clamp_index(index: int, length: int) -> int:
    return min(max(index, 0), length - 1)
