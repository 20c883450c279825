"""Tests for baseline vs. recent period comparison."""

import pytest

from climate_stats.compute.periods import ComparisonStatus, compare_periods, split_periods
from climate_stats.compute.series import YearRange
from climate_stats.errors import InsufficientDataError, InvalidSampleError


class TestComparePeriods:
    def test_both_fully_exceeding(self):
        result = compare_periods([1, 1, 1, 1], [2, 2, 2, 2], 0.5)
        assert result.p_exceed_baseline == 1.0
        assert result.p_exceed_recent == 1.0
        assert result.delta_percent == 0.0
        assert result.status == ComparisonStatus.OK
        assert result.is_computable

    def test_relative_increase(self):
        # 1/4 -> 3/4 is a 200% increase
        result = compare_periods([0, 0, 0, 1], [1, 1, 1, 0], 0.5)
        assert result.p_exceed_baseline == 0.25
        assert result.p_exceed_recent == 0.75
        assert result.delta_percent == pytest.approx(200.0)

    def test_relative_decrease(self):
        result = compare_periods([1, 1], [1, 0], 0.5)
        assert result.delta_percent == pytest.approx(-50.0)

    def test_zero_baseline_not_computable(self):
        result = compare_periods([0, 0, 0, 0], [1, 1, 0, 0], 0.5)
        assert result.p_exceed_baseline == 0.0
        assert result.p_exceed_recent == 0.5
        assert result.delta_percent is None
        assert result.status == ComparisonStatus.BASELINE_ZERO
        assert not result.is_computable

    def test_zero_baseline_and_recent(self):
        result = compare_periods([0, 0], [0, 0], 0.5)
        assert result.delta_percent is None
        assert result.status == ComparisonStatus.BASELINE_ZERO

    def test_as_dict(self):
        result = compare_periods([0, 0], [1, 1], 0.5).as_dict()
        assert result == {
            "p_exceed_baseline": 0.0,
            "p_exceed_recent": 1.0,
            "delta_percent": None,
            "status": "baseline_zero",
        }

    def test_empty_sample_raises(self):
        with pytest.raises(InsufficientDataError):
            compare_periods([], [1.0], 0.5)

    def test_nan_threshold_raises(self):
        with pytest.raises(InvalidSampleError):
            compare_periods([1.0, 2.0], [3.0, 4.0], float("nan"))


class TestSplitPeriods:
    def test_partition(self):
        series = [(1990 + i, float(i)) for i in range(30)]
        baseline, recent = split_periods(
            series, YearRange(1990, 1999), YearRange(2010, 2019),
        )
        assert baseline == [float(i) for i in range(10)]
        assert recent == [float(i) for i in range(20, 30)]

    def test_inclusive_bounds(self):
        series = [(2000, 1.0), (2001, 2.0), (2002, 3.0)]
        baseline, recent = split_periods(series, YearRange(2000, 2000), YearRange(2001, 2002))
        assert baseline == [1.0]
        assert recent == [2.0, 3.0]

    def test_overlapping_ranges(self):
        with pytest.raises(ValueError, match="overlaps"):
            split_periods([(2000, 1.0)], YearRange(1990, 2000), YearRange(2000, 2010))

    def test_empty_period(self):
        with pytest.raises(InsufficientDataError, match="recent"):
            split_periods([(2000, 1.0)], YearRange(1990, 2000), YearRange(2010, 2020))

    def test_reversed_year_range(self):
        with pytest.raises(ValueError):
            YearRange(2020, 2010)
