"""Shared test fixtures."""

import numpy as np
import pandas as pd
import pytest

from climate_stats.compute.series import TimeSeriesPoint


@pytest.fixture
def ten_values() -> list[float]:
    """Evenly spaced sample: 5, 10, ..., 50."""
    return [5.0, 10.0, 15.0, 20.0, 25.0, 30.0, 35.0, 40.0, 45.0, 50.0]


@pytest.fixture
def warming_series() -> list[TimeSeriesPoint]:
    """30 years (1994-2023) of a noisy upward trend, 0.1 units/year."""
    rng = np.random.default_rng(2023)
    years = range(1994, 2024)
    noise = rng.normal(0, 0.3, len(years))
    return [
        TimeSeriesPoint(year=y, value=round(20.0 + 0.1 * (y - 1994) + float(e), 3))
        for y, e in zip(years, noise)
    ]


@pytest.fixture
def sample_daily_df() -> pd.DataFrame:
    """Daily observations for 2001-2003 with value = year offset + day of year / 1000."""
    dates = pd.date_range("2001-01-01", "2003-12-31", freq="D")
    return pd.DataFrame({
        "obs_date": dates.date,
        "value": (dates.year - 2000) * 10.0 + dates.dayofyear / 1000.0,
    })
