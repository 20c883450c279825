"""Yearly sample extraction from daily observations.

Turns an already-fetched daily table into one value per year for a
day-of-year window, the input shape the statistics engine expects.
"""

from __future__ import annotations

import logging

import pandas as pd

from climate_stats.compute.series import TimeSeriesPoint
from climate_stats.config import DEFAULT_WINDOW_DAYS

logger = logging.getLogger(__name__)

AGGREGATIONS = ("mean", "sum", "max", "min")


def yearly_doy_series(
    daily: pd.DataFrame,
    day_of_year: int,
    window_days: int = DEFAULT_WINDOW_DAYS,
    agg: str = "mean",
    date_col: str = "obs_date",
    value_col: str = "value",
    min_days: int | None = None,
) -> list[TimeSeriesPoint]:
    """Aggregate each year's values within ``day_of_year +/- window_days``.

    Each year's window is centred on that year's target date and measured
    in calendar days, so a window around Jan 1 takes the last days of the
    previous December and a window around Dec 31 takes the first days of
    the next January. Day 366 falls on Dec 31 in non-leap years.

    Args:
        daily: DataFrame with one row per observed day.
        day_of_year: Target day of year (1-366).
        window_days: Days on each side of the target day.
        agg: One of "mean", "sum", "max", "min".
        date_col: Column holding the observation date.
        value_col: Column holding the observed value.
        min_days: Distinct observed days a window needs to be kept.
            Defaults to the full window (``2 * window_days + 1``), so
            partially covered edge years do not skew sums or extremes.

    Returns:
        One TimeSeriesPoint per year whose window has enough coverage,
        ordered by year.
    """
    if not 1 <= day_of_year <= 366:
        raise ValueError(f"day_of_year must be in 1..366, got {day_of_year}")
    if window_days < 0:
        raise ValueError(f"window_days must be >= 0, got {window_days}")
    if agg not in AGGREGATIONS:
        raise ValueError(f"agg must be one of {AGGREGATIONS}, got {agg!r}")
    window_length = 2 * window_days + 1
    if min_days is None:
        min_days = window_length
    if not 1 <= min_days <= window_length:
        raise ValueError(f"min_days must be in 1..{window_length}, got {min_days}")

    if daily.empty:
        return []

    frame = daily[[date_col, value_col]].dropna()
    if frame.empty:
        return []
    dates = pd.to_datetime(frame[date_col]).dt.normalize()
    values = frame[value_col].astype(float)

    points = []
    skipped = 0
    for year in range(int(dates.dt.year.min()) - 1, int(dates.dt.year.max()) + 2):
        offset = (dates - _target_date(year, day_of_year)).dt.days.abs()
        in_window = offset <= window_days
        if not in_window.any():
            continue
        if dates[in_window].nunique() < min_days:
            skipped += 1
            continue
        points.append(TimeSeriesPoint(year=year, value=float(values[in_window].agg(agg))))

    logger.debug(
        "Extracted %d yearly values for DOY %d +/- %d (%s), %d under-covered years skipped",
        len(points), day_of_year, window_days, agg, skipped,
    )
    return points


def _target_date(year: int, day_of_year: int) -> pd.Timestamp:
    days_in_year = pd.Timestamp(year=year, month=12, day=31).dayofyear
    return pd.Timestamp(year=year, month=1, day=1) + pd.Timedelta(
        days=min(day_of_year, days_in_year) - 1
    )
