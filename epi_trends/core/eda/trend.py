"""Trend analysis: trailing moving average, growth rates, linear trend fit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
import pandas as pd


def as_series(values: Iterable[float] | pd.Series) -> pd.Series:
    if isinstance(values, pd.Series):
        return values.astype(float).reset_index(drop=True)
    return pd.Series(list(values), dtype="float64")


def moving_average(values: Iterable[float] | pd.Series, window: int = 4) -> pd.Series:
    """Trailing moving average including the current point.

    The first ``window - 1`` entries are NaN: there is not enough history
    for a full window and a partial average is never reported.
    """
    if window < 1:
        raise ValueError(f"Moving average window must be >= 1, got {window}.")
    series = as_series(values)
    return series.rolling(window=window, min_periods=window).mean()


def growth_rates(values: Iterable[float] | pd.Series) -> pd.Series:
    """Period-over-period percent change.

    The first period and any period following a zero are reported as 0.
    """
    series = as_series(values)
    prev = series.shift(1)
    growth = (series - prev) / prev * 100
    return growth.where(prev != 0, 0.0).fillna(0.0)


@dataclass(frozen=True)
class LinearTrend:
    intercept: float
    slope: float

    def at(self, t: float | np.ndarray) -> float | np.ndarray:
        return self.intercept + self.slope * t


def fit_linear_trend(values: Iterable[float] | pd.Series) -> LinearTrend:
    """Ordinary least squares of value on the integer index t = 0..n-1."""
    y = as_series(values).to_numpy()
    n = len(y)
    if n == 0:
        return LinearTrend(0.0, 0.0)
    if n == 1:
        return LinearTrend(float(y[0]), 0.0)

    t = np.arange(n, dtype=float)
    sum_t, sum_y = t.sum(), y.sum()
    denom = n * (t * t).sum() - sum_t ** 2
    if denom == 0:
        return LinearTrend(float(y.mean()), 0.0)

    slope = (n * (t * y).sum() - sum_t * sum_y) / denom
    intercept = (sum_y - slope * sum_t) / n
    return LinearTrend(float(intercept), float(slope))
