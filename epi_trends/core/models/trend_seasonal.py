"""Linear trend + week-of-year seasonal offset forecaster.

The trend is an OLS line over the series position; the seasonal component
is the mean deviation from the overall mean per week of the cycle. Both are
added back together in-sample and over the forecast horizon.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from ..eda.seasonality import seasonal_offsets
from ..eda.trend import LinearTrend, as_series, fit_linear_trend
from .base import BaseForecaster


class TrendSeasonalForecaster(BaseForecaster):
    name = "Linear Trend + Seasonal"

    def __init__(self, seasonal_period: int = 52):
        if seasonal_period < 1:
            raise ValueError(f"seasonal_period must be >= 1, got {seasonal_period}.")
        self.seasonal_period = seasonal_period
        self._trend: LinearTrend | None = None
        self._offsets: pd.Series | None = None
        self._weeks: np.ndarray = np.array([], dtype=int)
        self._n_train: int = 0

    @property
    def trend(self) -> LinearTrend:
        if self._trend is None:
            raise RuntimeError("Model not fitted.")
        return self._trend

    @property
    def offsets(self) -> pd.Series:
        if self._offsets is None:
            raise RuntimeError("Model not fitted.")
        return self._offsets

    def fit(self, y_train: pd.Series, week_numbers: Sequence[int] | None = None) -> None:
        y = as_series(y_train)
        sp = self.seasonal_period
        self._n_train = len(y)

        if week_numbers is None:
            weeks = np.arange(len(y)) % sp + 1
        else:
            weeks = (np.asarray(week_numbers, dtype=int) - 1) % sp + 1

        self._trend = fit_linear_trend(y)
        self._offsets = seasonal_offsets(y, list(weeks), period=sp)
        self._weeks = weeks

    def fitted(self) -> pd.DataFrame:
        t = np.arange(self._n_train)
        trend = self.trend.at(t.astype(float))
        seasonal = self.offsets.loc[self._weeks].to_numpy() if self._n_train else np.array([])
        return pd.DataFrame({
            "t": t,
            "week_number": self._weeks,
            "trend": trend,
            "seasonal_trend": trend + seasonal,
        })

    def predict(self, horizon: int) -> pd.DataFrame:
        if self._trend is None:
            raise RuntimeError("Model not fitted.")

        sp = self.seasonal_period
        last_t = self._n_train - 1
        last_week = int(self._weeks[-1]) if self._n_train else 0

        steps = np.arange(1, max(horizon, 0) + 1)
        t = last_t + steps
        weeks = (last_week - 1 + steps) % sp + 1
        trend = self.trend.at(t.astype(float))
        seasonal = self.offsets.loc[weeks].to_numpy() if len(steps) else np.array([])

        return pd.DataFrame({
            "t": t,
            "week_number": weeks,
            "trend": trend,
            "forecast": trend + seasonal,
        })

    def get_params(self) -> dict:
        params = {"seasonal_period": self.seasonal_period}
        if self._trend is not None:
            params["intercept"] = round(self._trend.intercept, 4)
            params["slope"] = round(self._trend.slope, 4)
        return params

    def summary(self) -> str:
        if self._trend is None:
            return f"{self.name} (period={self.seasonal_period}), not fitted."
        return (
            f"{self.name} (period={self.seasonal_period}): "
            f"trend = {self._trend.intercept:.2f} + {self._trend.slope:.4f} * t "
            f"over {self._n_train} observations."
        )
