"""Outlier detection: IQR fences OR'd with population z-scores."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import numpy as np
import pandas as pd
from scipy import stats

from .distribution import percentile
from .trend import as_series


@dataclass
class OutlierResult:
    lower_fence: float | None = None
    upper_fence: float | None = None
    mean: float | None = None
    std_dev: float = 0.0
    z_scores: pd.Series = field(default_factory=lambda: pd.Series(dtype=float))
    flags: pd.Series = field(default_factory=lambda: pd.Series(dtype=bool))

    @property
    def n_outliers(self) -> int:
        return int(self.flags.sum())

    @property
    def outlier_positions(self) -> list[int]:
        return [int(i) for i in np.flatnonzero(self.flags.to_numpy())]


def iqr_fences(values: Iterable[float] | pd.Series, multiplier: float = 1.5) -> tuple[float, float] | None:
    """Return (Q1 - k*IQR, Q3 + k*IQR), or None for an empty sample."""
    series = as_series(values)
    q1 = percentile(series, 0.25)
    q3 = percentile(series, 0.75)
    if q1 is None or q3 is None:
        return None
    iqr = q3 - q1
    return q1 - multiplier * iqr, q3 + multiplier * iqr


def zscores(values: Iterable[float] | pd.Series) -> pd.Series:
    """Population z-scores; all zero when the sample has no spread."""
    series = as_series(values)
    if series.empty or series.nunique() <= 1:
        return pd.Series(0.0, index=series.index)
    return pd.Series(stats.zscore(series.to_numpy(), ddof=0), index=series.index)


def detect_iqr(values: Iterable[float] | pd.Series, multiplier: float = 1.5) -> pd.Series:
    """Detect outliers using IQR fences. Returns boolean mask."""
    series = as_series(values)
    fences = iqr_fences(series, multiplier)
    if fences is None:
        return pd.Series(False, index=series.index)
    lower, upper = fences
    return (series < lower) | (series > upper)


def detect_zscore(values: Iterable[float] | pd.Series, threshold: float = 2.0) -> pd.Series:
    """Detect outliers using |z| >= threshold. Returns boolean mask."""
    return zscores(values).abs() >= threshold


def detect_outliers(
    values: Iterable[float] | pd.Series,
    iqr_multiplier: float = 1.5,
    z_threshold: float = 2.0,
) -> OutlierResult:
    """Flag points outside the IQR fences or with |z| >= z_threshold.

    Either criterion alone is enough to flag a point. Fences, mean and
    standard deviation are computed once over the whole series.
    """
    series = as_series(values)
    if series.empty:
        return OutlierResult()

    lower, upper = iqr_fences(series, iqr_multiplier)
    z = zscores(series)
    flags = (series < lower) | (series > upper) | (z.abs() >= z_threshold)

    return OutlierResult(
        lower_fence=lower,
        upper_fence=upper,
        mean=float(series.mean()),
        std_dev=0.0 if series.nunique() <= 1 else float(series.std(ddof=0)),
        z_scores=z,
        flags=flags,
    )
