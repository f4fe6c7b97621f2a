"""Distribution statistics: percentiles, variance, standard deviation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable

import pandas as pd


@dataclass(frozen=True)
class DistributionStats:
    min: float
    max: float
    mean: float
    std_dev: float
    p25: float
    p50: float
    p75: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def _clean(values: Iterable[float]) -> pd.Series:
    return pd.Series(list(values), dtype="float64").dropna()


def percentile(values: Iterable[float], p: float) -> float | None:
    """Percentile by linear interpolation at index (n - 1) * p of the sorted values."""
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Percentile must be within [0, 1], got {p}.")
    s = _clean(values)
    if s.empty:
        return None
    return float(s.quantile(p, interpolation="linear"))


def variance(values: Iterable[float]) -> float | None:
    """Population variance (divides by n)."""
    s = _clean(values)
    if s.empty:
        return None
    if s.nunique() == 1:
        return 0.0
    return float(s.var(ddof=0))


def std_dev(values: Iterable[float]) -> float | None:
    """Population standard deviation."""
    var = variance(values)
    return None if var is None else var ** 0.5


def stats(values: Iterable[float]) -> DistributionStats | None:
    """Summary statistics of a numeric sample, or None when it is empty."""
    s = _clean(values)
    if s.empty:
        return None

    q = s.quantile([0.25, 0.5, 0.75], interpolation="linear")
    return DistributionStats(
        min=float(s.min()),
        max=float(s.max()),
        mean=float(s.mean()),
        std_dev=std_dev(s),
        p25=float(q.loc[0.25]),
        p50=float(q.loc[0.5]),
        p75=float(q.loc[0.75]),
    )
