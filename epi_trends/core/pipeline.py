"""Series analysis orchestrator.

Raw observations are ordered by period, then smoothed, scored for outliers
and decomposed into a linear trend plus week-of-year seasonal offsets, which
are projected over the forecast horizon. Every call is independent; nothing
is cached between runs.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable

import pandas as pd

from .data.periods import Observation, PeriodSeries, extend_labels, order_key, sort_series
from .eda.distribution import DistributionStats, stats
from .eda.outliers import detect_outliers
from .eda.seasonality import week_numbers
from .eda.trend import LinearTrend, growth_rates, moving_average
from .features.age_buckets import AgeBucket, bucket
from .models.trend_seasonal import TrendSeasonalForecaster

logger = logging.getLogger(__name__)


@dataclass
class AnalysisOptions:
    window: int = 4
    z_threshold: float = 2.0
    iqr_multiplier: float = 1.5
    forecast_horizon: int = 8
    seasonal_period: int = 52

    def __post_init__(self):
        if self.window < 1:
            raise ValueError(f"window must be >= 1, got {self.window}.")
        if self.z_threshold <= 0:
            raise ValueError(f"z_threshold must be > 0, got {self.z_threshold}.")
        if self.iqr_multiplier <= 0:
            raise ValueError(f"iqr_multiplier must be > 0, got {self.iqr_multiplier}.")
        if self.forecast_horizon < 0:
            raise ValueError(f"forecast_horizon must be >= 0, got {self.forecast_horizon}.")
        if self.seasonal_period < 1:
            raise ValueError(f"seasonal_period must be >= 1, got {self.seasonal_period}.")


@dataclass
class DerivedRecord:
    period_label: str
    value: float | None = None
    moving_avg: float | None = None
    growth_pct: float | None = None
    z_score: float | None = None
    iqr_lower: float | None = None
    iqr_upper: float | None = None
    is_outlier: bool = False
    trend: float | None = None
    seasonal_trend: float | None = None
    is_forecast: bool = False


@dataclass
class DerivedSeries:
    records: list[DerivedRecord] = field(default_factory=list)
    options: AnalysisOptions = field(default_factory=AnalysisOptions)
    trend: LinearTrend = field(default_factory=lambda: LinearTrend(0.0, 0.0))
    seasonal_offsets: dict[int, float] = field(default_factory=dict)
    stats: DistributionStats | None = None
    summary: dict | None = None

    def __len__(self) -> int:
        return len(self.records)

    @property
    def observed(self) -> list[DerivedRecord]:
        return [r for r in self.records if not r.is_forecast]

    @property
    def forecast(self) -> list[DerivedRecord]:
        return [r for r in self.records if r.is_forecast]

    @property
    def outliers(self) -> list[DerivedRecord]:
        return [r for r in self.records if r.is_outlier]

    def to_dicts(self) -> list[dict[str, Any]]:
        return [asdict(r) for r in self.records]

    def to_frame(self) -> pd.DataFrame:
        columns = list(DerivedRecord.__dataclass_fields__)
        return pd.DataFrame(self.to_dicts(), columns=columns)


def _round(value: float | None, digits: int = 2) -> float | None:
    """Round for output; NaN and None become None, -0.0 becomes 0.0."""
    if value is None:
        return None
    value = float(value)
    if math.isnan(value):
        return None
    return round(value, digits) + 0.0


def _coerce(item: Any, year: int | None) -> Observation | None:
    if isinstance(item, Observation):
        if item.period_label is None or pd.isna(item.value):
            return None
        return item
    if isinstance(item, dict):
        label = item.get("period_label", item.get("period"))
        raw = item.get("value", item.get("count"))
    else:
        label, raw = item

    value = pd.to_numeric(raw, errors="coerce")
    if label is None or pd.isna(value):
        return None
    return Observation(str(label), order_key(str(label), year), float(value))


def to_series(observations: Iterable[Any], year: int | None = None) -> PeriodSeries:
    """Order Observations, (label, value) pairs or record dicts into a series."""
    obs = []
    n_dropped = 0
    for item in observations:
        o = _coerce(item, year)
        if o is None:
            n_dropped += 1
            continue
        obs.append(o)
    if n_dropped > 0:
        logger.warning(f"Dropped {n_dropped} observation(s) with a missing label or non-numeric value")
    return sort_series(obs)


def analyze_series(
    observations: Iterable[Any] | PeriodSeries,
    options: AnalysisOptions | None = None,
    summary: dict | None = None,
    year: int | None = None,
) -> DerivedSeries:
    """Derive moving average, growth, outlier flags, trend and forecast records.

    Returns one record per distinct input period in chronological order,
    followed by ``forecast_horizon`` forecast records that carry no value.
    ``summary`` (total / average / record_count from the data source) is
    passed through untouched.
    """
    opts = options or AnalysisOptions()
    series = to_series(observations, year)

    if len(series) == 0:
        logger.debug("analyze_series called with an empty series")
        return DerivedSeries(options=opts, summary=summary)

    values = pd.Series(series.values, dtype="float64")
    labels = series.labels
    weeks = week_numbers(labels, opts.seasonal_period)

    ma = moving_average(values, opts.window)
    growth = growth_rates(values)
    outliers = detect_outliers(values, iqr_multiplier=opts.iqr_multiplier, z_threshold=opts.z_threshold)

    model = TrendSeasonalForecaster(seasonal_period=opts.seasonal_period)
    model.fit(values, weeks)
    fitted = model.fitted()
    logger.debug(f"{model.summary()} {outliers.n_outliers} outlier(s) flagged.")

    records = [
        DerivedRecord(
            period_label=labels[i],
            value=float(values.iloc[i]),
            moving_avg=_round(ma.iloc[i]),
            growth_pct=_round(growth.iloc[i]),
            z_score=_round(outliers.z_scores.iloc[i]),
            iqr_lower=_round(outliers.lower_fence),
            iqr_upper=_round(outliers.upper_fence),
            is_outlier=bool(outliers.flags.iloc[i]),
            trend=_round(fitted["trend"].iloc[i]),
            seasonal_trend=_round(fitted["seasonal_trend"].iloc[i]),
        )
        for i in range(len(series))
    ]

    forecast = model.predict(opts.forecast_horizon)
    future_labels = extend_labels(labels, opts.forecast_horizon, opts.seasonal_period)
    for label, row in zip(future_labels, forecast.itertuples(index=False)):
        records.append(DerivedRecord(
            period_label=label,
            trend=_round(row.trend),
            seasonal_trend=_round(row.forecast),
            is_forecast=True,
        ))

    return DerivedSeries(
        records=records,
        options=opts,
        trend=model.trend,
        seasonal_offsets={int(w): float(v) for w, v in model.offsets.items()},
        stats=stats(values),
        summary=summary,
    )


def summarize(values: Iterable[float]) -> DistributionStats | None:
    """Distribution statistics of a sample; None when it is empty."""
    return stats(values)


def bucket_label(label: str | None) -> AgeBucket | None:
    """Canonical age bucket of a free-text label, or None."""
    return bucket(label)
