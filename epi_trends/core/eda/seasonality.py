"""Seasonal offsets by week of year."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from ..data.periods import parse_week
from .trend import as_series


def week_number(label: str, index: int, period: int = 52) -> int:
    """Position of a period within the seasonal cycle, 1..period.

    Parsed from the label where it carries a week; otherwise the
    position in the series is used.
    """
    week = parse_week(label)
    if week is None:
        week = index + 1
    return (week - 1) % period + 1


def week_numbers(labels: Sequence[str], period: int = 52) -> list[int]:
    return [week_number(label, i, period) for i, label in enumerate(labels)]


def seasonal_offsets(
    values: Iterable[float] | pd.Series,
    weeks: Sequence[int],
    period: int = 52,
) -> pd.Series:
    """Mean deviation from the overall mean for each week of the cycle.

    Returns a Series indexed 1..period. Weeks without data get 0.
    """
    series = as_series(values)
    offsets = pd.Series(0.0, index=range(1, period + 1))
    if series.empty:
        return offsets

    if len(weeks) != len(series):
        raise ValueError(f"Got {len(weeks)} week numbers for {len(series)} values.")

    residual = series - series.mean()
    by_week = residual.groupby(np.asarray(weeks)).mean()
    for week, offset in by_week.items():
        offsets.loc[int(week)] = float(offset)
    return offsets

