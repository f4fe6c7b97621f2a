"""Period labels: chronological keys, ordering and label extension."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

import pandas as pd

logger = logging.getLogger(__name__)

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
MONTH_NAMES = {index: name.title() for name, index in MONTHS.items()}

_DATE_RE = re.compile(r"^\s*(\d{4}-\d{2}-\d{2})")
_MONTH_RE = re.compile(r"^\s*([A-Za-z]+)\.?\s+(\d{4})\s*$")
_TRAILING_INT_RE = re.compile(r"(\d+)\s*$")
_YEAR_PREFIX_RE = re.compile(r"^\s*(\d{4})\D")
_WEEK_RE = re.compile(r"(?<!\d)(\d{1,2})\s*$")
_ISO_WEEK_RE = re.compile(r"^\s*(\d{4})-W(\d{1,2})\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class Observation:
    period_label: str
    period_key: int
    value: float


@dataclass(frozen=True)
class PeriodSeries:
    """Observations of one metric, unique by label and sorted by period key."""

    observations: tuple[Observation, ...] = ()

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)

    def __getitem__(self, i: int) -> Observation:
        return self.observations[i]

    @property
    def labels(self) -> list[str]:
        return [o.period_label for o in self.observations]

    @property
    def values(self) -> list[float]:
        return [o.value for o in self.observations]

    @property
    def keys(self) -> list[int]:
        return [o.period_key for o in self.observations]


def _parse_date(label: str) -> pd.Timestamp | None:
    match = _DATE_RE.match(label)
    if not match:
        return None
    ts = pd.to_datetime(match.group(1), format="%Y-%m-%d", errors="coerce")
    return None if pd.isna(ts) else ts


def _parse_month(label: str) -> tuple[int, int] | None:
    """Return (year, month_index) for "<Mon> <Year>" labels; month 0 if unknown."""
    match = _MONTH_RE.match(label)
    if not match:
        return None
    return int(match.group(2)), MONTHS.get(match.group(1)[:3].lower(), 0)


def order_key(label: str, year: int | None = None) -> int:
    """Map a period label to an integer that sorts chronologically.

    Supported shapes, first match wins:
        "2022-01-15"        -> ordinal day number
        "Jan 2022"          -> year * 12 + month (unknown month counts as 0)
        "2022-W05", "W5"    -> trailing week number, or year * 100 + week when
                               a year grouping is passed or embedded in the label

    Anything else maps to 0 so it sorts first.
    """
    text = str(label) if label is not None else ""

    ts = _parse_date(text)
    if ts is not None:
        return ts.toordinal()

    month = _parse_month(text)
    if month is not None:
        y, m = month
        return y * 12 + m

    match = _TRAILING_INT_RE.search(text)
    if match:
        week = int(match.group(1))
        if year is None:
            prefix = _YEAR_PREFIX_RE.match(text)
            if prefix and prefix.end() <= match.start():
                year = int(prefix.group(1))
        if year is not None:
            return year * 100 + week
        return week

    logger.debug(f"Unparseable period label {text!r}; ordering it first")
    return 0


def parse_week(label: str) -> int | None:
    """Week-of-year carried by a label, or None when it has none."""
    text = str(label) if label is not None else ""

    ts = _parse_date(text)
    if ts is not None:
        return int(ts.isocalendar()[1])
    if _parse_month(text) is not None:
        return None

    match = _WEEK_RE.search(text)
    if match and int(match.group(1)) > 0:
        return int(match.group(1))
    return None


def sort_series(observations: Iterable[Observation]) -> PeriodSeries:
    """Stable chronological sort; a repeated label keeps its last occurrence."""
    obs = list(observations)
    if not obs:
        return PeriodSeries()

    df = pd.DataFrame({
        "period_label": [o.period_label for o in obs],
        "period_key": [o.period_key for o in obs],
        "value": [o.value for o in obs],
    })
    n_dups = int(df["period_label"].duplicated().sum())
    if n_dups > 0:
        logger.warning(f"{n_dups} duplicate period label(s); keeping the last occurrence")
        df = df.drop_duplicates(subset=["period_label"], keep="last")

    df = df.sort_values("period_key", kind="stable")
    return PeriodSeries(tuple(
        Observation(str(row.period_label), int(row.period_key), float(row.value))
        for row in df.itertuples(index=False)
    ))


def build_series(
    pairs: Iterable[tuple[str, float]],
    year: int | None = None,
) -> PeriodSeries:
    """Build a sorted series from (label, value) pairs."""
    return sort_series(
        Observation(str(label), order_key(label, year), float(value))
        for label, value in pairs
    )


def extend_labels(labels: list[str], horizon: int, period: int = 52) -> list[str]:
    """Labels for `horizon` periods following the last label."""
    if horizon <= 0:
        return []
    if not labels:
        return [f"T+{k}" for k in range(1, horizon + 1)]

    last = labels[-1]

    ts = _parse_date(last)
    if ts is not None:
        dates = pd.Series([_parse_date(lbl) for lbl in labels[-8:]]).dropna()
        step_days = 7
        if len(dates) > 1:
            median_days = dates.diff().dropna().dt.days.median()
            if median_days and median_days > 0:
                step_days = int(median_days)
        return [
            (ts + pd.Timedelta(days=step_days * k)).strftime("%Y-%m-%d")
            for k in range(1, horizon + 1)
        ]

    month = _parse_month(last)
    if month is not None and month[1] > 0:
        y, m = month
        out = []
        for k in range(1, horizon + 1):
            total = y * 12 + (m - 1) + k
            out.append(f"{MONTH_NAMES[total % 12 + 1]} {total // 12}")
        return out

    iso = _ISO_WEEK_RE.match(last)
    if iso:
        y, w = int(iso.group(1)), int(iso.group(2))
        out = []
        for k in range(1, horizon + 1):
            total = (w - 1) + k
            out.append(f"{y + total // period}-W{total % period + 1:02d}")
        return out

    match = _TRAILING_INT_RE.search(last)
    if match:
        n = int(match.group(1))
        prefix = last[:match.start()]
        width = len(match.group(1))
        return [f"{prefix}{n + k:0{width}d}" for k in range(1, horizon + 1)]

    return [f"T+{k}" for k in range(1, horizon + 1)]
