"""Headline totals and per-region breakdowns."""

from __future__ import annotations

from typing import Iterable

import pandas as pd


def summary_totals(values: Iterable[float]) -> dict[str, float | int | None]:
    """Total, average and record count of a metric; average is None when empty."""
    s = pd.to_numeric(pd.Series(list(values), dtype=object), errors="coerce").dropna()
    if s.empty:
        return {"total": 0.0, "average": None, "record_count": 0}
    return {
        "total": float(s.sum()),
        "average": float(s.mean()),
        "record_count": int(len(s)),
    }


def totals_by_region(
    records: list[dict],
    value_field: str,
    region_field: str = "region",
    top_n: int | None = 10,
) -> list[tuple[str, float]]:
    """Sum a metric per region, largest first."""
    df = pd.DataFrame.from_records(records)
    if df.empty or value_field not in df.columns or region_field not in df.columns:
        return []

    values = pd.to_numeric(df[value_field], errors="coerce").fillna(0)
    totals = (
        values.groupby(df[region_field].fillna("Unknown").astype(str), sort=False)
        .sum()
        .sort_values(ascending=False, kind="stable")
    )
    if top_n is not None:
        totals = totals.head(top_n)
    return [(str(region), float(total)) for region, total in totals.items()]
