"""Raw period-count records: unwrap API payloads and detect label/value fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

_LABEL_HINTS = [
    "period_label", "period", "label", "epi_week", "week", "month", "date",
]
_VALUE_HINTS = [
    "count", "value", "cases", "deaths", "icu_patients", "hospitalizations",
    "doses_administered", "vaccinated", "uptake", "total",
]
_SUMMARY_KEYS = ("total", "average", "record_count")
_RECORD_KEYS = ("records", "data", "items", "results")


@dataclass
class PeriodCounts:
    pairs: list[tuple[str, float]] = field(default_factory=list)
    label_field: str | None = None
    value_field: str | None = None
    summary: dict | None = None
    n_dropped: int = 0

    def __len__(self) -> int:
        return len(self.pairs)


def unwrap_payload(payload: Any) -> tuple[list[dict], dict | None]:
    """Split an API payload into its records and an optional summary object.

    Accepts a bare list of records, or a dict holding the records under one
    of ``records``/``data``/``items``/``results`` next to summary fields
    (``total``, ``average``, ``record_count``) that are passed through as-is.
    """
    if payload is None:
        return [], None
    if isinstance(payload, list):
        return payload, None
    if not isinstance(payload, dict):
        raise ValueError(f"Unsupported payload type: {type(payload).__name__}. Use a list or dict.")

    records: list[dict] = []
    for key in _RECORD_KEYS:
        if isinstance(payload.get(key), list):
            records = payload[key]
            break
    summary = {k: payload[k] for k in _SUMMARY_KEYS if k in payload}
    return records, (summary or None)


def detect_fields(df: pd.DataFrame) -> tuple[str | None, str | None]:
    """Guess the period label column and the numeric count column."""
    cols_lower = {c: str(c).strip().lower().replace(" ", "_") for c in df.columns}

    label_col = None
    for hint in _LABEL_HINTS:
        for col, norm in cols_lower.items():
            if norm == hint:
                label_col = col
                break
        if label_col is not None:
            break

    value_col = None
    for hint in _VALUE_HINTS:
        for col, norm in cols_lower.items():
            if col != label_col and norm == hint:
                value_col = col
                break
        if value_col is not None:
            break
    if value_col is None:
        for col in df.columns:
            if col == label_col or col == "id":
                continue
            if pd.api.types.is_numeric_dtype(df[col]):
                value_col = col
                break

    return label_col, value_col


def load_period_counts(
    payload: Any,
    label_field: str | None = None,
    value_field: str | None = None,
    combine_duplicates: bool = False,
) -> PeriodCounts:
    """Turn an API payload into (period_label, value) pairs.

    Rows whose value is missing or not numeric are dropped. With
    ``combine_duplicates`` the values of rows sharing a label (one row per
    region, say) are summed, keeping the order of first appearance.
    """
    records, summary = unwrap_payload(payload)
    df = pd.DataFrame.from_records(records)
    if df.empty:
        return PeriodCounts(label_field=label_field, value_field=value_field, summary=summary)

    detected_label, detected_value = detect_fields(df)
    label_col = label_field or detected_label
    value_col = value_field or detected_value

    if label_col is None:
        raise ValueError("No period label field identified. Pass label_field explicitly.")
    if value_col is None:
        raise ValueError("No numeric count field identified. Pass value_field explicitly.")
    for col in (label_col, value_col):
        if col not in df.columns:
            raise ValueError(f"Field '{col}' not found in records. Available: {list(df.columns)}")

    out = pd.DataFrame({
        "label": df[label_col],
        "value": pd.to_numeric(df[value_col], errors="coerce"),
    })
    keep = out["label"].notna() & out["value"].notna()
    n_dropped = int((~keep).sum())
    if n_dropped > 0:
        logger.warning(f"Dropped {n_dropped} record(s) with a missing label or non-numeric '{value_col}'")
    out = out[keep].copy()
    out["label"] = out["label"].astype(str)

    if combine_duplicates:
        out = out.groupby("label", sort=False, as_index=False)["value"].sum()

    pairs = [(str(label), float(value)) for label, value in zip(out["label"], out["value"])]
    return PeriodCounts(
        pairs=pairs,
        label_field=label_col,
        value_field=value_col,
        summary=summary,
        n_dropped=n_dropped,
    )
