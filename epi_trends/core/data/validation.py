"""Data quality diagnostics for a period-labelled series."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import pandas as pd

from .periods import Observation, order_key


@dataclass
class ValidationIssue:
    severity: str  # "error", "warning", "info"
    category: str
    message: str
    details: str = ""


@dataclass
class ValidationReport:
    is_valid: bool = True
    issues: list[ValidationIssue] = field(default_factory=list)
    stats: dict = field(default_factory=dict)

    def add(self, severity: str, category: str, message: str, details: str = ""):
        self.issues.append(ValidationIssue(severity, category, message, details))
        if severity == "error":
            self.is_valid = False

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "warning"]

    def categories(self) -> set[str]:
        return {i.category for i in self.issues}


def _to_frame(observations: Iterable[Observation | tuple[str, float]]) -> pd.DataFrame:
    rows = []
    for item in observations:
        if isinstance(item, Observation):
            rows.append((item.period_label, item.period_key, item.value))
        else:
            label, value = item
            rows.append((str(label), order_key(label), value))
    return pd.DataFrame(rows, columns=["period_label", "period_key", "value"])


def check_series_quality(
    observations: Iterable[Observation | tuple[str, float]],
    window: int = 4,
    seasonal_period: int = 52,
) -> ValidationReport:
    """Diagnose a series before analysis. Nothing here blocks the analysis
    itself; an empty series is the only error."""
    report = ValidationReport()
    df = _to_frame(observations)
    values = pd.to_numeric(df["value"], errors="coerce")

    if df.empty:
        report.add("error", "empty", "Series has no observations.")
        report.stats["n_points"] = 0
        return report

    n_unparsed = int((df["period_key"] == 0).sum())
    if n_unparsed > 0:
        examples = df.loc[df["period_key"] == 0, "period_label"].head(3).tolist()
        report.add(
            "warning", "unparseable_labels",
            f"{n_unparsed} period label(s) could not be ordered and will sort first.",
            f"Examples: {examples}",
        )

    n_dups = int(df["period_label"].duplicated().sum())
    if n_dups > 0:
        report.add("warning", "duplicates", f"{n_dups} duplicate period label(s); the last one is kept.")

    n_missing = int(values.isna().sum())
    if n_missing > 0:
        report.add("warning", "missing_values", f"{n_missing} missing or non-numeric value(s).")

    n_neg = int((values < 0).sum())
    if n_neg > 0:
        report.add("warning", "negative_values", f"{n_neg} negative count(s).")

    n_valid = int(values.notna().sum())
    if n_valid < window:
        report.add(
            "warning", "sparse_history",
            f"Only {n_valid} data point(s); the {window}-period moving average will be empty.",
        )
    elif n_valid < seasonal_period:
        report.add(
            "info", "sparse_history",
            f"{n_valid} data points cover less than one {seasonal_period}-period cycle; "
            "seasonal offsets rest on single observations.",
        )

    if n_valid > 1 and values.nunique() == 1:
        report.add("warning", "constant", "Series has zero variance (constant value).")

    ordered = df.sort_values("period_key", kind="stable")
    report.stats["n_points"] = len(df)
    report.stats["n_valid_points"] = n_valid
    report.stats["n_unparseable_labels"] = n_unparsed
    report.stats["period_range"] = (str(ordered["period_label"].iloc[0]), str(ordered["period_label"].iloc[-1]))
    return report
