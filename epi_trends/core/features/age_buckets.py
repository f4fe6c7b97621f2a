"""Age-group classification of free-text category labels."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from ..eda.distribution import DistributionStats, stats

logger = logging.getLogger(__name__)


class AgeBucket(str, Enum):
    CHILDREN = "0-11"
    ADULTS = "12-59"
    SENIORS = "60+"


BUCKET_ORDER = [AgeBucket.CHILDREN, AgeBucket.ADULTS, AgeBucket.SENIORS]

SENIOR_MIN_AGE = 60
CHILD_MAX_AGE = 11
ADULT_MIN_AGE = 12
ADULT_MAX_AGE = 59

_PLUS_RE = re.compile(r"(\d+)\s*\+$")
_AND_ABOVE_RE = re.compile(r"(\d+)\s*years?(?:\s+old)?\s+and\s+(?:above|over|older)")
_RANGE_RE = re.compile(r"(\d+)\s*(?:-|–|to)\s*(\d+)")


def bucket(label: str | None) -> AgeBucket | None:
    """Classify an age-group label; None when no rule matches.

    Rules, first match wins:
        "", "unknown"                 -> None
        "<N>+" with N >= 60           -> 60+
        "<N> years old and above"     -> 60+ when N >= 60
        "<low>-<high>" / "<low> to <high>":
            high <= 11                -> 0-11
            12 <= low, high <= 59     -> 12-59
            low >= 60                 -> 60+
    """
    if label is None:
        return None
    text = str(label).strip().lower()
    if not text or text == "unknown":
        return None

    match = _PLUS_RE.search(text)
    if match and int(match.group(1)) >= SENIOR_MIN_AGE:
        return AgeBucket.SENIORS

    match = _AND_ABOVE_RE.search(text)
    if match and int(match.group(1)) >= SENIOR_MIN_AGE:
        return AgeBucket.SENIORS

    match = _RANGE_RE.search(text)
    if match:
        low, high = int(match.group(1)), int(match.group(2))
        if high <= CHILD_MAX_AGE:
            return AgeBucket.CHILDREN
        if low >= ADULT_MIN_AGE and high <= ADULT_MAX_AGE:
            return AgeBucket.ADULTS
        if low >= SENIOR_MIN_AGE:
            return AgeBucket.SENIORS

    return None


@dataclass
class CategorySample:
    buckets: dict[AgeBucket, list[float]] = field(default_factory=dict)
    excluded: list[str] = field(default_factory=list)

    def values(self, name: AgeBucket) -> list[float]:
        return self.buckets.get(name, [])


def bucket_sample(records: Iterable[tuple[str, float]]) -> CategorySample:
    """Group (label, value) pairs by age bucket.

    Labels that match no bucket are listed in ``excluded`` and never
    contribute to any bucket.
    """
    sample = CategorySample()
    for label, value in records:
        name = bucket(label)
        if name is None:
            sample.excluded.append(str(label))
            continue
        sample.buckets.setdefault(name, []).append(float(value))

    if sample.excluded:
        logger.warning(
            f"{len(sample.excluded)} record(s) with unrecognised age group excluded: "
            f"{sorted(set(sample.excluded))}"
        )
    return sample


def bucket_totals(sample: CategorySample) -> dict[str, float]:
    """Sum per bucket in canonical order; buckets without data report 0."""
    return {name.value: float(sum(sample.values(name))) for name in BUCKET_ORDER}


def bucket_stats(sample: CategorySample) -> dict[str, DistributionStats | None]:
    """Distribution statistics per bucket in canonical order."""
    return {name.value: stats(sample.values(name)) for name in BUCKET_ORDER}
