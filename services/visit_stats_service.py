# services/visit_stats_service.py

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd

UNFILLED = "未填"


@dataclass(frozen=True)
class AggregationBucket:
    label: str
    count: int


@dataclass(frozen=True)
class VisitStats:
    total: int = 0
    by_store: List[AggregationBucket] = field(default_factory=list)
    by_gender: List[AggregationBucket] = field(default_factory=list)
    by_age: List[AggregationBucket] = field(default_factory=list)
    by_tainan: List[AggregationBucket] = field(default_factory=list)
    by_source: List[AggregationBucket] = field(default_factory=list)
    by_purpose: List[AggregationBucket] = field(default_factory=list)
    by_day: List[AggregationBucket] = field(default_factory=list)
    avg_per_day: float = 0.0

    @property
    def source_total(self) -> int:
        return sum(b.count for b in self.by_source)

    @property
    def purpose_total(self) -> int:
        return sum(b.count for b in self.by_purpose)


# -------------------------------------------------------------
# HELPERS: JS-style rounding (half-up, not banker's rounding)
# -------------------------------------------------------------
def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def pct(n: int, total: int) -> str:
    if not total:
        return "0%"
    return f"{_round_half_up(n / total * 100)}%"


def average_per_day(total: int, distinct_days: int) -> float:
    return _round_half_up(total / max(distinct_days, 1) * 10) / 10


def format_average(value: float) -> str:
    # 3.0 -> "3", 3.5 -> "3.5"
    return f"{value:g}"


# -------------------------------------------------------------
# Counting
# -------------------------------------------------------------
def count_by(values: Iterable[Optional[str]]) -> List[AggregationBucket]:
    """
    Frequency table sorted by descending count.

    Missing labels are counted as UNFILLED. Counter keeps first-seen order and
    most_common() sorts stably, so ties stay in first-seen order.
    """
    counts = Counter(v if v else UNFILLED for v in values)
    return [AggregationBucket(label, n) for label, n in counts.most_common()]


def column_values(rows: Iterable[Dict[str, Any]], name: str) -> List[Optional[str]]:
    return [r.get(name) for r in rows]


def flatten_tags(rows: Iterable[Dict[str, Any]], name: str) -> List[str]:
    """Every tag of every record, in order; null arrays contribute nothing."""
    out: List[str] = []
    for r in rows:
        tags = r.get(name)
        if isinstance(tags, (list, tuple)):
            out.extend(tags)
    return out


def count_by_day(rows: Iterable[Dict[str, Any]]) -> List[AggregationBucket]:
    # YYYY-MM-DD is zero-padded, so string order is date order
    counts = Counter(r.get("form_date") or UNFILLED for r in rows)
    return [AggregationBucket(d, counts[d]) for d in sorted(counts)]


def build_visit_stats(rows: Sequence[Dict[str, Any]]) -> VisitStats:
    by_day = count_by_day(rows)
    return VisitStats(
        total=len(rows),
        by_store=count_by(column_values(rows, "store")),
        by_gender=count_by(column_values(rows, "gender")),
        by_age=count_by(column_values(rows, "age_range")),
        by_tainan=count_by(column_values(rows, "is_tainan")),
        by_source=count_by(flatten_tags(rows, "source_tags")),
        by_purpose=count_by(flatten_tags(rows, "visit_purposes")),
        by_day=by_day,
        avg_per_day=average_per_day(len(rows), len(by_day)),
    )


# -------------------------------------------------------------
# Display tables
# -------------------------------------------------------------
def buckets_to_frame(
    buckets: Sequence[AggregationBucket],
    total: int,
    limit: Optional[int] = None,
) -> pd.DataFrame:
    rows = list(buckets)[:limit] if limit is not None else list(buckets)
    return pd.DataFrame(
        {
            "項目": [b.label for b in rows],
            "次數": [b.count for b in rows],
            "占比": [pct(b.count, total) for b in rows],
        },
        columns=["項目", "次數", "占比"],
    )


def day_series_frame(by_day: Sequence[AggregationBucket]) -> pd.DataFrame:
    return pd.DataFrame(
        {"日期": [b.label for b in by_day], "筆數": [b.count for b in by_day]},
        columns=["日期", "筆數"],
    )
