# helpers_periods.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

DEFAULT_TZ = "Asia/Taipei"

# range key -> button label (display order)
RANGE_LABELS: dict[str, str] = {
    "today": "今天",
    "7d": "近 7 天",
    "month": "本月",
    "year": "今年",
    "custom": "自訂",
}


@dataclass(frozen=True)
class PeriodDef:
    start: date
    end: date

    @property
    def start_str(self) -> str:
        return to_ymd(self.start)

    @property
    def end_str(self) -> str:
        return to_ymd(self.end)


def to_ymd(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_ymd(value: str | date | None) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value), "%Y-%m-%d").date()


def local_today(tz_name: str = DEFAULT_TZ) -> date:
    return datetime.now(ZoneInfo(tz_name)).date()


def period_catalog(today: date) -> dict[str, PeriodDef]:
    return {
        "today": PeriodDef(today, today),
        "7d": PeriodDef(today - timedelta(days=6), today),
        "month": PeriodDef(today.replace(day=1), today),
        "year": PeriodDef(date(today.year, 1, 1), today),
    }


def resolve_range(
    range_key: str,
    today: date,
    custom_start: str | date | None = None,
    custom_end: str | date | None = None,
) -> PeriodDef:
    """
    Turn a range button into an inclusive [start, end] window.

    For "custom" a missing bound falls back to today and an inverted pair is
    swapped, so start <= end always holds.
    """
    if range_key != "custom":
        catalog = period_catalog(today)
        if range_key not in catalog:
            raise ValueError(f"unknown range: {range_key!r}")
        return catalog[range_key]

    start = parse_ymd(custom_start) or today
    end = parse_ymd(custom_end) or today
    if start > end:
        start, end = end, start
    return PeriodDef(start, end)
