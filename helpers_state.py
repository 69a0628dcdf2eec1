# helpers_state.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from helpers_periods import PeriodDef, resolve_range
from helpers_visits import MULTI_FIELDS, VisitRecord, default_visit, toggle_value
from shop_mapping import ALL_STORES

logger = logging.getLogger(__name__)

FetchKey = Tuple[str, str, str]


@dataclass
class DashboardState:
    """
    Filters and fetched rows of one Dashboard session.

    Every load gets a new generation token; results that come back with an
    older token are dropped, so a slow response can't overwrite newer data.
    """

    range_key: str = "today"
    store: str = ALL_STORES
    custom_start: Optional[str] = None
    custom_end: Optional[str] = None

    loading: bool = False
    rows: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None
    generation: int = 0
    loaded_key: Optional[FetchKey] = None

    def period(self, today: date) -> PeriodDef:
        return resolve_range(self.range_key, today, self.custom_start, self.custom_end)

    def fetch_key(self, today: date) -> FetchKey:
        p = self.period(today)
        return (p.start_str, p.end_str, self.store)

    def needs_load(self, today: date) -> bool:
        return self.loaded_key != self.fetch_key(today)

    def begin_load(self) -> int:
        self.generation += 1
        self.loading = True
        self.error = None
        return self.generation

    def _is_current(self, token: int) -> bool:
        if token != self.generation:
            logger.info("Dropping stale result (token %s, current %s)", token, self.generation)
            return False
        return True

    def finish_load(self, token: int, key: FetchKey, rows: List[Dict[str, Any]]) -> bool:
        if not self._is_current(token):
            return False
        self.loading = False
        self.rows = list(rows)
        self.loaded_key = key
        return True

    def fail_load(self, token: int, key: FetchKey, message: str) -> bool:
        if not self._is_current(token):
            return False
        self.loading = False
        self.rows = []
        self.error = message
        # remember the key so a failure isn't retried on every rerun
        self.loaded_key = key
        return True


@dataclass
class IntakeFormState:
    today: date
    form: Optional[VisitRecord] = None
    saving: bool = False
    # bumped on reset so keyed text widgets start from the new defaults
    revision: int = 0

    def __post_init__(self) -> None:
        if self.form is None:
            self.form = default_visit(self.today)

    def update(self, **changes: Any) -> None:
        self.form = replace(self.form, **changes)

    def toggle(self, name: str, value: str) -> None:
        if name not in MULTI_FIELDS:
            raise ValueError(f"not a multi-select field: {name}")
        self.update(**{name: toggle_value(getattr(self.form, name), value)})

    def reset(self, today: Optional[date] = None) -> None:
        if today is not None:
            self.today = today
        self.form = default_visit(self.today)
        self.revision += 1
