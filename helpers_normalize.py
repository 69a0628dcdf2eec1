# helpers_normalize.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from helpers_supabase_api import VISIT_COLUMNS

SCALAR_FIELDS = ("form_date", "store", "gender", "age_range", "is_tainan")
ARRAY_FIELDS = ("source_tags", "visit_purposes")


def _coerce_text(x) -> Optional[str]:
    if x is None:
        return None
    s = str(x).strip()
    return s or None


def _coerce_list(x) -> List[str]:
    """Array columns come back as a JSON list or null; anything else counts as empty."""
    if not isinstance(x, (list, tuple)):
        return []
    return [str(v) for v in x if v is not None and str(v) != ""]


def normalize_visit_rows(rows: Optional[Iterable[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Flatten raw /rest/v1/visits rows into predictable dicts.

    Scalars become stripped strings or None, array columns become lists, the
    column set is always exactly VISIT_COLUMNS. Non-dict entries are skipped.
    """
    out: List[Dict[str, Any]] = []
    for raw in rows or []:
        if not isinstance(raw, dict):
            continue
        row: Dict[str, Any] = {"id": raw.get("id")}
        for k in SCALAR_FIELDS:
            row[k] = _coerce_text(raw.get(k))
        for k in ARRAY_FIELDS:
            row[k] = _coerce_list(raw.get(k))
        out.append(row)
    return out


def visits_to_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """Raw rows as a table (debug expander); list columns joined with '、'."""
    if not rows:
        return pd.DataFrame(columns=list(VISIT_COLUMNS))
    df = pd.DataFrame(rows).reindex(columns=list(VISIT_COLUMNS))
    for k in ARRAY_FIELDS:
        df[k] = df[k].apply(lambda v: "、".join(v) if isinstance(v, list) else "")
    return df.sort_values(by=["form_date", "id"], kind="stable", na_position="last").reset_index(drop=True)
