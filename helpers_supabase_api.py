# helpers_supabase_api.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from shop_mapping import ALL_STORES

logger = logging.getLogger(__name__)

VISIT_COLUMNS = (
    "id",
    "form_date",
    "store",
    "gender",
    "age_range",
    "is_tainan",
    "source_tags",
    "visit_purposes",
)


class VisitApiError(RuntimeError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


@dataclass(frozen=True)
class SupabaseApiConfig:
    base_url: str  # e.g. https://<project>.supabase.co
    api_key: str
    table: str = "visits"
    timeout: int = 20

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }


def normalize_base(url: str) -> str:
    if not url:
        return ""
    if "://" not in url:
        url = "https://" + url
    return url.rstrip("/")


def build_select_params(start_date: str, end_date: str, store: str = ALL_STORES) -> List[Tuple[str, str]]:
    """
    PostgREST filter syntax: repeated form_date keys give the inclusive range,
    store is only filtered when a specific store is chosen.
    """
    params: List[Tuple[str, str]] = [
        ("select", ",".join(VISIT_COLUMNS)),
        ("form_date", f"gte.{start_date}"),
        ("form_date", f"lte.{end_date}"),
    ]
    if store and store != ALL_STORES:
        params.append(("store", f"eq.{store}"))
    return params


def _error_message(resp: requests.Response) -> str:
    # PostgREST error body: {"code": ..., "message": ..., "details": ..., "hint": ...}
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        msg = body.get("message") or body.get("error_description") or body.get("error")
        if msg:
            return str(msg)
    return f"HTTP {resp.status_code}: {resp.text[:200]}".strip()


def _check(resp: requests.Response) -> None:
    if resp.status_code >= 400:
        msg = _error_message(resp)
        logger.warning("Supabase returned %s: %s", resp.status_code, msg)
        raise VisitApiError(msg, status=resp.status_code)


def fetch_visits(
    cfg: SupabaseApiConfig,
    start_date: str,
    end_date: str,
    store: str = ALL_STORES,
) -> List[Dict[str, Any]]:
    params = build_select_params(start_date, end_date, store)
    logger.info("Fetching visits %s..%s store=%s", start_date, end_date, store)
    try:
        resp = requests.get(cfg.table_url, params=params, headers=cfg.headers(), timeout=cfg.timeout)
    except requests.RequestException as e:
        logger.warning("Visit fetch failed: %s", e)
        raise VisitApiError(str(e)) from e

    _check(resp)
    try:
        data = resp.json()
    except ValueError as e:
        raise VisitApiError("invalid JSON in response", status=resp.status_code) from e
    if data is None:
        return []
    if not isinstance(data, list):
        raise VisitApiError("unexpected response shape", status=resp.status_code)

    logger.info("Fetched %d visits", len(data))
    return data


def insert_visit(cfg: SupabaseApiConfig, row: Dict[str, Any]) -> None:
    headers = cfg.headers()
    headers["Prefer"] = "return=minimal"
    logger.info("Inserting visit for store=%s date=%s", row.get("store"), row.get("form_date"))
    try:
        resp = requests.post(cfg.table_url, json=[row], headers=headers, timeout=cfg.timeout)
    except requests.RequestException as e:
        logger.warning("Visit insert failed: %s", e)
        raise VisitApiError(str(e)) from e
    _check(resp)
