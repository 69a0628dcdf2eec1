import logging
import os
from typing import Any, Optional

import streamlit as st

from helpers_periods import DEFAULT_TZ, local_today
from helpers_supabase_api import SupabaseApiConfig, normalize_base

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setting(name: str, default: Any = None) -> Any:
    """st.secrets first, then the environment (local runs without secrets.toml)."""
    try:
        value = st.secrets.get(name, None)
    except FileNotFoundError:
        # no secrets.toml at all (StreamlitSecretNotFoundError subclasses it)
        value = None
    if value is None or value == "":
        value = os.getenv(name, default)
    return value


def setup_logging() -> None:
    level = str(setting("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=_LOG_FORMAT)


def app_timezone() -> str:
    return str(setting("APP_TIMEZONE", DEFAULT_TZ))


def today():
    return local_today(app_timezone())


def load_api_config() -> Optional[SupabaseApiConfig]:
    base = normalize_base(str(setting("SUPABASE_URL", "")).strip())
    key = str(setting("SUPABASE_ANON_KEY", "")).strip()
    if not base or not key:
        return None
    try:
        timeout = int(setting("API_TIMEOUT", 20))
    except (TypeError, ValueError):
        timeout = 20
    return SupabaseApiConfig(
        base_url=base,
        api_key=key,
        table=str(setting("VISITS_TABLE", "visits")),
        timeout=timeout,
    )


def require_api_config() -> SupabaseApiConfig:
    cfg = load_api_config()
    if cfg is None:
        st.error("尚未設定 Supabase 連線。請在 secrets 或環境變數中設定 `SUPABASE_URL` 與 `SUPABASE_ANON_KEY`。")
        st.stop()
    return cfg
