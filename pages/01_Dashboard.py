# pages/01_Dashboard.py
# ------------------------------------------------------------
# WAKODO Stats — Dashboard
# - Range buttons (today / 7d / month / year / custom) + store filter
# - Fetches visits for the window, aggregates in memory
# - Summary cards, ranked tables with share %, daily counts
# ------------------------------------------------------------

import sys
from pathlib import Path

import altair as alt
import streamlit as st

# Ensure root importable (helpers_*.py in root)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from helpers_normalize import visits_to_frame, normalize_visit_rows
from helpers_periods import RANGE_LABELS, parse_ymd, period_catalog, to_ymd
from helpers_state import DashboardState
from helpers_supabase_api import VisitApiError, build_select_params, fetch_visits
from services.visit_stats_service import build_visit_stats, day_series_frame, format_average
from shop_mapping import STORE_FILTER_OPTIONS
from stylesheet import inject_css
from ui import EMPTY_HINT, chip_row, error_banner, header_card, kpi_card, stat_table
from utils_wakodo import require_api_config, setup_logging, today

st.set_page_config(page_title="儀表板 · WAKODO Stats", page_icon="📊", layout="wide")
setup_logging()
inject_css()

cfg = require_api_config()
TODAY = today()

# ----------------------
# Per-session view state
# ----------------------
if "dash_state" not in st.session_state:
    st.session_state.dash_state = DashboardState(custom_start=to_ymd(TODAY), custom_end=to_ymd(TODAY))
state: DashboardState = st.session_state.dash_state

LABEL_TO_RANGE = {label: key for key, label in RANGE_LABELS.items()}


def _set_range(label: str):
    state.range_key = LABEL_TO_RANGE[label]


def _set_store(store: str):
    state.store = store


def load(token, key):
    start_date, end_date, store = key
    with st.spinner("讀取中…"):
        try:
            rows = fetch_visits(cfg, start_date, end_date, store)
        except VisitApiError as e:
            state.fail_load(token, key, e.message)
            return
    state.finish_load(token, key, normalize_visit_rows(rows))


# ======================
# Filters
# ======================
col_title, col_btn = st.columns([5, 1], vertical_alignment="center")
with col_btn:
    refresh = st.button("重新整理", key="dash_refresh", type="primary", width="stretch")

catalog = period_catalog(TODAY)
chip_row(
    list(RANGE_LABELS.values()),
    is_active=lambda label: LABEL_TO_RANGE[label] == state.range_key,
    on_click=_set_range,
    key_prefix="dash_range",
    per_row=5,
)

if state.range_key == "custom":
    c1, c2, _ = st.columns([1, 1, 2])
    with c1:
        picked_start = st.date_input("開始", value=parse_ymd(state.custom_start) or TODAY, key="dash_custom_start")
    with c2:
        picked_end = st.date_input("結束", value=parse_ymd(state.custom_end) or TODAY, key="dash_custom_end")
    state.custom_start = to_ymd(picked_start)
    state.custom_end = to_ymd(picked_end)
    if picked_start > picked_end:
        st.caption("開始日期晚於結束日期，已自動對調。")
else:
    preset = catalog[state.range_key]
    st.caption(f"{preset.start_str} ～ {preset.end_str}")

chip_row(
    list(STORE_FILTER_OPTIONS),
    is_active=lambda s: s == state.store,
    on_click=_set_store,
    key_prefix="dash_store",
    per_row=len(STORE_FILTER_OPTIONS),
)

period = state.period(TODAY)
fetch_key = state.fetch_key(TODAY)

# flag the load here so this run draws the cards as "…"; the fetch itself runs at the bottom
if not state.loading and (refresh or state.needs_load(TODAY)):
    state.begin_load()

with col_title:
    header_card("儀表板", f"區間：{period.start_str} ～ {period.end_str}　門店：{state.store}")

if state.error:
    error_banner(f"讀取失敗：{state.error}")

# ======================
# Aggregation + cards
# ======================
stats = build_visit_stats(state.rows)

k1, k2, k3, k4 = st.columns(4)
with k1:
    kpi_card("總筆數", stats.total, loading=state.loading)
with k2:
    kpi_card("來源項目數（加總）", stats.source_total, loading=state.loading)
with k3:
    kpi_card("目的項目數（加總）", stats.purpose_total, loading=state.loading)
with k4:
    kpi_card("每日平均（筆）", format_average(stats.avg_per_day), loading=state.loading)

# ======================
# Ranked tables
# ======================
left, right = st.columns(2)
with left:
    stat_table("來源 Top", stats.by_source, stats.source_total, limit=12)
with right:
    stat_table("來店目的 Top", stats.by_purpose, stats.purpose_total, limit=12)

left, right = st.columns(2)
with left:
    stat_table("門店", stats.by_store, stats.total)
with right:
    stat_table("性別", stats.by_gender, stats.total)

left, right = st.columns(2)
with left:
    stat_table("年齡範圍", stats.by_age, stats.total)
with right:
    stat_table("是否台南人", stats.by_tainan, stats.total)

# ======================
# Daily counts
# ======================
st.markdown("**每日筆數**")
if not stats.by_day:
    st.caption(EMPTY_HINT)
else:
    day_df = day_series_frame(stats.by_day)
    chart = (
        alt.Chart(day_df)
        .mark_bar(color="#111111")
        .encode(
            x=alt.X("日期:N", sort=None, title=None),
            y=alt.Y("筆數:Q", title=None),
            tooltip=[alt.Tooltip("日期:N"), alt.Tooltip("筆數:Q")],
        )
        .properties(height=220)
    )
    st.altair_chart(chart, width="stretch")
    st.dataframe(day_df, hide_index=True, width="stretch")

# ---------- Debug ----------
with st.expander("Debug (原始資料)"):
    st.code(build_select_params(*fetch_key))
    st.dataframe(visits_to_frame(state.rows), hide_index=True, width="stretch")

if state.loading:
    load(state.generation, fetch_key)
    st.rerun()
