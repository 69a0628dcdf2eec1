from html import escape
from typing import Callable, Optional, Sequence

import streamlit as st

from services.visit_stats_service import AggregationBucket, buckets_to_frame

EMPTY_HINT = "（此範圍尚無資料）"


def header_card(title: str, subtitle: str = ""):
    sub = f'<div class="wk-sub">{escape(subtitle)}</div>' if subtitle else ""
    st.markdown(f"""
    <div class="wk-header">
      <div class="wk-title">{escape(title)}</div>
      {sub}
    </div>
    """, unsafe_allow_html=True)


def kpi_card(label: str, value, loading: bool = False):
    shown = "…" if loading else escape(str(value))
    st.markdown(f"""
    <div class="kpi-card">
      <div class="kpi-label">{escape(label)}</div>
      <div class="kpi-value">{shown}</div>
    </div>
    """, unsafe_allow_html=True)


def error_banner(message: str):
    st.markdown(f'<div class="wk-error">{escape(message)}</div>', unsafe_allow_html=True)


def chip_row(
    options: Sequence[str],
    is_active: Callable[[str], bool],
    on_click: Callable[[str], None],
    key_prefix: str,
    per_row: int = 4,
    disabled: bool = False,
):
    """Button-style chips; the active ones render as primary buttons."""
    for i in range(0, len(options), per_row):
        cols = st.columns(per_row)
        for col, opt in zip(cols, options[i:i + per_row]):
            col.button(
                opt,
                key=f"{key_prefix}_{opt}",
                type="primary" if is_active(opt) else "secondary",
                on_click=on_click,
                args=(opt,),
                disabled=disabled,
                width="stretch",
            )


def stat_table(
    title: str,
    buckets: Sequence[AggregationBucket],
    total: int,
    limit: Optional[int] = None,
):
    st.markdown(f"**{title}**")
    if not buckets:
        st.caption(EMPTY_HINT)
        return
    st.dataframe(buckets_to_frame(buckets, total, limit=limit), hide_index=True, width="stretch")
