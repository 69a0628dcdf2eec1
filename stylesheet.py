# stylesheet.py
import streamlit as st

WAKODO_DARK = "#111111"
WAKODO_GRAY = "#64748B"
WAKODO_LIGHT = "#F8FAFC"
WAKODO_LINE = "#E2E8F0"
WAKODO_RED = "#B91C1C"


def get_css(
    *,
    DARK: str = WAKODO_DARK,
    GRAY: str = WAKODO_GRAY,
    LIGHT: str = WAKODO_LIGHT,
    LINE: str = WAKODO_LINE,
    RED: str = WAKODO_RED,
) -> str:
    """
    Returns the full CSS string (no <style> tags). Keep this file as the single source of truth.
    """

    return f"""
/* ---------------- Layout ---------------- */
.block-container {{
  padding-top: 2rem;
  padding-bottom: 2rem;
  max-width: 72rem;
}}

/* ---------------- Header (title card) ---------------- */
.wk-header {{
  padding: 1rem 1.25rem;
  border: 1px solid {LINE};
  border-radius: 16px;
  background: white;
  margin-bottom: 0.75rem;
}}

.wk-title {{
  font-size: 1.15rem;
  font-weight: 700;
  color: {DARK};
}}

.wk-sub {{
  color: {GRAY};
  font-size: 0.9rem;
  margin-top: 0.25rem;
}}

/* ---------------- KPI Cards ---------------- */
.kpi-card {{
  border: 1px solid {LINE};
  border-radius: 16px;
  background: white;
  padding: 0.9rem 1rem;
  margin-bottom: 0.5rem;
}}

.kpi-label {{
  color: {GRAY};
  font-size: 0.85rem;
}}

.kpi-value {{
  color: {DARK};
  font-size: 1.5rem;
  font-weight: 700;
  margin-top: 0.2rem;
}}

/* ---------------- Error banner ---------------- */
.wk-error {{
  border: 1px solid #FECACA;
  border-radius: 12px;
  background: #FEF2F2;
  color: {RED};
  padding: 0.75rem 1rem;
  font-size: 0.9rem;
}}

.muted {{
  color: {GRAY};
  font-size: 0.86rem;
}}

/* ---------------- Chips (buttons) ---------------- */
div.stButton > button {{
  border-radius: 999px !important;
  padding: 0.3rem 0.9rem !important;
}}
div.stButton > button[kind="primary"] {{
  background: {DARK} !important;
  border-color: {DARK} !important;
  color: white !important;
}}
div.stButton > button[kind="secondary"] {{
  background: white !important;
  border-color: {LINE} !important;
  color: #334155 !important;
}}
"""


def inject_css(**colors) -> None:
    """
    Injects CSS into the Streamlit app. Call once near the top of each page.
    """
    css = get_css(**colors)
    st.markdown(f"<style>{css}</style>", unsafe_allow_html=True)
