# pages/02_New_Entry.py
# ------------------------------------------------------------
# WAKODO Stats — New Entry (visit intake)
# - Staff open this on a phone via QR code; every choice is a button
# - Required: name, detail, >= 1 source, >= 1 purpose
# - Success resets the whole form; a backend error keeps it for retry
# ------------------------------------------------------------

import sys
from pathlib import Path

import streamlit as st

# Ensure root importable (helpers_*.py in root)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from helpers_periods import parse_ymd, to_ymd
from helpers_state import IntakeFormState
from helpers_supabase_api import insert_visit
from helpers_visits import AGE_OPTIONS, GENDER_OPTIONS, PURPOSES, SOURCES, TAINAN_OPTIONS
from services.intake_service import submit_visit
from shop_mapping import STORE_OPTIONS
from stylesheet import inject_css
from ui import chip_row, header_card
from utils_wakodo import require_api_config, setup_logging, today

st.set_page_config(page_title="新增資料 · WAKODO Stats", page_icon="📝", layout="centered")
setup_logging()
inject_css()

cfg = require_api_config()

if "new_state" not in st.session_state:
    st.session_state.new_state = IntakeFormState(today=today())
state: IntakeFormState = st.session_state.new_state
rev = state.revision

header_card("新增資料", "店內同仁可直接用手機掃 QR Code 進來填寫（全部選項皆按鈕化）。")

flash = st.session_state.pop("new_flash", None)
if flash:
    kind, message = flash
    (st.success if kind == "success" else st.error)(message)


def _start_saving():
    state.saving = True


def _confirm_reset():
    state.reset(today())


@st.dialog("重置填寫內容？")
def confirm_reset():
    st.write("目前填寫的內容將全部清除。")
    c1, c2 = st.columns(2)
    if c1.button("確定重置", key="new_reset_ok", type="primary", on_click=_confirm_reset, width="stretch"):
        st.rerun()
    if c2.button("取消", key="new_reset_cancel", width="stretch"):
        st.rerun()


# ======================
# Free-text fields
# ======================
picked = st.date_input("日期", value=parse_ymd(state.form.form_date), key=f"new_date_{rev}", disabled=state.saving)
name = st.text_input("顧客姓名（必填）", value=state.form.customer_name, key=f"new_name_{rev}", disabled=state.saving)
keyword = st.text_input("搜尋關鍵字（可空）", value=state.form.search_keyword, key=f"new_kw_{rev}", disabled=state.saving)
detail = st.text_area("詳細描述（必填）", value=state.form.detail_desc, height=120, key=f"new_detail_{rev}", disabled=state.saving)
state.update(
    form_date=to_ymd(picked),
    customer_name=name,
    search_keyword=keyword,
    detail_desc=detail,
)


# ======================
# Button-style choices
# ======================
def single_choice(label: str, field_name: str, options, per_row: int = 3):
    st.markdown(f"**{label}**")
    chip_row(
        list(options),
        is_active=lambda opt: getattr(state.form, field_name) == opt,
        on_click=lambda opt: state.update(**{field_name: opt}),
        key_prefix=f"new_{field_name}",
        per_row=per_row,
        disabled=state.saving,
    )


def multi_choice(label: str, field_name: str, options, per_row: int = 3):
    st.markdown(f"**{label}**")
    chip_row(
        list(options),
        is_active=lambda opt: opt in getattr(state.form, field_name),
        on_click=lambda opt: state.toggle(field_name, opt),
        key_prefix=f"new_{field_name}",
        per_row=per_row,
        disabled=state.saving,
    )


single_choice("門店", "store", STORE_OPTIONS, per_row=2)
single_choice("性別", "gender", GENDER_OPTIONS, per_row=2)
single_choice("年齡範圍", "age_range", AGE_OPTIONS)
single_choice("是否為台南人", "is_tainan", TAINAN_OPTIONS, per_row=2)
multi_choice("來源（可複選，至少 1）", "source_tags", SOURCES)
multi_choice("來店目的（可複選，至少 1）", "visit_purposes", PURPOSES)

st.divider()

# ======================
# Submit / reset
# ======================
col_submit, col_reset = st.columns(2)
with col_submit:
    st.button(
        "送出",
        key="new_submit",
        type="primary",
        on_click=_start_saving,
        disabled=state.saving,
        width="stretch",
    )
with col_reset:
    if st.button("一鍵重填", key="new_reset", disabled=state.saving, width="stretch"):
        confirm_reset()

# the click only raised the flag; this run drew everything disabled, now write
if state.saving:
    try:
        with st.spinner("儲存中..."):
            result = submit_visit(state.form, lambda row: insert_visit(cfg, row))
    finally:
        state.saving = False

    if result.ok:
        state.reset(today())
        st.session_state.new_flash = ("success", result.message)
    else:
        st.session_state.new_flash = ("error", result.message)
    st.rerun()
