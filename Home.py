# Home.py — entry page of WAKODO Stats
import streamlit as st

from stylesheet import inject_css
from utils_wakodo import load_api_config, setup_logging

st.set_page_config(page_title="WAKODO Stats", page_icon="👓", layout="wide")
setup_logging()
inject_css()

st.title("WAKODO Stats")
st.markdown(
    "- **儀表板**：依日期區間與門店查看來客統計。\n"
    "- **新增資料**：店內同仁用手機掃 QR Code 進來填寫。"
)
st.caption("請由左側選單選擇頁面。")

if load_api_config() is None:
    st.warning("尚未設定 `SUPABASE_URL` / `SUPABASE_ANON_KEY`，頁面將無法讀寫資料。")
