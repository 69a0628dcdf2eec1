import pytest
import requests
import streamlit as st
from streamlit.testing.v1 import AppTest

NEW_ENTRY = "../pages/02_New_Entry.py"
DASHBOARD = "../pages/01_Dashboard.py"


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        return self._body


def _app(path):
    at = AppTest.from_file(path, default_timeout=30)
    at.secrets["SUPABASE_URL"] = "https://demo.supabase.co"
    at.secrets["SUPABASE_ANON_KEY"] = "anon"
    return at.run()


@pytest.fixture
def posts(monkeypatch):
    calls = []
    replies = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append({"url": url, "json": json, "saving": st.session_state["new_state"].saving})
        return replies.pop(0) if replies else FakeResponse(201)

    monkeypatch.setattr(requests, "post", fake_post)
    return calls, replies


def _fill_form(at):
    at.text_input(key="new_name_0").set_value("王小明")
    at.text_area(key="new_detail_0").set_value("配一副新眼鏡")
    at.button(key="new_source_tags_PTT").click().run()
    at.button(key="new_visit_purposes_驗光配鏡").click().run()
    return at


def _form(at):
    return at.session_state["new_state"].form


# ======================
# New entry page
# ======================
def test_submit_success_resets_form(posts):
    calls, _ = posts
    at = _fill_form(_app(NEW_ENTRY))
    assert _form(at).customer_name == "王小明"

    at.button(key="new_submit").click().run()

    assert len(calls) == 1
    assert calls[0]["url"] == "https://demo.supabase.co/rest/v1/visits"
    row = calls[0]["json"][0]
    assert row["customer_name"] == "王小明"
    assert row["source_tags"] == ["PTT"]
    assert [s.value for s in at.success] == ["新增成功！"]
    assert _form(at).customer_name == ""
    assert _form(at).source_tags == ()
    assert at.text_input(key="new_name_1").value == ""
    assert not at.session_state["new_state"].saving


def test_controls_disabled_while_saving(posts):
    calls, _ = posts
    at = _fill_form(_app(NEW_ENTRY))
    at.button(key="new_submit").click().run()
    assert calls[0]["saving"] is True
    assert not at.button(key="new_submit").disabled


def test_submit_failure_keeps_form(posts):
    calls, replies = posts
    replies.append(FakeResponse(401, {"message": "rls"}))
    at = _fill_form(_app(NEW_ENTRY))

    at.button(key="new_submit").click().run()

    assert len(calls) == 1
    assert [e.value for e in at.error] == ["新增失敗：rls"]
    assert _form(at).customer_name == "王小明"
    assert _form(at).source_tags == ("PTT",)
    assert at.text_input(key="new_name_0").value == "王小明"
    assert not at.button(key="new_submit").disabled


def test_missing_name_never_posts(posts):
    calls, _ = posts
    at = _app(NEW_ENTRY)
    at.text_area(key="new_detail_0").set_value("配一副新眼鏡")
    at.button(key="new_submit").click().run()

    assert calls == []
    assert [e.value for e in at.error] == ["請填寫顧客姓名"]


def test_reset_dialog_confirm_clears_form(posts):
    at = _fill_form(_app(NEW_ENTRY))
    at.button(key="new_reset").click().run()
    at.button(key="new_reset_ok").click().run()

    assert _form(at).customer_name == ""
    assert _form(at).visit_purposes == ()
    assert at.session_state["new_state"].revision == 1
    assert posts[0] == []


def test_reset_dialog_cancel_keeps_form(posts):
    at = _fill_form(_app(NEW_ENTRY))
    at.button(key="new_reset").click().run()
    at.button(key="new_reset_cancel").click().run()

    assert _form(at).customer_name == "王小明"
    assert at.session_state["new_state"].revision == 0


# ======================
# Dashboard page
# ======================
ROWS = [
    {"id": 1, "form_date": "2024-05-20", "store": "臨安店", "gender": "女", "source_tags": ["PTT"], "visit_purposes": ["驗光配鏡"]},
    {"id": 2, "form_date": "2024-05-20", "store": "南科店", "gender": "男", "source_tags": ["PTT", "Dcard"], "visit_purposes": None},
    {"id": 3, "form_date": "2024-05-20", "store": "臨安店", "gender": "男", "source_tags": [], "visit_purposes": ["調整眼鏡"]},
]


@pytest.fixture
def gets(monkeypatch):
    calls = []
    replies = []

    def fake_get(url, params=None, headers=None, timeout=None):
        calls.append({"params": params, "loading": st.session_state["dash_state"].loading})
        return replies.pop(0) if replies else FakeResponse(200, ROWS)

    monkeypatch.setattr(requests, "get", fake_get)
    return calls, replies


def _kpi_values(at):
    return [m.value for m in at.markdown if "kpi-value" in m.value]


def test_dashboard_loads_and_shows_cards(gets):
    calls, _ = gets
    at = _app(DASHBOARD)

    assert len(calls) == 1
    assert calls[0]["loading"] is True
    state = at.session_state["dash_state"]
    assert not state.loading
    assert len(state.rows) == 3
    cards = "".join(_kpi_values(at))
    assert '<div class="kpi-value">3</div>' in cards
    assert '<div class="kpi-value">…</div>' not in cards
    # 3 records on 1 day
    assert '<div class="kpi-value">3.0</div>' not in cards


def test_dashboard_store_filter_refetches(gets):
    calls, _ = gets
    at = _app(DASHBOARD)
    at.button(key="dash_store_南科店").click().run()

    assert len(calls) == 2
    assert ("store", "eq.南科店") in calls[1]["params"]


def test_dashboard_fetch_error_clears_rows(gets):
    calls, replies = gets
    at = _app(DASHBOARD)
    assert len(at.session_state["dash_state"].rows) == 3

    replies.append(FakeResponse(500, {"message": "boom"}))
    at.button(key="dash_refresh").click().run()

    assert len(calls) == 2
    state = at.session_state["dash_state"]
    assert state.rows == []
    assert state.error == "boom"
    assert any('<div class="wk-error">讀取失敗：boom</div>' in m.value for m in at.markdown)


def test_dashboard_does_not_refetch_failed_key(gets):
    calls, replies = gets
    replies.append(FakeResponse(500, {"message": "boom"}))
    at = _app(DASHBOARD)
    at.run()

    assert len(calls) == 1
    assert at.session_state["dash_state"].error == "boom"
