from helpers_normalize import normalize_visit_rows, visits_to_frame
from helpers_supabase_api import VISIT_COLUMNS


def test_normalize_fills_missing_columns():
    rows = normalize_visit_rows([{"id": 3, "form_date": "2024-05-01", "gender": " 女 "}])
    assert len(rows) == 1
    row = rows[0]
    assert tuple(row) == VISIT_COLUMNS
    assert row["gender"] == "女"
    assert row["store"] is None
    assert row["source_tags"] == []


def test_normalize_handles_null_and_odd_arrays():
    rows = normalize_visit_rows(
        [
            {"source_tags": None, "visit_purposes": "驗光配鏡"},
            {"source_tags": ["PTT", None, ""], "visit_purposes": []},
        ]
    )
    assert rows[0]["source_tags"] == [] and rows[0]["visit_purposes"] == []
    assert rows[1]["source_tags"] == ["PTT"]


def test_normalize_skips_non_dicts_and_none():
    assert normalize_visit_rows(None) == []
    assert normalize_visit_rows(["oops", 1]) == []


def test_visits_to_frame_joins_tags_and_sorts():
    rows = normalize_visit_rows(
        [
            {"id": 2, "form_date": "2024-05-02", "source_tags": ["PTT", "Dcard"]},
            {"id": 1, "form_date": "2024-05-01", "source_tags": None},
        ]
    )
    df = visits_to_frame(rows)
    assert list(df.columns) == list(VISIT_COLUMNS)
    assert df["form_date"].tolist() == ["2024-05-01", "2024-05-02"]
    assert df["source_tags"].tolist() == ["", "PTT、Dcard"]


def test_visits_to_frame_empty():
    df = visits_to_frame([])
    assert df.empty
    assert list(df.columns) == list(VISIT_COLUMNS)
