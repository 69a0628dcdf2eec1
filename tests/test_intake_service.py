from helpers_supabase_api import VisitApiError
from helpers_visits import VisitRecord
from services.intake_service import submit_visit


class RecordingWriter:
    def __init__(self, error=None):
        self.rows = []
        self.error = error

    def __call__(self, row):
        self.rows.append(row)
        if self.error:
            raise self.error


def _visit(**overrides):
    data = dict(
        form_date="2024-05-01",
        customer_name="林小姐",
        source_tags=("Instagram",),
        visit_purposes=("購買隱形眼鏡",),
        detail_desc="回購",
    )
    data.update(overrides)
    return VisitRecord(**data)


def test_empty_name_never_calls_writer():
    writer = RecordingWriter()
    result = submit_visit(_visit(customer_name=""), writer)
    assert not result.ok
    assert result.reason == "invalid"
    assert result.message == "請填寫顧客姓名"
    assert writer.rows == []


def test_missing_purpose_never_calls_writer():
    writer = RecordingWriter()
    result = submit_visit(_visit(visit_purposes=()), writer)
    assert result.reason == "invalid"
    assert writer.rows == []


def test_valid_visit_written_once():
    writer = RecordingWriter()
    result = submit_visit(_visit(), writer)
    assert result.ok
    assert result.message == "新增成功！"
    assert len(writer.rows) == 1
    assert writer.rows[0]["customer_name"] == "林小姐"
    assert "id" not in writer.rows[0]


def test_backend_error_is_reported():
    writer = RecordingWriter(error=VisitApiError("duplicate key", status=409))
    result = submit_visit(_visit(), writer)
    assert not result.ok
    assert result.reason == "failed"
    assert result.message == "新增失敗：duplicate key"
    assert len(writer.rows) == 1
