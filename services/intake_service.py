# services/intake_service.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from helpers_supabase_api import VisitApiError
from helpers_visits import VisitRecord, validate_visit

logger = logging.getLogger(__name__)

RowWriter = Callable[[Dict[str, Any]], None]


@dataclass(frozen=True)
class SubmitResult:
    ok: bool
    message: str
    # "invalid" = blocked before writing, "failed" = backend refused
    reason: Optional[str] = None


def submit_visit(visit: VisitRecord, writer: RowWriter) -> SubmitResult:
    """
    Validate the form and write it as one row.

    The writer is only called when every required field is present. A
    VisitApiError from the writer is turned into a failed result; the caller
    keeps the form as-is so the user can retry.
    """
    problem = validate_visit(visit)
    if problem:
        return SubmitResult(ok=False, message=problem, reason="invalid")

    try:
        writer(visit.to_row())
    except VisitApiError as e:
        logger.warning("Intake submit failed: %s", e.message)
        return SubmitResult(ok=False, message=f"新增失敗：{e.message}", reason="failed")

    return SubmitResult(ok=True, message="新增成功！")
