# helpers_visits.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import date
from typing import Any, Dict, Optional, Tuple

from helpers_periods import parse_ymd, to_ymd
from shop_mapping import STORE_OPTIONS

GENDER_OPTIONS = ("男", "女")
TAINAN_OPTIONS = ("是", "否")
AGE_OPTIONS = ("18以下", "18-24", "25-34", "35-44", "45-54", "55以上")

SOURCES = (
    "Google 搜尋",
    "Facebook 廣告",
    "Facebook 轉發",
    "Instagram",
    "TikTok & YouTube",
    "Dcard",
    "Mobile 01",
    "PTT",
    "親友介紹",
    "純粹路過",
    "其他",
    "業配貼文（FB、IG）",
)

PURPOSES = (
    "驗光配鏡",
    "購買隱形眼鏡",
    "調整眼鏡",
    "單純買框",
    "問題諮詢",
    "單純看看",
    "購買其他商品",
    "住戶視力檢查",
)

MULTI_FIELDS = {"source_tags": SOURCES, "visit_purposes": PURPOSES}

_SINGLE_CHOICES = {
    "gender": GENDER_OPTIONS,
    "store": STORE_OPTIONS,
    "age_range": AGE_OPTIONS,
    "is_tainan": TAINAN_OPTIONS,
}


@dataclass(frozen=True)
class VisitRecord:
    """
    One intake submission, as written to the ``visits`` table.

    Text fields may be blank while the form is being filled in; required-field
    checks live in ``validate_visit``. Choice fields are checked against the
    fixed catalogs on construction.
    """

    form_date: str
    customer_name: str = ""
    gender: str = "男"
    store: str = "臨安店"
    age_range: str = "25-34"
    is_tainan: str = "是"
    source_tags: Tuple[str, ...] = field(default_factory=tuple)
    visit_purposes: Tuple[str, ...] = field(default_factory=tuple)
    search_keyword: str = ""
    detail_desc: str = ""
    id: Optional[int] = None

    def __post_init__(self) -> None:
        # raises ValueError on anything that is not a real YYYY-MM-DD date
        d = parse_ymd(self.form_date)
        if d is None:
            raise ValueError("form_date is required")
        object.__setattr__(self, "form_date", to_ymd(d))

        for name, options in _SINGLE_CHOICES.items():
            value = getattr(self, name)
            if value not in options:
                raise ValueError(f"{name}: {value!r} is not one of {options}")

        for name, catalog in MULTI_FIELDS.items():
            values = tuple(getattr(self, name) or ())
            unknown = [v for v in values if v not in catalog]
            if unknown:
                raise ValueError(f"{name}: unknown values {unknown}")
            object.__setattr__(self, name, values)

    @classmethod
    def from_form(cls, data: Dict[str, Any]) -> "VisitRecord":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown fields: {', '.join(unknown)}")
        return cls(**data)

    def to_row(self) -> Dict[str, Any]:
        """Payload for the remote insert; ``id`` is left to the backend."""
        row = asdict(self)
        row.pop("id")
        row["source_tags"] = list(self.source_tags)
        row["visit_purposes"] = list(self.visit_purposes)
        return row


def default_visit(today: date) -> VisitRecord:
    return VisitRecord(form_date=to_ymd(today))


def toggle_value(values: Tuple[str, ...], value: str) -> Tuple[str, ...]:
    if value in values:
        return tuple(v for v in values if v != value)
    return values + (value,)


def validate_visit(visit: VisitRecord) -> Optional[str]:
    """Return the first blocking message, or None when the form can be sent."""
    if not visit.customer_name.strip():
        return "請填寫顧客姓名"
    if not visit.detail_desc.strip():
        return "請填寫詳細描述"
    if not visit.source_tags:
        return "請至少選擇 1 個來源"
    if not visit.visit_purposes:
        return "請至少選擇 1 個來店目的"
    return None
