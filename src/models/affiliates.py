from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Literal, Optional

from pydantic import ValidationError, ValidationInfo, field_validator

from src.core.errors import InvalidMonthKeyError, InvalidReferralCountError
from src.shared.base import RecordModel

Role = Literal["admin", "affiliate"]


class ProfileRecord(RecordModel):
    id: str
    username: str
    role: Role = "affiliate"
    must_change_password: bool = False


def parse_month_key(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidMonthKeyError(value)
    try:
        parsed = date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidMonthKeyError(value) from exc
    if parsed.day != 1 or parsed.isoformat() != value:
        raise InvalidMonthKeyError(value)
    return value


class ReferralRecord(RecordModel):
    month: str
    referrals_count: Optional[int] = None

    # AppError is not a ValueError, so pydantic lets these propagate unwrapped.
    @field_validator("month", mode="before")
    @classmethod
    def check_month(cls, value: Any) -> str:
        return parse_month_key(value)

    @field_validator("referrals_count", mode="before")
    @classmethod
    def check_referrals_count(cls, value: Any, info: ValidationInfo) -> Optional[int]:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidReferralCountError(info.data.get("month", ""), value)
        return value


class ReferralTotalRecord(RecordModel):
    user_id: str
    referrals_count: Optional[int] = None


def parse_referral_rows(rows: Iterable[Dict[str, Any]]) -> List[ReferralRecord]:
    records: List[ReferralRecord] = []
    for row in rows:
        try:
            records.append(ReferralRecord.model_validate(row))
        except ValidationError as exc:
            # Only a missing month reaches here; the field validators raise our own errors.
            raise InvalidMonthKeyError(row.get("month")) from exc
    return records
