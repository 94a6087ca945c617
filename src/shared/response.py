from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Generic, Optional, TypeVar

from src.shared.base import BaseSchema


T = TypeVar("T")

CALCULATION_VERSION = "v1"


class Meta(BaseSchema):
    as_of_date: str
    source: str
    calculation_version: str = CALCULATION_VERSION
    currency: Optional[str] = None
    generated_at: Optional[str] = None


class ResponseEnvelope(BaseSchema, Generic[T]):
    data: T
    meta: Optional[Meta] = None


def build_meta(source: str, currency: Optional[str] = None) -> Meta:
    return Meta(
        as_of_date=date.today().isoformat(),
        source=source,
        currency=currency,
        generated_at=datetime.now(timezone.utc).isoformat(),
    )
