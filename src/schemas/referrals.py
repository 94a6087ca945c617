from __future__ import annotations

from decimal import Decimal
from typing import List

from src.shared.base import BaseSchema


class ReferralSeriesPoint(BaseSchema):
    month_key: str
    label: str
    referrals_count: int
    earnings: Decimal


class ReferralAggregate(BaseSchema):
    series: List[ReferralSeriesPoint]
    total_referrals: int
    total_earnings: Decimal
    current_month_key: str
    monthly_referrals: int
    monthly_earnings: Decimal
