from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from src.schemas.referrals import ReferralAggregate
from src.shared.base import BaseSchema


class MonthlyOverviewRow(BaseSchema):
    month_key: str
    label: str
    referrals_count: int
    earnings: Decimal
    earnings_display: str


class DashboardOverview(BaseSchema):
    username: Optional[str] = None
    referral_link: Optional[str] = None
    commission_per_referral: Decimal
    currency_code: str
    referrals: ReferralAggregate
    total_earnings_display: str
    monthly_earnings_display: str
    monthly_overview: List[MonthlyOverviewRow]
