from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, Union

from src.models.affiliates import ReferralRecord
from src.schemas.referrals import ReferralAggregate, ReferralSeriesPoint
from src.shared.formatting import format_month_label


def current_month_key(now: Union[date, datetime]) -> str:
    """First day of the month containing ``now``, read from its own calendar fields."""
    return f"{now.year:04d}-{now.month:02d}-01"


def aggregate_referrals(
    records: Iterable[ReferralRecord],
    commission_rate: Decimal,
    now: Union[date, datetime],
    label_formatter: Callable[[str], str] = format_month_label,
) -> ReferralAggregate:
    rate = Decimal(str(commission_rate))
    snapshot = list(records)
    month_key = current_month_key(now)

    series = [
        ReferralSeriesPoint(
            month_key=record.month,
            label=label_formatter(record.month),
            referrals_count=record.referrals_count or 0,
            earnings=(record.referrals_count or 0) * rate,
        )
        for record in sorted(snapshot, key=lambda item: item.month)
    ]
    total_referrals = sum(record.referrals_count or 0 for record in snapshot)
    # Duplicate months are not merged; the first match stands for the current month.
    current = next((record for record in snapshot if record.month == month_key), None)
    monthly_referrals = (current.referrals_count or 0) if current else 0

    return ReferralAggregate(
        series=series,
        total_referrals=total_referrals,
        total_earnings=total_referrals * rate,
        current_month_key=month_key,
        monthly_referrals=monthly_referrals,
        monthly_earnings=monthly_referrals * rate,
    )
