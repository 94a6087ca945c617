from __future__ import annotations

from datetime import datetime

from src.analytics.referrals import aggregate_referrals
from src.core.config import Settings
from src.repositories.affiliate_stats_repository import AffiliateStatsRepository
from src.schemas.auth import CurrentUser
from src.schemas.dashboard import DashboardOverview, MonthlyOverviewRow
from src.shared.accounts import build_referral_link
from src.shared.formatting import format_currency


class DashboardService:
    def __init__(self, stats_repository: AffiliateStatsRepository, settings: Settings) -> None:
        self.stats_repository = stats_repository
        self.settings = settings

    def get_overview(self, current_user: CurrentUser, now: datetime) -> DashboardOverview:
        currency = self.settings.commission_currency
        username = current_user.profile.username or None
        records = self.stats_repository.list_referral_records(current_user.profile.id)
        aggregate = aggregate_referrals(records, self.settings.commission_per_referral, now)

        monthly_overview = [
            MonthlyOverviewRow(
                month_key=point.month_key,
                label=point.label,
                referrals_count=point.referrals_count,
                earnings=point.earnings,
                earnings_display=format_currency(point.earnings, currency),
            )
            for point in reversed(aggregate.series)
        ]
        return DashboardOverview(
            username=username,
            referral_link=build_referral_link(self.settings.ref_base_url, username) if username else None,
            commission_per_referral=self.settings.commission_per_referral,
            currency_code=currency,
            referrals=aggregate,
            total_earnings_display=format_currency(aggregate.total_earnings, currency),
            monthly_earnings_display=format_currency(aggregate.monthly_earnings, currency),
            monthly_overview=monthly_overview,
        )
