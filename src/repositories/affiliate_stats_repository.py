from __future__ import annotations

from collections import defaultdict
from typing import Dict, List

from src.core.supabase import SupabaseClient
from src.models.affiliates import ReferralRecord, ReferralTotalRecord, parse_referral_rows

MAX_QUERY_ROWS = 5000


class AffiliateStatsRepository:
    def __init__(self, client: SupabaseClient, table: str = "affiliates", page_size: int = MAX_QUERY_ROWS) -> None:
        self.client = client
        self.table = table
        self.page_size = page_size

    def list_referral_records(self, user_id: str) -> List[ReferralRecord]:
        rows = self.client.select(
            table=self.table,
            select="month,referrals_count",
            filters=[("user_id", f"eq.{user_id}")],
            limit=self.page_size,
        )
        return parse_referral_rows(rows)

    def list_referral_totals_by_user(self) -> Dict[str, int]:
        totals: Dict[str, int] = defaultdict(int)
        offset = 0
        while True:
            rows = self.client.select(
                table=self.table,
                select="user_id,referrals_count",
                limit=self.page_size,
                offset=offset,
                order="user_id.asc,month.asc",
            )
            for row in rows:
                record = ReferralTotalRecord.model_validate(row)
                totals[record.user_id] += record.referrals_count or 0
            if len(rows) < self.page_size:
                return dict(totals)
            offset += self.page_size
