from __future__ import annotations

import os

os.environ.setdefault("SUPABASE_URL", "https://project.supabase.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-key")

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from src.analytics.referrals import aggregate_referrals
from src.api.dependencies import get_admin_service, get_auth_service, get_dashboard_service
from src.core.errors import BadRequestError, UnauthorizedError
from src.main import create_app
from src.models.affiliates import ReferralRecord
from src.schemas.admin import AdminUserRow, CreatedUser
from src.schemas.auth import CurrentUser, LoginResponse, Profile, SessionTokens
from src.schemas.dashboard import DashboardOverview, MonthlyOverviewRow
from src.shared.formatting import format_currency

ADMIN_PROFILE = Profile(id="user-admin", username="beheer", role="admin", must_change_password=False)
AFFILIATE_PROFILE = Profile(id="user-aff", username="jan-jansen", role="affiliate", must_change_password=True)

TOKENS = {
    "admin-token": ADMIN_PROFILE,
    "affiliate-token": AFFILIATE_PROFILE,
}


class FakeAuthService:
    def __init__(self) -> None:
        self.signed_out: List[str] = []

    def login(self, username: str, password: str) -> LoginResponse:
        if username.strip().lower() != "jan-jansen" or password != "correct-horse":
            raise UnauthorizedError("Login failed, check your credentials")
        return LoginResponse(
            session=SessionTokens(access_token="affiliate-token", refresh_token="refresh-1", expires_in=3600),
            profile=AFFILIATE_PROFILE,
        )

    def get_current_user(self, access_token: str) -> CurrentUser:
        profile = TOKENS.get(access_token)
        if profile is None:
            raise UnauthorizedError()
        return CurrentUser(access_token=access_token, email=f"{profile.username}@affiliate.getscora.app", profile=profile)

    def logout(self, access_token: str) -> None:
        self.signed_out.append(access_token)

    def change_password(self, current_user: CurrentUser, new_password: str, confirm_password: str) -> Profile:
        if new_password != confirm_password:
            raise BadRequestError("Passwords do not match")
        return current_user.profile.model_copy(update={"must_change_password": False})


class FakeDashboardService:
    def get_overview(self, current_user: CurrentUser, now: datetime) -> DashboardOverview:
        _ = now
        records = [
            ReferralRecord(month="2024-05-01", referrals_count=4),
            ReferralRecord(month="2024-06-01", referrals_count=10),
        ]
        aggregate = aggregate_referrals(records, Decimal("5"), datetime(2024, 6, 15, 12, 0))
        return DashboardOverview(
            username=current_user.profile.username,
            referral_link=f"https://app.scora.nl?ref={current_user.profile.username}",
            commission_per_referral=Decimal("5"),
            currency_code="EUR",
            referrals=aggregate,
            total_earnings_display=format_currency(aggregate.total_earnings),
            monthly_earnings_display=format_currency(aggregate.monthly_earnings),
            monthly_overview=[
                MonthlyOverviewRow(
                    month_key=point.month_key,
                    label=point.label,
                    referrals_count=point.referrals_count,
                    earnings=point.earnings,
                    earnings_display=format_currency(point.earnings),
                )
                for point in reversed(aggregate.series)
            ],
        )


class FakeAdminService:
    def __init__(self) -> None:
        self.created: List[dict] = []

    def list_users(self) -> List[AdminUserRow]:
        return [
            AdminUserRow(id="user-admin", username="beheer", role="admin", must_change_password=False, total_referrals=0),
            AdminUserRow(
                id="user-aff", username="jan-jansen", role="affiliate", must_change_password=True, total_referrals=14
            ),
        ]

    def create_user(self, username: str, role: Optional[str] = None, email: Optional[str] = None) -> CreatedUser:
        self.created.append({"username": username, "role": role, "email": email})
        normalized = username.strip().lower().replace(" ", "-")
        return CreatedUser(
            email=email or f"{normalized}@affiliate.getscora.app",
            temp_password="Tmp-Passw0rd",
            username=normalized,
            role="admin" if role == "admin" else "affiliate",
        )


@pytest.fixture()
def fake_auth_service() -> FakeAuthService:
    return FakeAuthService()


@pytest.fixture()
def fake_admin_service() -> FakeAdminService:
    return FakeAdminService()


@pytest.fixture()
def client(fake_auth_service: FakeAuthService, fake_admin_service: FakeAdminService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: fake_auth_service
    app.dependency_overrides[get_dashboard_service] = FakeDashboardService
    app.dependency_overrides[get_admin_service] = lambda: fake_admin_service
    return TestClient(app)
