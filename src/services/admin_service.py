from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from src.core.config import Settings
from src.core.errors import BadRequestError
from src.core.supabase import SupabaseAuthClient, provider_error_message
from src.repositories.affiliate_stats_repository import AffiliateStatsRepository
from src.repositories.profiles_repository import ProfilesRepository
from src.schemas.admin import AdminUserRow, CreatedUser
from src.shared.accounts import generate_temp_password, normalize_username, username_to_email

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        auth_client: SupabaseAuthClient,
        profiles_repository: ProfilesRepository,
        stats_repository: AffiliateStatsRepository,
        settings: Settings,
    ) -> None:
        self.auth_client = auth_client
        self.profiles_repository = profiles_repository
        self.stats_repository = stats_repository
        self.settings = settings

    def list_users(self) -> List[AdminUserRow]:
        profiles = self.profiles_repository.list_profiles()
        try:
            totals = self.stats_repository.list_referral_totals_by_user()
        except httpx.HTTPError as exc:
            logger.warning("Referral totals unavailable, listing users without them: %s", exc)
            totals = {}
        return [
            AdminUserRow(
                id=profile.id,
                username=profile.username,
                role=profile.role,
                must_change_password=profile.must_change_password,
                total_referrals=totals.get(profile.id, 0),
            )
            for profile in profiles
        ]

    def create_user(self, username: str, role: Optional[str] = None, email: Optional[str] = None) -> CreatedUser:
        normalized = normalize_username(username)
        if not normalized:
            raise BadRequestError("Invalid username")
        safe_role = "admin" if role == "admin" else "affiliate"
        account_email = (email or "").strip() or username_to_email(
            normalized, self.settings.affiliate_email_domain
        )
        temp_password = generate_temp_password(self.settings.temp_password_length)

        try:
            user = self.auth_client.admin_create_user(account_email, temp_password, email_confirm=True)
        except httpx.HTTPError as exc:
            logger.warning("Creating auth user %s failed: %s", normalized, exc)
            raise BadRequestError(provider_error_message(exc, "Create user failed")) from exc
        user_id = str(user.get("id") or "")
        if not user_id:
            raise BadRequestError("Create user failed")

        try:
            self.profiles_repository.create_profile(
                user_id=user_id,
                username=normalized,
                role=safe_role,
                must_change_password=True,
            )
        except httpx.HTTPError as exc:
            # TODO: delete the orphaned auth user once admin deletes are wired into SupabaseAuthClient.
            logger.error("Auth user %s created but profile insert failed: %s", user_id, exc)
            raise BadRequestError(provider_error_message(exc, "Create profile failed")) from exc

        logger.info("Provisioned %s account %s", safe_role, normalized)
        return CreatedUser(
            email=account_email,
            temp_password=temp_password,
            username=normalized,
            role=safe_role,
        )
