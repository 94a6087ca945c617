from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from src.core.config import Settings
from src.core.errors import BadRequestError, UnauthorizedError, UpstreamError
from src.core.supabase import SupabaseAuthClient, provider_error_message
from src.models.affiliates import ProfileRecord
from src.repositories.profiles_repository import ProfilesRepository
from src.schemas.auth import CurrentUser, LoginResponse, Profile, SessionTokens
from src.shared.accounts import normalize_username, username_to_email

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        auth_client: SupabaseAuthClient,
        profiles_repository: ProfilesRepository,
        settings: Settings,
    ) -> None:
        self.auth_client = auth_client
        self.profiles_repository = profiles_repository
        self.settings = settings

    def login(self, username: str, password: str) -> LoginResponse:
        normalized = normalize_username(username)
        if not normalized:
            raise BadRequestError("Invalid username")
        email = username_to_email(normalized, self.settings.affiliate_email_domain)
        try:
            session = self.auth_client.sign_in_with_password(email, password)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code >= 500:
                logger.error("Sign-in failed upstream for %s: %s", normalized, exc.response.status_code)
                raise UpstreamError("Authentication service unavailable") from exc
            logger.info("Rejected sign-in for %s", normalized)
            raise UnauthorizedError("Login failed, check your credentials") from exc
        except httpx.HTTPError as exc:
            logger.error("Sign-in request failed for %s: %s", normalized, exc)
            raise UpstreamError("Authentication service unavailable") from exc

        access_token = session["access_token"]
        user_id = str((session.get("user") or {}).get("id") or "")
        profile = self._load_profile_or_sign_out(access_token, user_id)
        logger.info("User %s signed in", profile.username)
        return LoginResponse(
            session=SessionTokens(
                access_token=access_token,
                refresh_token=session.get("refresh_token"),
                token_type=session.get("token_type") or "bearer",
                expires_in=session.get("expires_in"),
            ),
            profile=_to_profile(profile),
        )

    def get_current_user(self, access_token: str) -> CurrentUser:
        user = self._get_user(access_token)
        profile = self._load_profile_or_sign_out(access_token, str(user.get("id") or ""))
        return CurrentUser(access_token=access_token, email=user.get("email"), profile=_to_profile(profile))

    def logout(self, access_token: str) -> None:
        try:
            self.auth_client.sign_out(access_token)
        except httpx.HTTPError as exc:
            # The token may already be revoked; signing out is best effort.
            logger.warning("Sign-out failed: %s", exc)

    def change_password(
        self,
        current_user: CurrentUser,
        new_password: str,
        confirm_password: str,
    ) -> Profile:
        if len(new_password) < self.settings.password_min_length:
            raise BadRequestError(
                f"Password must be at least {self.settings.password_min_length} characters"
            )
        if new_password != confirm_password:
            raise BadRequestError("Passwords do not match")
        try:
            self.auth_client.update_user_password(current_user.access_token, new_password)
        except httpx.HTTPError as exc:
            logger.warning("Password update failed for %s: %s", current_user.profile.username, exc)
            raise BadRequestError("Could not update password") from exc
        self.profiles_repository.clear_must_change_password(current_user.profile.id)
        logger.info("Password changed for %s", current_user.profile.username)
        return current_user.profile.model_copy(update={"must_change_password": False})

    def _get_user(self, access_token: str) -> Dict[str, Any]:
        try:
            user = self.auth_client.get_user(access_token)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code >= 500:
                raise UpstreamError(
                    provider_error_message(exc, "Authentication service unavailable")
                ) from exc
            raise UnauthorizedError() from exc
        except httpx.HTTPError as exc:
            raise UpstreamError("Authentication service unavailable") from exc
        if not user.get("id"):
            raise UnauthorizedError()
        return user

    def _load_profile_or_sign_out(self, access_token: str, user_id: str) -> ProfileRecord:
        profile = self.profiles_repository.get_profile(user_id) if user_id else None
        if profile is None:
            logger.warning("No profile for authenticated user %s, signing out", user_id or "<unknown>")
            self.logout(access_token)
            raise UnauthorizedError("Account not found, contact support")
        return profile


def _to_profile(record: ProfileRecord) -> Profile:
    return Profile(
        id=record.id,
        username=record.username,
        role=record.role,
        must_change_password=record.must_change_password,
    )
