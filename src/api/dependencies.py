from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from src.core.config import get_settings
from src.core.errors import ForbiddenError, UnauthorizedError
from src.core.supabase import SupabaseAuthClient, SupabaseClient
from src.repositories.affiliate_stats_repository import AffiliateStatsRepository
from src.repositories.profiles_repository import ProfilesRepository
from src.schemas.auth import CurrentUser
from src.services.admin_service import AdminService
from src.services.auth_service import AuthService
from src.services.dashboard_service import DashboardService


@lru_cache
def get_supabase_client() -> SupabaseClient:
    return SupabaseClient(get_settings())


@lru_cache
def get_supabase_auth_client() -> SupabaseAuthClient:
    return SupabaseAuthClient(get_settings())


@lru_cache
def get_profiles_repository() -> ProfilesRepository:
    return ProfilesRepository(client=get_supabase_client())


@lru_cache
def get_affiliate_stats_repository() -> AffiliateStatsRepository:
    return AffiliateStatsRepository(
        client=get_supabase_client(),
        table=get_settings().affiliate_stats_table,
    )


def get_auth_service() -> AuthService:
    return AuthService(
        auth_client=get_supabase_auth_client(),
        profiles_repository=get_profiles_repository(),
        settings=get_settings(),
    )


def get_dashboard_service() -> DashboardService:
    return DashboardService(stats_repository=get_affiliate_stats_repository(), settings=get_settings())


def get_admin_service() -> AdminService:
    return AdminService(
        auth_client=get_supabase_auth_client(),
        profiles_repository=get_profiles_repository(),
        stats_repository=get_affiliate_stats_repository(),
        settings=get_settings(),
    )


def get_access_token(authorization: Optional[str] = Header(default=None)) -> str:
    if not authorization:
        raise UnauthorizedError()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError()
    return token


def get_current_user(
    access_token: str = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service),
) -> CurrentUser:
    return service.get_current_user(access_token)


def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if current_user.profile.role != "admin":
        raise ForbiddenError()
    return current_user
