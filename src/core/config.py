from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unrelated env keys so the frontend's .env can be shared.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Scora Affiliate Backend"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    supabase_url: str = Field(..., alias="SUPABASE_URL")
    supabase_service_role_key: Optional[str] = Field(
        default=None, alias="SUPABASE_SERVICE_ROLE_KEY"
    )
    supabase_anon_key: Optional[str] = Field(default=None, alias="SUPABASE_ANON_KEY")
    supabase_timeout_seconds: float = Field(default=30.0, alias="SUPABASE_TIMEOUT_SECONDS")

    commission_per_referral: Decimal = Field(default=Decimal("5"), alias="COMMISSION_PER_REFERRAL")
    commission_currency: str = Field(default="EUR", alias="COMMISSION_CURRENCY")
    affiliate_stats_table: str = Field(default="affiliates", alias="AFFILIATE_STATS_TABLE")
    affiliate_email_domain: str = Field(
        default="affiliate.getscora.app", alias="AFFILIATE_EMAIL_DOMAIN"
    )
    ref_base_url: str = Field(default="https://app.scora.nl", alias="REF_BASE_URL")

    password_min_length: int = Field(default=8, alias="PASSWORD_MIN_LENGTH")
    temp_password_length: int = Field(default=12, alias="TEMP_PASSWORD_LENGTH")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
