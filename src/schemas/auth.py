from __future__ import annotations

from typing import Literal, Optional

from pydantic import ConfigDict, Field

from src.shared.base import BaseSchema


class LoginRequest(BaseSchema):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class PasswordChangeRequest(BaseSchema):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    new_password: str
    confirm_password: str


class Profile(BaseSchema):
    id: str
    username: str
    role: Literal["admin", "affiliate"]
    must_change_password: bool


class SessionTokens(BaseSchema):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None


class LoginResponse(BaseSchema):
    session: SessionTokens
    profile: Profile


class CurrentUser(BaseSchema):
    access_token: str
    email: Optional[str] = None
    profile: Profile
