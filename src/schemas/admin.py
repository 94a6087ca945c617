from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, ConfigDict, Field

from src.shared.base import BaseSchema


class AdminUserRow(BaseSchema):
    id: str
    username: str
    role: str
    must_change_password: bool
    total_referrals: int


class CreateUserRequest(BaseSchema):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    username: str = Field(min_length=1, validation_alias=AliasChoices("username", "refCode"))
    role: Optional[str] = None
    email: Optional[str] = None


class CreatedUser(BaseSchema):
    email: str
    temp_password: str
    username: str
    role: str
