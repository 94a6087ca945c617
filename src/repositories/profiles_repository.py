from __future__ import annotations

from typing import List, Optional

from src.core.supabase import SupabaseClient
from src.models.affiliates import ProfileRecord

PROFILE_COLUMNS = "id,username,role,must_change_password"


class ProfilesRepository:
    def __init__(self, client: SupabaseClient) -> None:
        self.client = client

    def get_profile(self, user_id: str) -> Optional[ProfileRecord]:
        rows = self.client.select(
            table="profiles",
            select=PROFILE_COLUMNS,
            filters=[("id", f"eq.{user_id}")],
            limit=1,
        )
        if not rows:
            return None
        return ProfileRecord.model_validate(rows[0])

    def list_profiles(self) -> List[ProfileRecord]:
        rows = self.client.select(table="profiles", select=PROFILE_COLUMNS, order="username.asc")
        return [ProfileRecord.model_validate(row) for row in rows]

    def create_profile(
        self,
        user_id: str,
        username: str,
        role: str,
        must_change_password: bool = True,
    ) -> ProfileRecord:
        rows = self.client.insert(
            "profiles",
            {
                "id": user_id,
                "username": username,
                "role": role,
                "must_change_password": must_change_password,
            },
        )
        if rows:
            return ProfileRecord.model_validate(rows[0])
        return ProfileRecord(
            id=user_id, username=username, role=role, must_change_password=must_change_password
        )

    def clear_must_change_password(self, user_id: str) -> None:
        self.client.update(
            "profiles",
            {"must_change_password": False},
            filters=[("id", f"eq.{user_id}")],
        )
