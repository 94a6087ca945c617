from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from src.api.dependencies import get_admin_service, require_admin
from src.schemas.admin import AdminUserRow, CreatedUser, CreateUserRequest
from src.schemas.auth import CurrentUser
from src.services.admin_service import AdminService
from src.shared.response import ResponseEnvelope, build_meta


router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users")
def admin_list_users(
    _: CurrentUser = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
) -> ResponseEnvelope[List[AdminUserRow]]:
    return ResponseEnvelope(data=service.list_users(), meta=build_meta(source="profiles,affiliates"))


@router.post("/users")
def admin_create_user(
    request: CreateUserRequest,
    _: CurrentUser = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
) -> ResponseEnvelope[CreatedUser]:
    created = service.create_user(request.username, role=request.role, email=request.email)
    return ResponseEnvelope(data=created, meta=build_meta(source="supabase_auth,profiles"))
