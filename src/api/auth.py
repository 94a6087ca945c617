from __future__ import annotations

from fastapi import APIRouter, Depends

from src.api.dependencies import get_access_token, get_auth_service, get_current_user
from src.schemas.auth import CurrentUser, LoginRequest, LoginResponse, PasswordChangeRequest, Profile
from src.services.auth_service import AuthService
from src.shared.response import ResponseEnvelope, build_meta


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login(
    request: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> ResponseEnvelope[LoginResponse]:
    data = service.login(request.username, request.password)
    return ResponseEnvelope(data=data, meta=build_meta(source="supabase_auth"))


@router.post("/logout")
def logout(
    access_token: str = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service),
) -> ResponseEnvelope[dict]:
    service.logout(access_token)
    return ResponseEnvelope(data={"status": "signed_out"}, meta=build_meta(source="supabase_auth"))


@router.get("/session")
def session(current_user: CurrentUser = Depends(get_current_user)) -> ResponseEnvelope[Profile]:
    return ResponseEnvelope(data=current_user.profile, meta=build_meta(source="supabase_auth,profiles"))


@router.post("/password")
def change_password(
    request: PasswordChangeRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> ResponseEnvelope[Profile]:
    profile = service.change_password(current_user, request.new_password, request.confirm_password)
    return ResponseEnvelope(data=profile, meta=build_meta(source="supabase_auth,profiles"))
