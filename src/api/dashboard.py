from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user, get_dashboard_service
from src.schemas.auth import CurrentUser
from src.schemas.dashboard import DashboardOverview
from src.services.dashboard_service import DashboardService
from src.shared.response import ResponseEnvelope, build_meta


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/overview")
def dashboard_overview(
    current_user: CurrentUser = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
) -> ResponseEnvelope[DashboardOverview]:
    data = service.get_overview(current_user, now=datetime.now())
    return ResponseEnvelope(
        data=data,
        meta=build_meta(source="affiliates", currency=data.currency_code),
    )
