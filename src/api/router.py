from __future__ import annotations

from fastapi import APIRouter

from src.api.admin import router as admin_router
from src.api.auth import router as auth_router
from src.api.dashboard import router as dashboard_router
from src.api.health import router as health_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(dashboard_router)
api_router.include_router(admin_router)
