from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class AppError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details


class BadRequestError(AppError):
    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(code="bad_request", message=message, status_code=400)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(code="unauthorized", message=message, status_code=401)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(code="forbidden", message=message, status_code=403)


class UpstreamError(AppError):
    def __init__(self, message: str = "Upstream service unavailable") -> None:
        super().__init__(code="upstream_error", message=message, status_code=502)


class RecordValidationError(AppError):
    """A stored row failed validation at ingestion, before any aggregation."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(code=code, message=message, status_code=422, details=details)


class InvalidMonthKeyError(RecordValidationError):
    def __init__(self, month_key: Any) -> None:
        super().__init__(
            code="invalid_month_key",
            message=f"Unparseable month key: {month_key!r}",
            details={"month": month_key},
        )
        self.month_key = month_key


class InvalidReferralCountError(RecordValidationError):
    def __init__(self, month_key: str, count: Any) -> None:
        super().__init__(
            code="invalid_referral_count",
            message=f"Invalid referrals count {count!r} for month {month_key}",
            details={"month": month_key, "referralsCount": count},
        )


class ErrorEnvelope(BaseModel):
    error: ErrorDetail


def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    envelope = ErrorEnvelope(
        error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details)
    )
    return JSONResponse(status_code=exc.status_code, content=envelope.model_dump())


def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    envelope = ErrorEnvelope(
        error=ErrorDetail(
            code="validation_error",
            message="Validation error",
            details={"errors": exc.errors()},
        )
    )
    return JSONResponse(status_code=422, content=envelope.model_dump())


def upstream_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Supabase request failed: %s", exc)
    return app_error_handler(request, UpstreamError())
