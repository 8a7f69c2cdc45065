"""
커스텀 예외 클래스 및 FastAPI 예외 핸들러

모든 비즈니스 예외는 AppError를 상속하며,
HTTP 응답은 일관된 JSON 형식으로 반환됩니다.

응답 형식::

    {
        "success": false,
        "error": "Alert not found",
        "code": "NOT_FOUND",
        "detail": { ... }  // optional
    }
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from index_tracker.utils.logger import get_logger

logger = get_logger(__name__)


# ───────────────────────── Base ─────────────────────────


class AppError(Exception):
    """애플리케이션 최상위 예외"""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "Internal server error."

    def __init__(
        self,
        message: str | None = None,
        *,
        detail: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.__class__.message
        self.detail = detail
        super().__init__(self.message)


# ───────────────────── Concrete Errors ──────────────────


class NotFoundError(AppError):
    """리소스를 찾을 수 없음 (404)"""

    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found."


class ValidationError(AppError):
    """입력 검증 실패 (400)"""

    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Invalid request data."


class QuoteFetchError(AppError):
    """시세 조회 실패 (502)"""

    status_code = 502
    code = "QUOTE_FETCH_ERROR"
    message = "Failed to fetch quote data."


class UnknownSymbolError(QuoteFetchError):
    """존재하지 않는 종목 (404)

    대체 시세로 넘어가지 않고 그대로 전파됩니다.
    """

    status_code = 404
    code = "UNKNOWN_SYMBOL"
    message = "Unknown symbol."


class NotifyError(AppError):
    """알림 전송 실패 (502)"""

    status_code = 502
    code = "NOTIFY_ERROR"
    message = "Failed to send notification."


# ──────────────────── Exception Handlers ────────────────


def _error_body(code: str, message: str, detail: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "error": message, "code": code}
    if detail is not None:
        body["detail"] = detail
    return body


async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    """AppError 계열 예외를 일관된 JSON으로 변환"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.code, exc.message, exc.detail),
    )


async def request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 본문 검증 실패를 400 응답으로 변환"""
    errors = exc.errors()
    if any(err.get("type") == "missing" for err in errors):
        message = (
            "Missing required fields. Please provide symbol, threshold, "
            "direction, and email."
        )
    elif any(err["loc"] and err["loc"][-1] == "direction" for err in errors):
        message = 'Direction must be either "above" or "below".'
    else:
        message = ValidationError.message

    detail = [
        {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
        for err in errors
    ]
    return JSONResponse(
        status_code=ValidationError.status_code,
        content=_error_body(ValidationError.code, message, detail),
    )


async def unhandled_error_handler(
    _request: Request, exc: Exception
) -> JSONResponse:
    """예상치 못한 예외에 대한 안전한 500 응답"""
    logger.error("처리되지 않은 예외: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=_error_body("INTERNAL_ERROR", AppError.message),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """FastAPI 앱에 예외 핸들러를 등록합니다."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
