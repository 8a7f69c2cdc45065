"""시스템 엔드포인트 (배너 / 헬스 체크)"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

from index_tracker.api.schemas import HealthResponse, RootResponse

router = APIRouter(tags=["System"])


@router.get("/", response_model=RootResponse, summary="API 배너")
async def root() -> RootResponse:
    return RootResponse(message="Stock Index Values Tracker API")


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="헬스 체크",
    description="서비스의 정상 동작 여부와 현재 시각을 반환합니다.",
)
async def health_check() -> HealthResponse:
    """헬스 체크 엔드포인트"""
    return HealthResponse(status="OK", timestamp=datetime.now(UTC).isoformat())
