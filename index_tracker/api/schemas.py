"""
API 요청/응답 스키마

모든 성공 응답은 {"success": true, ...} 형태의 봉투를 사용합니다.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from index_tracker.alerts.models import Alert, EvaluationResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── 알림 ──────────────────────────────────────────────────────


class AlertResponse(BaseModel):
    """알림 단건 응답"""

    success: bool = True
    data: Alert


class AlertListResponse(BaseModel):
    """알림 목록 응답"""

    success: bool = True
    data: list[Alert]


class MessageResponse(BaseModel):
    """메시지 응답"""

    success: bool = True
    message: str


class EvaluationResponse(BaseModel):
    """수동 평가 결과 응답"""

    success: bool = True
    data: EvaluationResult


class SchedulerStatusResponse(BaseModel):
    success: bool = True
    data: dict[str, Any]


class SchedulerHistoryResponse(BaseModel):
    """최근 틱 결과 (최신순)"""

    success: bool = True
    data: list[dict[str, Any]]


# ── 시세 ──────────────────────────────────────────────────────


class QuoteData(_CamelModel):
    """종목 시세 응답 데이터"""

    symbol: str
    current_price: float
    high_price: float | None = None
    low_price: float | None = None
    open_price: float | None = None
    previous_close: float | None = None
    change: float | None = None
    percent_change: float | None = None
    timestamp: int | None = None


class QuoteResponse(BaseModel):
    success: bool = True
    data: QuoteData


class IndexData(_CamelModel):
    """추적 지수 + 시세 (시세 조회 실패 시 가격 필드 없음)"""

    symbol: str
    display_symbol: str
    name: str
    market: str
    current_price: float | None = None
    previous_close: float | None = None
    change: float | None = None
    percent_change: float | None = None


class IndexListResponse(BaseModel):
    success: bool = True
    data: list[IndexData]


class UsageStats(_CamelModel):
    """시세 API 사용량"""

    total_requests: int = Field(..., description="누적 요청 수")
    requests_today: int = Field(..., description="당일 요청 수")
    remaining_quota: int = Field(..., description="당일 잔여 요청 수")
    plan_limit: int = Field(..., description="일일 한도")


class UsageStatsResponse(BaseModel):
    success: bool = True
    data: UsageStats


# ── 시스템 ─────────────────────────────────────────────────────


class RootResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(..., examples=["OK"])
    timestamp: str
