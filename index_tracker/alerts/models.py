"""
알림 도메인 모델

알림 레코드, 생성 요청, 평가 결과 모델을 정의합니다.
JSON 직렬화 시 camelCase 키(userId, createdAt)를 사용합니다.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_USER_ID = "demo-user"


class AlertDirection(str, Enum):
    """임계값 돌파 방향"""

    ABOVE = "above"
    BELOW = "below"


class Alert(BaseModel):
    """가격 임계값 알림 레코드"""

    id: str
    user_id: str = DEFAULT_USER_ID
    symbol: str
    threshold: float
    direction: AlertDirection
    email: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    active: bool = True

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AlertCreateRequest(BaseModel):
    """알림 생성 요청"""

    user_id: str = Field(default=DEFAULT_USER_ID, min_length=1)
    symbol: str = Field(..., min_length=1, max_length=20)
    threshold: float = Field(..., gt=0)
    direction: AlertDirection
    email: EmailStr

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    @field_validator("threshold")
    @classmethod
    def _threshold_must_be_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("threshold must be a finite number")
        return value


class EvaluationResult(BaseModel):
    """평가 패스 1회 요약"""

    started_at: datetime
    finished_at: datetime | None = None
    active: int = 0
    evaluated: int = 0
    triggered: int = 0
    notified: int = 0
    suppressed: int = 0
    quote_failures: int = 0
    notify_failures: int = 0

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
