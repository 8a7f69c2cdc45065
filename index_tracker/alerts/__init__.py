"""
가격 알림 패키지

알림 저장소, 임계값 평가기, 주기 실행 스케줄러를 제공합니다.
"""

from __future__ import annotations

__all__ = [
    "Alert",
    "AlertCreateRequest",
    "AlertDirection",
    "AlertEvaluator",
    "AlertScheduler",
    "AlertStore",
    "EvaluationResult",
    "is_crossed",
]

from index_tracker.alerts.evaluator import AlertEvaluator, is_crossed
from index_tracker.alerts.models import (
    Alert,
    AlertCreateRequest,
    AlertDirection,
    EvaluationResult,
)
from index_tracker.alerts.scheduler import AlertScheduler
from index_tracker.alerts.store import AlertStore
