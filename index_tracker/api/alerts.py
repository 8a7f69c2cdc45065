"""
알림 API 라우터

알림 생성/조회/삭제/토글, 수동 평가 실행, 스케줄러 상태와 틱 히스토리 조회를 제공합니다.
소유자는 userId 쿼리 파라미터(없으면 demo-user)로 식별합니다.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from index_tracker.alerts.evaluator import AlertEvaluator
from index_tracker.alerts.models import DEFAULT_USER_ID, AlertCreateRequest
from index_tracker.alerts.scheduler import AlertScheduler
from index_tracker.alerts.store import AlertStore
from index_tracker.api.dependencies import get_evaluator, get_scheduler, get_store
from index_tracker.api.schemas import (
    AlertListResponse,
    AlertResponse,
    EvaluationResponse,
    MessageResponse,
    SchedulerHistoryResponse,
    SchedulerStatusResponse,
)
from index_tracker.exceptions import NotFoundError

router = APIRouter(prefix="/api/alerts", tags=["Alerts"])

ALERT_NOT_FOUND = "Alert not found"


@router.get(
    "",
    response_model=AlertListResponse,
    summary="알림 목록 조회",
    description="사용자의 알림 목록을 조회합니다.",
)
async def list_alerts(
    user_id: str = Query(default=DEFAULT_USER_ID, alias="userId"),
    store: AlertStore = Depends(get_store),
) -> AlertListResponse:
    """알림 목록 조회"""
    return AlertListResponse(data=store.list(user_id))


@router.post(
    "",
    response_model=AlertResponse,
    status_code=status.HTTP_201_CREATED,
    summary="알림 생성",
    description="종목/임계값/방향/수신 메일로 새 알림을 생성합니다.",
)
async def create_alert(
    req: AlertCreateRequest,
    store: AlertStore = Depends(get_store),
) -> AlertResponse:
    """알림 생성"""
    alert = store.create(req)
    return AlertResponse(data=alert)


@router.post(
    "/check",
    response_model=EvaluationResponse,
    summary="수동 알림 평가",
    description="스케줄을 기다리지 않고 활성 알림 평가 패스를 즉시 1회 실행합니다.",
)
async def check_alerts(
    evaluator: AlertEvaluator = Depends(get_evaluator),
) -> EvaluationResponse:
    """수동 알림 평가"""
    result = await evaluator.run_once()
    return EvaluationResponse(data=result)


@router.get(
    "/scheduler",
    response_model=SchedulerStatusResponse,
    summary="스케줄러 상태 조회",
)
async def scheduler_status(
    scheduler: AlertScheduler = Depends(get_scheduler),
) -> SchedulerStatusResponse:
    """스케줄러 상태 조회"""
    return SchedulerStatusResponse(data=scheduler.get_status())


@router.get(
    "/scheduler/history",
    response_model=SchedulerHistoryResponse,
    summary="스케줄러 틱 히스토리 조회",
    description="최근 평가 틱 결과를 최신순으로 조회합니다.",
)
async def scheduler_history(
    limit: int = Query(default=10, ge=1, le=AlertScheduler.MAX_HISTORY),
    scheduler: AlertScheduler = Depends(get_scheduler),
) -> SchedulerHistoryResponse:
    """스케줄러 틱 히스토리 조회"""
    return SchedulerHistoryResponse(data=scheduler.get_history(limit))


@router.delete(
    "/{alert_id}",
    response_model=MessageResponse,
    summary="알림 삭제",
    description="ID와 소유자가 일치하는 알림을 삭제합니다.",
)
async def delete_alert(
    alert_id: str,
    user_id: str = Query(default=DEFAULT_USER_ID, alias="userId"),
    store: AlertStore = Depends(get_store),
) -> MessageResponse:
    """알림 삭제"""
    if not store.delete(alert_id, user_id):
        raise NotFoundError(ALERT_NOT_FOUND, detail={"id": alert_id})
    return MessageResponse(message="Alert deleted successfully")


@router.patch(
    "/{alert_id}/toggle",
    response_model=AlertResponse,
    summary="알림 활성/비활성 토글",
)
async def toggle_alert(
    alert_id: str,
    user_id: str = Query(default=DEFAULT_USER_ID, alias="userId"),
    store: AlertStore = Depends(get_store),
) -> AlertResponse:
    """알림 활성/비활성 토글"""
    alert = store.toggle(alert_id, user_id)
    if alert is None:
        raise NotFoundError(ALERT_NOT_FOUND, detail={"id": alert_id})
    return AlertResponse(data=alert)
