"""
FastAPI 의존성 주입

알림 저장소, 시세 소스, 평가기, 스케줄러를 프로세스 단일 인스턴스로
생성해 API 핸들러에 주입합니다. 테스트에서는 app.dependency_overrides로
교체합니다.
"""

from __future__ import annotations

from asyncio import AbstractEventLoop

from config.settings import settings
from index_tracker.alerts.evaluator import AlertEvaluator
from index_tracker.alerts.scheduler import AlertScheduler
from index_tracker.alerts.store import AlertStore
from index_tracker.notification.email_notifier import EmailNotifier
from index_tracker.quotes import ApiUsageTracker, QuoteSource, create_quote_source

_store = AlertStore()
_usage = ApiUsageTracker(plan_limit=settings.quote_daily_limit)
_quote_source = create_quote_source(settings, usage=_usage)
_notifier = EmailNotifier(timeout=settings.notify_timeout_seconds)
_evaluator = AlertEvaluator(
    _store,
    _quote_source,
    _notifier,
    quote_timeout=settings.quote_timeout_seconds,
    notify_timeout=settings.notify_timeout_seconds,
    max_concurrency=settings.evaluator_max_concurrency,
    cooldown_minutes=settings.alert_cooldown_minutes,
)


_scheduler: AlertScheduler | None = None
_scheduler_loop: AbstractEventLoop | None = None


def set_scheduler_event_loop(loop: AbstractEventLoop) -> None:
    """lifespan에서 메인 이벤트 루프를 주입"""
    global _scheduler_loop
    _scheduler_loop = loop


def get_store() -> AlertStore:
    return _store


def get_usage_tracker() -> ApiUsageTracker:
    return _usage


def get_quote_source() -> QuoteSource:
    return _quote_source


def get_evaluator() -> AlertEvaluator:
    return _evaluator


def get_scheduler() -> AlertScheduler:
    """알림 스케줄러 (최초 호출 시 생성)"""
    global _scheduler
    if _scheduler is None:
        _scheduler = AlertScheduler(
            _evaluator,
            interval_seconds=settings.alert_check_interval_seconds,
            event_loop=_scheduler_loop,
        )
    return _scheduler
