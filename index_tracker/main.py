"""
FastAPI 애플리케이션 엔트리포인트
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings
from index_tracker.api.alerts import router as alerts_router
from index_tracker.api.dependencies import get_scheduler, set_scheduler_event_loop
from index_tracker.api.health import router as health_router
from index_tracker.api.stocks import router as stocks_router
from index_tracker.exceptions import register_exception_handlers
from index_tracker.utils.logger import get_logger

logger = get_logger(__name__)


OPENAPI_TAGS = [
    {
        "name": "System",
        "description": "시스템 상태 확인",
    },
    {
        "name": "Stocks",
        "description": "주요 종목 시세 조회 및 시세 API 사용량",
    },
    {
        "name": "Alerts",
        "description": "가격 임계값 알림 관리 — 생성/삭제/토글, 수동 평가, 스케줄러 상태",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """애플리케이션 시작/종료 시 실행되는 로직"""
    logger.info("🚀 Stock Index Tracker 시작 (환경: %s)", settings.app_env)
    logger.info(
        "📈 시세 소스: %s",
        "Finnhub" if settings.use_live_quotes else "합성 시세",
    )

    # APScheduler가 FastAPI 메인 이벤트 루프에 붙도록 루프 객체를 주입
    set_scheduler_event_loop(asyncio.get_running_loop())

    scheduler = get_scheduler()
    if settings.scheduler_enabled:
        scheduler.start()
    else:
        logger.info("알림 스케줄러 비활성화 (SCHEDULER_ENABLED=false)")

    yield

    if scheduler.is_running:
        scheduler.stop()
    logger.info("👋 Stock Index Tracker 종료")


app = FastAPI(
    title="Stock Index Tracker",
    description=(
        "주요 종목 시세 조회 및 가격 임계값 알림 서비스\n\n"
        "등록된 알림을 주기적으로 평가해 임계값을 돌파하면 메일로 알려줍니다."
    ),
    version="1.0.0",
    openapi_tags=OPENAPI_TAGS,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# 예외 핸들러 등록
register_exception_handlers(app)

# 라우터 등록
app.include_router(health_router)
app.include_router(stocks_router)
app.include_router(alerts_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "index_tracker.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.app_env == "development",
    )
