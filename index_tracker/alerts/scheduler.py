"""
알림 스케줄러 — 고정 주기로 알림 평가 패스 실행

APScheduler의 AsyncIOScheduler로 AlertEvaluator.run_once()를
일정 간격마다 실행합니다. 이전 패스가 끝나지 않았어도 다음 틱은
예정대로 시작됩니다 (패스 간 중첩 허용).
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from index_tracker.alerts.evaluator import AlertEvaluator
from index_tracker.utils.logger import get_logger

logger = get_logger(__name__)

JOB_ID = "alert_evaluation"


class AlertScheduler:
    """알림 평가 스케줄러"""

    MAX_HISTORY = 100
    # 동시에 진행 중인 패스 상한. 넘으면 APScheduler가 해당 틱을 건너뜀
    # (기본값 1이면 이전 패스가 끝나지 않은 틱을 모두 건너뜀)
    MAX_OVERLAPPING_RUNS = 10

    def __init__(
        self,
        evaluator: AlertEvaluator,
        interval_seconds: int = 60,
        event_loop: Any | None = None,
    ) -> None:
        """스케줄러 초기화

        Parameters
        ----------
        evaluator:
            알림 평가기
        interval_seconds:
            평가 주기 (초)
        event_loop:
            APScheduler가 붙을 asyncio 이벤트 루프. None이면 start() 시점의
            실행 중인 루프를 사용합니다.
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds는 0보다 커야 합니다.")

        self._evaluator = evaluator
        self._interval_seconds = interval_seconds
        self._event_loop = event_loop
        self._scheduler = self._create_scheduler()
        self._is_running = False
        self._tick_history: list[dict[str, Any]] = []
        self._total_ticks = 0

    def _create_scheduler(self) -> AsyncIOScheduler:
        """AsyncIOScheduler 인스턴스를 생성합니다."""
        kwargs: dict[str, Any] = {"timezone": UTC}
        if self._event_loop is not None:
            kwargs["event_loop"] = self._event_loop
        return AsyncIOScheduler(**kwargs)

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def interval_seconds(self) -> int:
        return self._interval_seconds

    # ───────────────── 시작 / 중지 ─────────────────

    def start(self) -> None:
        """스케줄러 시작"""
        if self._is_running:
            logger.warning("스케줄러가 이미 실행 중입니다")
            return

        self._scheduler.add_job(
            self.run_tick,
            trigger=IntervalTrigger(seconds=self._interval_seconds, timezone=UTC),
            id=JOB_ID,
            replace_existing=True,
            max_instances=self.MAX_OVERLAPPING_RUNS,
            coalesce=False,
        )
        self._scheduler.start()
        self._is_running = True
        logger.info("알림 스케줄러 시작: %d초 간격", self._interval_seconds)

    def stop(self) -> None:
        """스케줄러 중지"""
        if not self._is_running:
            logger.warning("스케줄러가 실행 중이 아닙니다")
            return

        self._scheduler.shutdown(wait=False)
        # 재시작 가능하도록 새 인스턴스 준비
        self._scheduler = self._create_scheduler()
        self._is_running = False
        logger.info("알림 스케줄러 중지")

    # ───────────────── 틱 실행 ─────────────────

    async def run_tick(self) -> dict[str, Any]:
        """스케줄된 평가 패스 1회 실행"""
        now = datetime.now(UTC)

        try:
            evaluation = await self._evaluator.run_once()
            result: dict[str, Any] = {
                "timestamp": now.isoformat(),
                "status": "completed",
                "evaluation": evaluation.model_dump(mode="json", by_alias=True),
            }
        except Exception:
            # 평가기는 알림별 예외를 모두 흡수하므로 여기까지 오면 버그
            logger.exception("알림 평가 패스 실패")
            result = {
                "timestamp": now.isoformat(),
                "status": "error",
                "error": "알림 평가 중 오류 발생",
            }

        self._append_history(result)
        return result

    # ───────────────── 상태 조회 ─────────────────

    def get_status(self) -> dict[str, Any]:
        """스케줄러 상태 조회"""
        next_run_time = None
        if self._is_running:
            job = self._scheduler.get_job(JOB_ID)
            if job and job.next_run_time:
                next_run_time = job.next_run_time.isoformat()

        return {
            "isRunning": self._is_running,
            "intervalSeconds": self._interval_seconds,
            "nextRunTime": next_run_time,
            "totalTicks": self._total_ticks,
            "lastTickResult": self._tick_history[-1] if self._tick_history else None,
        }

    def get_history(self, limit: int = 10) -> list[dict[str, Any]]:
        """최근 틱 히스토리 (최신순)"""
        return list(reversed(self._tick_history[-limit:]))

    def _append_history(self, result: dict[str, Any]) -> None:
        self._total_ticks += 1
        self._tick_history.append(result)
        if len(self._tick_history) > self.MAX_HISTORY:
            self._tick_history = self._tick_history[-self.MAX_HISTORY :]
