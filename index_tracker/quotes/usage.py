"""시세 API 사용량 카운터"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import Any

from index_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class ApiUsageTracker:
    """Finnhub 요청 수 집계 (전체 / 당일)

    날짜가 바뀌면 당일 카운터를 0으로 초기화합니다.

    Args:
        plan_limit: 하루 허용 요청 수
        today: 현재 날짜 공급자 (테스트에서 주입)
    """

    def __init__(
        self,
        plan_limit: int = 60 * 24,
        today: Callable[[], date] | None = None,
    ) -> None:
        self.plan_limit = plan_limit
        self._today = today or (lambda: datetime.now(UTC).date())
        self.total_requests = 0
        self.requests_today = 0
        self.last_reset: date = self._today()

    def _reset_if_new_day(self) -> None:
        today = self._today()
        if today != self.last_reset:
            logger.info(
                "시세 API 일일 사용량 초기화: %s → %s (전일 %d건)",
                self.last_reset.isoformat(),
                today.isoformat(),
                self.requests_today,
            )
            self.requests_today = 0
            self.last_reset = today

    def increment(self) -> None:
        """요청 1건 기록"""
        self._reset_if_new_day()
        self.total_requests += 1
        self.requests_today += 1

        if self.requests_today == self.plan_limit:
            logger.warning("시세 API 일일 한도 도달: %d건", self.plan_limit)

    @property
    def remaining_quota(self) -> int:
        self._reset_if_new_day()
        return max(self.plan_limit - self.requests_today, 0)

    def snapshot(self) -> dict[str, Any]:
        """현재 사용량 통계"""
        self._reset_if_new_day()
        return {
            "totalRequests": self.total_requests,
            "requestsToday": self.requests_today,
            "remainingQuota": self.remaining_quota,
            "planLimit": self.plan_limit,
        }
