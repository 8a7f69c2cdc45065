"""AlertScheduler 테스트"""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from index_tracker.alerts.models import EvaluationResult
from index_tracker.alerts.scheduler import JOB_ID, AlertScheduler


# ───────────────── Fixtures ─────────────────


@pytest.fixture()
def mock_evaluator() -> MagicMock:
    evaluator = MagicMock()
    evaluator.run_once = AsyncMock(
        return_value=EvaluationResult(
            started_at=datetime(2026, 3, 2, 10, 0, tzinfo=UTC),
            finished_at=datetime(2026, 3, 2, 10, 0, 1, tzinfo=UTC),
            active=2,
            evaluated=2,
            triggered=1,
            notified=1,
        )
    )
    return evaluator


@pytest.fixture()
def scheduler(mock_evaluator: MagicMock) -> AlertScheduler:
    return AlertScheduler(mock_evaluator, interval_seconds=60)


# ───────────────── 틱 실행 ─────────────────


class TestRunTick:
    """스케줄된 평가 패스 실행 테스트"""

    @pytest.mark.asyncio
    async def test_completed(self, scheduler: AlertScheduler, mock_evaluator: MagicMock) -> None:
        result = await scheduler.run_tick()

        mock_evaluator.run_once.assert_awaited_once()
        assert result["status"] == "completed"
        assert result["evaluation"]["notified"] == 1
        assert result["evaluation"]["startedAt"].startswith("2026-03-02")

    @pytest.mark.asyncio
    async def test_error_is_recorded(
        self, scheduler: AlertScheduler, mock_evaluator: MagicMock
    ) -> None:
        """평가기 예외가 스케줄러 밖으로 새지 않음"""
        mock_evaluator.run_once.side_effect = RuntimeError("boom")

        result = await scheduler.run_tick()

        assert result["status"] == "error"
        assert scheduler.get_status()["lastTickResult"]["status"] == "error"

    @pytest.mark.asyncio
    async def test_history_is_bounded(self, scheduler: AlertScheduler) -> None:
        for _ in range(AlertScheduler.MAX_HISTORY + 5):
            await scheduler.run_tick()

        assert len(scheduler.get_history(limit=AlertScheduler.MAX_HISTORY + 5)) == AlertScheduler.MAX_HISTORY
        assert len(scheduler.get_history(limit=3)) == 3

    @pytest.mark.asyncio
    async def test_total_ticks_keeps_counting_past_history(self, scheduler: AlertScheduler) -> None:
        """히스토리는 잘려도 누적 틱 수는 계속 증가"""
        for _ in range(AlertScheduler.MAX_HISTORY + 5):
            await scheduler.run_tick()

        assert scheduler.get_status()["totalTicks"] == AlertScheduler.MAX_HISTORY + 5

    @pytest.mark.asyncio
    async def test_history_is_newest_first(
        self, scheduler: AlertScheduler, mock_evaluator: MagicMock
    ) -> None:
        await scheduler.run_tick()
        mock_evaluator.run_once.side_effect = RuntimeError("boom")
        await scheduler.run_tick()

        history = scheduler.get_history(limit=10)
        assert [item["status"] for item in history] == ["error", "completed"]


# ───────────────── 시작 / 중지 ─────────────────


class TestLifecycle:
    """스케줄러 시작/중지 테스트"""

    def test_invalid_interval(self, mock_evaluator: MagicMock) -> None:
        with pytest.raises(ValueError):
            AlertScheduler(mock_evaluator, interval_seconds=0)

    def test_initial_status(self, scheduler: AlertScheduler) -> None:
        status = scheduler.get_status()

        assert status["isRunning"] is False
        assert status["intervalSeconds"] == 60
        assert status["nextRunTime"] is None
        assert status["totalTicks"] == 0
        assert status["lastTickResult"] is None

    @pytest.mark.asyncio
    async def test_start_and_stop(self, scheduler: AlertScheduler) -> None:
        scheduler.start()
        try:
            assert scheduler.is_running is True
            status = scheduler.get_status()
            assert status["isRunning"] is True
            assert status["nextRunTime"] is not None

            job = scheduler._scheduler.get_job(JOB_ID)
            assert job is not None
            # 이전 패스가 끝나지 않아도 다음 틱 실행 허용
            assert job.max_instances == AlertScheduler.MAX_OVERLAPPING_RUNS
            assert job.max_instances > 1
            assert job.coalesce is False
        finally:
            scheduler.stop()

        assert scheduler.is_running is False

    @pytest.mark.asyncio
    async def test_double_start_is_ignored(self, scheduler: AlertScheduler) -> None:
        scheduler.start()
        try:
            scheduler.start()
            assert scheduler.is_running is True
        finally:
            scheduler.stop()

    def test_stop_when_not_running(self, scheduler: AlertScheduler) -> None:
        scheduler.stop()
        assert scheduler.is_running is False
