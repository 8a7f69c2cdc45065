"""
알림 평가기

틱마다 활성 알림 전체를 한 번 훑으며:
1. 알림 종목의 현재가를 조회하고
2. 임계값 돌파 여부를 판정한 뒤 (엄격 부등호)
3. 돌파한 알림에 대해 알림을 전송합니다.

알림 하나의 실패(시세 조회 실패, 전송 실패, 타임아웃)는 해당 알림에만
국한되며 패스 전체를 중단시키지 않습니다. 평가기는 알림 레코드를
절대 수정하지 않습니다.

기본 동작은 level-triggered 입니다. 돌파 상태가 유지되는 한 매 틱마다
다시 알림을 보냅니다. cooldown_minutes > 0이면 마지막 전송 이후
해당 시간 동안 재전송을 건너뜁니다.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from index_tracker.alerts.models import Alert, AlertDirection, EvaluationResult
from index_tracker.alerts.store import AlertStore
from index_tracker.exceptions import NotifyError, QuoteFetchError
from index_tracker.notification.email_notifier import Notifier
from index_tracker.quotes.base import QuoteSource
from index_tracker.utils.logger import alert_context, get_logger

logger = get_logger(__name__)


def is_crossed(alert: Alert, current_price: float) -> bool:
    """현재가가 알림 방향 기준으로 임계값을 넘었는지 판정 (같으면 미돌파)"""
    if alert.direction == AlertDirection.ABOVE:
        return current_price > alert.threshold
    if alert.direction == AlertDirection.BELOW:
        return current_price < alert.threshold
    return False


class AlertEvaluator:
    """활성 알림 평가 및 알림 전송"""

    def __init__(
        self,
        store: AlertStore,
        quote_source: QuoteSource,
        notifier: Notifier,
        *,
        quote_timeout: float = 10.0,
        notify_timeout: float = 30.0,
        max_concurrency: int = 1,
        cooldown_minutes: int = 0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Args:
            store: 알림 저장소 (매 패스마다 저장소를 통해 읽음)
            quote_source: 시세 소스
            notifier: 알림 전송기
            quote_timeout: 시세 조회 타임아웃 (초)
            notify_timeout: 알림 전송 타임아웃 (초)
            max_concurrency: 동시에 평가할 최대 알림 수 (1이면 순차)
            cooldown_minutes: 재알림 억제 시간 (0이면 비활성)
            clock: 현재 시각 공급자 (테스트에서 주입)
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency는 1 이상이어야 합니다.")

        self.store = store
        self.quote_source = quote_source
        self.notifier = notifier
        self.quote_timeout = quote_timeout
        self.notify_timeout = notify_timeout
        self.max_concurrency = max_concurrency
        self.cooldown = timedelta(minutes=cooldown_minutes)
        self._clock = clock or (lambda: datetime.now(UTC))
        self._last_notified: dict[str, datetime] = {}

    async def run_once(self) -> EvaluationResult:
        """활성 알림 전체에 대해 평가 패스를 1회 실행"""
        result = EvaluationResult(started_at=self._clock())
        logger.info("알림 평가 시작: %s", result.started_at.isoformat())

        active_alerts = self.store.active()
        result.active = len(active_alerts)

        # 삭제되었거나 비활성화된 알림의 전송 기록은 버림
        active_ids = {alert.id for alert in active_alerts}
        self._last_notified = {
            alert_id: ts for alert_id, ts in self._last_notified.items() if alert_id in active_ids
        }

        if not active_alerts:
            logger.info("평가할 활성 알림이 없습니다.")
            result.finished_at = self._clock()
            return result

        logger.info("활성 알림 %d건 평가", len(active_alerts))

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _guarded(alert: Alert) -> None:
            async with semaphore:
                await self._evaluate_alert(alert, result)

        await asyncio.gather(*(_guarded(alert) for alert in active_alerts))

        result.finished_at = self._clock()
        logger.info(
            "알림 평가 완료: 평가 %d, 돌파 %d, 전송 %d, 시세실패 %d, 전송실패 %d",
            result.evaluated,
            result.triggered,
            result.notified,
            result.quote_failures,
            result.notify_failures,
        )
        return result

    async def _evaluate_alert(self, alert: Alert, result: EvaluationResult) -> None:
        """알림 1건 평가. 어떤 예외도 밖으로 전파하지 않습니다."""
        try:
            quote = await asyncio.wait_for(
                self.quote_source.get_quote(alert.symbol),
                timeout=self.quote_timeout,
            )
        except TimeoutError:
            result.quote_failures += 1
            logger.error(
                "시세 조회 타임아웃: 알림=%s, 종목=%s (%.1f초)",
                alert.id,
                alert.symbol,
                self.quote_timeout,
            )
            return
        except QuoteFetchError as e:
            result.quote_failures += 1
            logger.error(
                "시세 조회 실패: 알림=%s, 종목=%s, 에러=%s",
                alert.id,
                alert.symbol,
                e,
                extra=alert_context(alert),
            )
            return
        except Exception:
            result.quote_failures += 1
            logger.exception("시세 조회 중 예외: 알림=%s, 종목=%s", alert.id, alert.symbol)
            return

        result.evaluated += 1
        current_price = quote.current_price

        if not is_crossed(alert, current_price):
            return

        result.triggered += 1
        logger.info(
            "임계값 돌파: 종목=%s, 현재가=%s, 방향=%s, 임계값=%s",
            alert.symbol,
            current_price,
            alert.direction.value,
            alert.threshold,
            extra=alert_context(alert, price=current_price),
        )

        if self._in_cooldown(alert):
            result.suppressed += 1
            logger.info("cooldown 중이라 알림 생략: 알림=%s", alert.id)
            return

        try:
            await asyncio.wait_for(
                self.notifier.send(alert, current_price),
                timeout=self.notify_timeout,
            )
        except TimeoutError:
            result.notify_failures += 1
            logger.error(
                "알림 전송 타임아웃: 알림=%s, 수신=%s (%.1f초)",
                alert.id,
                alert.email,
                self.notify_timeout,
            )
            return
        except NotifyError as e:
            result.notify_failures += 1
            logger.error(
                "알림 전송 실패: 알림=%s, 수신=%s, 에러=%s",
                alert.id,
                alert.email,
                e,
                extra=alert_context(alert),
            )
            return
        except Exception:
            result.notify_failures += 1
            logger.exception("알림 전송 중 예외: 알림=%s, 수신=%s", alert.id, alert.email)
            return

        result.notified += 1
        if self.cooldown:
            self._last_notified[alert.id] = self._clock()

    def _in_cooldown(self, alert: Alert) -> bool:
        """마지막 전송 후 cooldown이 지나지 않았는지 확인"""
        if not self.cooldown:
            return False

        last = self._last_notified.get(alert.id)
        if last is None:
            return False
        return self._clock() - last < self.cooldown
