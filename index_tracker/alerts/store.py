"""
알림 저장소

프로세스 수명 동안 알림 레코드를 메모리에 보관하는 단일 저장소입니다.
CRUD 라우터와 평가기가 같은 저장소 객체를 참조하므로,
라우터의 변경 사항은 별도의 동기화 없이 다음 평가 틱에 반영됩니다.

모든 접근은 asyncio 이벤트 루프 위에서만 일어나므로 락을 두지 않습니다.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import UTC, datetime

from index_tracker.alerts.models import Alert, AlertCreateRequest
from index_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class AlertStore:
    """인메모리 알림 저장소"""

    def __init__(self, records: Iterable[Alert] | None = None) -> None:
        self._alerts: list[Alert] = list(records or [])

    def __len__(self) -> int:
        return len(self._alerts)

    def current(self) -> list[Alert]:
        """현재 보관 중인 리스트 자체를 반환 (복사본 아님)"""
        return self._alerts

    def replace(self, records: Iterable[Alert]) -> None:
        """보관 리스트를 통째로 교체"""
        self._alerts = list(records)
        logger.info("알림 저장소 교체: %d건", len(self._alerts))

    def list(self, user_id: str | None = None) -> list[Alert]:
        """알림 목록 조회 (user_id가 주어지면 소유자 기준 필터링)"""
        if user_id is None:
            return list(self._alerts)
        return [a for a in self._alerts if a.user_id == user_id]

    def active(self) -> list[Alert]:
        """활성화된 알림만 조회"""
        return [a for a in self._alerts if a.active]

    def get(self, alert_id: str, user_id: str | None = None) -> Alert | None:
        """ID (및 소유자)로 알림 단건 조회"""
        for alert in self._alerts:
            if alert.id == alert_id and (user_id is None or alert.user_id == user_id):
                return alert
        return None

    def create(self, request: AlertCreateRequest) -> Alert:
        """검증된 요청으로 새 알림을 생성해 저장"""
        alert = Alert(
            id=self._new_id(),
            user_id=request.user_id,
            symbol=request.symbol,
            threshold=request.threshold,
            direction=request.direction,
            email=request.email,
            created_at=datetime.now(UTC),
            active=True,
        )
        self._alerts.append(alert)
        logger.info(
            "알림 생성: ID=%s, 사용자=%s, 종목=%s, 방향=%s, 임계값=%s",
            alert.id,
            alert.user_id,
            alert.symbol,
            alert.direction.value,
            alert.threshold,
        )
        return alert

    def delete(self, alert_id: str, user_id: str) -> bool:
        """ID와 소유자가 모두 일치하는 알림을 삭제"""
        for idx, alert in enumerate(self._alerts):
            if alert.id == alert_id and alert.user_id == user_id:
                del self._alerts[idx]
                logger.info("알림 삭제: ID=%s, 사용자=%s", alert_id, user_id)
                return True
        return False

    def toggle(self, alert_id: str, user_id: str) -> Alert | None:
        """알림 활성 상태를 뒤집고 변경된 알림을 반환"""
        alert = self.get(alert_id, user_id)
        if alert is None:
            return None

        alert.active = not alert.active
        logger.info("알림 토글: ID=%s, 활성=%s", alert_id, alert.active)
        return alert

    def _new_id(self) -> str:
        alert_id = uuid.uuid4().hex
        while self.get(alert_id) is not None:  # pragma: no cover
            alert_id = uuid.uuid4().hex
        return alert_id
