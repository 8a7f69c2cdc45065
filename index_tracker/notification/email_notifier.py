"""
이메일 알림 모듈

SMTP를 통해 임계값 돌파 알림 메일을 전송합니다.
smtplib는 블로킹 API이므로 워커 스레드에서 실행합니다.
"""

from __future__ import annotations

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

from config.settings import settings
from index_tracker.alerts.models import Alert, AlertDirection
from index_tracker.exceptions import NotifyError
from index_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class Notifier(Protocol):
    """알림 전송 인터페이스"""

    async def send(self, alert: Alert, current_price: float) -> None:
        """트리거된 알림 전송. 실패 시 NotifyError를 발생시킵니다."""
        ...


def direction_text(alert: Alert) -> str:
    return "exceeded" if alert.direction == AlertDirection.ABOVE else "fallen below"


def format_threshold(value: float) -> str:
    """정수 임계값은 소수점 없이 표시 (150.0 → 150)"""
    return str(int(value)) if value.is_integer() else str(value)


def build_subject(alert: Alert) -> str:
    """메일 제목 생성"""
    return (
        f"Stock Alert: {alert.symbol} has {direction_text(alert)} "
        f"{format_threshold(alert.threshold)}"
    )


def build_html(alert: Alert, current_price: float) -> str:
    """메일 본문(HTML) 생성"""
    text = direction_text(alert)
    return (
        "<h2>Stock Price Alert</h2>\n"
        "<p>Hello,</p>\n"
        f"<p>This is an alert for the stock <strong>{alert.symbol}</strong>.</p>\n"
        f"<p>The current price is <strong>${current_price:.2f}</strong>.</p>\n"
        f"<p>This price has {text} your threshold of "
        f"<strong>${alert.threshold:.2f}</strong>.</p>\n"
        "<p>Thank you for using our Stock Index Values Tracker!</p>\n"
    )


class EmailNotifier:
    """SMTP 메일 알림기"""

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        user: str | None = None,
        password: str | None = None,
        sender: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Args:
            host: SMTP 서버 (None이면 settings에서 가져옴)
            port: SMTP 포트 (STARTTLS 사용)
            user: SMTP 로그인 계정
            password: SMTP 비밀번호 (앱 비밀번호)
            sender: 발신 주소 (None이면 user 사용)
            timeout: SMTP 연결 타임아웃 (초)
        """
        self.host = host or settings.smtp_host
        self.port = port or settings.smtp_port
        self.user = user if user is not None else settings.smtp_user
        self.password = password if password is not None else settings.smtp_password
        self.sender = sender or settings.mail_from or self.user
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.user and self.password)

    async def send(self, alert: Alert, current_price: float) -> None:
        """
        알림 메일을 전송합니다.

        Args:
            alert: 트리거된 알림
            current_price: 현재가

        Raises:
            NotifyError: SMTP 인증 정보 미설정 또는 전송 실패
        """
        if not self.configured:
            logger.warning(
                "SMTP 인증 정보가 설정되지 않아 메일을 보내지 않습니다: 종목=%s, 수신=%s",
                alert.symbol,
                alert.email,
            )
            raise NotifyError(
                "SMTP credentials not configured",
                detail={"alert_id": alert.id, "symbol": alert.symbol},
            )

        message = self._build_message(alert, current_price)

        try:
            await asyncio.to_thread(self._deliver, alert.email, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("알림 메일 전송 실패: 수신=%s, 에러=%s", alert.email, e)
            raise NotifyError(
                f"Error sending alert email to {alert.email}",
                detail={"alert_id": alert.id, "symbol": alert.symbol},
            ) from e

        logger.info("알림 메일 전송 완료: 수신=%s, 종목=%s", alert.email, alert.symbol)

    def _build_message(self, alert: Alert, current_price: float) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = build_subject(alert)
        message["From"] = self.sender
        message["To"] = alert.email
        message.attach(MIMEText(build_html(alert, current_price), "html", "utf-8"))
        return message

    def _deliver(self, recipient: str, message: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls()
            server.login(self.user, self.password)
            server.sendmail(self.sender, [recipient], message.as_string())
