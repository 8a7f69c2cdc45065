"""
로깅 설정

프로덕션에서는 JSON 한 줄 로그를, 개발 환경에서는 읽기 쉬운 포맷을 출력합니다.
알림 평가 로그는 extra로 넘긴 알림 컨텍스트(alert_id, symbol 등)를
JSON 필드로 함께 남깁니다.

Usage::

    logger = get_logger(__name__)
    logger.info("임계값 돌파", extra=alert_context(alert))
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from config.settings import settings

SERVICE_NAME = "stock-index-tracker"

# extra로 전달되면 JSON 로그에 포함되는 필드
CONTEXT_FIELDS = ("alert_id", "user_id", "symbol", "price", "threshold")


def alert_context(alert: Any, **fields: Any) -> dict[str, Any]:
    """알림 로그용 extra 딕셔너리 생성"""
    context = {
        "alert_id": alert.id,
        "user_id": alert.user_id,
        "symbol": alert.symbol,
        "threshold": alert.threshold,
    }
    context.update(fields)
    return context


class JSONFormatter(logging.Formatter):
    """서비스/환경 정보와 알림 컨텍스트를 담는 JSON 포매터"""

    def __init__(self, env: str = "production") -> None:
        super().__init__()
        self.env = env

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "service": SERVICE_NAME,
            "env": self.env,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def get_logger(name: str) -> logging.Logger:
    """
    로거 인스턴스 생성

    Args:
        name: 로거 이름 (보통 __name__ 사용)

    Returns:
        설정된 로거 인스턴스
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if settings.app_env == "production":
        formatter: logging.Formatter = JSONFormatter(env=settings.app_env)
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
