"""
애플리케이션 설정 관리

pydantic-settings를 사용하여 환경변수 기반 설정을 관리합니다.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # Finnhub 시세 API 설정 (키가 없으면 합성 시세 사용)
    finnhub_api_key: str = ""
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    quote_fallback_on_error: bool = True
    synthetic_quote_seed: int | None = None
    quote_daily_limit: int = Field(default=60 * 24, gt=0)

    # 메일(SMTP) 설정
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    mail_from: str = ""

    # 알림 평가 설정
    alert_check_interval_seconds: int = Field(default=60, gt=0)
    alert_cooldown_minutes: int = Field(default=0, ge=0)  # 0이면 매 틱마다 재알림
    quote_timeout_seconds: float = Field(default=10.0, gt=0)
    notify_timeout_seconds: float = Field(default=30.0, gt=0)
    evaluator_max_concurrency: int = Field(default=1, ge=1)
    scheduler_enabled: bool = True

    # 앱 설정
    app_env: str = "development"
    log_level: str = "INFO"
    port: int = 5001

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def use_live_quotes(self) -> bool:
        """Finnhub API 키가 설정되어 있는지 여부"""
        return bool(self.finnhub_api_key)


# 전역 설정 인스턴스
settings = Settings()
