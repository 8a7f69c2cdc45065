"""
설정 패키지

환경변수(.env) 기반 애플리케이션 설정을 제공합니다.
- settings: 시세 API / SMTP / 알림 평가 / 앱 설정
"""

from __future__ import annotations

from config.settings import Settings, settings

__all__ = ["Settings", "settings"]
