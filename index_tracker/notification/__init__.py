"""
알림 전송 패키지

임계값 돌파 시 이메일 알림을 전송합니다.
"""

from __future__ import annotations

__all__ = [
    "EmailNotifier",
    "Notifier",
]

from index_tracker.notification.email_notifier import EmailNotifier, Notifier
