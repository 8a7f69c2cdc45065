"""알림 모델 검증 테스트"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from index_tracker.alerts.models import Alert, AlertCreateRequest, AlertDirection


def test_create_request_accepts_camel_case() -> None:
    req = AlertCreateRequest.model_validate(
        {"userId": "alice", "symbol": "AAPL", "threshold": "150.5", "direction": "below", "email": "a@b.com"}
    )
    assert req.user_id == "alice"
    assert req.threshold == 150.5
    assert req.direction == AlertDirection.BELOW


def test_create_request_defaults_user() -> None:
    req = AlertCreateRequest(symbol="AAPL", threshold=1, direction="above", email="a@b.com")
    assert req.user_id == "demo-user"


@pytest.mark.parametrize(
    "overrides",
    [
        {"threshold": 0},
        {"threshold": -5},
        {"threshold": float("inf")},
        {"direction": "sideways"},
        {"symbol": ""},
        {"email": "not-an-address"},
        {"email": "@@@"},
        {"email": "user@"},
    ],
)
def test_create_request_rejects_invalid(overrides: dict) -> None:
    data = {"symbol": "AAPL", "threshold": 150, "direction": "above", "email": "a@b.com"}
    data.update(overrides)

    with pytest.raises(ValidationError):
        AlertCreateRequest(**data)


def test_alert_serializes_camel_case() -> None:
    alert = Alert(id="1", symbol="AAPL", threshold=1.0, direction=AlertDirection.ABOVE, email="a@b.com")
    dumped = alert.model_dump(mode="json", by_alias=True)

    assert dumped["userId"] == "demo-user"
    assert "createdAt" in dumped
    assert dumped["direction"] == "above"
