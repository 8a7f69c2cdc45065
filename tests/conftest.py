"""
테스트 공통 Fixture 정의

pytest conftest.py - 모든 테스트에서 공유하는 fixture들을 정의합니다.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from index_tracker.alerts.models import AlertCreateRequest, AlertDirection
from index_tracker.alerts.store import AlertStore
from index_tracker.api.dependencies import get_store
from index_tracker.main import app
from index_tracker.quotes.base import Quote


def _make_request(**overrides: object) -> AlertCreateRequest:
    data: dict[str, object] = {
        "symbol": "AAPL",
        "threshold": 150.0,
        "direction": AlertDirection.ABOVE,
        "email": "a@b.com",
    }
    data.update(overrides)
    return AlertCreateRequest(**data)


def _make_quote(price: float) -> Quote:
    return Quote(current_price=price, previous_close=price)


@pytest.fixture
def store() -> AlertStore:
    """빈 알림 저장소"""
    return AlertStore()


@pytest.fixture
def quote_source() -> AsyncMock:
    """현재가 151.0을 돌려주는 Mock 시세 소스"""
    source = AsyncMock()
    source.get_quote = AsyncMock(return_value=_make_quote(151.0))
    return source


@pytest.fixture
def notifier() -> AsyncMock:
    """Mock 알림 전송기"""
    mock = AsyncMock()
    mock.send = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def client(store: AlertStore) -> Iterator[TestClient]:
    """빈 저장소가 주입된 FastAPI 테스트 클라이언트"""
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def make_request() -> Callable[..., AlertCreateRequest]:
    """알림 생성 요청 팩토리 (AAPL / 150 / above / a@b.com 기본값)"""
    return _make_request


@pytest.fixture
def make_quote() -> Callable[[float], Quote]:
    """현재가만 지정하는 시세 팩토리"""
    return _make_quote
