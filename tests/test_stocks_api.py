"""시세 API 및 시스템 엔드포인트 테스트"""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from index_tracker.api.dependencies import get_quote_source, get_usage_tracker
from index_tracker.api.stocks import TRACKED_INDICES
from index_tracker.exceptions import QuoteFetchError, UnknownSymbolError
from index_tracker.main import app
from index_tracker.quotes import ApiUsageTracker
from index_tracker.quotes.base import Quote


@pytest.fixture
def stock_client(quote_source: AsyncMock) -> Iterator[TestClient]:
    quote_source.get_quote = AsyncMock(
        return_value=Quote(
            current_price=110.0,
            high_price=111.0,
            low_price=108.0,
            open_price=109.0,
            previous_close=100.0,
            timestamp=1767225600,
        )
    )
    app.dependency_overrides[get_quote_source] = lambda: quote_source
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_quote_source, None)


def test_root() -> None:
    response = TestClient(app).get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Stock Index Values Tracker API"}


def test_health() -> None:
    response = TestClient(app).get("/api/health")
    assert response.status_code == 200

    body = response.json()
    assert body["status"] == "OK"
    assert "timestamp" in body


def test_get_quote(stock_client: TestClient) -> None:
    """종목 현재가 조회"""
    response = stock_client.get("/api/stocks/quote/AAPL")
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["symbol"] == "AAPL"
    assert data["currentPrice"] == 110.0
    assert data["previousClose"] == 100.0
    assert data["change"] == 10.0
    assert data["percentChange"] == 10.0
    assert data["timestamp"] == 1767225600


def test_get_quote_upstream_failure(stock_client: TestClient, quote_source: AsyncMock) -> None:
    """시세 조회 실패 시 502"""
    quote_source.get_quote.side_effect = QuoteFetchError("upstream down")

    response = stock_client.get("/api/stocks/quote/AAPL")
    assert response.status_code == 502

    body = response.json()
    assert body["success"] is False
    assert body["code"] == "QUOTE_FETCH_ERROR"


def test_get_quote_unknown_symbol(stock_client: TestClient, quote_source: AsyncMock) -> None:
    """존재하지 않는 종목은 404"""
    quote_source.get_quote.side_effect = UnknownSymbolError("Unknown symbol: NOPE")

    response = stock_client.get("/api/stocks/quote/NOPE")
    assert response.status_code == 404
    assert response.json()["code"] == "UNKNOWN_SYMBOL"


def test_list_indices(stock_client: TestClient) -> None:
    response = stock_client.get("/api/stocks/indices")
    assert response.status_code == 200

    data = response.json()["data"]
    assert [d["symbol"] for d in data] == [idx["symbol"] for idx in TRACKED_INDICES]
    assert data[0]["displaySymbol"] == "AAPL"
    assert data[0]["currentPrice"] == 110.0


def test_list_indices_partial_failure(stock_client: TestClient, quote_source: AsyncMock) -> None:
    """한 종목 시세 실패 시 해당 종목만 가격 없이 반환"""
    ok = Quote(current_price=110.0, previous_close=100.0)

    async def _get_quote(symbol: str) -> Quote:
        if symbol == "TSLA":
            raise QuoteFetchError("upstream down")
        return ok

    quote_source.get_quote.side_effect = _get_quote

    response = stock_client.get("/api/stocks/indices")
    assert response.status_code == 200

    by_symbol = {d["symbol"]: d for d in response.json()["data"]}
    assert by_symbol["TSLA"]["currentPrice"] is None
    assert by_symbol["TSLA"]["name"] == "Tesla"
    assert by_symbol["AAPL"]["currentPrice"] == 110.0


def test_usage_stats() -> None:
    usage = ApiUsageTracker(plan_limit=100)
    usage.increment()
    app.dependency_overrides[get_usage_tracker] = lambda: usage

    try:
        response = TestClient(app).get("/api/stocks/stats")
    finally:
        app.dependency_overrides.pop(get_usage_tracker, None)

    assert response.status_code == 200
    assert response.json()["data"] == {
        "totalRequests": 1,
        "requestsToday": 1,
        "remainingQuota": 99,
        "planLimit": 100,
    }
