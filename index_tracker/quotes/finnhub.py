"""
Finnhub 시세 소스

Finnhub REST API(/quote)로 현재가를 조회합니다.

References:
    - https://finnhub.io/docs/api/quote
    - 응답 필드: c(현재가), h(고가), l(저가), o(시가), pc(전일 종가), t(timestamp)
"""

from __future__ import annotations

from typing import Any

import httpx

from index_tracker.exceptions import QuoteFetchError, UnknownSymbolError
from index_tracker.quotes.base import Quote, QuoteSource
from index_tracker.quotes.usage import ApiUsageTracker
from index_tracker.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://finnhub.io/api/v1"


class FinnhubQuoteSource:
    """Finnhub REST 시세 소스

    Usage::

        source = FinnhubQuoteSource(api_key="...", fallback=SyntheticQuoteSource())
        quote = await source.get_quote("AAPL")
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        usage: ApiUsageTracker | None = None,
        fallback: QuoteSource | None = None,
    ) -> None:
        """
        Args:
            api_key: Finnhub API 토큰
            base_url: API 기본 URL
            timeout: 요청 타임아웃 (초)
            usage: 요청 수 집계기
            fallback: 조회 실패 시 대신 사용할 시세 소스 (None이면 예외 전파)
        """
        if not api_key:
            raise ValueError("api_key가 비어 있습니다.")
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.usage = usage or ApiUsageTracker()
        self.fallback = fallback

    async def get_quote(self, symbol: str) -> Quote:
        try:
            return await self._fetch(symbol)
        except UnknownSymbolError:
            # 존재하지 않는 종목은 대체 시세를 쓰지 않음
            raise
        except QuoteFetchError as e:
            if self.fallback is None:
                raise
            logger.warning("시세 조회 실패, 대체 시세 사용: 종목=%s, 에러=%s", symbol, e)
            return await self.fallback.get_quote(symbol)

    async def _fetch(self, symbol: str) -> Quote:
        self.usage.increment()
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self.base_url}/quote",
                    params={"symbol": symbol, "token": self._api_key},
                    timeout=self.timeout,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise QuoteFetchError(
                f"Error fetching quote for {symbol}: {e}",
                detail={"symbol": symbol},
            ) from e
        except ValueError as e:
            raise QuoteFetchError(
                f"Invalid quote response for {symbol}",
                detail={"symbol": symbol},
            ) from e

        return self._parse(symbol, data)

    @staticmethod
    def _parse(symbol: str, data: Any) -> Quote:
        """Finnhub 응답을 Quote로 변환"""
        if not isinstance(data, dict) or data.get("c") is None:
            raise QuoteFetchError(
                f"Invalid quote response for {symbol}",
                detail={"symbol": symbol},
            )

        # 존재하지 않는 종목은 모든 값이 0으로 내려옴
        if not data.get("c") and not data.get("t"):
            raise UnknownSymbolError(
                f"Unknown symbol: {symbol}",
                detail={"symbol": symbol},
            )

        try:
            return Quote(
                current_price=float(data["c"]),
                high_price=data.get("h"),
                low_price=data.get("l"),
                open_price=data.get("o"),
                previous_close=data.get("pc"),
                timestamp=data.get("t"),
            )
        except (TypeError, ValueError) as e:
            raise QuoteFetchError(
                f"Invalid quote response for {symbol}",
                detail={"symbol": symbol},
            ) from e
