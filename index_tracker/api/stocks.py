"""
시세 API 라우터

추적 지수 목록, 종목 현재가, 시세 API 사용량을 제공합니다.
"""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends

from index_tracker.api.dependencies import get_quote_source, get_usage_tracker
from index_tracker.api.schemas import (
    IndexData,
    IndexListResponse,
    QuoteData,
    QuoteResponse,
    UsageStats,
    UsageStatsResponse,
)
from index_tracker.quotes import ApiUsageTracker, QuoteSource
from index_tracker.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/stocks", tags=["Stocks"])

# 대시보드에 노출하는 주요 종목
TRACKED_INDICES: list[dict[str, str]] = [
    {"symbol": "AAPL", "display_symbol": "AAPL", "name": "Apple", "market": "US"},
    {"symbol": "TSLA", "display_symbol": "TSLA", "name": "Tesla", "market": "US"},
    {"symbol": "NVDA", "display_symbol": "NVDA", "name": "NVIDIA", "market": "US"},
    {"symbol": "MSFT", "display_symbol": "MSFT", "name": "Microsoft", "market": "US"},
    {"symbol": "GOOG", "display_symbol": "GOOG", "name": "Google", "market": "US"},
    {"symbol": "AMZN", "display_symbol": "AMZN", "name": "Amazon", "market": "US"},
]


async def _index_with_quote(index: dict[str, str], source: QuoteSource) -> IndexData:
    """지수 정보에 시세를 붙임 (실패 시 시세 없이 반환)"""
    try:
        quote = await source.get_quote(index["symbol"])
    except Exception as e:
        logger.error("지수 시세 조회 실패: 종목=%s, 에러=%s", index["symbol"], e)
        return IndexData(**index)

    return IndexData(
        **index,
        current_price=quote.current_price,
        previous_close=quote.previous_close,
        change=quote.change,
        percent_change=quote.percent_change,
    )


@router.get(
    "/indices",
    response_model=IndexListResponse,
    summary="추적 지수 목록",
    description="주요 종목 목록과 현재 시세를 반환합니다.",
)
async def list_indices(
    source: QuoteSource = Depends(get_quote_source),
) -> IndexListResponse:
    """추적 지수 목록"""
    data = await asyncio.gather(*(_index_with_quote(idx, source) for idx in TRACKED_INDICES))
    return IndexListResponse(data=list(data))


@router.get(
    "/quote/{symbol}",
    response_model=QuoteResponse,
    summary="종목 현재가 조회",
)
async def get_quote(
    symbol: str,
    source: QuoteSource = Depends(get_quote_source),
) -> QuoteResponse:
    """종목 현재가 조회 (실패 시 502, 없는 종목은 404)"""
    quote = await source.get_quote(symbol)
    return QuoteResponse(
        data=QuoteData(
            symbol=symbol,
            current_price=quote.current_price,
            high_price=quote.high_price,
            low_price=quote.low_price,
            open_price=quote.open_price,
            previous_close=quote.previous_close,
            change=quote.change,
            percent_change=quote.percent_change,
            timestamp=quote.timestamp,
        )
    )


@router.get(
    "/stats",
    response_model=UsageStatsResponse,
    summary="시세 API 사용량",
)
async def usage_stats(
    usage: ApiUsageTracker = Depends(get_usage_tracker),
) -> UsageStatsResponse:
    """시세 API 사용량"""
    return UsageStatsResponse(data=UsageStats(**usage.snapshot()))
