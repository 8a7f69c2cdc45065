"""
시세 소스 패키지

API 키 유무에 따라 Finnhub 실시세 또는 합성 시세를 제공합니다.
"""

from __future__ import annotations

from config.settings import Settings
from index_tracker.quotes.base import Quote, QuoteSource
from index_tracker.quotes.finnhub import FinnhubQuoteSource
from index_tracker.quotes.synthetic import SyntheticQuoteSource
from index_tracker.quotes.usage import ApiUsageTracker
from index_tracker.utils.logger import get_logger

__all__ = [
    "ApiUsageTracker",
    "FinnhubQuoteSource",
    "Quote",
    "QuoteSource",
    "SyntheticQuoteSource",
    "create_quote_source",
]

logger = get_logger(__name__)


def create_quote_source(settings: Settings, usage: ApiUsageTracker | None = None) -> QuoteSource:
    """설정에 맞는 시세 소스 생성"""
    synthetic = SyntheticQuoteSource(seed=settings.synthetic_quote_seed)

    if not settings.use_live_quotes:
        logger.warning("Finnhub API 키가 없어 합성 시세를 사용합니다.")
        return synthetic

    logger.info("Finnhub 시세 소스 초기화")
    return FinnhubQuoteSource(
        api_key=settings.finnhub_api_key,
        base_url=settings.finnhub_base_url,
        timeout=settings.quote_timeout_seconds,
        usage=usage or ApiUsageTracker(plan_limit=settings.quote_daily_limit),
        fallback=synthetic if settings.quote_fallback_on_error else None,
    )
