"""
합성 시세 소스

시세 API 키가 없을 때 사용하는 대체 시세입니다.
종목별 기준가에 ±2% 범위의 랜덤 계수를 곱해 현재가를 만듭니다.
seed를 주면 같은 순서의 호출에 대해 항상 같은 값을 돌려줍니다.
"""

from __future__ import annotations

import random
import time

from index_tracker.quotes.base import Quote
from index_tracker.utils.logger import get_logger

logger = get_logger(__name__)

# 주요 종목 기준가 (대소문자 무시)
BASE_PRICES: dict[str, float] = {
    "AAPL": 150.0,
    "MSFT": 250.0,
    "GOOGL": 2800.0,
    "AMZN": 3500.0,
    "TSLA": 1000.0,
    "NVDA": 200.0,
    "TSM": 100.0,
    "META": 300.0,
    "NFLX": 500.0,
    "GOOG": 2800.0,
    "ORCL": 50.0,
}
DEFAULT_BASE_PRICE = 1000.0

MIN_FACTOR = 0.98
MAX_FACTOR = 1.02


def base_price_for(symbol: str) -> float:
    """종목 기준가 조회"""
    return BASE_PRICES.get(symbol.upper(), DEFAULT_BASE_PRICE)


class SyntheticQuoteSource:
    """랜덤 워크 기반 합성 시세 소스"""

    def __init__(self, seed: int | None = None) -> None:
        """
        Args:
            seed: 난수 시드 (None이면 비결정적)
        """
        self._rng = random.Random(seed)  # noqa: S311
        self.seed = seed

    async def get_quote(self, symbol: str) -> Quote:
        return self.generate(symbol)

    def generate(self, symbol: str) -> Quote:
        """합성 시세 1건 생성"""
        base = base_price_for(symbol)
        factor = self._rng.uniform(MIN_FACTOR, MAX_FACTOR)

        quote = Quote(
            current_price=round(base * factor, 2),
            high_price=round(base * (factor + 0.01), 2),
            low_price=round(base * (factor - 0.01), 2),
            open_price=round(base * (factor - 0.005), 2),
            previous_close=round(base * (factor - 0.02), 2),
            timestamp=int(time.time()),
        )
        logger.debug("합성 시세 생성: 종목=%s, 현재가=%s", symbol, quote.current_price)
        return quote
