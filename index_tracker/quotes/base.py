"""
시세 소스 공통 인터페이스

평가기와 API 라우터는 QuoteSource 프로토콜에만 의존하며,
실제 구현(Finnhub / 합성 시세)에는 관여하지 않습니다.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Quote(BaseModel):
    """현재가 시세 스냅샷"""

    current_price: float
    high_price: float | None = None
    low_price: float | None = None
    open_price: float | None = None
    previous_close: float | None = None
    timestamp: int | None = Field(default=None, description="epoch seconds")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @property
    def change(self) -> float | None:
        """전일 종가 대비 변동폭"""
        if self.previous_close is None:
            return None
        return self.current_price - self.previous_close

    @property
    def percent_change(self) -> float | None:
        """전일 종가 대비 변동률 (%)"""
        if not self.previous_close:
            return None
        return round((self.current_price - self.previous_close) / self.previous_close * 100, 2)


@runtime_checkable
class QuoteSource(Protocol):
    """종목 현재가 조회 인터페이스"""

    async def get_quote(self, symbol: str) -> Quote:
        """현재가 조회. 실패 시 QuoteFetchError를 발생시킵니다."""
        ...
