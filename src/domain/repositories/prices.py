"""Price repository interface.

PriceRepository is a specialised time-series interface and does not extend
the generic Repository[T] base.  Month-end closes are ingested in bulk and
queried by date range; the spot price is a single latest value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from src.domain.models.market_data import MonthlyPriceRecord, SpotPrice


class PriceRepository(ABC):
    """Read/write interface for BTC month-end closes and the live spot price.

    Read methods never interpolate or fabricate prices: a month without a
    close is simply absent from the result.  Implementations raise
    PriceFetchError when the store cannot be read.
    """

    @abstractmethod
    async def get_monthly_closes(self, start: date, end: date) -> dict[str, float]:
        """Return month key ("YYYY-MM") → close price for month-end dates in [start, end]."""

    @abstractmethod
    async def get_spot_price(self) -> SpotPrice:
        """Return the most recently updated spot price.

        Raises PriceFetchError when no spot price has ever been recorded.
        """

    @abstractmethod
    async def upsert_monthly_closes(self, records: list[MonthlyPriceRecord]) -> int:
        """Insert or update closes keyed by month_end_date.  Returns rows affected."""

    @abstractmethod
    async def record_spot_price(self, spot: SpotPrice) -> SpotPrice:
        """Store a new latest spot price and return it."""
