"""Market data domain models.

MonthlyPriceRecord: the canonical BTC/USD close for one fully elapsed month.
SpotPrice:          the latest live BTC/USD price, used for the open month.

Both are immutable value objects.  Month keys are "YYYY-MM" strings.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def month_key(value: date) -> str:
    """Return the "YYYY-MM" key of the calendar month containing value."""
    return f"{value.year:04d}-{value.month:02d}"


def month_end(year: int, month: int) -> date:
    """Return the last calendar day of the given month."""
    return date(year, month, calendar.monthrange(year, month)[1])


class MonthlyPriceRecord(BaseModel):
    """Month-end close for one calendar month.

    At most one record exists per calendar month (month_end_date is the
    natural key).  Only months that have fully elapsed have a record.
    """

    model_config = ConfigDict(frozen=True)

    month_end_date: date
    close_price: float = Field(gt=0.0)

    @property
    def month_key(self) -> str:
        return month_key(self.month_end_date)


class SpotPrice(BaseModel):
    """Most recently fetched live price.  No history is retained."""

    model_config = ConfigDict(frozen=True)

    price_usd: float = Field(gt=0.0)
    as_of: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source: str | None = None
