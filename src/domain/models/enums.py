"""Domain enumerations for the BTC portfolio tracker.

All string-valued enums use str mixin so they serialize cleanly to JSON
and remain comparable to plain strings (FastAPI / Pydantic default behaviour).
"""

from enum import Enum


class LedgerEventKind(str, Enum):
    """Transaction kinds that change BTC holdings and carry P&L meaning.

    Deposits and withdrawals are transfers between the user's own wallets and
    are not part of the valuation ledger.
    """

    BUY = "buy"
    SELL = "sell"
    INTEREST = "interest"


class TimeRange(str, Enum):
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    TWO_YEARS = "2Y"
    THREE_YEARS = "3Y"
    FIVE_YEARS = "5Y"
    ALL = "ALL"

    @property
    def months_back(self) -> int | None:
        """Months between the window's first month and the current month.

        None for ALL, whose window starts at the first ledger event.
        """
        return {
            TimeRange.SIX_MONTHS: 6,
            TimeRange.ONE_YEAR: 12,
            TimeRange.TWO_YEARS: 24,
            TimeRange.THREE_YEARS: 36,
            TimeRange.FIVE_YEARS: 60,
            TimeRange.ALL: None,
        }[self]


class CostBasisMethod(str, Enum):
    """How a sell affects the running cost basis.

    FIFO, LIFO and HIFO relieve individual acquisition lots (oldest first,
    newest first, highest purchase price first).
    """

    PRESERVE_ON_SELL = "preserve_on_sell"
    PROPORTIONAL_REDUCTION = "proportional_reduction"
    FIFO = "fifo"
    LIFO = "lifo"
    HIFO = "hifo"


class PriceGapPolicy(str, Enum):
    """Fallback used when a closed month has no month-end close.

    LATEST_AVAILABLE uses the close of the latest month present in the fetched
    range; CARRY_FORWARD uses the nearest earlier month's close.
    """

    LATEST_AVAILABLE = "latest_available"
    CARRY_FORWARD = "carry_forward"
