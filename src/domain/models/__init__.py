"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .enums import CostBasisMethod, LedgerEventKind, PriceGapPolicy, TimeRange
from .ledger import LedgerEvent
from .market_data import MonthlyPriceRecord, SpotPrice, month_end, month_key
from .portfolio import MonthlySnapshot, PortfolioSummary

__all__ = [
    # enums
    "CostBasisMethod",
    "LedgerEventKind",
    "PriceGapPolicy",
    "TimeRange",
    # ledger
    "LedgerEvent",
    # market data
    "MonthlyPriceRecord",
    "SpotPrice",
    "month_end",
    "month_key",
    # portfolio
    "MonthlySnapshot",
    "PortfolioSummary",
]
