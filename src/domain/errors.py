"""Domain exception hierarchy.

FetchFailure and its subclasses signal that a data source could not be read;
they always propagate to the caller so "fetch failed" is never confused with
"no transactions".  A month without a historical close is not an error.
"""

from __future__ import annotations


class PortfolioError(Exception):
    """Base class for all portfolio-domain errors."""


class FetchFailure(PortfolioError):
    """A ledger or price data source was unreachable or returned an error."""

    source: str = "data source"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or f"Failed to fetch from {self.source}")


class LedgerFetchError(FetchFailure):
    source = "ledger store"


class PriceFetchError(FetchFailure):
    source = "price store"


class InvalidTimeRangeError(PortfolioError, ValueError):
    """An unrecognised time range value was requested."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Unknown time range {value!r}. Expected one of: 6M, 1Y, 2Y, 3Y, 5Y, ALL."
        )
