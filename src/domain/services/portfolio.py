"""Monthly portfolio valuation service.

Reconstructs a user's BTC holdings and cost basis month by month from the
ordered ledger and values each month at its month-end close (or the live spot
price for the month still in progress).

Pipeline:
    compute_monthly_snapshots
        → _load                  (ledger, closes and spot price; concurrent where possible)
        → _monthly_positions     (fold ledger → per-month positions, forward-filled)
        → _monthly_prices        (close / spot / gap fallback per month)
        → _build_snapshots       (floored valuation → MonthlySnapshot)

Fetch failures are logged and re-raised unchanged.  An empty ledger is the
only case that yields an empty result.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import date, datetime, timezone
from itertools import accumulate
from typing import TypeVar
from uuid import UUID

import numpy as np
import pandas as pd

from src.domain.errors import InvalidTimeRangeError
from src.domain.models.enums import PriceGapPolicy, TimeRange
from src.domain.models.ledger import LedgerEvent
from src.domain.models.market_data import SpotPrice, month_end
from src.domain.models.portfolio import MonthlySnapshot, PortfolioSummary
from src.domain.repositories.ledger import LedgerRepository
from src.domain.repositories.prices import PriceRepository

from .cost_basis import CostBasisPolicy, Position, PreserveOnSell

logger = logging.getLogger(__name__)

R = TypeVar("R")

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _month_of(value: date) -> pd.Period:
    return pd.Period(year=value.year, month=value.month, freq="M")


def parse_time_range(value: TimeRange | str) -> TimeRange:
    """Coerce a TimeRange or its string value; unknown values raise InvalidTimeRangeError."""
    try:
        return TimeRange(value)
    except ValueError:
        raise InvalidTimeRangeError(value) from None


def summarize_snapshots(snapshots: Sequence[MonthlySnapshot]) -> PortfolioSummary | None:
    """Headline figures for the latest snapshot, or None for an empty series."""
    if not snapshots:
        return None
    return PortfolioSummary.from_snapshot(snapshots[-1])


def slice_time_range(
    snapshots: Sequence[MonthlySnapshot], time_range: TimeRange | str
) -> list[MonthlySnapshot]:
    """Keep the trailing window of a series computed for a wider range.

    A fixed range keeps months_back + 1 months (the window start month through
    the current month), matching compute_monthly_snapshots for that range,
    rather than only the trailing months_back months.
    """
    months_back = parse_time_range(time_range).months_back
    if months_back is None:
        return list(snapshots)
    return list(snapshots[-(months_back + 1):])


class MonthlyPortfolioAggregator:
    """Computes one MonthlySnapshot per calendar month for a user's ledger.

    Collaborators:
    - ledger: LedgerRepository supplying ascending buy/sell/interest events.
    - prices: PriceRepository supplying month-end closes and the spot price.

    Configuration:
    - cost_basis_policy: how sells affect cost basis (default PreserveOnSell).
    - price_gap_policy: fallback for closed months with no close
      (default LATEST_AVAILABLE).
    - clock: returns "now"; defines the current month.

    Holds no per-call state; concurrent calls are independent.
    """

    def __init__(
        self,
        ledger: LedgerRepository,
        prices: PriceRepository,
        cost_basis_policy: CostBasisPolicy | None = None,
        price_gap_policy: PriceGapPolicy = PriceGapPolicy.LATEST_AVAILABLE,
        clock: Clock | None = None,
    ) -> None:
        self._ledger = ledger
        self._prices = prices
        self._policy = cost_basis_policy or PreserveOnSell()
        self._gap_policy = PriceGapPolicy(price_gap_policy)
        self._clock = clock or _utcnow

    # ------------------------------------------------------------------ #
    # Public API                                                           #
    # ------------------------------------------------------------------ #

    async def compute_monthly_snapshots(
        self,
        user_id: UUID,
        time_range: TimeRange | str = TimeRange.ALL,
    ) -> list[MonthlySnapshot]:
        """Return the monthly valuation series for the user.

        Months run from the window start (first event's month for ALL, else
        the current month minus months_back) through the current month with
        no gaps.  Events dated before the window start are reflected in the
        first month's opening position; events after the current month are
        ignored.

        Raises:
            InvalidTimeRangeError: time_range is not a recognised value.
            FetchFailure: the ledger or price store could not be read.
        """
        time_range = parse_time_range(time_range)
        current = _month_of(self._clock())

        loaded = await self._load(user_id, time_range, current)
        if loaded is None:
            return []
        events, start, closes, spot = loaded

        months = pd.period_range(start=start, end=current, freq="M")
        positions = self._monthly_positions(events, months)
        prices = self._monthly_prices(months, current, closes, spot)
        snapshots = self._build_snapshots(months, current, positions, prices)
        logger.info(
            "Computed %d monthly snapshots for user %s (range=%s, events=%d)",
            len(snapshots), user_id, time_range.value, len(events),
        )
        return snapshots

    async def summarize(
        self,
        user_id: UUID,
        time_range: TimeRange | str = TimeRange.ALL,
    ) -> PortfolioSummary | None:
        """Headline figures for the current month, or None for an empty ledger."""
        return summarize_snapshots(await self.compute_monthly_snapshots(user_id, time_range))

    # ------------------------------------------------------------------ #
    # Fetching                                                             #
    # ------------------------------------------------------------------ #

    async def _load(
        self,
        user_id: UUID,
        time_range: TimeRange,
        current: pd.Period,
    ) -> tuple[list[LedgerEvent], pd.Period, dict[str, float], SpotPrice] | None:
        """Fetch every input, or return None when there is nothing to value.

        ALL needs the first event's date before the price window is known, so
        the ledger is read first.  Fixed ranges read all three concurrently.
        """
        end = month_end(current.year, current.month)

        if time_range.months_back is None:
            events = await self._fetch_ledger(user_id)
            if not events:
                return None
            start = _month_of(events[0].date)
            if start > current:
                logger.warning("Ledger for user %s only has future-dated events", user_id)
                return None
            closes, spot = await asyncio.gather(
                self._fetch("monthly closes", self._prices.get_monthly_closes(start.start_time.date(), end)),
                self._fetch("spot price", self._prices.get_spot_price()),
                return_exceptions=True,
            )
            for result in (closes, spot):
                if isinstance(result, BaseException):
                    raise result
            return events, start, closes, spot

        start = current - time_range.months_back
        events, closes, spot = await asyncio.gather(
            self._fetch_ledger(user_id),
            self._fetch("monthly closes", self._prices.get_monthly_closes(start.start_time.date(), end)),
            self._fetch("spot price", self._prices.get_spot_price()),
            return_exceptions=True,
        )
        if isinstance(events, BaseException):
            raise events
        if not events:
            return None
        for result in (closes, spot):
            if isinstance(result, BaseException):
                raise result
        return events, start, closes, spot

    async def _fetch_ledger(self, user_id: UUID) -> list[LedgerEvent]:
        events = await self._fetch("ledger", self._ledger.list_for_user(user_id))
        return sorted(events, key=lambda e: e.date)

    @staticmethod
    async def _fetch(label: str, call: Awaitable[R]) -> R:
        logger.debug("Fetching %s", label)
        try:
            result = await call
        except Exception:
            logger.exception("Fetching %s failed", label)
            raise
        logger.debug("Fetched %s", label)
        return result

    # ------------------------------------------------------------------ #
    # Pipeline stages                                                      #
    # ------------------------------------------------------------------ #

    def _monthly_positions(
        self, events: list[LedgerEvent], months: pd.PeriodIndex
    ) -> pd.DataFrame:
        """Position at the end of every month in months.

        The ledger is folded once through the cost basis policy; each month
        takes the state after its last event, months without events inherit
        the previous month, and the first month opens with the state reached
        by any earlier events (zero otherwise).
        """
        states: list[Position] = list(accumulate(events, self._policy.apply, initial=Position()))[1:]
        by_event = pd.DataFrame(
            {
                "btc": [s.btc for s in states],
                "cost_basis": [s.cost_basis for s in states],
                "realized_gain": [s.realized_gain for s in states],
            },
            index=pd.PeriodIndex([_month_of(e.date) for e in events], freq="M"),
        )
        month_close = by_event.groupby(level=0).last()

        prior = month_close[month_close.index < months[0]]
        opening = prior.iloc[-1] if len(prior) else pd.Series(0.0, index=month_close.columns)
        return month_close.reindex(months).ffill().fillna(opening)

    def _monthly_prices(
        self,
        months: pd.PeriodIndex,
        current: pd.Period,
        closes: dict[str, float],
        spot: SpotPrice,
    ) -> pd.Series:
        """Price per month: spot for the current month, else close, else gap fallback, else 0."""
        available = pd.Series(
            list(closes.values()),
            index=pd.PeriodIndex(list(closes), freq="M"),
            dtype=float,
        ).sort_index()
        available = available[~available.index.duplicated(keep="last")]
        observed = available.reindex(months)

        is_current = months == current
        gaps = int((observed.isna() & ~is_current).sum())

        if available.empty:
            if gaps:
                logger.warning("No month-end closes in range; %d month(s) priced at 0", gaps)
            filled = observed
        elif self._gap_policy == PriceGapPolicy.CARRY_FORWARD:
            nearest = available.reindex(available.index.union(months)).ffill().bfill()
            filled = observed.fillna(nearest.reindex(months))
        else:
            filled = observed.fillna(available.iloc[-1])

        if gaps and not available.empty:
            logger.warning(
                "Month-end close missing for %d month(s); used %s fallback",
                gaps, self._gap_policy.value,
            )
        return filled.fillna(0.0).where(~is_current, spot.price_usd)

    @staticmethod
    def _build_snapshots(
        months: pd.PeriodIndex,
        current: pd.Period,
        positions: pd.DataFrame,
        prices: pd.Series,
    ) -> list[MonthlySnapshot]:
        btc = positions["btc"].to_numpy(dtype=float)
        basis = positions["cost_basis"].to_numpy(dtype=float)
        realized = positions["realized_gain"].to_numpy(dtype=float)
        price = prices.to_numpy(dtype=float)
        value = np.maximum(btc, 0.0) * price
        return [
            MonthlySnapshot(
                month_key=period.strftime("%Y-%m"),
                month_end_date=month_end(period.year, period.month),
                cumulative_btc=float(btc[i]),
                cumulative_cost_basis=float(basis[i]),
                cumulative_realized_gain=float(realized[i]),
                btc_price_used=float(price[i]),
                portfolio_value_usd=float(value[i]),
                is_current_month=period == current,
            )
            for i, period in enumerate(months)
        ]
