"""Portfolio valuation output models.

MonthlySnapshot is one row of the monthly valuation series; PortfolioSummary
condenses the latest row into headline figures.  Both are derived values:
computed fresh on every call and never persisted.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class MonthlySnapshot(BaseModel):
    """Holdings and valuation at the end of one calendar month.

    cumulative_btc / cumulative_cost_basis are the running totals after every
    ledger event dated on or before this month.  cumulative_btc may be negative
    when the ledger over-sells; portfolio_value_usd is floored at zero.
    cumulative_realized_gain stays 0 under PreserveOnSell, which relieves no
    basis.
    """

    model_config = ConfigDict(frozen=True)

    month_key: str = Field(pattern=r"^\d{4}-\d{2}$")
    month_end_date: date
    cumulative_btc: float
    cumulative_cost_basis: float
    cumulative_realized_gain: float = 0.0
    btc_price_used: float = Field(ge=0.0)
    portfolio_value_usd: float = Field(ge=0.0)
    is_current_month: bool = False


class PortfolioSummary(BaseModel):
    """Headline figures for the latest month of a valuation series.

    unrealized_gain_percent is expressed in percent (12.5 == 12.5 %) and is
    0.0 when there is no cost basis.  average_buy_price is cost basis per BTC
    held, 0.0 when nothing is held.
    """

    model_config = ConfigDict(frozen=True)

    as_of_month: str
    total_btc: float
    total_cost_basis: float
    current_value_usd: float = Field(ge=0.0)
    unrealized_gain_usd: float
    unrealized_gain_percent: float
    average_buy_price: float = Field(ge=0.0)
    realized_gain_usd: float = 0.0

    @classmethod
    def from_snapshot(cls, snapshot: MonthlySnapshot) -> PortfolioSummary:
        basis = snapshot.cumulative_cost_basis
        held = max(0.0, snapshot.cumulative_btc)
        gain = snapshot.portfolio_value_usd - basis
        return cls(
            as_of_month=snapshot.month_key,
            total_btc=held,
            total_cost_basis=basis,
            current_value_usd=snapshot.portfolio_value_usd,
            unrealized_gain_usd=gain,
            unrealized_gain_percent=(gain / basis * 100.0) if basis > 0 else 0.0,
            average_buy_price=(max(0.0, basis) / held) if held > 0 else 0.0,
            realized_gain_usd=snapshot.cumulative_realized_gain,
        )
