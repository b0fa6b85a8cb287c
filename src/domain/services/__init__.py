"""Domain services package."""

from .cost_basis import (
    CostBasisPolicy,
    Fifo,
    Hifo,
    Lifo,
    Lot,
    LotRelief,
    Position,
    PreserveOnSell,
    ProportionalReduction,
    cost_basis_policy_for,
)
from .portfolio import (
    MonthlyPortfolioAggregator,
    parse_time_range,
    slice_time_range,
    summarize_snapshots,
)

__all__ = [
    "CostBasisPolicy",
    "Fifo",
    "Hifo",
    "Lifo",
    "Lot",
    "LotRelief",
    "Position",
    "PreserveOnSell",
    "ProportionalReduction",
    "cost_basis_policy_for",
    "MonthlyPortfolioAggregator",
    "parse_time_range",
    "slice_time_range",
    "summarize_snapshots",
]
