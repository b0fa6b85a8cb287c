"""Tests for src/domain/models/portfolio.py."""

from datetime import date

import pytest
from pydantic import ValidationError

from src.domain.models.portfolio import MonthlySnapshot, PortfolioSummary


def _snapshot(**overrides):
    defaults = dict(
        month_key="2024-01",
        month_end_date=date(2024, 1, 31),
        cumulative_btc=0.5,
        cumulative_cost_basis=20_000.0,
        btc_price_used=60_000.0,
        portfolio_value_usd=30_000.0,
        is_current_month=True,
    )
    defaults.update(overrides)
    return MonthlySnapshot(**defaults)


# --- MonthlySnapshot ---

def test_snapshot_rejects_malformed_month_key():
    with pytest.raises(ValidationError):
        _snapshot(month_key="2024-1")


def test_snapshot_rejects_negative_value():
    with pytest.raises(ValidationError):
        _snapshot(portfolio_value_usd=-1.0)


def test_snapshot_allows_negative_btc():
    assert _snapshot(cumulative_btc=-0.1, portfolio_value_usd=0.0).cumulative_btc == -0.1


def test_snapshot_is_frozen():
    with pytest.raises(ValidationError):
        _snapshot().cumulative_btc = 1.0  # type: ignore[misc]


# --- PortfolioSummary.from_snapshot ---

def test_summary_unrealized_gain():
    assert PortfolioSummary.from_snapshot(_snapshot()).unrealized_gain_usd == pytest.approx(10_000.0)


def test_summary_unrealized_gain_percent():
    assert PortfolioSummary.from_snapshot(_snapshot()).unrealized_gain_percent == pytest.approx(50.0)


def test_summary_average_buy_price():
    assert PortfolioSummary.from_snapshot(_snapshot()).average_buy_price == pytest.approx(40_000.0)


def test_summary_zero_basis_gives_zero_percent():
    summary = PortfolioSummary.from_snapshot(_snapshot(cumulative_cost_basis=0.0))
    assert summary.unrealized_gain_percent == 0.0


def test_summary_nothing_held_gives_zero_average_price():
    summary = PortfolioSummary.from_snapshot(_snapshot(cumulative_btc=0.0, portfolio_value_usd=0.0))
    assert summary.average_buy_price == 0.0
    assert summary.unrealized_gain_usd == pytest.approx(-20_000.0)


def test_summary_floors_negative_holdings():
    summary = PortfolioSummary.from_snapshot(_snapshot(cumulative_btc=-0.2, portfolio_value_usd=0.0))
    assert summary.total_btc == 0.0


def test_summary_as_of_month():
    assert PortfolioSummary.from_snapshot(_snapshot()).as_of_month == "2024-01"


def test_snapshot_realized_gain_defaults_to_zero():
    assert _snapshot().cumulative_realized_gain == 0.0


def test_summary_carries_realized_gain():
    summary = PortfolioSummary.from_snapshot(_snapshot(cumulative_realized_gain=4_500.0))
    assert summary.realized_gain_usd == 4_500.0
