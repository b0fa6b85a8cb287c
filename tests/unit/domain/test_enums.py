"""Tests for src/domain/models/enums.py."""

import pytest

from src.domain.models.enums import CostBasisMethod, LedgerEventKind, PriceGapPolicy, TimeRange


# --- TimeRange.months_back ---

@pytest.mark.parametrize(
    "time_range,months",
    [("6M", 6), ("1Y", 12), ("2Y", 24), ("3Y", 36), ("5Y", 60)],
)
def test_time_range_months_back(time_range, months):
    assert TimeRange(time_range).months_back == months


def test_time_range_all_has_no_months_back():
    assert TimeRange.ALL.months_back is None


def test_time_range_has_six_members():
    assert len(TimeRange) == 6


def test_time_range_unknown_value_raises():
    with pytest.raises(ValueError):
        TimeRange("10Y")


# --- string values ---

def test_ledger_event_kinds():
    assert {k.value for k in LedgerEventKind} == {"buy", "sell", "interest"}


def test_ledger_event_kind_compares_to_string():
    assert LedgerEventKind.BUY == "buy"


def test_cost_basis_method_values():
    assert CostBasisMethod.PRESERVE_ON_SELL == "preserve_on_sell"
    assert CostBasisMethod.PROPORTIONAL_REDUCTION == "proportional_reduction"
    assert CostBasisMethod.FIFO == "fifo"
    assert CostBasisMethod.LIFO == "lifo"
    assert CostBasisMethod.HIFO == "hifo"


def test_price_gap_policy_values():
    assert PriceGapPolicy.LATEST_AVAILABLE == "latest_available"
    assert PriceGapPolicy.CARRY_FORWARD == "carry_forward"
