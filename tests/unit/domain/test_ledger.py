"""Tests for src/domain/models/ledger.py."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from src.domain.models.enums import LedgerEventKind
from src.domain.models.ledger import LedgerEvent

_WHEN = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


def _event(**overrides):
    defaults = dict(
        user_id=uuid4(),
        date=_WHEN,
        kind=LedgerEventKind.BUY,
        btc_delta=0.01,
        fiat_cost=500.0,
    )
    defaults.update(overrides)
    return LedgerEvent(**defaults)


# --- construction and validation ---

def test_buy_event_construction():
    assert _event().fiat_cost == 500.0


def test_kind_accepts_string_value():
    assert _event(kind="interest", fiat_cost=0.0).kind == LedgerEventKind.INTEREST


def test_event_is_frozen():
    with pytest.raises(ValidationError):
        _event().btc_delta = 1.0  # type: ignore[misc]


def test_buy_with_negative_delta_raises():
    with pytest.raises(ValidationError):
        _event(btc_delta=-0.1)


def test_sell_with_positive_delta_raises():
    with pytest.raises(ValidationError):
        _event(kind=LedgerEventKind.SELL, btc_delta=0.1, fiat_cost=0.0)


def test_sell_with_fiat_cost_raises():
    with pytest.raises(ValidationError):
        _event(kind=LedgerEventKind.SELL, btc_delta=-0.1, fiat_cost=10.0)


def test_interest_with_fiat_cost_raises():
    with pytest.raises(ValidationError):
        _event(kind=LedgerEventKind.INTEREST, btc_delta=0.001, fiat_cost=1.0)


def test_negative_fiat_cost_raises():
    with pytest.raises(ValidationError):
        _event(fiat_cost=-1.0)


def test_unknown_kind_raises():
    with pytest.raises(ValidationError):
        _event(kind="deposit")


def test_price_per_btc_defaults_to_none():
    assert _event().price_per_btc is None


# --- timezone handling ---

def test_naive_date_is_read_as_utc():
    event = _event(date=datetime(2023, 6, 1, 8, 0))
    assert event.date == datetime(2023, 6, 1, 8, 0, tzinfo=timezone.utc)


def test_aware_date_keeps_its_offset():
    offset = timezone(timedelta(hours=-5))
    assert _event(date=datetime(2023, 6, 1, tzinfo=offset)).date.utcoffset() == timedelta(hours=-5)


def test_naive_and_aware_dates_are_comparable():
    naive = _event(date=datetime(2023, 6, 1))
    aware = _event(date=datetime(2023, 7, 1, tzinfo=timezone.utc))
    assert naive.date < aware.date


def test_naive_created_at_is_read_as_utc():
    assert _event(created_at=datetime(2024, 1, 1)).created_at.tzinfo == timezone.utc


def test_from_order_naive_date_is_read_as_utc():
    event = LedgerEvent.from_order(uuid4(), datetime(2023, 6, 1), "interest", received_btc_amount=0.001)
    assert event.date.tzinfo == timezone.utc


# --- from_order ---

def test_from_order_buy_adds_usd_fee():
    event = LedgerEvent.from_order(
        uuid4(), _WHEN, "buy",
        received_btc_amount=0.01, buy_fiat_amount=495.0,
        service_fee=5.0, service_fee_currency="USD", price=50_000.0,
    )
    assert event.btc_delta == 0.01
    assert event.fiat_cost == 500.0
    assert event.price_per_btc == 50_000.0


def test_from_order_buy_ignores_non_usd_fee():
    event = LedgerEvent.from_order(
        uuid4(), _WHEN, LedgerEventKind.BUY,
        received_btc_amount=0.01, buy_fiat_amount=495.0,
        service_fee=0.0001, service_fee_currency="BTC",
    )
    assert event.fiat_cost == 495.0


def test_from_order_sell_negates_amount():
    event = LedgerEvent.from_order(uuid4(), _WHEN, "sell", sell_btc_amount=0.5, price=60_000.0)
    assert event.btc_delta == -0.5
    assert event.fiat_cost == 0.0


def test_from_order_interest_has_zero_cost():
    event = LedgerEvent.from_order(uuid4(), _WHEN, "interest", received_btc_amount=0.0002)
    assert event.btc_delta == 0.0002
    assert event.fiat_cost == 0.0


def test_from_order_missing_amounts_count_as_zero():
    event = LedgerEvent.from_order(uuid4(), _WHEN, "buy")
    assert (event.btc_delta, event.fiat_cost) == (0.0, 0.0)


def test_from_order_zero_price_becomes_none():
    event = LedgerEvent.from_order(uuid4(), _WHEN, "buy", received_btc_amount=0.1, price=0.0)
    assert event.price_per_btc is None
