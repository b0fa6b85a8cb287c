"""Tests for src/domain/models/market_data.py."""

from datetime import date

import pytest
from pydantic import ValidationError

from src.domain.models.market_data import MonthlyPriceRecord, SpotPrice, month_end, month_key


# --- helpers ---

def test_month_key_zero_pads_month():
    assert month_key(date(2024, 3, 31)) == "2024-03"


def test_month_end_handles_leap_february():
    assert month_end(2024, 2) == date(2024, 2, 29)


def test_month_end_handles_non_leap_february():
    assert month_end(2023, 2) == date(2023, 2, 28)


def test_month_end_december():
    assert month_end(2023, 12) == date(2023, 12, 31)


# --- MonthlyPriceRecord ---

def test_monthly_price_record_month_key():
    record = MonthlyPriceRecord(month_end_date=date(2023, 6, 30), close_price=30_477.25)
    assert record.month_key == "2023-06"


def test_monthly_price_record_zero_close_raises():
    with pytest.raises(ValidationError):
        MonthlyPriceRecord(month_end_date=date(2023, 6, 30), close_price=0.0)


def test_monthly_price_record_is_frozen():
    record = MonthlyPriceRecord(month_end_date=date(2023, 6, 30), close_price=1.0)
    with pytest.raises(ValidationError):
        record.close_price = 2.0  # type: ignore[misc]


# --- SpotPrice ---

def test_spot_price_as_of_defaults_to_now():
    assert SpotPrice(price_usd=60_000.0).as_of is not None


def test_spot_price_negative_raises():
    with pytest.raises(ValidationError):
        SpotPrice(price_usd=-1.0)


def test_spot_price_source_optional():
    assert SpotPrice(price_usd=1.0).source is None
