"""Tests for src/domain/repositories/prices.py."""

import asyncio
from datetime import date

import pytest

from src.domain.models.market_data import SpotPrice
from src.domain.repositories.prices import PriceRepository


def _concrete() -> PriceRepository:
    class _Impl(PriceRepository):
        async def get_monthly_closes(self, start, end): return {}
        async def get_spot_price(self): return SpotPrice(price_usd=1.0)
        async def upsert_monthly_closes(self, records): return len(records)
        async def record_spot_price(self, spot): return spot

    return _Impl()


def test_price_repository_is_abstract():
    with pytest.raises(TypeError):
        PriceRepository()  # type: ignore[abstract]


def test_price_repository_concrete_instantiates():
    assert _concrete() is not None


def test_price_repository_upsert_returns_count():
    result = asyncio.run(_concrete().upsert_monthly_closes(["a", "b", "c"]))
    assert result == 3


def test_price_repository_missing_months_are_absent():
    result = asyncio.run(_concrete().get_monthly_closes(date(2024, 1, 1), date(2024, 6, 30)))
    assert result == {}
