"""SQLAlchemy implementation of PriceRepository.

Price tables are shared reference data rather than user-owned aggregates, so
this repository takes a session factory and runs every call in its own
short-lived session.  Independent reads can therefore be awaited concurrently.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.errors import PriceFetchError
from src.domain.models.market_data import MonthlyPriceRecord, month_key
from src.domain.models.market_data import SpotPrice as DomainSpotPrice
from src.domain.repositories.prices import PriceRepository
from src.infrastructure.persistence.models.market_data import BtcMonthlyClose
from src.infrastructure.persistence.models.market_data import SpotPrice as OrmSpotPrice


class SqlPriceRepository(PriceRepository):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @staticmethod
    def _spot_to_domain(row: OrmSpotPrice) -> DomainSpotPrice:
        return DomainSpotPrice(price_usd=row.price_usd, as_of=row.updated_at, source=row.source)

    async def get_monthly_closes(self, start: date, end: date) -> dict[str, float]:
        stmt = (
            select(BtcMonthlyClose.month_end_date, BtcMonthlyClose.close)
            .where(BtcMonthlyClose.month_end_date.between(start, end))
            .order_by(BtcMonthlyClose.month_end_date.asc())
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.all()
        except SQLAlchemyError as exc:
            raise PriceFetchError(f"Failed to load monthly closes for {start}..{end}") from exc
        return {month_key(row.month_end_date): float(row.close) for row in rows}

    async def get_spot_price(self) -> DomainSpotPrice:
        stmt = select(OrmSpotPrice).order_by(OrmSpotPrice.updated_at.desc()).limit(1)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                row = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise PriceFetchError("Failed to load spot price") from exc
        if row is None:
            raise PriceFetchError("No spot price has been recorded")
        return self._spot_to_domain(row)

    async def upsert_monthly_closes(self, records: list[MonthlyPriceRecord]) -> int:
        if not records:
            return 0
        # Last record wins when a batch repeats a month.
        values = list(
            {
                r.month_end_date: {"month_end_date": r.month_end_date, "close": r.close_price}
                for r in records
            }.values()
        )
        stmt = pg_insert(BtcMonthlyClose).values(values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["month_end_date"],
            set_={"close": stmt.excluded.close, "updated_at": func.now()},
        )
        async with self._session_factory.begin() as session:
            result = await session.execute(stmt)
        return result.rowcount

    async def record_spot_price(self, spot: DomainSpotPrice) -> DomainSpotPrice:
        async with self._session_factory.begin() as session:
            session.add(
                OrmSpotPrice(price_usd=spot.price_usd, source=spot.source, updated_at=spot.as_of)
            )
        return spot
