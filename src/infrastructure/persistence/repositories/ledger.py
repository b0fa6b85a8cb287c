"""SQLAlchemy implementation of LedgerRepository."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.errors import LedgerFetchError
from src.domain.models.enums import LedgerEventKind
from src.domain.models.ledger import LedgerEvent as DomainLedgerEvent
from src.domain.repositories.ledger import LedgerRepository
from src.infrastructure.persistence.models.ledger import LedgerEvent as OrmLedgerEvent

_VALUATION_KINDS = [k.value for k in LedgerEventKind]


def _to_domain(row: OrmLedgerEvent) -> DomainLedgerEvent:
    return DomainLedgerEvent(
        event_id=row.event_id,
        user_id=row.user_id,
        date=row.event_date,
        kind=LedgerEventKind(row.kind),
        btc_delta=row.btc_delta,
        fiat_cost=row.fiat_cost,
        price_per_btc=row.price_per_btc,
        created_at=row.created_at,
    )


def _to_orm(entity: DomainLedgerEvent) -> OrmLedgerEvent:
    return OrmLedgerEvent(
        event_id=entity.event_id,
        user_id=entity.user_id,
        event_date=entity.date,
        kind=entity.kind.value,
        btc_delta=entity.btc_delta,
        fiat_cost=entity.fiat_cost,
        price_per_btc=entity.price_per_btc,
        created_at=entity.created_at,
    )


class SqlLedgerRepository(LedgerRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, event_id: UUID) -> DomainLedgerEvent | None:
        try:
            row = await self._session.get(OrmLedgerEvent, event_id)
        except SQLAlchemyError as exc:
            raise LedgerFetchError(f"Failed to load ledger event {event_id}") from exc
        return _to_domain(row) if row else None

    async def list_for_user(self, user_id: UUID) -> list[DomainLedgerEvent]:
        stmt = (
            select(OrmLedgerEvent)
            .where(
                OrmLedgerEvent.user_id == user_id,
                OrmLedgerEvent.kind.in_(_VALUATION_KINDS),
            )
            .order_by(OrmLedgerEvent.event_date.asc(), OrmLedgerEvent.created_at.asc())
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise LedgerFetchError(f"Failed to load ledger for user {user_id}") from exc
        return [_to_domain(row) for row in result.scalars()]

    async def list(self, limit: int = 50, offset: int = 0) -> list[DomainLedgerEvent]:
        stmt = (
            select(OrmLedgerEvent)
            .order_by(OrmLedgerEvent.event_date.desc())
            .limit(limit)
            .offset(offset)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise LedgerFetchError("Failed to list ledger events") from exc
        return [_to_domain(row) for row in result.scalars()]

    async def create(self, entity: DomainLedgerEvent) -> DomainLedgerEvent:
        self._session.add(_to_orm(entity))
        return entity

    async def bulk_insert(self, events: list[DomainLedgerEvent]) -> int:
        if not events:
            return 0
        self._session.add_all([_to_orm(e) for e in events])
        return len(events)

    async def update(self, entity: DomainLedgerEvent) -> DomainLedgerEvent:
        raise NotImplementedError("Ledger events are immutable; delete and re-create instead")

    async def delete(self, id: UUID) -> None:
        await self._session.execute(delete(OrmLedgerEvent).where(OrmLedgerEvent.event_id == id))
