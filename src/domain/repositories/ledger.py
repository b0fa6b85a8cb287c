"""Ledger repository interface."""

from __future__ import annotations

from abc import abstractmethod
from uuid import UUID

from src.domain.models.ledger import LedgerEvent

from .base import Repository


class LedgerRepository(Repository[LedgerEvent]):
    """Read/write interface for a user's ledger events.

    Events are immutable once created: update is unsupported, delete removes
    an event entirely (the user re-enters a corrected one).

    Implementations raise LedgerFetchError when the store cannot be read.  An
    empty result always means "no transactions", never "read failed".
    """

    async def get(self, id: UUID) -> LedgerEvent | None:
        return await self.get_by_id(id)

    @abstractmethod
    async def get_by_id(self, event_id: UUID) -> LedgerEvent | None:
        """Return the event, or None."""

    @abstractmethod
    async def list_for_user(self, user_id: UUID) -> list[LedgerEvent]:
        """Return every buy/sell/interest event for the user, ascending by date.

        No pagination: running totals need the complete ledger.
        """

    @abstractmethod
    async def list(self, limit: int = 50, offset: int = 0) -> list[LedgerEvent]:
        """Return a page of events across all users ordered by date descending."""

    @abstractmethod
    async def create(self, entity: LedgerEvent) -> LedgerEvent:
        """Persist a single event."""

    @abstractmethod
    async def bulk_insert(self, events: list[LedgerEvent]) -> int:
        """Persist many events (e.g. from an import).  Returns the count added."""
