"""Concrete SQLAlchemy repository implementations.

Exports all SqlRepository classes, the get_repositories() factory and the
get_portfolio_aggregator() factory for wiring at the application boundary
(FastAPI dependency injection).
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.services.cost_basis import cost_basis_policy_for
from src.domain.services.portfolio import MonthlyPortfolioAggregator
from src.infrastructure.database import AsyncSessionLocal, Settings, settings

from .ledger import SqlLedgerRepository
from .prices import SqlPriceRepository


@dataclass
class Repositories:
    """All repository instances.

    ledger is bound to the caller's AsyncSession; prices opens its own
    short-lived sessions from the session factory.
    """

    ledger: SqlLedgerRepository
    prices: SqlPriceRepository


def get_repositories(
    session: AsyncSession,
    session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
) -> Repositories:
    """Construct all repositories.

    Intended for use as a FastAPI dependency:

        async def handler(
            session: AsyncSession = Depends(get_session),
        ) -> ...:
            repos = get_repositories(session)
            events = await repos.ledger.list_for_user(user_id)
    """
    return Repositories(
        ledger=SqlLedgerRepository(session),
        prices=SqlPriceRepository(session_factory),
    )


def get_portfolio_aggregator(
    session: AsyncSession,
    session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
    config: Settings = settings,
) -> MonthlyPortfolioAggregator:
    """Build a MonthlyPortfolioAggregator over the SQL repositories.

    Cost basis method and price gap policy come from config.
    """
    repos = get_repositories(session, session_factory)
    return MonthlyPortfolioAggregator(
        ledger=repos.ledger,
        prices=repos.prices,
        cost_basis_policy=cost_basis_policy_for(config.cost_basis_method),
        price_gap_policy=config.price_gap_policy,
    )


__all__ = [
    "SqlLedgerRepository",
    "SqlPriceRepository",
    "Repositories",
    "get_repositories",
    "get_portfolio_aggregator",
]
