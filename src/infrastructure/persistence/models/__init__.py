"""ORM model registry: imports all layer modules so every mapper class is
registered with Base.metadata before Alembic or SQLAlchemy runs.
"""

from src.infrastructure.persistence.models.ledger import LedgerEvent
from src.infrastructure.persistence.models.market_data import (
    BtcMonthlyClose,
    SpotPrice,
)

__all__ = [
    # Ledger
    "LedgerEvent",
    # Market data
    "BtcMonthlyClose",
    "SpotPrice",
]
