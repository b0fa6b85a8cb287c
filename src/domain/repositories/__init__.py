"""Domain repository interfaces.

All abstractions are defined here with abc.ABC and @abstractmethod.
Concrete implementations live in src/infrastructure/persistence/ and are
wired at the application boundary via dependency injection.

Import from this package rather than individual modules to avoid coupling
handlers to specific repository module paths.
"""

from .base import Repository
from .ledger import LedgerRepository
from .prices import PriceRepository

__all__ = [
    "Repository",
    "LedgerRepository",
    "PriceRepository",
]
