"""Cost basis policies.

A CostBasisPolicy folds one LedgerEvent into a running Position.  Buys add
their fiat cost, interest adds BTC at zero cost, and each policy decides what
a sell does to the basis:

  PreserveOnSell:        basis unchanged; the series shows total historical
                         investment.
  ProportionalReduction: basis reduced by the sold fraction of the holding
                         (average-cost relief).
  Fifo / Lifo / Hifo:    basis reduced by the lots the sell consumes, taken
                         oldest first, newest first or highest price first.

Policies that relieve basis also accumulate realized gain when the sell
records its price; a sell without a price relieves basis but realizes nothing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime

from src.domain.models.enums import CostBasisMethod, LedgerEventKind
from src.domain.models.ledger import LedgerEvent

# Lots smaller than this are treated as fully consumed.
_DUST = 1e-9


@dataclass(frozen=True)
class Lot:
    """BTC acquired by one buy or interest event and not yet sold."""

    acquired: datetime
    btc: float
    cost_basis: float
    price_per_btc: float = 0.0


@dataclass(frozen=True)
class Position:
    """Running BTC balance and USD cost basis after some prefix of the ledger.

    lots is only populated by lot-relief policies.
    """

    btc: float = 0.0
    cost_basis: float = 0.0
    realized_gain: float = 0.0
    lots: tuple[Lot, ...] = ()


class CostBasisPolicy(ABC):
    """Reducer applied to each ledger event in ascending date order."""

    method: CostBasisMethod

    def apply(self, position: Position, event: LedgerEvent) -> Position:
        """Return the position after event; position itself is never modified."""
        if event.kind == LedgerEventKind.SELL:
            return self.sell(position, event)
        return self.acquire(position, event)

    def acquire(self, position: Position, event: LedgerEvent) -> Position:
        # Interest events always carry fiat_cost == 0.
        return replace(
            position,
            btc=position.btc + event.btc_delta,
            cost_basis=position.cost_basis + event.fiat_cost,
        )

    @abstractmethod
    def sell(self, position: Position, event: LedgerEvent) -> Position:
        """Position after a sell event (btc_delta <= 0)."""

    @staticmethod
    def _realized(position: Position, event: LedgerEvent, sold: float, relieved: float) -> float:
        if event.price_per_btc is None:
            return position.realized_gain
        return position.realized_gain + sold * event.price_per_btc - relieved


class PreserveOnSell(CostBasisPolicy):
    method = CostBasisMethod.PRESERVE_ON_SELL

    def sell(self, position: Position, event: LedgerEvent) -> Position:
        return replace(position, btc=position.btc + event.btc_delta)


class ProportionalReduction(CostBasisPolicy):
    method = CostBasisMethod.PROPORTIONAL_REDUCTION

    def sell(self, position: Position, event: LedgerEvent) -> Position:
        btc = position.btc + event.btc_delta
        if position.btc <= 0:
            return replace(position, btc=btc)
        sold = min(-event.btc_delta, position.btc)
        relieved = position.cost_basis * sold / position.btc
        return replace(
            position,
            btc=btc,
            cost_basis=position.cost_basis - relieved,
            realized_gain=self._realized(position, event, sold, relieved),
        )


class LotRelief(CostBasisPolicy):
    """Specific-lot relief: buys and interest open lots, sells consume them.

    Interest lots carry zero basis, so selling them realizes their full
    proceeds.  Only lots held at the time of the sell can be consumed; BTC
    sold beyond the open lots reduces the balance without relieving basis.
    """

    def acquire(self, position: Position, event: LedgerEvent) -> Position:
        acquired = super().acquire(position, event)
        if event.btc_delta <= 0:
            return acquired
        price = event.price_per_btc
        if price is None:
            price = event.fiat_cost / event.btc_delta
        lot = Lot(event.date, event.btc_delta, event.fiat_cost, price)
        return replace(acquired, lots=position.lots + (lot,))

    def sell(self, position: Position, event: LedgerEvent) -> Position:
        lots = list(position.lots)
        remaining = -event.btc_delta
        sold = relieved = 0.0
        while remaining > _DUST and lots:
            i = self.next_lot(lots)
            lot = lots[i]
            taken = min(remaining, lot.btc)
            portion = lot.cost_basis * taken / lot.btc
            sold += taken
            relieved += portion
            remaining -= taken
            if lot.btc - taken <= _DUST:
                del lots[i]
            else:
                lots[i] = replace(lot, btc=lot.btc - taken, cost_basis=lot.cost_basis - portion)
        return Position(
            btc=position.btc + event.btc_delta,
            cost_basis=max(position.cost_basis - relieved, 0.0),
            realized_gain=self._realized(position, event, sold, relieved),
            lots=tuple(lots),
        )

    @abstractmethod
    def next_lot(self, lots: list[Lot]) -> int:
        """Index of the lot the next unit of a sell is taken from."""


class Fifo(LotRelief):
    method = CostBasisMethod.FIFO

    def next_lot(self, lots: list[Lot]) -> int:
        return 0


class Lifo(LotRelief):
    method = CostBasisMethod.LIFO

    def next_lot(self, lots: list[Lot]) -> int:
        return len(lots) - 1


class Hifo(LotRelief):
    method = CostBasisMethod.HIFO

    def next_lot(self, lots: list[Lot]) -> int:
        # Ties go to the oldest lot.
        return max(range(len(lots)), key=lambda i: lots[i].price_per_btc)


_POLICIES: dict[CostBasisMethod, type[CostBasisPolicy]] = {
    CostBasisMethod.PRESERVE_ON_SELL: PreserveOnSell,
    CostBasisMethod.PROPORTIONAL_REDUCTION: ProportionalReduction,
    CostBasisMethod.FIFO: Fifo,
    CostBasisMethod.LIFO: Lifo,
    CostBasisMethod.HIFO: Hifo,
}


def cost_basis_policy_for(method: CostBasisMethod | str) -> CostBasisPolicy:
    """Instantiate the policy for a CostBasisMethod (or its string value)."""
    return _POLICIES[CostBasisMethod(method)]()
