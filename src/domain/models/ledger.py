"""Ledger domain models.

A LedgerEvent is one completed transaction that changes a user's BTC holdings.
Events are immutable value objects; the valuation pipeline only folds over
them in ascending date order.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import LedgerEventKind


class LedgerEvent(BaseModel):
    """A single buy, sell or interest event.

    btc_delta is signed: >= 0 for buy and interest, <= 0 for sell.
    fiat_cost is the USD outlay of a buy including any USD-denominated fee;
    it is always 0 for sells and interest (interest has zero cost basis).
    price_per_btc is the price recorded at transaction time; lot-relief
    policies use it to order lots and to price realized gains.
    Naive datetimes are read as UTC.
    """

    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    date: datetime
    kind: LedgerEventKind
    btc_delta: float
    fiat_cost: float = Field(default=0.0, ge=0.0)
    price_per_btc: float | None = Field(default=None, gt=0.0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("date", "created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None or value.utcoffset() is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _sign_matches_kind(self) -> LedgerEvent:
        if self.kind == LedgerEventKind.SELL:
            if self.btc_delta > 0:
                raise ValueError(f"sell events must have btc_delta <= 0, got {self.btc_delta}")
        elif self.btc_delta < 0:
            raise ValueError(
                f"{self.kind.value} events must have btc_delta >= 0, got {self.btc_delta}"
            )
        if self.kind != LedgerEventKind.BUY and self.fiat_cost != 0.0:
            raise ValueError(f"{self.kind.value} events carry no fiat cost, got {self.fiat_cost}")
        return self

    @classmethod
    def from_order(
        cls,
        user_id: UUID,
        date: datetime,
        kind: LedgerEventKind | str,
        received_btc_amount: float | None = None,
        buy_fiat_amount: float | None = None,
        service_fee: float | None = None,
        service_fee_currency: str | None = None,
        sell_btc_amount: float | None = None,
        price: float | None = None,
    ) -> LedgerEvent:
        """Construct an event from the raw columns of an exchange order row.

        Missing amounts count as zero.  A service fee is added to the fiat cost
        of a buy only when it is denominated in USD.
        """
        kind = LedgerEventKind(kind)
        if kind == LedgerEventKind.SELL:
            btc_delta = -(sell_btc_amount or 0.0)
            fiat_cost = 0.0
        else:
            btc_delta = received_btc_amount or 0.0
            fiat_cost = 0.0
            if kind == LedgerEventKind.BUY:
                fee = service_fee if service_fee and service_fee_currency == "USD" else 0.0
                fiat_cost = (buy_fiat_amount or 0.0) + fee
        return cls(
            user_id=user_id,
            date=date,
            kind=kind,
            btc_delta=btc_delta,
            fiat_cost=fiat_cost,
            price_per_btc=price or None,
        )
