"""Ledger layer ORM model: ledger_events."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Double, Index, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base


class LedgerEvent(Base):
    """One buy / sell / interest transaction owned by a user.

    btc_delta is signed (negative for sells); fiat_cost already includes any
    USD fee.  Rows are never updated in place.
    """

    __tablename__ = "ledger_events"
    __table_args__ = (
        Index("ix_ledger_events_user_date", "user_id", "event_date"),
        CheckConstraint("kind IN ('buy', 'sell', 'interest')", name="ck_ledger_events_kind"),
        CheckConstraint("fiat_cost >= 0", name="ck_ledger_events_fiat_cost"),
    )

    event_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    event_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    kind: Mapped[str] = mapped_column(Text, nullable=False)  # buy / sell / interest
    btc_delta: Mapped[float] = mapped_column(Double, nullable=False)
    fiat_cost: Mapped[float] = mapped_column(Double, nullable=False, server_default="0")
    price_per_btc: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
