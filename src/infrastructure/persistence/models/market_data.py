"""Market data layer ORM models: btc_monthly_close, spot_price."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import CheckConstraint, Date, DateTime, Double, Index, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base


class BtcMonthlyClose(Base):
    """Canonical BTC/USD close for one completed calendar month.

    PK is the month-end date, so there is at most one row per month.
    """

    __tablename__ = "btc_monthly_close"
    __table_args__ = (CheckConstraint("close > 0", name="ck_btc_monthly_close_positive"),)

    month_end_date: Mapped[date] = mapped_column(Date, primary_key=True)
    close: Mapped[float] = mapped_column(Double, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class SpotPrice(Base):
    """Live price observations; the newest updated_at row is the current spot."""

    __tablename__ = "spot_price"
    __table_args__ = (Index("ix_spot_price_updated_at", "updated_at"),)

    spot_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    price_usd: Mapped[float] = mapped_column(Double, nullable=False)
    source: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # e.g. coinpaprika
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
