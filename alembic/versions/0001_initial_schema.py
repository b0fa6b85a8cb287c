"""Initial schema: ledger events, month-end closes, spot price.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ------------------------------------------------------------------ #
    # 1. LEDGER                                                            #
    # ------------------------------------------------------------------ #

    op.create_table(
        "ledger_events",
        sa.Column("event_id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("kind", sa.Text, nullable=False),
        sa.Column("btc_delta", sa.Double, nullable=False),
        sa.Column("fiat_cost", sa.Double, nullable=False, server_default="0"),
        sa.Column("price_per_btc", sa.Double, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint("kind IN ('buy', 'sell', 'interest')", name="ck_ledger_events_kind"),
        sa.CheckConstraint("fiat_cost >= 0", name="ck_ledger_events_fiat_cost"),
    )
    op.create_index("ix_ledger_events_user_date", "ledger_events", ["user_id", "event_date"])

    # ------------------------------------------------------------------ #
    # 2. MARKET DATA                                                       #
    # ------------------------------------------------------------------ #

    op.create_table(
        "btc_monthly_close",
        sa.Column("month_end_date", sa.Date, primary_key=True),
        sa.Column("close", sa.Double, nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint("close > 0", name="ck_btc_monthly_close_positive"),
    )

    op.create_table(
        "spot_price",
        sa.Column("spot_id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("price_usd", sa.Double, nullable=False),
        sa.Column("source", sa.Text, nullable=True),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )
    op.create_index("ix_spot_price_updated_at", "spot_price", ["updated_at"])


def downgrade() -> None:
    op.drop_index("ix_spot_price_updated_at", table_name="spot_price")
    op.drop_table("spot_price")
    op.drop_table("btc_monthly_close")
    op.drop_index("ix_ledger_events_user_date", table_name="ledger_events")
    op.drop_table("ledger_events")
