"""Create quotes_daily table.

Revision ID: 001
Revises: None
Create Date: 2025-09-12
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "quotes_daily",
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("fx_rate", sa.Float(), nullable=True),
        sa.Column("vix", sa.Float(), nullable=True),
        sa.Column("etf_volume", sa.Float(), nullable=True),
        sa.Column("gold_open", sa.Float(), nullable=True),
        sa.Column("gold_close", sa.Float(), nullable=True),
        sa.Column("usd_oz_open", sa.Float(), nullable=True),
        sa.Column("usd_oz_close", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("date"),
    )


def downgrade() -> None:
    op.drop_table("quotes_daily")
