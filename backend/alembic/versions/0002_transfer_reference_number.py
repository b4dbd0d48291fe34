"""add reference number to money transfers

Revision ID: 0002_transfer_refno
Revises: 0001_init
Create Date: 2026-10-17

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0002_transfer_refno"
down_revision = "0001_init"
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Existing rows get an empty reference number; new rows always carry a generated one.
    op.add_column(
        "transfers",
        sa.Column("reference_number", sa.String(length=64), nullable=False, server_default=sa.text("''")),
    )
    op.create_index("ix_transfers_reference_number", "transfers", ["reference_number"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_transfers_reference_number", table_name="transfers")
    op.drop_column("transfers", "reference_number")
