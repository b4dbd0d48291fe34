"""init

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-17

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("user_name", sa.String(length=256), nullable=True),
        sa.Column("normalized_user_name", sa.String(length=256), nullable=True),
        sa.Column("email", sa.String(length=256), nullable=True),
        sa.Column("normalized_email", sa.String(length=256), nullable=True),
        sa.Column("email_confirmed", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("security_stamp", sa.String(length=36), nullable=True),
        sa.Column("concurrency_stamp", sa.String(length=36), nullable=True),
        sa.Column("phone_number", sa.String(length=50), nullable=True),
        sa.Column("phone_number_confirmed", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("two_factor_enabled", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("lockout_end", sa.DateTime(), nullable=True),
        sa.Column("lockout_enabled", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("access_failed_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("full_name", sa.String(length=50), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
    )
    op.create_index(
        "UserNameIndex",
        "users",
        ["normalized_user_name"],
        unique=True,
        mssql_where=sa.text("normalized_user_name IS NOT NULL"),
    )
    op.create_index("EmailIndex", "users", ["normalized_email"], unique=False)

    op.create_table(
        "roles",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=256), nullable=True),
        sa.Column("normalized_name", sa.String(length=256), nullable=True),
        sa.Column("concurrency_stamp", sa.String(length=36), nullable=True),
    )
    op.create_index(
        "RoleNameIndex",
        "roles",
        ["normalized_name"],
        unique=True,
        mssql_where=sa.text("normalized_name IS NOT NULL"),
    )

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("role_id", sa.String(length=36), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "role_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_user_roles_user_id", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], name="fk_user_roles_role_id", ondelete="CASCADE"),
    )
    op.create_index("ix_user_roles_role_id", "user_roles", ["role_id"], unique=False)

    op.create_table(
        "user_claims",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("claim_type", sa.Text(), nullable=True),
        sa.Column("claim_value", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_user_claims_user_id", ondelete="CASCADE"),
    )
    op.create_index("ix_user_claims_user_id", "user_claims", ["user_id"], unique=False)

    op.create_table(
        "role_claims",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("role_id", sa.String(length=36), nullable=False),
        sa.Column("claim_type", sa.Text(), nullable=True),
        sa.Column("claim_value", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], name="fk_role_claims_role_id", ondelete="CASCADE"),
    )
    op.create_index("ix_role_claims_role_id", "role_claims", ["role_id"], unique=False)

    op.create_table(
        "user_logins",
        sa.Column("login_provider", sa.String(length=128), nullable=False),
        sa.Column("provider_key", sa.String(length=128), nullable=False),
        sa.Column("provider_display_name", sa.Text(), nullable=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.PrimaryKeyConstraint("login_provider", "provider_key"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_user_logins_user_id", ondelete="CASCADE"),
    )
    op.create_index("ix_user_logins_user_id", "user_logins", ["user_id"], unique=False)

    op.create_table(
        "user_tokens",
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("login_provider", sa.String(length=128), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("value", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("user_id", "login_provider", "name"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_user_tokens_user_id", ondelete="CASCADE"),
    )

    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("balance", sa.Numeric(18, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("created_on", sa.DateTime(), nullable=False),
        sa.Column("name", sa.String(length=35), nullable=False),
        sa.Column("unique_id", sa.String(length=34), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_accounts_user_id", ondelete="CASCADE"),
        sa.UniqueConstraint("unique_id", name="uq_accounts_unique_id"),
    )
    op.create_index("ix_accounts_user_id", "accounts", ["user_id"], unique=False)

    op.create_table(
        "cards",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("number", sa.String(length=16), nullable=False),
        sa.Column("expiry_date", sa.String(length=5), nullable=False),
        sa.Column("security_code", sa.String(length=3), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("account_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], name="fk_cards_account_id", ondelete="CASCADE"),
        # NO ACTION: SQL Server rejects a second cascade path from users.
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_cards_user_id"),
    )
    op.create_index("ix_cards_account_id", "cards", ["account_id"], unique=False)
    op.create_index("ix_cards_user_id", "cards", ["user_id"], unique=False)

    op.create_table(
        "transfers",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("description", sa.String(length=150), nullable=True),
        sa.Column("source", sa.String(length=34), nullable=False),
        sa.Column("destination", sa.String(length=34), nullable=False),
        sa.Column("sender_name", sa.String(length=50), nullable=False),
        sa.Column("recipient_name", sa.String(length=50), nullable=False),
        sa.Column("made_on", sa.DateTime(), nullable=False),
        sa.Column("account_id", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], name="fk_transfers_account_id", ondelete="CASCADE"),
    )
    op.create_index("ix_transfers_account_id", "transfers", ["account_id"], unique=False)
    op.create_index("ix_transfers_made_on", "transfers", ["made_on"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_transfers_made_on", table_name="transfers")
    op.drop_index("ix_transfers_account_id", table_name="transfers")
    op.drop_table("transfers")

    op.drop_index("ix_cards_user_id", table_name="cards")
    op.drop_index("ix_cards_account_id", table_name="cards")
    op.drop_table("cards")

    op.drop_index("ix_accounts_user_id", table_name="accounts")
    op.drop_table("accounts")

    op.drop_table("user_tokens")
    op.drop_index("ix_user_logins_user_id", table_name="user_logins")
    op.drop_table("user_logins")
    op.drop_index("ix_role_claims_role_id", table_name="role_claims")
    op.drop_table("role_claims")
    op.drop_index("ix_user_claims_user_id", table_name="user_claims")
    op.drop_table("user_claims")
    op.drop_index("ix_user_roles_role_id", table_name="user_roles")
    op.drop_table("user_roles")

    op.drop_index("RoleNameIndex", table_name="roles")
    op.drop_table("roles")

    op.drop_index("EmailIndex", table_name="users")
    op.drop_index("UserNameIndex", table_name="users")
    op.drop_table("users")
