"""users and subscriptions

Learn: Case-insensitive email uniqueness is a functional unique index on
lower(email). The (id, user_id) index serves the ownership-scoped
UPDATE/DELETE statements.

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "uq_users_email_lower",
        "users",
        [sa.text("lower(email)")],
        unique=True,
    )

    op.create_table(
        "subscriptions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("service_name", sa.Text(), nullable=False),
        sa.Column("bank_name", sa.Text(), nullable=False),
        sa.Column("card_last4", sa.String(4), nullable=False),
        sa.Column("billing_cycle", sa.String(10), nullable=False),
        sa.Column("charge_date", sa.Date(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "billing_cycle IN ('monthly', 'yearly')",
            name="ck_subscriptions_billing_cycle",
        ),
        sa.CheckConstraint(
            "char_length(card_last4) = 4", name="ck_subscriptions_card_last4"
        ),
    )
    op.create_index(
        "ix_subscriptions_id_user_id", "subscriptions", ["id", "user_id"]
    )
    op.create_index(
        "ix_subscriptions_user_id_charge_date",
        "subscriptions",
        ["user_id", "charge_date"],
    )


def downgrade() -> None:
    op.drop_index("ix_subscriptions_user_id_charge_date", table_name="subscriptions")
    op.drop_index("ix_subscriptions_id_user_id", table_name="subscriptions")
    op.drop_table("subscriptions")
    op.drop_index("uq_users_email_lower", table_name="users")
    op.drop_table("users")
