"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table. Alembic migrations under db/migrations mirror these.

Two invariants live in the schema, not in application code:
- Email uniqueness is a unique index on lower(email), so two concurrent
  registrations of "Ana@x.com" and "ana@x.com" can't both succeed.
- Every subscription row points at an existing user (FK, cascade delete).

Free-text columns (names, email) are unbounded TEXT.
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


class User(Base):
    """A registered account. Immutable after creation."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True), primary_key=True, default=new_uuid
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


# Functional index, declared after the class so it can see User.email
Index("uq_users_email_lower", func.lower(User.email), unique=True)


class Subscription(Base):
    """A recurring payment owned by exactly one user.

    Learn: The (id, user_id) index backs the ownership-scoped UPDATE and
    DELETE statements — every mutation matches on both columns at once.
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        CheckConstraint(
            "billing_cycle IN ('monthly', 'yearly')",
            name="ck_subscriptions_billing_cycle",
        ),
        CheckConstraint(
            "char_length(card_last4) = 4", name="ck_subscriptions_card_last4"
        ),
        Index("ix_subscriptions_id_user_id", "id", "user_id"),
        Index("ix_subscriptions_user_id_charge_date", "user_id", "charge_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True), primary_key=True, default=new_uuid
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    service_name: Mapped[str] = mapped_column(Text, nullable=False)
    bank_name: Mapped[str] = mapped_column(Text, nullable=False)
    card_last4: Mapped[str] = mapped_column(String(4), nullable=False)
    billing_cycle: Mapped[str] = mapped_column(String(10), nullable=False)
    charge_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=utcnow
    )
