"""PostgreSQL repositories on the async SQLAlchemy session.

Learn: Ownership is enforced inside single statements:

    UPDATE subscriptions SET ... WHERE id = :id AND user_id = :owner RETURNING ...
    DELETE FROM subscriptions WHERE id = :id AND user_id = :owner

There is no "load, compare owner, then write" sequence, so there's no
window between the ownership check and the mutation.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from subtracker.db import models
from subtracker.domain import Subscription, User
from subtracker.errors import DuplicateEmailError, NotFoundError, UnauthorizedError

logger = structlog.get_logger()


def _as_uuid(value: str) -> Optional[uuid.UUID]:
    """Parse an opaque identifier. None if it can't be one of ours."""
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


def _to_user(row: models.User) -> User:
    return User(
        id=str(row.id),
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
    )


def _to_subscription(row: models.Subscription) -> Subscription:
    return Subscription(
        id=str(row.id),
        user_id=str(row.user_id),
        service_name=row.service_name,
        bank_name=row.bank_name,
        card_last4=row.card_last4,
        billing_cycle=row.billing_cycle,
        charge_date=row.charge_date,
    )


class SqlUserRepository:
    """Users table access."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str, email: str, password_hash: str) -> User:
        row = models.User(name=name, email=email, password_hash=password_hash)
        self.db.add(row)
        try:
            await self.db.flush()
        except IntegrityError as e:
            # uq_users_email_lower is the only unique constraint besides the pk
            await self.db.rollback()
            raise DuplicateEmailError() from e
        await self.db.commit()
        return _to_user(row)

    async def find_by_email(self, email: str) -> User:
        result = await self.db.execute(
            select(models.User).where(func.lower(models.User.email) == email.lower())
        )
        row = result.scalars().first()
        if row is None:
            raise NotFoundError("user not found")
        return _to_user(row)


class SqlSubscriptionRepository:
    """Subscriptions table access, always filtered by owner."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_by_owner(self, owner_id: str) -> list[Subscription]:
        owner = _as_uuid(owner_id)
        if owner is None:
            return []
        result = await self.db.execute(
            select(models.Subscription)
            .where(models.Subscription.user_id == owner)
            .order_by(models.Subscription.charge_date, models.Subscription.id)
        )
        return [_to_subscription(row) for row in result.scalars().all()]

    async def create(self, subscription: Subscription) -> Subscription:
        owner = _as_uuid(subscription.user_id)
        if owner is None:
            raise UnauthorizedError()

        row = models.Subscription(
            user_id=owner,
            service_name=subscription.service_name,
            bank_name=subscription.bank_name,
            card_last4=subscription.card_last4,
            billing_cycle=subscription.billing_cycle,
            charge_date=subscription.charge_date,
        )
        self.db.add(row)
        try:
            await self.db.flush()
        except IntegrityError as e:
            # FK violation: the token names a user that no longer exists
            await self.db.rollback()
            logger.warning("subscriptions.orphan_owner", user_id=subscription.user_id)
            raise UnauthorizedError() from e
        await self.db.commit()
        return _to_subscription(row)

    async def update(self, subscription: Subscription) -> Subscription:
        sub_id = _as_uuid(subscription.id)
        owner = _as_uuid(subscription.user_id)
        if sub_id is None or owner is None:
            raise NotFoundError("subscription not found")

        result = await self.db.execute(
            update(models.Subscription)
            .where(
                models.Subscription.id == sub_id,
                models.Subscription.user_id == owner,
            )
            .values(
                service_name=subscription.service_name,
                bank_name=subscription.bank_name,
                card_last4=subscription.card_last4,
                billing_cycle=subscription.billing_cycle,
                charge_date=subscription.charge_date,
            )
            .returning(models.Subscription)
            .execution_options(
                synchronize_session=False, populate_existing=True
            )
        )
        row = result.scalars().first()
        if row is None:
            await self.db.rollback()
            raise NotFoundError("subscription not found")
        updated = _to_subscription(row)
        await self.db.commit()
        return updated

    async def delete(self, owner_id: str, subscription_id: str) -> None:
        sub_id = _as_uuid(subscription_id)
        owner = _as_uuid(owner_id)
        if sub_id is None or owner is None:
            raise NotFoundError("subscription not found")

        result = await self.db.execute(
            delete(models.Subscription)
            .where(
                models.Subscription.id == sub_id,
                models.Subscription.user_id == owner,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundError("subscription not found")
        await self.db.commit()
