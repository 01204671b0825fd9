"""Subscription service — validated, owner-scoped CRUD.

Learn: Every method takes the caller's owner_id as an explicit argument,
resolved from the verified token by the route's auth dependency. The
owner is stamped onto the record here; nothing in the request body can
name a different owner.

Validation happens entirely before the repository is touched, so an
invalid request never causes a partial write.
"""

import re
from dataclasses import dataclass
from datetime import date

import structlog

from subtracker.domain import BILLING_CYCLES, CARD_LAST4_LENGTH, Subscription
from subtracker.errors import InvalidInputError, UnauthorizedError
from subtracker.repositories.base import SubscriptionRepository

logger = structlog.get_logger()

_DATE_FORMAT = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class SubscriptionInput:
    """Raw, unvalidated fields as the client sent them."""

    service_name: str = ""
    bank_name: str = ""
    card_last4: str = ""
    billing_cycle: str = ""
    charge_date: str = ""


def parse_charge_date(value: str) -> date:
    """Strict YYYY-MM-DD. Rejects "2024-3-5", "20240305" and impossible dates."""
    value = value.strip()
    if not _DATE_FORMAT.match(value):
        raise InvalidInputError("charge_date must be YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidInputError("charge_date must be YYYY-MM-DD")


def build_subscription(owner_id: str, data: SubscriptionInput) -> Subscription:
    """Validate and normalize client input into a Subscription for owner_id."""
    _require_owner(owner_id)

    service_name = data.service_name.strip()
    bank_name = data.bank_name.strip()
    card_last4 = data.card_last4.strip()
    billing_cycle = data.billing_cycle.strip().lower()

    if not service_name:
        raise InvalidInputError("service_name is required")
    if not bank_name:
        raise InvalidInputError("bank_name is required")
    if len(card_last4) != CARD_LAST4_LENGTH:
        raise InvalidInputError("card_last4 must be exactly 4 characters")
    if billing_cycle not in BILLING_CYCLES:
        raise InvalidInputError("billing_cycle must be 'monthly' or 'yearly'")

    return Subscription(
        user_id=owner_id,
        service_name=service_name,
        bank_name=bank_name,
        card_last4=card_last4,
        billing_cycle=billing_cycle,
        charge_date=parse_charge_date(data.charge_date),
    )


def _require_owner(owner_id: str) -> None:
    if not owner_id or not owner_id.strip():
        raise UnauthorizedError()


def _require_id(subscription_id: str) -> str:
    subscription_id = (subscription_id or "").strip()
    if not subscription_id:
        raise InvalidInputError("subscription id is required")
    return subscription_id


class SubscriptionService:
    """Business logic for the subscription ledger."""

    def __init__(self, subscriptions: SubscriptionRepository):
        self.subscriptions = subscriptions

    async def list_subscriptions(self, owner_id: str) -> list[Subscription]:
        _require_owner(owner_id)
        return await self.subscriptions.list_by_owner(owner_id)

    async def create_subscription(
        self, owner_id: str, data: SubscriptionInput
    ) -> Subscription:
        subscription = build_subscription(owner_id, data)
        created = await self.subscriptions.create(subscription)
        logger.info("subscriptions.created", subscription_id=created.id)
        return created

    async def update_subscription(
        self, owner_id: str, subscription_id: str, data: SubscriptionInput
    ) -> Subscription:
        """Full replacement of the owner's record (HTTP PUT semantics)."""
        _require_owner(owner_id)
        subscription_id = _require_id(subscription_id)
        subscription = build_subscription(owner_id, data).with_id(subscription_id)
        updated = await self.subscriptions.update(subscription)
        logger.info("subscriptions.updated", subscription_id=updated.id)
        return updated

    async def delete_subscription(self, owner_id: str, subscription_id: str) -> None:
        _require_owner(owner_id)
        subscription_id = _require_id(subscription_id)
        await self.subscriptions.delete(owner_id, subscription_id)
        logger.info("subscriptions.deleted", subscription_id=subscription_id)
