"""Pydantic schemas for subscriptions.

Learn: SubscriptionWrite has no user_id field and forbids extras, so a
body that tries to name an owner is rejected outright (400). The owner
always comes from the token. SubscriptionRead never echoes the owner.
"""

from datetime import date

from pydantic import BaseModel

from subtracker.services.subscription_service import SubscriptionInput


class SubscriptionWrite(BaseModel):
    """Body for POST /subscriptions and PUT /subscriptions/{id}."""

    service_name: str = ""
    bank_name: str = ""
    card_last4: str = ""
    billing_cycle: str = ""
    charge_date: str = ""

    model_config = {"extra": "forbid"}

    def to_input(self) -> SubscriptionInput:
        return SubscriptionInput(**self.model_dump())


class SubscriptionRead(BaseModel):
    id: str
    service_name: str
    bank_name: str
    card_last4: str
    billing_cycle: str
    charge_date: date  # serialized as YYYY-MM-DD

    model_config = {"from_attributes": True}


class SubscriptionDeleted(BaseModel):
    id: str
