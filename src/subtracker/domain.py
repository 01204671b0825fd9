"""Domain records passed between services and repositories.

Learn: These are plain frozen dataclasses, not ORM rows. Repositories
translate to and from their storage (SQLAlchemy rows, dicts in memory),
so services never touch a session and tests can swap storage freely.
"""

from dataclasses import dataclass, field, replace
from datetime import date

BILLING_MONTHLY = "monthly"
BILLING_YEARLY = "yearly"
BILLING_CYCLES = (BILLING_MONTHLY, BILLING_YEARLY)

CARD_LAST4_LENGTH = 4
MIN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    password_hash: str = field(repr=False)


@dataclass(frozen=True)
class Subscription:
    """One recurring payment. `id` is empty until storage assigns one."""

    user_id: str
    service_name: str
    bank_name: str
    card_last4: str
    billing_cycle: str
    charge_date: date
    id: str = ""

    def with_id(self, subscription_id: str) -> "Subscription":
        return replace(self, id=subscription_id)
