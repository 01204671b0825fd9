"""Storage contracts for accounts and subscriptions.

Learn: Services depend on these Protocols, not on SQLAlchemy. Any storage
engine that satisfies them can back the API; the SQL implementations run
in production, the in-memory ones back the test suite.
"""

from typing import Protocol

from subtracker.domain import Subscription, User


class UserRepository(Protocol):
    """Account directory."""

    async def create(self, name: str, email: str, password_hash: str) -> User:
        """Persist a new user.

        Raises DuplicateEmailError if the email (case-insensitive) is taken.
        The check and the insert must be one atomic storage operation.
        """
        ...

    async def find_by_email(self, email: str) -> User:
        """Raises NotFoundError if no user has this email."""
        ...


class SubscriptionRepository(Protocol):
    """Subscription ledger. Every operation is scoped to one owner."""

    async def list_by_owner(self, owner_id: str) -> list[Subscription]:
        """Owner's subscriptions, charge date ascending. Empty list if none."""
        ...

    async def create(self, subscription: Subscription) -> Subscription:
        """Persist and return the record with its storage-assigned id."""
        ...

    async def update(self, subscription: Subscription) -> Subscription:
        """Replace the record matching BOTH id and user_id.

        Raises NotFoundError when nothing matches — missing and
        not-yours are indistinguishable.
        """
        ...

    async def delete(self, owner_id: str, subscription_id: str) -> None:
        """Delete the record matching BOTH ids, else NotFoundError."""
        ...
