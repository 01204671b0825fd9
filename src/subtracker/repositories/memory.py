"""In-memory repositories with the same contract as the SQL ones.

Learn: Used by the test suite (via app.dependency_overrides) so API and
service tests run without PostgreSQL. Semantics mirror sql.py exactly:
case-insensitive email uniqueness, charge-date ordering, and the same
NotFoundError for "missing" and "someone else's".

Each check-and-write below runs without an await in between, so on a
single event loop it is atomic — the in-memory stand-in for the unique
index and the `WHERE id AND user_id` statements.
"""

import uuid
from dataclasses import replace

from subtracker.domain import Subscription, User
from subtracker.errors import DuplicateEmailError, NotFoundError


class InMemoryUserRepository:
    def __init__(self):
        self._by_email: dict[str, User] = {}

    async def create(self, name: str, email: str, password_hash: str) -> User:
        key = email.lower()
        if key in self._by_email:
            raise DuplicateEmailError()
        user = User(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=password_hash,
        )
        self._by_email[key] = user
        return user

    async def find_by_email(self, email: str) -> User:
        user = self._by_email.get(email.lower())
        if user is None:
            raise NotFoundError("user not found")
        return user

    def __len__(self) -> int:
        return len(self._by_email)


class InMemorySubscriptionRepository:
    def __init__(self):
        self._rows: dict[str, Subscription] = {}

    async def list_by_owner(self, owner_id: str) -> list[Subscription]:
        owned = [s for s in self._rows.values() if s.user_id == owner_id]
        return sorted(owned, key=lambda s: (s.charge_date, s.id))

    async def create(self, subscription: Subscription) -> Subscription:
        stored = subscription.with_id(str(uuid.uuid4()))
        self._rows[stored.id] = stored
        return stored

    async def update(self, subscription: Subscription) -> Subscription:
        current = self._rows.get(subscription.id)
        if current is None or current.user_id != subscription.user_id:
            raise NotFoundError("subscription not found")
        stored = replace(subscription, id=current.id, user_id=current.user_id)
        self._rows[stored.id] = stored
        return stored

    async def delete(self, owner_id: str, subscription_id: str) -> None:
        current = self._rows.get(subscription_id)
        if current is None or current.user_id != owner_id:
            raise NotFoundError("subscription not found")
        del self._rows[subscription_id]

    def __len__(self) -> int:
        return len(self._rows)
