"""Storage layer: contracts plus SQL and in-memory implementations."""

from subtracker.repositories.base import SubscriptionRepository, UserRepository
from subtracker.repositories.memory import (
    InMemorySubscriptionRepository,
    InMemoryUserRepository,
)
from subtracker.repositories.sql import SqlSubscriptionRepository, SqlUserRepository

__all__ = [
    "InMemorySubscriptionRepository",
    "InMemoryUserRepository",
    "SqlSubscriptionRepository",
    "SqlUserRepository",
    "SubscriptionRepository",
    "UserRepository",
]
