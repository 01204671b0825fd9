"""Service wiring for route handlers.

Learn: Routes receive fully-built services via Depends(). The repository
providers are the seams tests override (app.dependency_overrides) to
run the real routes and services on in-memory storage.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from subtracker.auth.jwt import TokenService, get_token_service
from subtracker.config import settings
from subtracker.db.engine import get_db
from subtracker.repositories import (
    SqlSubscriptionRepository,
    SqlUserRepository,
    SubscriptionRepository,
    UserRepository,
)
from subtracker.services.auth_service import AuthService
from subtracker.services.subscription_service import SubscriptionService


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return SqlUserRepository(db)


def get_subscription_repository(
    db: AsyncSession = Depends(get_db),
) -> SubscriptionRepository:
    return SqlSubscriptionRepository(db)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(users, tokens, bcrypt_rounds=settings.bcrypt_rounds)


def get_subscription_service(
    subscriptions: SubscriptionRepository = Depends(get_subscription_repository),
) -> SubscriptionService:
    return SubscriptionService(subscriptions)
