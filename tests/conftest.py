"""Test fixtures — the real app on in-memory storage.

Learn: Testing pattern for FastAPI without a database:

1. Each test gets fresh InMemoryUserRepository / InMemorySubscriptionRepository.
2. app.dependency_overrides swaps the SQL repository providers for them,
   and the token service for one with a known test secret.
3. Everything between the HTTP boundary and the repositories — auth
   dependency, services, validation, error handlers — is the real code.

bcrypt rounds are dropped to 4 so registration tests stay fast.

Tests marked `db` run the SQL repositories against real PostgreSQL
(SUBTRACKER_TEST_DATABASE_URL, default: the app database). Each one gets
its own connection + outer transaction; the session uses
join_transaction_mode="create_savepoint" so repository commit() and
rollback() only touch a SAVEPOINT, and the outer transaction is rolled
back afterwards. The schema is created inside that transaction too.
Without a reachable server these tests are skipped.
"""

import os
import uuid
from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from subtracker.api.dependencies import (
    get_subscription_repository,
    get_user_repository,
)
from subtracker.auth.jwt import TokenService, TokenSettings, get_token_service
from subtracker.config import settings
from subtracker.db.engine import get_db
from subtracker.db.models import Base
from subtracker.main import app
from subtracker.repositories import (
    InMemorySubscriptionRepository,
    InMemoryUserRepository,
)
from subtracker.services.auth_service import AuthService
from subtracker.services.subscription_service import SubscriptionService

TEST_SECRET = "test-secret-do-not-use-in-production"
TEST_ROUNDS = 4
TEST_DB_URL = os.environ.get("SUBTRACKER_TEST_DATABASE_URL", settings.database_url)

_db_unavailable: list[str] = []


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(settings, "bcrypt_rounds", TEST_ROUNDS)


@pytest.fixture()
def token_service() -> TokenService:
    return TokenService(TokenSettings(secret=TEST_SECRET, ttl=timedelta(days=7)))


@pytest.fixture()
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def subscription_repo() -> InMemorySubscriptionRepository:
    return InMemorySubscriptionRepository()


@pytest.fixture()
def auth_service(user_repo, token_service) -> AuthService:
    return AuthService(user_repo, token_service, bcrypt_rounds=TEST_ROUNDS)


@pytest.fixture()
def subscription_service(subscription_repo) -> SubscriptionService:
    return SubscriptionService(subscription_repo)


@pytest_asyncio.fixture()
async def client(user_repo, subscription_repo, token_service):
    """HTTP client with storage and token service overridden for testing."""
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_subscription_repository] = lambda: subscription_repo
    app.dependency_overrides[get_token_service] = lambda: token_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


async def register_user(
    client,
    name: str = "User",
    email: str | None = None,
    password: str = "password_123",
) -> dict:
    """Register through the API and return {token, user, headers}."""
    r = await client.post(
        "/api/auth/register",
        json={"name": name, "email": email or unique_email(), "password": password},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    body["headers"] = {"Authorization": f"Bearer {body['token']}"}
    return body


# ═══════════════════════════════════════════════════════════
# PostgreSQL-backed fixtures
# ═══════════════════════════════════════════════════════════


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session with automatic rollback via savepoints."""
    if _db_unavailable:
        pytest.skip(_db_unavailable[0])

    engine = create_async_engine(TEST_DB_URL, echo=False, connect_args={"timeout": 5})
    try:
        conn = await engine.connect()
    except (OSError, DBAPIError) as e:
        await engine.dispose()
        _db_unavailable.append(f"PostgreSQL unavailable at {TEST_DB_URL}: {e}")
        pytest.skip(_db_unavailable[0])

    try:
        trans = await conn.begin()
        await conn.run_sync(Base.metadata.create_all)
        session = AsyncSession(
            bind=conn,
            expire_on_commit=False,
            join_transaction_mode="create_savepoint",
        )
        try:
            yield session
        finally:
            await session.close()
            await trans.rollback()
    finally:
        await conn.close()
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_client(db_session, token_service):
    """HTTP client on the SQL repositories, inside the test transaction."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: token_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
