"""Auth service — registration and login.

Learn: Login failures are deliberately uniform. "No such email" and
"wrong password" both raise UnauthorizedError("invalid credentials"),
and an unknown email still pays for one bcrypt verification against a
throwaway hash, so neither the response nor its timing tells a caller
whether an account exists.
"""

import asyncio
from dataclasses import dataclass
from functools import lru_cache

import structlog

from subtracker.auth.jwt import TokenService
from subtracker.auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from subtracker.domain import MIN_PASSWORD_LENGTH, User
from subtracker.errors import InvalidInputError, NotFoundError, UnauthorizedError
from subtracker.repositories.base import UserRepository

logger = structlog.get_logger()


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: User


def normalize_email(email: str) -> str:
    return email.strip().lower()


@lru_cache(maxsize=4)
def dummy_hash(rounds: int) -> str:
    """Throwaway hash verified on unknown-email logins. Warmed at startup."""
    return hash_password("timing-equalizer", rounds)


def _verify_against_dummy(password: str, rounds: int) -> bool:
    """Burn one bcrypt verification at the configured cost."""
    return verify_password(password, dummy_hash(rounds))


class AuthService:
    """Business logic for account registration and login."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ):
        self.users = users
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        name = name.strip()
        email = normalize_email(email)
        if not name:
            raise InvalidInputError("name is required")
        if not email:
            raise InvalidInputError("email is required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputError(
                f"password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        # bcrypt is CPU-bound, run it off the event loop
        password_hash = await asyncio.to_thread(
            hash_password, password, self.bcrypt_rounds
        )

        # DuplicateEmailError propagates unchanged
        user = await self.users.create(name, email, password_hash)
        token = self.tokens.issue(user.id, user.email)

        logger.info("auth.registered", user_id=user.id)
        return AuthResult(token=token, user=user)

    async def login(self, email: str, password: str) -> AuthResult:
        email = normalize_email(email)
        if not email or not password:
            raise InvalidInputError("email and password are required")

        try:
            user = await self.users.find_by_email(email)
        except NotFoundError:
            await asyncio.to_thread(_verify_against_dummy, password, self.bcrypt_rounds)
            logger.info("auth.login_failed")
            raise UnauthorizedError("invalid credentials")

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            logger.info("auth.login_failed")
            raise UnauthorizedError("invalid credentials")

        token = self.tokens.issue(user.id, user.email)
        logger.info("auth.logged_in", user_id=user.id)
        return AuthResult(token=token, user=user)
