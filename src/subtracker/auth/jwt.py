"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
One token type only: issued at register/login, valid for TTL (7 days by
default), carrying the user id in `sub`. No refresh, no revocation.

The algorithm is pinned to HS256 on BOTH sides. Decoding with
algorithms=[...] from the token header is the classic hole that lets
"alg: none" or a forged asymmetric token through — never do that.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import jwt

from subtracker.config import settings
from subtracker.errors import InvalidTokenError, SigningError

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenSettings:
    """Resolved signing configuration. Built once, never mutated."""

    secret: str
    ttl: timedelta


class TokenService:
    """Issues and validates identity tokens."""

    def __init__(self, config: TokenSettings):
        if not config.secret:
            raise SigningError("JWT secret is not configured")
        if config.ttl <= timedelta(0):
            raise SigningError("token TTL must be positive")
        self.config = config

    def issue(self, owner_id: str, email: str) -> str:
        """Create a signed token for `owner_id` expiring after the TTL."""
        issued_at = datetime.now(timezone.utc).replace(microsecond=0)
        payload = {
            "sub": owner_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.config.ttl,
        }
        try:
            return jwt.encode(payload, self.config.secret, algorithm=ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise SigningError("token signing failed") from e

    def validate(self, token: str) -> str:
        """Verify a token and return the owner id it was issued for.

        Raises InvalidTokenError for every failure (bad signature, wrong
        algorithm, expired, missing sub) without saying which.
        """
        try:
            payload = jwt.decode(
                token,
                self.config.secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e

        owner_id = payload.get("sub")
        if not isinstance(owner_id, str) or not owner_id.strip():
            raise InvalidTokenError()
        return owner_id


def token_settings_from(ttl_days: int, secret: str) -> TokenSettings:
    return TokenSettings(secret=secret, ttl=timedelta(days=ttl_days))


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """FastAPI dependency — the process-wide token service.

    Built lazily from settings and cached; main.py calls it during
    startup so a bad secret fails fast instead of on the first request.
    """
    return TokenService(token_settings_from(settings.token_ttl_days, settings.jwt_secret))
