"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract
and validate the current user identity from the request. The resolved
CurrentIdentity is then passed explicitly into the service layer —
services never look at headers, request state, or context vars.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header

from subtracker.auth.jwt import TokenService, get_token_service
from subtracker.errors import InvalidTokenError, UnauthorizedError

logger = structlog.get_logger()


class CurrentIdentity:
    """The authenticated caller.

    Learn: user_id comes from the verified token's `sub` claim and
    nowhere else. Request bodies cannot override it.
    """

    def __init__(self, user_id: str):
        self.user_id = user_id

    def __repr__(self) -> str:
        return f"CurrentIdentity(user_id={self.user_id!r})"


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an `Authorization: Bearer <token>` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def get_current_user(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> CurrentIdentity:
    """Extract current identity (required — 401 if no valid token)."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise UnauthorizedError("missing token")

    try:
        user_id = tokens.validate(token)
    except InvalidTokenError:
        logger.info("auth.token_rejected")
        raise
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return CurrentIdentity(user_id=user_id)
