"""Error taxonomy shared by the services and the HTTP boundary.

Learn: Services raise these deliberately. Each class knows the HTTP status
and the public message it maps to, so the API layer needs a single
exception handler instead of a try/except in every route. Anything that is
NOT an AppError is unexpected and gets the generic 500 treatment in
middleware/errors.py.
"""


class AppError(Exception):
    """Base class for errors that are safe to show to the client."""

    status_code = 500
    default_message = "request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(AppError):
    """Malformed or missing fields. Never retried, the user must correct."""

    status_code = 400
    default_message = "invalid input"


class UnauthorizedError(AppError):
    """Missing/invalid token or failed credential check."""

    status_code = 401
    default_message = "unauthorized"


class InvalidTokenError(UnauthorizedError):
    """Token rejected. The reason is deliberately not exposed."""

    default_message = "invalid token"


class NotFoundError(AppError):
    """Target absent OR not owned by the caller — same signal for both."""

    status_code = 404
    default_message = "not found"


class DuplicateEmailError(AppError):
    """Registration conflict."""

    status_code = 409
    default_message = "email already in use"


class InternalError(AppError):
    """Non-retryable failure inside the service (hashing, signing)."""

    status_code = 500
    default_message = "internal server error"


class SigningError(InternalError):
    """Token signing misconfigured. Fatal at startup."""


class TransientError(AppError):
    """Storage unavailable or too slow. The caller may retry."""

    status_code = 503
    default_message = "service temporarily unavailable"
