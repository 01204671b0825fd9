"""Catch-all for unexpected exceptions.

Learn: AppError subclasses never reach this middleware — FastAPI's
exception handlers turn them into responses first. What does reach it
is genuinely unexpected: a dropped database connection, a pool timeout,
a bug. The client gets a generic body (no stack trace, no SQL); the
full traceback goes to the log with the request id attached.

Storage timeouts and connectivity failures are transient (503, caller
may retry); everything else is a 500.
"""

import structlog
from sqlalchemy import exc as sa_exc
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from subtracker.errors import InternalError, TransientError

logger = structlog.get_logger()

TRANSIENT_EXCEPTIONS = (
    sa_exc.TimeoutError,  # pool exhausted for pool_timeout seconds
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    TimeoutError,  # asyncpg command_timeout
    ConnectionError,
)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Convert unexpected exceptions into the standard error envelope."""

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except TRANSIENT_EXCEPTIONS:
            logger.exception("request.storage_unavailable", path=request.url.path)
            error = TransientError()
        except Exception:
            logger.exception("request.unhandled_error", path=request.url.path)
            error = InternalError()
        return JSONResponse(
            status_code=error.status_code, content={"error": error.message}
        )
