"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown: the token service is built
up front (a missing secret kills the process at boot, not on the first
login) and the database pool is disposed after uvicorn has drained
in-flight requests.
"""

import asyncio
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from subtracker import __version__
from subtracker.api import api_router
from subtracker.api.errors import register_exception_handlers
from subtracker.auth.jwt import get_token_service
from subtracker.config import settings
from subtracker.log import configure_logging
from subtracker.services.auth_service import dummy_hash

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs
    at shutdown — which uvicorn only reaches once it has stopped
    accepting connections and in-flight requests have finished (or the
    graceful-shutdown timeout expired).
    """
    logger.info(
        "subtracker.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    # SigningError here aborts startup
    get_token_service()

    # First unknown-email login must not pay for building the dummy hash
    await asyncio.to_thread(dummy_hash, settings.bcrypt_rounds)

    yield

    logger.info("subtracker.shutdown")

    from subtracker.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging(json_logs=settings.log_json, debug=settings.debug)

    app = FastAPI(
        title="Subtracker",
        description="Track recurring subscription payments",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → RequestId → UnhandledError → handler

    from subtracker.middleware.errors import UnhandledErrorMiddleware
    from subtracker.middleware.request_id import RequestIdMiddleware

    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(RequestIdMiddleware)
    # No configured origins: reflect whatever Origin the browser sent
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=None if settings.cors_origins else ".*",
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: subtracker.main:app)
app = create_app()


def run() -> None:
    """Console entry point: `subtracker`."""
    uvicorn.run(
        "subtracker.main:app",
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
        log_level="debug" if settings.debug else "info",
    )
