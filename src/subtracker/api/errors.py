"""Exception handlers — map the error taxonomy to HTTP responses.

Learn: Every error body has the same shape: {"error": "<message>"}.
- AppError subclasses carry their own status + safe message.
- Request validation failures (bad JSON, wrong types, unknown fields)
  are client mistakes → 400, not FastAPI's default 422.
Anything else is handled by middleware/errors.py.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from subtracker.errors import AppError, UnauthorizedError

logger = structlog.get_logger()


def error_response(
    status_code: int, message: str, headers: dict | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": message}, headers=headers
    )


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    message = exc.message
    if exc.status_code >= 500:
        # internal detail stays in the log
        logger.error("request.failed", error=exc.message, path=request.url.path)
        message = type(exc).default_message
    return error_response(exc.status_code, message, headers)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info(
        "request.invalid_payload", path=request.url.path, errors=len(exc.errors())
    )
    return error_response(400, "invalid payload")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
