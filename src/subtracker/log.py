"""structlog configuration.

Learn: Every module does `logger = structlog.get_logger()` and logs
event-style keys ("auth.registered", "request.completed") with keyword
context. merge_contextvars pulls in the request_id (and user_id, once
authenticated) bound by middleware, so handlers never pass them along.

Console output in development; one JSON object per line when
SUBTRACKER_LOG_JSON=true (production log shippers).
"""

import logging

import structlog


def configure_logging(json_logs: bool = False, debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
