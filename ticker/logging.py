"""
Structured logging for the dev ticker server.

Every line is a JSON object. Besides the event name, entries carry an ISO
``timestamp``, the logger name and level, and, while a request is being
served, its ``request_id``. Request-scoped fields live in structlog's
contextvars, so they follow the request across awaits.
"""
import logging
import sys
import time
import uuid
from decimal import Decimal
from typing import Any, Optional

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Route structlog through stdlib logging and render JSON to stdout."""
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level.upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    return str(uuid.uuid4())


def set_request_context(request_id: str) -> None:
    """Tag every log line of the current request with its id."""
    structlog.contextvars.bind_contextvars(request_id=request_id)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


class TimedOperation:
    """
    Log ``<event>_started`` on entry and ``<event>_completed`` or
    ``<event>_failed`` on exit, with the elapsed ``duration_ms``.
    Exceptions are logged and re-raised.
    """

    def __init__(
        self,
        event: str,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
        **fields: Any,
    ):
        self.event = event
        self.logger = (logger or get_logger()).bind(**fields)
        self.started: float = 0
        self.duration_ms: float = 0

    def __enter__(self) -> "TimedOperation":
        self.started = time.perf_counter()
        self.logger.info(f"{self.event}_started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.duration_ms = round((time.perf_counter() - self.started) * 1000, 2)

        if exc_type is None:
            self.logger.info(f"{self.event}_completed", duration_ms=self.duration_ms)
        else:
            self.logger.error(
                f"{self.event}_failed",
                duration_ms=self.duration_ms,
                error=str(exc_val),
            )


def log_quote(
    logger: structlog.stdlib.BoundLogger,
    api: str,
    key: str,
    price_usd: Decimal,
    known: bool,
) -> None:
    """Log a served price quote."""
    logger.info(
        "price_quoted",
        api=api,
        key=key,
        price_usd=format(price_usd, "f"),
        known=known,
    )
