"""Logging and observability configuration using Pydantic Logfire.

All modules use Python's standard logging library (logging.getLogger(__name__)),
and Logfire captures and enriches these logs when a token is configured.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("task_created", extra={"task_id": "abc"})

Structured logging utilities:
    log_with_user_context(logger, "info", "Task deleted", user_id="123", task_id="abc")
"""

import logging

import logfire
from fastapi import FastAPI

from tasktrack.core.config import Settings, constants


def configure_logfire(app_settings: Settings) -> None:
    """Configure Pydantic Logfire with the token from settings.

    Nothing is shipped unless a token is present.
    """
    logfire.configure(
        token=app_settings.logfire_token,
        service_name=constants.SERVICE_NAME,
        service_version=constants.SERVICE_VERSION,
        environment=app_settings.environment,
        send_to_logfire="if-token-present",
        console=False,
    )

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def instrument_fastapi(app: FastAPI) -> None:
    """Add Logfire instrumentation to FastAPI application."""
    logfire.instrument_fastapi(app)
    logger = logging.getLogger(__name__)
    logger.info("FastAPI instrumentation configured")


def span(name: str) -> logfire.LogfireSpan:
    """Create a custom span for service layer functions.

    Usage:
        with span("task_service.create_task"):
            ...
    """
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (user_id, task_id, collection, ...)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)


def log_with_user_context(
    logger: logging.Logger,
    level: str,
    message: str,
    user_id: str | None = None,
    **extra: object,
) -> None:
    """Log a message with user context.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        user_id: User ID to include in context
        **extra: Additional context fields
    """
    context = {"user_id": user_id, **extra} if user_id else extra
    log_with_context(logger, level, message, **context)
