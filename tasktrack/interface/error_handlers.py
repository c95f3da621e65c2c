"""Mapping of exceptions to the JSON error envelope."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasktrack.core.db_client import DatabaseError
from tasktrack.core.errors import ErrorResponse, InternalError, TaskTrackError, Unauthenticated, ValidationError


logger = logging.getLogger(__name__)

# Location prefixes FastAPI puts in front of the offending field name
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def _error_response(error: TaskTrackError, *, detail: str | None = None) -> JSONResponse:
    body = ErrorResponse.from_error(error, detail=detail)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, Unauthenticated) else None
    return JSONResponse(content=body.model_dump(exclude_none=True), status_code=error.status_code, headers=headers)


def _field_from_location(loc: tuple | list) -> str | None:
    parts = [str(part) for part in loc if str(part) not in _LOCATION_PREFIXES]
    return parts[0] if parts else None


async def handle_app_error(_request: Request, exc: TaskTrackError) -> JSONResponse:
    return _error_response(exc)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Turn schema validation failures into field-tagged 400 responses."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = _field_from_location(first.get("loc", ()))
    reason = first.get("msg", "Invalid request")
    message = f"Invalid value for '{field}': {reason}" if field else f"Invalid request body: {reason}"

    logger.info("request_validation_failed", extra={"path": request.url.path, "field": field})
    return _error_response(ValidationError(message, field=field))


async def handle_database_error(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error("database_error", extra={"path": request.url.path, "error": str(exc)})
    return _error_response(InternalError("Internal server error"), detail=str(exc))


async def handle_http_exception(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        content={"success": False, "message": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unexpected_error", extra={"path": request.url.path})
    return _error_response(InternalError("Internal server error"), detail=str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler on the application."""
    app.add_exception_handler(TaskTrackError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(DatabaseError, handle_database_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
