"""Error taxonomy and the handlers that turn it into JSON responses.

Every route is a boundary: only the categorized message reaches the client,
internal detail (tracebacks, database error text) is logged server-side.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal server error."


class TaskboardError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = GENERIC_SERVER_ERROR

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "All fields are required."


class AuthenticationError(TaskboardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials."


class AuthorizationDenied(TaskboardError):
    """Task missing or owned by someone else. Both look like a 404."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Task not found for this user."


class NotFound(TaskboardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Task not found."


class Conflict(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Resource already exists."


class DuplicateEmail(Conflict):
    default_detail = "E-mail already registered."


class InternalError(TaskboardError):
    """Persistence or unexpected failure. The client only sees a generic message."""


def error_key(request: Request) -> str:
    """JSON field carrying the error text for this route."""
    # The global task routes have always answered with "error"
    return "error" if request.url.path.startswith("/tasks") else "message"


def _internal_error_response(request: Request) -> JSONResponse:
    return JSONResponse(
        status_code=InternalError.status_code,
        content={error_key(request): GENERIC_SERVER_ERROR},
    )


async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
        return _internal_error_response(request)
    return JSONResponse(status_code=exc.status_code, content={error_key(request): exc.detail})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown routes, wrong methods and other framework-level errors
    return JSONResponse(
        status_code=exc.status_code,
        content={error_key(request): exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request for %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={error_key(request): "Invalid or missing fields."},
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return _internal_error_response(request)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _internal_error_response(request)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskboardError, taskboard_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
