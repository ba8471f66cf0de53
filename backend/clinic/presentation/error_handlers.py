"""Global error handler — translates exceptions into JSON error responses.

Every failure leaves the API as ``{"success": false, "message": ...}``;
in development the body also carries ``error`` with structured details.
"""

import logging
import re
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

import jwt
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import exc as sa_exc
from starlette.exceptions import HTTPException as StarletteHTTPException

from clinic.config import get_settings
from clinic.domain.exceptions import (
    AppError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidQueryError,
)

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Something went wrong!"

# PostgreSQL SQLSTATE codes for integrity violations
_SQLSTATE_KINDS = {
    "23505": "unique",
    "23503": "foreign_key",
    "23502": "not_null",
    "23514": "check",
}

# SQLite reports violations only in the message text
_MESSAGE_KINDS = (
    ("unique", "unique"),
    ("duplicate key", "unique"),
    ("foreign key", "foreign_key"),
    ("not null", "not_null"),
    ("check constraint", "check"),
)

_UNIQUE_TARGET_PATTERNS = (
    re.compile(r"Key \((?P<target>[^)]+)\)="),
    re.compile(r"UNIQUE constraint failed: (?P<target>[\w., ]+)"),
)


@dataclass
class ErrorResponse:
    """Status, user-facing message and debug details for one exception."""

    status_code: int
    message: str
    details: dict[str, Any] = field(default_factory=dict)


def translate_exception(exc: Exception) -> ErrorResponse:
    """Map any exception raised while serving a request to an ErrorResponse."""
    if isinstance(exc, AppError):
        return ErrorResponse(exc.status_code, exc.message, {"type": "AppError"})

    if isinstance(exc, EntityNotFoundError):
        return ErrorResponse(
            HTTPStatus.NOT_FOUND,
            str(exc),
            {"type": "NotFoundError", "entity": exc.entity_type},
        )

    if isinstance(exc, DuplicateEntityError):
        return ErrorResponse(
            HTTPStatus.CONFLICT,
            str(exc),
            {"type": "DuplicateError", "field": exc.field},
        )

    if isinstance(exc, InvalidQueryError):
        return ErrorResponse(
            HTTPStatus.BAD_REQUEST,
            str(exc),
            {"type": "QueryError", "field": exc.field},
        )

    if isinstance(exc, sa_exc.SQLAlchemyError):
        return _translate_database_error(exc)

    if isinstance(exc, jwt.ExpiredSignatureError):
        return ErrorResponse(
            HTTPStatus.UNAUTHORIZED,
            "Authentication token has expired. Please log in again.",
            {"type": "AuthenticationError"},
        )

    if isinstance(exc, jwt.InvalidTokenError):
        return ErrorResponse(
            HTTPStatus.UNAUTHORIZED,
            "Invalid authentication token. Please log in again.",
            {"type": "AuthenticationError"},
        )

    if isinstance(exc, RequestValidationError):
        return ErrorResponse(
            HTTPStatus.BAD_REQUEST,
            "Validation failed. Please check your input data.",
            {"type": "ValidationError", "issues": jsonable_encoder(exc.errors())},
        )

    if isinstance(exc, StarletteHTTPException):
        return ErrorResponse(exc.status_code, str(exc.detail), {"type": "HTTPError"})

    return ErrorResponse(
        HTTPStatus.INTERNAL_SERVER_ERROR,
        DEFAULT_MESSAGE,
        {"type": type(exc).__name__, "details": str(exc)},
    )


def _translate_database_error(exc: sa_exc.SQLAlchemyError) -> ErrorResponse:
    if isinstance(exc, sa_exc.IntegrityError):
        return _translate_integrity_error(exc)

    if isinstance(exc, sa_exc.NoResultFound):
        return ErrorResponse(
            HTTPStatus.NOT_FOUND,
            "Record not found. The requested resource does not exist.",
            {"type": "DatabaseError"},
        )

    if isinstance(exc, sa_exc.TimeoutError):
        return ErrorResponse(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "Database connection timeout. Please try again later.",
            {"type": "DatabaseConnectionError"},
        )

    if isinstance(exc, sa_exc.DataError):
        return ErrorResponse(
            HTTPStatus.BAD_REQUEST,
            "Input error. Please check your data format.",
            {"type": "DatabaseError", "details": str(exc.orig)},
        )

    if isinstance(exc, sa_exc.ProgrammingError):
        return ErrorResponse(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "Database table or column does not exist. Please contact support.",
            {"type": "DatabaseError", "details": str(exc.orig)},
        )

    if isinstance(exc, (sa_exc.OperationalError, sa_exc.InterfaceError)):
        return ErrorResponse(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "Database connection failed. Please try again later.",
            {"type": "DatabaseConnectionError"},
        )

    if isinstance(exc, sa_exc.DBAPIError):
        return ErrorResponse(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "An unexpected database error occurred. Please try again or contact support.",
            {"type": "UnknownDatabaseError", "details": str(exc.orig)},
        )

    return ErrorResponse(
        HTTPStatus.BAD_REQUEST,
        f"Database operation failed: {exc}",
        {"type": "DatabaseError"},
    )


def _translate_integrity_error(exc: sa_exc.IntegrityError) -> ErrorResponse:
    kind = _constraint_kind(exc.orig)
    details = {"type": "DatabaseError", "constraint": kind}

    if kind == "unique":
        target = _unique_target(exc.orig) or "field"
        return ErrorResponse(
            HTTPStatus.CONFLICT,
            f"Duplicate entry. The {target} already exists.",
            details,
        )
    if kind == "foreign_key":
        return ErrorResponse(
            HTTPStatus.BAD_REQUEST,
            "Invalid reference. The referenced record does not exist.",
            details,
        )
    if kind == "not_null":
        return ErrorResponse(
            HTTPStatus.BAD_REQUEST,
            "Required field is missing. Please provide all required information.",
            details,
        )
    return ErrorResponse(
        HTTPStatus.BAD_REQUEST,
        "Database constraint violation occurred.",
        details,
    )


def _constraint_kind(orig: Any) -> str:
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in _SQLSTATE_KINDS:
        return _SQLSTATE_KINDS[sqlstate]
    text = str(orig).lower()
    for marker, kind in _MESSAGE_KINDS:
        if marker in text:
            return kind
    return "other"


def _unique_target(orig: Any) -> str | None:
    text = str(orig)
    for pattern in _UNIQUE_TARGET_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group("target")
    return None


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """Starlette exception handler producing the standard error body."""
    settings = get_settings()
    error = translate_exception(exc)

    if settings.is_development:
        logger.error("Error: %s %s -> %s", request.method, request.url.path, exc, exc_info=exc)
    elif error.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)

    body: dict[str, Any] = {"success": False, "message": error.message}
    if settings.is_development:
        body["error"] = error.details

    return JSONResponse(
        status_code=int(error.status_code),
        content=jsonable_encoder(body),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install ``handle_exception`` for every exception family the API knows."""
    for exc_class in (
        AppError,
        EntityNotFoundError,
        DuplicateEntityError,
        InvalidQueryError,
        sa_exc.SQLAlchemyError,
        jwt.PyJWTError,
        RequestValidationError,
        StarletteHTTPException,
        Exception,
    ):
        app.add_exception_handler(exc_class, handle_exception)
