"""
Error handlers for the catalog service.

Turns domain exceptions, request validation failures and database errors into
one structured JSON envelope. The top-level ``message`` is meant to be shown
to the admin verbatim; ``error`` carries the machine-readable details.
"""

import logging
from datetime import datetime, timezone

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.core.exceptions import CatalogError, ErrorCategory

logger = logging.getLogger(__name__)


def _envelope(category: str, message: str, request: Request, **extra) -> dict:
    return {
        "message": message,
        "error": {
            "category": category,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
            **extra,
        },
    }


def handle_catalog_error(error: CatalogError, request: Request) -> JSONResponse:
    """Handle structured domain errors"""
    log = logger.error if error.status_code >= 500 else logger.info
    log(
        f"{error.category} on {request.method} {request.url.path}: {error.message}",
        extra={"category": error.category, "details": error.details},
    )
    return JSONResponse(
        status_code=error.status_code,
        content=_envelope(error.category, error.message, request, **error.details),
    )


def handle_http_error(error: StarletteHTTPException, request: Request) -> JSONResponse:
    """Wrap framework HTTP errors (auth, unknown routes) in the same envelope"""
    if error.status_code in (401, 403):
        category = ErrorCategory.AUTHENTICATION
    elif error.status_code == 404:
        category = ErrorCategory.NOT_FOUND
    elif error.status_code < 500:
        category = ErrorCategory.VALIDATION
    else:
        category = ErrorCategory.INTERNAL
    message = error.detail if isinstance(error.detail, str) else "Request failed"
    return JSONResponse(
        status_code=error.status_code,
        content=_envelope(category, message, request),
        headers=getattr(error, "headers", None),
    )


def handle_validation_error(error: RequestValidationError, request: Request) -> JSONResponse:
    """Handle FastAPI request body/query validation errors"""
    errors = []
    for err in error.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        })

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"errors": errors, "method": request.method},
    )

    # Surface the first problem as the human-readable message
    first = errors[0] if errors else None
    message = (
        f"{first['field']}: {first['message']}" if first else "Request validation failed"
    )
    return JSONResponse(
        status_code=400,
        content=_envelope(
            ErrorCategory.VALIDATION, message, request, validation_errors=errors
        ),
    )


def handle_database_error(error: SQLAlchemyError, request: Request) -> JSONResponse:
    """Handle database errors that escaped the CRUD layer"""
    is_connection_error = isinstance(error, OperationalError)
    is_integrity_error = isinstance(error, IntegrityError)

    if is_connection_error:
        message = "Database connection failed. Please try again."
    elif is_integrity_error:
        message = "Database constraint violation. Check your input data."
    else:
        message = "Database operation failed. Please try again."

    logger.error(
        f"Database error: {type(error).__name__}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "is_connection_error": is_connection_error,
            "is_integrity_error": is_integrity_error,
        },
        exc_info=error,
    )

    return JSONResponse(
        status_code=503 if is_connection_error else 500,
        content=_envelope(
            ErrorCategory.DATABASE, message, request, type=type(error).__name__
        ),
    )


# Exception handlers for FastAPI
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """FastAPI exception handler for CatalogError"""
    return handle_catalog_error(exc, request)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """FastAPI exception handler for HTTPException"""
    return handle_http_error(exc, request)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """FastAPI exception handler for validation errors"""
    return handle_validation_error(exc, request)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """FastAPI exception handler for SQLAlchemy errors"""
    return handle_database_error(exc, request)
