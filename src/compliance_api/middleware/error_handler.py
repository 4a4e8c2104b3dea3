"""Exception handlers translating errors to stable, sanitized responses.

Every error body carries ``detail`` and a stable ``code``; raw driver output
and stack traces are never returned outside debug mode.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from compliance_api.config import get_settings
from compliance_api.exceptions import ComplianceAPIError, StorageError
from compliance_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    422: "Invalid input data",
    500: "Internal server error",
    503: "Service temporarily unavailable",
}

# Codes for framework-level HTTP errors
HTTP_ERROR_CODES = {
    400: "invalid_argument",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    422: "invalid_argument",
    503: "storage_error",
}


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers run outside the CORS middleware, so allowed origins
    must be echoed here for browsers to read the error body.
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    if origin in get_settings().cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }
    return {}


def sanitize_validation_errors(errors: list[Any]) -> str:
    """Reduce validation errors to field names and messages.

    Args:
        errors: Errors from ``RequestValidationError.errors()``

    Returns:
        Safe error message
    """
    safe_errors = []
    for error in errors:
        if isinstance(error, dict):
            loc = error.get("loc", [])
            msg = error.get("msg", "Invalid value")
            # Only include field name, not detailed type information
            field = loc[-1] if loc else "field"
            if isinstance(field, str) and not field.startswith("_"):
                safe_errors.append(f"{field}: {msg}")
    if safe_errors:
        return "; ".join(safe_errors[:3])  # Limit to 3 errors
    return SAFE_ERROR_MESSAGES[422]


async def compliance_exception_handler(request: Request, exc: ComplianceAPIError) -> JSONResponse:
    """Handle domain errors raised by services.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with the error code, message and details
    """
    if isinstance(exc, StorageError):
        logger.warning("Storage error for %s %s", request.method, request.url.path)
    else:
        logger.info("%s for %s %s", exc.code, request.method, request.url.path)

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code, **exc.details},
        headers=_get_cors_headers(request),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with sanitized error
    """
    settings = get_settings()
    detail = exc.detail if settings.debug else SAFE_ERROR_MESSAGES.get(exc.status_code, "Request failed")

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail, "code": HTTP_ERROR_CODES.get(exc.status_code, "error")},
        headers=_get_cors_headers(request),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors with sanitized messages.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with sanitized error
    """
    settings = get_settings()
    logger.warning("Validation error for %s %s", request.method, request.url.path)

    detail: Any = exc.errors() if settings.debug else sanitize_validation_errors(exc.errors())
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": detail, "code": "invalid_argument"},
        headers=_get_cors_headers(request),
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle record store errors that escaped a service, e.g. at commit.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with a storage error
    """
    log_error(logger, f"Database error for {request.method} {request.url.path}", exc)
    storage_error = StorageError()
    return JSONResponse(
        status_code=storage_error.status_code,
        content={"detail": storage_error.message, "code": storage_error.code},
        headers=_get_cors_headers(request),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with generic error
    """
    settings = get_settings()
    logger.error("Unhandled exception for %s %s", request.method, request.url.path, exc_info=True)

    content: dict[str, Any] = {"detail": SAFE_ERROR_MESSAGES[500], "code": "internal_error"}
    if settings.debug:
        content["type"] = type(exc).__name__
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_get_cors_headers(request),
    )
