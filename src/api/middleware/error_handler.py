"""Global exception handlers for the FastAPI application.

Every failure leaves the API through one of these handlers, so clients
always receive the ``ErrorResponse`` envelope with a status chosen from
the exception type:

- ``ValidationError`` and request validation failures: 400
- ``UnauthorizedError``: 401
- ``DocumentStoreError`` and anything unexpected: 500
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from src.api.constants import HTTP_500_INTERNAL_SERVER_ERROR
from src.api.schemas.errors import ErrorResponse, ServiceInfo
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.context import RequestContext, generate_request_id
from src.core.error_context import sanitize_error_context
from src.core.exceptions import (
    CosmiBitError,
    ErrorCode,
    Severity,
    UnauthorizedError,
    ValidationError,
)


def get_service_info(settings: Settings) -> ServiceInfo:
    """Create ServiceInfo from application settings."""
    return ServiceInfo(
        name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


def error_response(
    status_code: int,
    error_code: str | ErrorCode,
    message: str,
    severity: Severity,
    details: dict[str, Any] | None = None,
    debug_info: dict[str, Any] | None = None,
) -> ORJSONResponse:
    """Build an ``ErrorResponse`` envelope for the current request.

    Used by the exception handlers below and by middleware that rejects a
    request before it reaches the routing layer.

    Args:
        status_code: HTTP status of the response
        error_code: Error code identifying the failure
        message: Human-readable message
        severity: Severity of the failure
        details: Optional structured details such as field errors
        debug_info: Optional debug payload for development environments

    Returns:
        ORJSONResponse: The serialized envelope
    """
    if isinstance(error_code, ErrorCode):
        error_code = error_code.value
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        correlation_id=RequestContext.get_correlation_id(),
        request_id=RequestContext.get_request_id() or generate_request_id(),
        severity=severity.value,
        service_info=get_service_info(get_settings()),
        debug_info=debug_info,
    )
    return ORJSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def status_code_for(exc: CosmiBitError) -> int:
    """Map an application exception to its HTTP status code."""
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, UnauthorizedError):
        return status.HTTP_401_UNAUTHORIZED
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def cosmibit_error_handler(request: Request, exc: Exception) -> Response:
    """Handle CosmiBitError exceptions.

    Expected errors (client input) are logged at warning level, everything
    else at error level with the sanitized exception context.

    Raises:
        TypeError: If exc is not a CosmiBitError instance
    """
    if not isinstance(exc, CosmiBitError):
        raise TypeError(f"Expected CosmiBitError, got {type(exc).__name__}")

    settings = get_settings()
    status_code = status_code_for(exc)

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
            "error_code": exc.error_code,
            "status_code": status_code,
        },
    )
    log = logger.warning if exc.is_expected else logger.error
    log(
        "Handling {exception_type}: {error_text}",
        exception_type=type(exc).__name__,
        error_text=exc.message,
        correlation_id=RequestContext.get_correlation_id(),
        **error_context,
    )

    # Store failures never leak driver details to clients
    if isinstance(exc, ValidationError):
        details = {"field_errors": exc.field_errors} if exc.field_errors else None
    else:
        details = None

    debug_info = None
    if settings.environment == "development":
        debug_info = {
            "stack_trace": exc.stack_trace,
            "error_context": exc.context,
            "exception_type": type(exc).__name__,
        }
        if exc.cause:
            debug_info["cause"] = {
                "type": type(exc.cause).__name__,
                "message": str(exc.cause),
            }

    return error_response(
        status_code,
        exc.error_code,
        exc.message,
        exc.severity,
        details=details,
        debug_info=debug_info,
    )


def _field_name(location: tuple[Any, ...] | list[Any]) -> str:
    """Turn a validation error location into a dotted field name.

    ``("body", "email")`` becomes ``"email"`` and ``("path", "project_id")``
    becomes ``"project_id"``.
    """
    parts = [str(part) for part in location[1:] if part != "__root__"]
    return ".".join(parts) or "root"


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Handle FastAPI RequestValidationError exceptions.

    Malformed bodies and parameters are reported as 400 with the same
    ``field_errors`` mapping the contact rules produce, keeping the first
    message for each field.

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    field_errors: dict[str, str] = {}
    for error in exc.errors():
        field_errors.setdefault(
            _field_name(error.get("loc", ())), error.get("msg", "Invalid value")
        )

    error_context = sanitize_error_context(
        exc,
        {
            "path": str(request.url.path),
            "method": request.method,
            "field_errors": field_errors,
        },
    )
    logger.warning(
        "Request validation failed",
        correlation_id=RequestContext.get_correlation_id(),
        status_code=status.HTTP_400_BAD_REQUEST,
        **error_context,
    )

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.VALIDATION_ERROR,
        "Request validation failed",
        Severity.LOW,
        details={"field_errors": field_errors},
    )


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException, such as unknown routes and methods.

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    error_code = ErrorCode.INTERNAL_ERROR
    severity = Severity.MEDIUM
    if exc.status_code == status.HTTP_400_BAD_REQUEST:
        error_code = ErrorCode.VALIDATION_ERROR
        severity = Severity.LOW
    elif exc.status_code == status.HTTP_401_UNAUTHORIZED:
        error_code = ErrorCode.UNAUTHORIZED
        severity = Severity.HIGH
    elif exc.status_code == status.HTTP_404_NOT_FOUND:
        error_code = ErrorCode.NOT_FOUND
        severity = Severity.LOW
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        error_code = ErrorCode.METHOD_NOT_ALLOWED
        severity = Severity.LOW
    elif exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        severity = Severity.HIGH

    error_context = sanitize_error_context(
        exc,
        {
            "status": exc.status_code,
            "method": request.method,
            "path": str(request.url.path),
            "detail": exc.detail,
        },
    )
    logger.warning(
        "HTTP exception",
        correlation_id=RequestContext.get_correlation_id(),
        **error_context,
    )

    response = error_response(
        exc.status_code, error_code, str(exc.detail), severity
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected exceptions.

    In production the response carries a generic message only; other
    environments include the exception type and traceback.
    """
    settings = get_settings()

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
        },
    )
    logger.exception(
        "Unhandled exception: {exception_type}",
        exception_type=type(exc).__name__,
        correlation_id=RequestContext.get_correlation_id(),
        **error_context,
    )

    if settings.environment == "production":
        message = "An internal server error occurred"
        details = None
        debug_info = None
    else:
        message = f"Internal server error: {type(exc).__name__}"
        details = {"error": str(exc), "type": type(exc).__name__}
        debug_info = {
            "stack_trace": traceback.format_tb(exc.__traceback__),
            "exception_type": type(exc).__name__,
        }

    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_ERROR,
        message,
        Severity.CRITICAL,
        details=details,
        debug_info=debug_info,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(CosmiBitError, cosmibit_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
