"""Correlation and request ID middleware.

The correlation ID is taken from ``X-Correlation-ID`` when the caller
sends one and generated otherwise; the request ID likewise from
``X-Request-ID``. Both are stored in ``RequestContext`` for the error
handlers and trace hooks, bound to every log record emitted while the
request is handled, and echoed on the response.

Exceptions no registered handler turned into a response are rendered here
by ``generic_exception_handler``. Starlette would otherwise handle them
outside every middleware, after the identifiers are gone and without the
CORS and security headers.
"""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.api.constants import CORRELATION_ID_HEADER, REQUEST_ID_HEADER
from src.api.middleware.error_handler import generic_exception_handler
from src.core.context import (
    RequestContext,
    generate_correlation_id,
    generate_request_id,
)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Set up the request-scoped identifiers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = (
            request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        )
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        RequestContext.set_correlation_id(correlation_id)
        RequestContext.set_request_id(request_id)

        try:
            with logger.contextualize(
                correlation_id=correlation_id, request_id=request_id
            ):
                try:
                    response = await call_next(request)
                except Exception as exc:
                    response = await generic_exception_handler(request, exc)
        finally:
            RequestContext.clear()

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
