"""Request-scoped identifiers shared across middleware, handlers and traces.

Two IDs follow each request: the correlation ID, which may come from the
caller and ties together work across services, and the request ID, which
names this one HTTP exchange. Both live in context variables so any code
running for the request can read them without having them passed in.
"""

import uuid
from contextvars import ContextVar

REQUEST_ID_PREFIX = "req-"

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestContext:
    """Accessors for the identifiers of the request being handled."""

    @staticmethod
    def set_correlation_id(correlation_id: str) -> None:
        _correlation_id.set(correlation_id)

    @staticmethod
    def get_correlation_id() -> str | None:
        return _correlation_id.get()

    @staticmethod
    def set_request_id(request_id: str) -> None:
        _request_id.set(request_id)

    @staticmethod
    def get_request_id() -> str | None:
        return _request_id.get()

    @staticmethod
    def clear() -> None:
        """Forget both identifiers."""
        _correlation_id.set(None)
        _request_id.set(None)


def generate_correlation_id() -> str:
    """Return a new UUID4 string."""
    return str(uuid.uuid4())


def generate_request_id() -> str:
    """Return a new request ID of the form ``req-<uuid4>``."""
    return f"{REQUEST_ID_PREFIX}{uuid.uuid4()}"
