"""Error envelope returned by every failing request.

Validation failures, unknown routes, routes closed by the access policy
and store outages all answer with ``ErrorResponse``. Looking up a record
by an id that does not exist is the one case without a body: it answers
404 and nothing else.
"""

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SeverityName = Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]


class ServiceInfo(BaseModel):
    """Which deployment produced the error."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(examples=["CosmiBit"])
    version: str = Field(examples=["1.0.0"])
    environment: str = Field(examples=["development", "production"])


class ErrorResponse(BaseModel):
    """Body of a failed request.

    ``details.field_errors`` maps each rejected field to one message, in
    the same shape for contact rule violations and malformed requests.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error_code": "VALIDATION_ERROR",
                    "message": "Contact message validation failed",
                    "details": {
                        "field_errors": {
                            "name": "Name must be between 2 and 100 characters",
                            "email": "Email must be valid",
                        }
                    },
                    "correlation_id": "550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "req-660e8400-e29b-41d4-a716-446655440000",
                    "timestamp": "2024-06-14T12:00:00+00:00",
                    "severity": "LOW",
                    "service_info": {
                        "name": "CosmiBit",
                        "version": "1.0.0",
                        "environment": "production",
                    },
                },
                {
                    "error_code": "STORE_UNAVAILABLE",
                    "message": "Document store operation 'find_all' failed",
                    "timestamp": "2024-06-14T12:00:02+00:00",
                    "severity": "HIGH",
                },
            ]
        }
    )

    error_code: str = Field(
        description="Machine-readable code such as VALIDATION_ERROR",
        examples=["VALIDATION_ERROR", "NOT_FOUND", "UNAUTHORIZED"],
    )
    message: str = Field(description="Message safe to show to the caller")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Structured details, currently only field_errors",
    )
    correlation_id: str | None = Field(
        default=None,
        description="Correlation ID, matching the X-Correlation-ID response header",
    )
    request_id: str | None = Field(
        default=None,
        description="Request ID, matching the X-Request-ID response header",
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    severity: SeverityName | None = None
    service_info: ServiceInfo | None = None
    debug_info: dict[str, Any] | None = Field(
        default=None,
        description="Stack trace and exception context, development only",
    )
