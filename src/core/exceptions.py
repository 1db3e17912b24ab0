"""Exception hierarchy for the CosmiBit API.

Facades and repositories raise these; the exception handlers turn each
one into an ``ErrorResponse`` with a status chosen from its type. Every
error carries a machine-readable code, a severity used to pick the log
level, optional context for logs and a fingerprint that groups
occurrences raised from the same place.
"""

import hashlib
import traceback
from enum import Enum
from typing import Any

# Frames considered when fingerprinting, innermost last
FINGERPRINT_FRAMES = 5
APPLICATION_PATH_MARKER = "src/"


class ErrorCode(Enum):
    """Error codes reported in ``ErrorResponse.error_code``."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    UNAUTHORIZED = "UNAUTHORIZED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class Severity(Enum):
    """How bad an error is; LOW and MEDIUM are caused by the client."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


def _fingerprint(
    name: str, error_code: str, frames: list[traceback.FrameSummary]
) -> str:
    parts = [name, error_code]
    parts.extend(
        f"{frame.filename}:{frame.name}:{frame.lineno}"
        for frame in frames[-FINGERPRINT_FRAMES:]
        if APPLICATION_PATH_MARKER in frame.filename
        and "site-packages" not in frame.filename
    )
    return hashlib.sha256(":".join(parts).encode()).hexdigest()[:16]


class CosmiBitError(Exception):
    """Base class for every error the API reports deliberately.

    Args:
        error_code: Code identifying the failure (string or ErrorCode)
        message: Human-readable message, safe to show to clients
        severity: Severity of the failure
        context: Extra details for logs
        cause: The exception that triggered this one
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

        # Drop this constructor's own frame
        frames = traceback.extract_stack()[:-1]
        self.stack_trace = traceback.format_list(frames)
        self.fingerprint = _fingerprint(type(self).__name__, self.error_code, frames)

    @property
    def is_expected(self) -> bool:
        """Expected errors come from client input and are not alert-worthy."""
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        context = f", context={self.context}" if self.context else ""
        return (
            f"{type(self).__name__}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context})"
        )


class ValidationError(CosmiBitError):
    """Client data broke one or more field rules (400).

    ``field_errors`` maps each offending field to a single message.
    """

    def __init__(
        self,
        message: str,
        field_errors: dict[str, str] | None = None,
        error_code: str | ErrorCode = ErrorCode.VALIDATION_ERROR,
        cause: Exception | None = None,
    ) -> None:
        self.field_errors = dict(field_errors or {})
        super().__init__(
            error_code,
            message,
            Severity.LOW,
            {"field_errors": self.field_errors} if self.field_errors else None,
            cause,
        )


class UnauthorizedError(CosmiBitError):
    """The route needs an authenticated caller (401)."""

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.UNAUTHORIZED,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.HIGH, context)


class DocumentStoreError(CosmiBitError):
    """A MongoDB operation failed (500).

    The driver exception is kept as ``cause`` for logs and never shown to
    clients. Nothing retries these.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.STORE_UNAVAILABLE, message, Severity.HIGH, context, cause
        )
