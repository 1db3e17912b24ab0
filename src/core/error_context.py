"""Redaction of secrets in logged error context.

Error handlers log the request path, method and exception attributes.
Everything passes through ``sanitize_error_context`` first: any key whose
name looks like a credential, or contains one of the names listed in
``LogConfig.sensitive_fields``, has its value replaced by ``[REDACTED]``.
The caller's data is left untouched; only the logged copy changes.
"""

from __future__ import annotations

import re
from functools import lru_cache
from re import Pattern
from typing import Any, Final

from src.core.config import get_settings
from src.core.constants import REDACTED

SanitizableValue = (
    str | int | float | bool | None | dict[str, Any] | list[Any] | tuple[Any, ...]
)

CREDENTIAL_NAME_FRAGMENTS: Final[tuple[str, ...]] = (
    r"password",
    r"passwd",
    r"pwd",
    r"secret",
    r"token",
    r"api[_-]?key",
    r"auth",
    r"credential",
    r"private[_-]?key",
    r"access[_-]?key",
    r"session",
    r"connection[_-]?string",
    r"mongodb[_-]?url",
)

MAX_DEPTH: Final[int] = 10

# Exception attributes that are bulky or logged separately
_SKIPPED_ATTRIBUTES: Final[frozenset[str]] = frozenset({"stack_trace", "cause"})


@lru_cache(maxsize=1)
def _sensitive_name_pattern() -> Pattern[str]:
    """Credential fragments plus the configured field names, as one regex."""
    configured = [
        re.escape(name) for name in get_settings().log_config.sensitive_fields
    ]
    return re.compile(
        "|".join([*CREDENTIAL_NAME_FRAGMENTS, *configured]), re.IGNORECASE
    )


def is_sensitive_field(field_name: str) -> bool:
    return _sensitive_name_pattern().search(field_name) is not None


def sanitize_value(
    value: SanitizableValue, field_name: str = "", depth: int = 0
) -> SanitizableValue:
    """Redact ``value`` when ``field_name`` is sensitive.

    Containers are walked so that nested keys are checked as well. Anything
    nested deeper than ``MAX_DEPTH`` is redacted outright.
    """
    if depth > MAX_DEPTH or (field_name and is_sensitive_field(field_name)):
        return REDACTED

    match value:
        case dict():
            return {
                key: sanitize_value(item, key, depth + 1)
                for key, item in value.items()
            }
        case list():
            return [sanitize_value(item, depth=depth + 1) for item in value]
        case tuple():
            return tuple(sanitize_value(item, depth=depth + 1) for item in value)
        case _:
            return value


def sanitize_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with sensitive values redacted."""
    return {key: sanitize_value(value, key) for key, value in data.items()}


def sanitize_error_context(
    error: Exception, context: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Build the keyword arguments an error handler passes to the logger.

    Args:
        error: The exception being handled.
        context: Request details to log alongside it.

    Returns:
        dict[str, Any]: ``error_type``, ``error_message``, the sanitized
        context and, when the exception has public attributes, an
        ``error_attributes`` mapping.
    """
    result: dict[str, Any] = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        **sanitize_dict(context or {}),
    }

    attributes = {
        name: value
        for name, value in vars(error).items()
        if not name.startswith("_") and name not in _SKIPPED_ATTRIBUTES
    }
    if attributes:
        result["error_attributes"] = sanitize_dict(attributes)

    return result
