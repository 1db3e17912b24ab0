"""Unit tests for the exception hierarchy."""

import pytest

from src.core.exceptions import (
    CosmiBitError,
    DocumentStoreError,
    ErrorCode,
    Severity,
    UnauthorizedError,
    ValidationError,
)


@pytest.mark.unit
class TestCosmiBitError:
    def test_accepts_enum_or_string_error_code(self) -> None:
        from_enum = CosmiBitError(ErrorCode.INTERNAL_ERROR, "boom")
        from_string = CosmiBitError("CUSTOM_CODE", "boom")

        assert from_enum.error_code == "INTERNAL_ERROR"
        assert from_string.error_code == "CUSTOM_CODE"

    def test_defaults(self) -> None:
        error = CosmiBitError(ErrorCode.INTERNAL_ERROR, "boom")

        assert error.severity is Severity.MEDIUM
        assert error.context == {}
        assert error.cause is None
        assert error.stack_trace
        assert len(error.fingerprint) == 16

    def test_str_and_repr(self) -> None:
        error = CosmiBitError(
            ErrorCode.VALIDATION_ERROR, "bad input", context={"field": "email"}
        )

        assert str(error) == "[VALIDATION_ERROR] bad input"
        assert "context={'field': 'email'}" in repr(error)
        assert repr(error).startswith("CosmiBitError(error_code='VALIDATION_ERROR'")

    def test_cause_is_chained(self) -> None:
        cause = ValueError("root cause")
        error = CosmiBitError(ErrorCode.INTERNAL_ERROR, "wrapped", cause=cause)

        assert error.__cause__ is cause

    def test_fingerprint_is_stable_for_the_same_origin(self) -> None:
        fingerprints = {
            CosmiBitError(ErrorCode.INTERNAL_ERROR, f"boom {i}").fingerprint
            for i in range(3)
        }

        assert len(fingerprints) == 1

    @pytest.mark.parametrize(
        ("severity", "expected"),
        [
            (Severity.LOW, True),
            (Severity.MEDIUM, True),
            (Severity.HIGH, False),
            (Severity.CRITICAL, False),
        ],
    )
    def test_is_expected(self, severity: Severity, expected: bool) -> None:
        error = CosmiBitError(ErrorCode.INTERNAL_ERROR, "boom", severity=severity)

        assert error.is_expected is expected


@pytest.mark.unit
class TestSpecializedErrors:
    def test_validation_error_carries_field_errors(self) -> None:
        error = ValidationError(
            "Contact message validation failed",
            field_errors={"email": "Email must be valid"},
        )

        assert error.error_code == ErrorCode.VALIDATION_ERROR.value
        assert error.severity is Severity.LOW
        assert error.field_errors == {"email": "Email must be valid"}
        assert error.context == {"field_errors": {"email": "Email must be valid"}}

    def test_validation_error_without_field_errors(self) -> None:
        error = ValidationError("bad")

        assert error.field_errors == {}
        assert error.context == {}

    def test_unauthorized_error(self) -> None:
        error = UnauthorizedError("Authentication is required for this route")

        assert error.error_code == ErrorCode.UNAUTHORIZED.value
        assert error.severity is Severity.HIGH
        assert not error.is_expected

    def test_document_store_error(self) -> None:
        cause = ConnectionError("no servers")
        error = DocumentStoreError(
            "Document store operation 'find_all' failed",
            context={"collection": "projects"},
            cause=cause,
        )

        assert error.error_code == ErrorCode.STORE_UNAVAILABLE.value
        assert error.severity is Severity.HIGH
        assert error.context == {"collection": "projects"}
        assert error.__cause__ is cause

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("bad"),
            UnauthorizedError("no"),
            DocumentStoreError("down"),
        ],
    )
    def test_all_inherit_from_base(self, error: CosmiBitError) -> None:
        assert isinstance(error, CosmiBitError)
