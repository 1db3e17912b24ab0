"""Unit tests for the contact form rules."""

import pytest

from src.domain.validation import (
    CONTACT_RULES,
    FieldRule,
    collect_field_errors,
    has_length_between,
    is_email_address,
    is_not_blank,
)

VALID = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "message": "Interested in your services, please contact me back.",
}


def errors_for(**overrides: str | None) -> dict[str, str]:
    return collect_field_errors({**VALID, **overrides})


@pytest.mark.unit
class TestPredicates:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, False), ("", False), ("  ", False), ("a", True)],
    )
    def test_is_not_blank(self, value: str | None, expected: bool) -> None:
        assert is_not_blank(value) is expected

    def test_has_length_between_is_inclusive(self) -> None:
        predicate = has_length_between(2, 4)

        assert not predicate("a")
        assert predicate("ab")
        assert predicate("abcd")
        assert not predicate("abcde")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("ada@example.com", True),
            ("first.last+tag@sub.example.org", True),
            ("ada@corp.test", True),
            ("ada@intranet", True),
            ("not-an-email", False),
            ("ada@", False),
            ("@example.com", False),
        ],
    )
    def test_is_email_address(self, value: str, expected: bool) -> None:
        assert is_email_address(value) is expected


@pytest.mark.unit
class TestCollectFieldErrors:
    def test_valid_submission_has_no_errors(self) -> None:
        assert collect_field_errors(VALID) == {}

    @pytest.mark.parametrize(
        ("length", "valid"), [(1, False), (2, True), (100, True), (101, False)]
    )
    def test_name_length_boundaries(self, length: int, valid: bool) -> None:
        errors = errors_for(name="a" * length)

        if valid:
            assert "name" not in errors
        else:
            assert errors["name"] == "Name must be between 2 and 100 characters"

    @pytest.mark.parametrize(
        ("length", "valid"), [(9, False), (10, True), (1000, True), (1001, False)]
    )
    def test_message_length_boundaries(self, length: int, valid: bool) -> None:
        errors = errors_for(message="m" * length)

        if valid:
            assert "message" not in errors
        else:
            assert errors["message"] == "Message must be between 10 and 1000 characters"

    def test_malformed_email(self) -> None:
        assert errors_for(email="not-an-email") == {"email": "Email must be valid"}

    def test_blank_fields_report_required_only(self) -> None:
        errors = collect_field_errors({"name": " ", "email": None})

        assert errors == {
            "name": "Name is required",
            "email": "Email is required",
            "message": "Message is required",
        }

    def test_first_failing_rule_wins(self) -> None:
        rules = (
            FieldRule("code", lambda v: v is not None, "first"),
            FieldRule("code", lambda v: False, "second"),
        )

        assert collect_field_errors({}, rules) == {"code": "first"}
        assert collect_field_errors({"code": "x"}, rules) == {"code": "second"}

    def test_rules_cover_every_contact_field(self) -> None:
        assert {rule.field for rule in CONTACT_RULES} == {"name", "email", "message"}
