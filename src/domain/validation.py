"""Field rules for contact form submissions.

Rules are an ordered list of ``(field, predicate, message)`` checks. Every
field is checked; a field reports only the message of its first failing
rule, so clients get at most one violation per field.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import NamedTuple

from email_validator import EmailNotValidError, validate_email

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 1000

type Predicate = Callable[[str | None], bool]


class FieldRule(NamedTuple):
    """One check applied to one field."""

    field: str
    predicate: Predicate
    message: str


def is_not_blank(value: str | None) -> bool:
    """True when the value has at least one non-whitespace character."""
    return value is not None and value.strip() != ""


def has_length_between(min_length: int, max_length: int) -> Predicate:
    """Build a predicate accepting values whose length is within bounds."""

    def predicate(value: str | None) -> bool:
        return value is None or min_length <= len(value) <= max_length

    return predicate


def is_email_address(value: str | None) -> bool:
    """True when the value is a syntactically valid email address.

    Only the syntax is checked; no DNS lookups are made. Dotless domains and
    the ``test`` domain are accepted. Other special-use names such as
    ``localhost`` are still refused by email-validator.
    """
    if value is None:
        return True
    try:
        validate_email(
            value,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
        )
    except EmailNotValidError:
        return False
    return True


CONTACT_RULES: tuple[FieldRule, ...] = (
    FieldRule("name", is_not_blank, "Name is required"),
    FieldRule(
        "name",
        has_length_between(NAME_MIN_LENGTH, NAME_MAX_LENGTH),
        f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
    ),
    FieldRule("email", is_not_blank, "Email is required"),
    FieldRule("email", is_email_address, "Email must be valid"),
    FieldRule("message", is_not_blank, "Message is required"),
    FieldRule(
        "message",
        has_length_between(MESSAGE_MIN_LENGTH, MESSAGE_MAX_LENGTH),
        f"Message must be between {MESSAGE_MIN_LENGTH} and "
        f"{MESSAGE_MAX_LENGTH} characters",
    ),
)


def collect_field_errors(
    values: Mapping[str, str | None], rules: Sequence[FieldRule] = CONTACT_RULES
) -> dict[str, str]:
    """Evaluate rules in order and collect one message per invalid field.

    Args:
        values: Field name to submitted value (missing fields count as None).
        rules: The ordered rules to apply.

    Returns:
        dict[str, str]: Field name to violation message; empty when valid.
    """
    errors: dict[str, str] = {}
    for rule in rules:
        if rule.field in errors:
            continue
        if not rule.predicate(values.get(rule.field)):
            errors[rule.field] = rule.message
    return errors
