"""Field validation for CreateUserCommand."""

from collections.abc import Callable
from typing import NamedTuple

from email_validator import EmailNotValidError, validate_email

from enrollment.application.identity.commands.create_user_command import CreateUserCommand
from enrollment.domain.identity.violations import FieldViolation, ViolationCode

# Match the column sizes of the users table
MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 254


def _is_blank(value: str) -> bool:
    return not value or not value.strip()


def _is_too_long(limit: int) -> Callable[[str], bool]:
    return lambda value: len(value) > limit


def _is_malformed_email(value: str) -> bool:
    # Syntax only; dotless and special-use domains (user@localhost) are rejected
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return True
    return False


class Rule(NamedTuple):
    """A rule fails when ``predicate`` returns True for the field's value."""

    field: str
    predicate: Callable[[str], bool]
    code: ViolationCode
    message: str


DEFAULT_RULES: tuple[Rule, ...] = (
    Rule("first_name", _is_blank, ViolationCode.REQUIRED, "First name is required"),
    Rule(
        "first_name",
        _is_too_long(MAX_NAME_LENGTH),
        ViolationCode.TOO_LONG,
        f"First name cannot exceed {MAX_NAME_LENGTH} characters",
    ),
    Rule("last_name", _is_blank, ViolationCode.REQUIRED, "Last name is required"),
    Rule(
        "last_name",
        _is_too_long(MAX_NAME_LENGTH),
        ViolationCode.TOO_LONG,
        f"Last name cannot exceed {MAX_NAME_LENGTH} characters",
    ),
    Rule("email", _is_blank, ViolationCode.REQUIRED, "Email is required"),
    Rule(
        "email",
        _is_too_long(MAX_EMAIL_LENGTH),
        ViolationCode.TOO_LONG,
        f"Email cannot exceed {MAX_EMAIL_LENGTH} characters",
    ),
    Rule("email", _is_malformed_email, ViolationCode.INVALID_FORMAT, "Email is not valid"),
)


class CreateUserValidator:
    """
    Evaluates an ordered list of rules against a command.

    Every field is checked, but only the first failing rule of a field is
    reported, so an empty email yields REQUIRED and never INVALID_FORMAT.
    """

    def __init__(self, rules: tuple[Rule, ...] = DEFAULT_RULES) -> None:
        self.rules = rules

    def validate(self, command: CreateUserCommand) -> list[FieldViolation]:
        violations: list[FieldViolation] = []
        failed_fields: set[str] = set()
        for rule in self.rules:
            if rule.field in failed_fields:
                continue
            value = getattr(command, rule.field) or ""
            if rule.predicate(value):
                failed_fields.add(rule.field)
                violations.append(FieldViolation(rule.field, rule.code, rule.message))
        return violations
