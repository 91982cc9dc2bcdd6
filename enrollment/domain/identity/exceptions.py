"""Identity domain exceptions."""

from collections.abc import Sequence

from enrollment.domain.common.exceptions import BusinessRuleViolationError, DomainError

from .violations import FieldViolation


class UserValidationError(DomainError):
    """Raised when a create-user request fails field validation."""

    def __init__(self, violations: Sequence[FieldViolation]) -> None:
        self.violations = tuple(violations)
        fields = sorted({v.field for v in self.violations})
        super().__init__(
            "User data is invalid",
            {"violations": [v.to_dict() for v in self.violations]},
        )
        self.fields = fields


class EmailAlreadyExistsError(BusinessRuleViolationError):
    """
    Raised when the email is already registered.

    ``late`` is True when the conflict was only detected by the store's
    unique constraint at commit time, after the up-front check passed.
    """

    field = "email"

    def __init__(self, email: str, *, late: bool = False) -> None:
        super().__init__("unique_email", f"Email {email} already exists")
        self.details["field"] = self.field
        self.email = email
        self.late = late


class UserPersistenceError(DomainError):
    """Raised when the store fails to commit a new user."""

    def __init__(self, message: str, *, cause: str | None = None) -> None:
        super().__init__(message, {"cause": cause} if cause else None)
        self.cause = cause


class DispatchError(DomainError):
    """Raised when a background task cannot be accepted by the job queue."""

    def __init__(self, task_name: str, reason: str) -> None:
        super().__init__(
            f"Could not enqueue task {task_name}: {reason}",
            {"task_name": task_name, "reason": reason},
        )
        self.task_name = task_name
        self.reason = reason
