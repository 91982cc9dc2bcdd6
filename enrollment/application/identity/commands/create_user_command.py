"""Input and output types of the create-user command."""

from dataclasses import dataclass

from enrollment.application.common.command import Command
from enrollment.domain.identity.entities.user import UserId
from enrollment.domain.identity.exceptions import (
    EmailAlreadyExistsError,
    UserPersistenceError,
    UserValidationError,
)


@dataclass(frozen=True)
class CreateUserCommand(Command):
    first_name: str
    last_name: str
    email: str


@dataclass(frozen=True)
class DispatchWarning:
    """The user was created but its follow-up task was not enqueued."""

    task_name: str
    reason: str


@dataclass(frozen=True)
class CreateUserResult:
    id: UserId
    warnings: tuple[DispatchWarning, ...] = ()

    @property
    def dispatched(self) -> bool:
        return not self.warnings


CreateUserError = UserValidationError | EmailAlreadyExistsError | UserPersistenceError
