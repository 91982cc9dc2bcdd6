"""
Command and CommandHandler base classes.

Commands represent intentions to change the system state.
They are named in imperative form: CreateUser, not UserCreation.

Example:
    @dataclass(frozen=True)
    class CreateUserCommand(Command):
        first_name: str
        last_name: str
        email: str

    class CreateUserHandler(CommandHandler[CreateUserCommand, Result[...]]):
        async def handle(self, command: CreateUserCommand) -> Result[...]:
            ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

# Input type (the command)
TCommand = TypeVar("TCommand", bound="Command")
# Output type (the result of handling the command)
TResult = TypeVar("TResult")


@dataclass(frozen=True)
class Command:
    """
    Base class for Commands.

    Commands are:
    - Immutable (frozen dataclass)
    - Named in imperative form
    - Carry all data needed to execute the operation
    - Represent intentions, not facts
    """


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """
    Base class for Command Handlers.

    Command Handlers:
    - Execute a single command type
    - Orchestrate domain logic
    - Manage transactions (via Unit of Work)
    - Return the result of the operation

    Each command should have exactly one handler.
    """

    @abstractmethod
    async def handle(self, command: TCommand) -> TResult:
        """Handle the command and return the result."""
        raise NotImplementedError
