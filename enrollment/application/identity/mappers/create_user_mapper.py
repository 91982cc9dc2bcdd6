"""Explicit conversions between the create-user command, the User entity and task payloads."""

from collections.abc import Mapping
from typing import Any

from enrollment.application.identity.commands.create_user_command import CreateUserCommand
from enrollment.domain.identity.entities.user import User, UserId


class CreateUserMapper:
    """Hand-written mapping; fields are copied verbatim, no normalization."""

    def to_entity(self, command: CreateUserCommand) -> User:
        """Build a new User with a freshly generated id."""
        return User.create(
            first_name=command.first_name,
            last_name=command.last_name,
            email=command.email,
        )

    def to_task_payload(self, user: User) -> dict[str, str]:
        return {
            "id": user.id.to_primitive(),
            "first_name": user.first_name,
            "last_name": user.last_name,
            "email": user.email,
        }

    def from_task_payload(self, payload: Mapping[str, Any]) -> User:
        return User.create_with_id(
            id=UserId.from_string(payload["id"]),
            first_name=payload["first_name"],
            last_name=payload["last_name"],
            email=payload["email"],
        )
