from .create_user_command import (
    CreateUserCommand,
    CreateUserError,
    CreateUserResult,
    DispatchWarning,
)

__all__ = [
    "CreateUserCommand",
    "CreateUserError",
    "CreateUserResult",
    "DispatchWarning",
]
