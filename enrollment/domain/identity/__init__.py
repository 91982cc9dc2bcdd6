"""Identity domain: users and the errors raised while creating them."""

from .entities.user import User, UserId
from .exceptions import (
    DispatchError,
    EmailAlreadyExistsError,
    UserPersistenceError,
    UserValidationError,
)
from .violations import FieldViolation, ViolationCode

__all__ = [
    "DispatchError",
    "EmailAlreadyExistsError",
    "FieldViolation",
    "User",
    "UserId",
    "UserPersistenceError",
    "UserValidationError",
    "ViolationCode",
]
