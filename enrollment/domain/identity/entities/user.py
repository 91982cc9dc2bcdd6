"""User entity for identity management."""

from dataclasses import dataclass
from datetime import datetime

from enrollment.domain.common.entity import Entity, EntityId
from enrollment.domain.common.exceptions import ValidationError


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""


@dataclass(eq=False)
class User(Entity[UserId]):
    """
    User entity created by the "create user" command.

    Business Rules:
    - Email must be unique (checked before persistence, enforced by the store)
    - Names and email are stored verbatim, without normalization
    - The id is assigned at creation and never changes
    """

    id: UserId
    first_name: str
    last_name: str
    email: str
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate structural invariants."""
        for field_name in ("first_name", "last_name", "email"):
            if not getattr(self, field_name):
                raise ValidationError(f"{field_name} cannot be empty", field=field_name)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def create(cls, first_name: str, last_name: str, email: str) -> "User":
        """
        Create a new user with a freshly generated id.

        Raises:
            ValidationError: If a required field is empty
        """
        return cls(
            id=UserId.generate(),
            first_name=first_name,
            last_name=last_name,
            email=email,
        )

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        first_name: str,
        last_name: str,
        email: str,
        created_at: datetime | None = None,
    ) -> "User":
        """Reconstitute a user from persistence or a task payload."""
        return cls(
            id=id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            created_at=created_at,
        )
