from typing import Protocol

from enrollment.domain.identity.entities.user import User, UserId


class UserLookupProtocol(Protocol):
    """Read-only view over committed users."""

    async def email_exists(self, email: str) -> bool: ...

    async def find_by_id(self, user_id: UserId) -> User | None: ...
