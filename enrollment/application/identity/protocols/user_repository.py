from typing import Protocol

from enrollment.domain.identity.entities.user import User, UserId


class UserRepositoryProtocol(Protocol):
    def add(self, user: User) -> None: ...

    async def find_by_id(self, user_id: UserId) -> User | None: ...
