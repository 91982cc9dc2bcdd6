from typing import TYPE_CHECKING

from enrollment.domain.identity.entities.user import User, UserId

if TYPE_CHECKING:
    from .unit_of_work import InMemoryUnitOfWork


class InMemoryUserRepository:
    def __init__(self, uow: "InMemoryUnitOfWork") -> None:
        self.uow = uow

    def add(self, user: User) -> None:
        self.uow.stage(user)

    async def find_by_id(self, user_id: UserId) -> User | None:
        return self.uow.store.get(user_id)
