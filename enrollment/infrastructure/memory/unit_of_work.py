import asyncio
from dataclasses import dataclass, field

from enrollment.application.common.unit_of_work import UnitOfWork
from enrollment.domain.identity.entities.user import User

from .store import InMemoryUserStore
from .user_repository import InMemoryUserRepository


class InMemoryUnitOfWork(UnitOfWork):
    """Buffers staged users and applies them to the store on commit."""

    def __init__(self, store: InMemoryUserStore) -> None:
        self.store = store
        self.staged: list[User] = []

    def stage(self, user: User) -> None:
        self.staged.append(user)

    async def commit(self) -> None:
        # Suspension point, like a round trip to a real store
        await asyncio.sleep(0)
        batch, self.staged = self.staged, []
        self.store.apply(batch)

    async def rollback(self) -> None:
        self.staged = []


@dataclass
class InMemoryUserWriteScope:
    store: InMemoryUserStore
    uow: InMemoryUnitOfWork = field(init=False)
    users: InMemoryUserRepository = field(init=False)

    def __post_init__(self) -> None:
        self.uow = InMemoryUnitOfWork(self.store)
        self.users = InMemoryUserRepository(self.uow)
