import asyncio

from enrollment.domain.identity.entities.user import User, UserId

from .store import InMemoryUserStore


class InMemoryUserLookup:
    def __init__(self, store: InMemoryUserStore) -> None:
        self.store = store

    async def email_exists(self, email: str) -> bool:
        await asyncio.sleep(0)
        return self.store.email_exists(email)

    async def find_by_id(self, user_id: UserId) -> User | None:
        return self.store.get(user_id)
