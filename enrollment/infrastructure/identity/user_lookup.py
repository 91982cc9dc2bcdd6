"""Read-only queries over committed users."""

import asyncio

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from enrollment.domain.identity.entities.user import User, UserId
from enrollment.infrastructure.identity.user_mapper import UserMapper
from enrollment.infrastructure.models import User as UserORM


class SqlAlchemyUserLookup:
    """
    Answers existence queries with a short-lived session per call.

    A fresh session always reads committed rows, never another caller's
    staged changes.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory
        self.mapper = UserMapper()

    async def email_exists(self, email: str) -> bool:
        return await asyncio.to_thread(self._email_exists, email)

    async def find_by_id(self, user_id: UserId) -> User | None:
        return await asyncio.to_thread(self._find_by_id, user_id)

    def _email_exists(self, email: str) -> bool:
        with self.session_factory() as db:
            stmt = select(UserORM.id).where(UserORM.email == email)
            return db.execute(stmt).first() is not None

    def _find_by_id(self, user_id: UserId) -> User | None:
        with self.session_factory() as db:
            orm_model = db.get(UserORM, user_id.value)
            return self.mapper.to_domain(orm_model) if orm_model else None
