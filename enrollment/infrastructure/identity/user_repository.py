"""Repository for User domain entities."""

import asyncio
from dataclasses import dataclass, field

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from enrollment.domain.identity.entities.user import User, UserId
from enrollment.infrastructure.identity.unit_of_work import SqlAlchemyUnitOfWork
from enrollment.infrastructure.identity.user_mapper import UserMapper
from enrollment.infrastructure.models import User as UserORM

logger = structlog.get_logger(__name__)


class SqlAlchemyUserRepository:
    """Stages users on a session; the unit of work sharing the session commits them."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def add(self, user: User) -> None:
        """Stage a new user for insertion."""
        self.db.add(self.mapper.to_orm(user))
        logger.debug("user_staged", user_id=str(user.id))

    async def find_by_id(self, user_id: UserId) -> User | None:
        """
        Find a user by ID.

        Returns:
            User entity if found, None otherwise
        """
        return await asyncio.to_thread(self._find_by_id, user_id)

    def _find_by_id(self, user_id: UserId) -> User | None:
        stmt = select(UserORM).where(UserORM.id == user_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None


@dataclass
class SqlAlchemyUserWriteScope:
    """A session-owning unit of work plus the repository bound to the same session."""

    session_factory: sessionmaker[Session]
    uow: SqlAlchemyUnitOfWork = field(init=False)
    users: SqlAlchemyUserRepository = field(init=False)

    def __post_init__(self) -> None:
        db = self.session_factory()
        self.uow = SqlAlchemyUnitOfWork(db, owns_session=True)
        self.users = SqlAlchemyUserRepository(db)
