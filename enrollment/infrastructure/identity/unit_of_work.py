"""SQLAlchemy implementation of the UnitOfWork port."""

import asyncio
from types import TracebackType

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from enrollment.application.common.unit_of_work import UnitOfWork
from enrollment.domain.identity.exceptions import EmailAlreadyExistsError, UserPersistenceError
from enrollment.infrastructure.models import User as UserORM

logger = structlog.get_logger(__name__)

EMAIL_CONSTRAINT_MARKERS = ("uq_users_email", "users.email")


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of work over a synchronous SQLAlchemy session.

    Session I/O runs in a worker thread so the event loop is never blocked.
    A commit that has been handed to the driver cannot be interrupted: if the
    caller is cancelled meanwhile, the commit is allowed to finish and the
    cancellation is re-raised afterwards.
    """

    def __init__(self, db: Session, *, owns_session: bool = False) -> None:
        self.db = db
        self.owns_session = owns_session

    async def commit(self) -> None:
        pending = asyncio.ensure_future(asyncio.to_thread(self._commit))
        try:
            await asyncio.shield(pending)
        except asyncio.CancelledError:
            await asyncio.wait({pending})
            if not pending.cancelled() and pending.exception() is None:
                logger.warning("commit_completed_after_cancellation")
            raise

    async def rollback(self) -> None:
        await asyncio.to_thread(self.db.rollback)

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc_val, exc_tb)
        finally:
            await self.close()

    async def close(self) -> None:
        if self.owns_session:
            self.db.close()

    def _commit(self) -> None:
        staged_emails = [obj.email for obj in self.db.new if isinstance(obj, UserORM)]
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if any(marker in str(e.orig) for marker in EMAIL_CONSTRAINT_MARKERS):
                email = staged_emails[0] if staged_emails else ""
                raise EmailAlreadyExistsError(email, late=True) from e
            raise UserPersistenceError("Commit rejected by the database", cause=str(e.orig)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise UserPersistenceError("Database commit failed", cause=str(e)) from e
