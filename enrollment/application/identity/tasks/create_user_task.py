"""Deferred "create user" task executed by the job worker."""

from collections.abc import Callable, Mapping
from typing import Any, Protocol

import structlog

from enrollment.application.common.unit_of_work import UnitOfWork
from enrollment.application.identity.mappers.create_user_mapper import CreateUserMapper
from enrollment.application.identity.protocols.user_repository import UserRepositoryProtocol

logger = structlog.get_logger(__name__)

CREATE_USER_TASK = "identity.create_user"


class UserWriteScope(Protocol):
    """A fresh unit of work together with the repository bound to it."""

    @property
    def uow(self) -> UnitOfWork: ...

    @property
    def users(self) -> UserRepositoryProtocol: ...


class CreateUserTask:
    """
    Persist a user from a task payload, upserting by id.

    The job queue delivers at least once, so running this task for a user
    that is already durable is a no-op rather than an error.

    Raises:
        EmailAlreadyExistsError: If another user already owns the email
        UserPersistenceError: If the store fails to commit
    """

    name = CREATE_USER_TASK

    def __init__(
        self,
        scope_factory: Callable[[], UserWriteScope],
        mapper: CreateUserMapper | None = None,
    ) -> None:
        self.scope_factory = scope_factory
        self.mapper = mapper or CreateUserMapper()

    async def __call__(self, payload: Mapping[str, Any]) -> None:
        user = self.mapper.from_task_payload(payload)
        scope = self.scope_factory()

        async with scope.uow:
            if await scope.users.find_by_id(user.id) is not None:
                logger.info("create_user_task_skipped", user_id=str(user.id))
                return
            scope.users.add(user)
            await scope.uow.commit()

        logger.info("create_user_task_persisted", user_id=str(user.id))
