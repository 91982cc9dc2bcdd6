"""Handler for the create-user command."""

import structlog

from enrollment.application.common.command import CommandHandler
from enrollment.application.common.result import Failure, Result, Success
from enrollment.application.common.unit_of_work import UnitOfWork
from enrollment.application.identity.commands.create_user_command import (
    CreateUserCommand,
    CreateUserError,
    CreateUserResult,
    DispatchWarning,
)
from enrollment.application.identity.mappers.create_user_mapper import CreateUserMapper
from enrollment.application.identity.protocols.job_client import (
    JobClientProtocol,
    TaskDescriptor,
)
from enrollment.application.identity.protocols.uniqueness_checker import (
    UniquenessCheckerProtocol,
)
from enrollment.application.identity.protocols.user_repository import UserRepositoryProtocol
from enrollment.application.identity.tasks.create_user_task import CREATE_USER_TASK
from enrollment.application.identity.validators.create_user_validator import (
    CreateUserValidator,
)
from enrollment.domain.identity.entities.user import User
from enrollment.domain.identity.exceptions import (
    DispatchError,
    EmailAlreadyExistsError,
    UserPersistenceError,
    UserValidationError,
)

logger = structlog.get_logger(__name__)


class CreateUserHandler(
    CommandHandler[CreateUserCommand, Result[CreateUserResult, CreateUserError]]
):
    """
    Create a user: validate, check uniqueness, map, persist, dispatch.

    Steps run in a fixed order and the first failing step ends the attempt.
    Nothing is retried here; retries of the follow-up task belong to the
    job queue.

    The uniqueness check and the commit are not atomic. Two concurrent
    handlers can both pass the check for the same email; only a unique
    constraint in the store turns the loser into an EmailAlreadyExistsError
    (with ``late=True``) instead of a second user.
    """

    def __init__(
        self,
        validator: CreateUserValidator,
        uniqueness_checker: UniquenessCheckerProtocol,
        mapper: CreateUserMapper,
        user_repository: UserRepositoryProtocol,
        uow: UnitOfWork,
        job_client: JobClientProtocol,
    ) -> None:
        self.validator = validator
        self.uniqueness_checker = uniqueness_checker
        self.mapper = mapper
        self.user_repository = user_repository
        self.uow = uow
        self.job_client = job_client

    async def handle(
        self, command: CreateUserCommand
    ) -> Result[CreateUserResult, CreateUserError]:
        """
        Handle the command.

        Returns:
            Success(CreateUserResult) once the user is durable, possibly with
            dispatch warnings; Failure(UserValidationError),
            Failure(EmailAlreadyExistsError) or Failure(UserPersistenceError)
            otherwise.

        Raises:
            asyncio.CancelledError: If cancelled; before the commit completes
                nothing is persisted, after it the user stays durable
        """
        try:
            return await self._handle(command)
        finally:
            # Handlers are request scoped; every exit path releases the session
            await self.uow.close()

    async def _handle(
        self, command: CreateUserCommand
    ) -> Result[CreateUserResult, CreateUserError]:
        log = logger.bind(email=command.email)

        violations = self.validator.validate(command)
        if violations:
            log.info("create_user_invalid", fields=[v.field for v in violations])
            return Failure(UserValidationError(violations))

        if await self.uniqueness_checker.exists(command.email):
            log.info("create_user_duplicate")
            return Failure(EmailAlreadyExistsError(command.email))

        user = self.mapper.to_entity(command)
        log = log.bind(user_id=str(user.id))

        try:
            await self._persist(user)
        except EmailAlreadyExistsError as e:
            log.warning("create_user_duplicate_on_commit")
            return Failure(e)
        except UserPersistenceError as e:
            log.error("create_user_persistence_failed", error=str(e))
            return Failure(e)
        log.info("create_user_persisted")

        warnings = await self._dispatch(user)
        return Success(CreateUserResult(id=user.id, warnings=warnings))

    async def _persist(self, user: User) -> None:
        async with self.uow:
            self.user_repository.add(user)
            await self.uow.commit()

    async def _dispatch(self, user: User) -> tuple[DispatchWarning, ...]:
        task = TaskDescriptor(name=CREATE_USER_TASK, payload=self.mapper.to_task_payload(user))
        try:
            job_id = await self.job_client.enqueue(task)
        except DispatchError as e:
            logger.warning(
                "create_user_dispatch_failed",
                user_id=str(user.id),
                task=task.name,
                reason=e.reason,
            )
            return (DispatchWarning(task_name=task.name, reason=e.reason),)
        logger.info("create_user_dispatched", user_id=str(user.id), job_id=str(job_id))
        return ()
