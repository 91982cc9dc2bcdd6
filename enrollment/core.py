"""Composition root: wires ports to adapters and routes requests to handlers."""

from dependency_injector import containers, providers

from enrollment.application.common.mediator import HandlerFactory, Mediator
from enrollment.application.identity.commands.create_user_command import CreateUserCommand
from enrollment.application.identity.commands.create_user_handler import CreateUserHandler
from enrollment.application.identity.mappers.create_user_mapper import CreateUserMapper
from enrollment.application.identity.protocols.job_client import JobClientProtocol
from enrollment.application.identity.protocols.uniqueness_checker import (
    UniquenessCheckerProtocol,
)
from enrollment.application.identity.queries.does_user_exist import (
    DoesUserExistHandler,
    DoesUserExistQuery,
)
from enrollment.application.identity.tasks.create_user_task import (
    CREATE_USER_TASK,
    CreateUserTask,
    UserWriteScope,
)
from enrollment.application.identity.validators.create_user_validator import (
    CreateUserValidator,
)
from enrollment.config import get_settings
from enrollment.database import get_session_factory
from enrollment.infrastructure.identity.user_lookup import SqlAlchemyUserLookup
from enrollment.infrastructure.identity.user_repository import SqlAlchemyUserWriteScope
from enrollment.infrastructure.jobs.registry import TaskRegistry
from enrollment.infrastructure.jobs.sqlalchemy_queue import SqlAlchemyJobQueue
from enrollment.infrastructure.jobs.worker import JobWorker


def build_create_user_handler(
    scope: UserWriteScope,
    validator: CreateUserValidator,
    uniqueness_checker: UniquenessCheckerProtocol,
    mapper: CreateUserMapper,
    job_client: JobClientProtocol,
) -> CreateUserHandler:
    """The repository and the unit of work must come from the same scope."""
    return CreateUserHandler(
        validator=validator,
        uniqueness_checker=uniqueness_checker,
        mapper=mapper,
        user_repository=scope.users,
        uow=scope.uow,
        job_client=job_client,
    )


def build_mediator(
    create_user_handler: HandlerFactory,
    does_user_exist_handler: HandlerFactory,
) -> Mediator:
    mediator = Mediator()
    mediator.register(CreateUserCommand, create_user_handler)
    mediator.register(DoesUserExistQuery, does_user_exist_handler)
    return mediator


def build_task_registry(create_user_task: CreateUserTask) -> TaskRegistry:
    registry = TaskRegistry()
    registry.register(CREATE_USER_TASK, create_user_task)
    return registry


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Singleton(get_settings)
    session_factory = providers.Singleton(get_session_factory, settings=settings)

    # Persistence
    user_write_scope = providers.Factory(SqlAlchemyUserWriteScope, session_factory=session_factory)
    user_lookup = providers.Singleton(SqlAlchemyUserLookup, session_factory=session_factory)

    # Background jobs
    job_queue = providers.Singleton(
        SqlAlchemyJobQueue,
        session_factory=session_factory,
        retry_delay_seconds=settings.provided.JOB_RETRY_DELAY_SECONDS,
    )

    # Pipeline components (stateless)
    validator = providers.Singleton(CreateUserValidator)
    mapper = providers.Singleton(CreateUserMapper)

    # Handlers
    does_user_exist_handler = providers.Factory(DoesUserExistHandler, user_lookup=user_lookup)
    create_user_handler = providers.Factory(
        build_create_user_handler,
        scope=user_write_scope,
        validator=validator,
        uniqueness_checker=does_user_exist_handler,
        mapper=mapper,
        job_client=job_queue,
    )

    mediator = providers.Singleton(
        build_mediator,
        create_user_handler=create_user_handler.provider,
        does_user_exist_handler=does_user_exist_handler.provider,
    )

    # Worker side
    create_user_task = providers.Factory(
        CreateUserTask,
        scope_factory=user_write_scope.provider,
        mapper=mapper,
    )
    task_registry = providers.Singleton(build_task_registry, create_user_task=create_user_task)
    job_worker = providers.Factory(
        JobWorker,
        queue=job_queue,
        registry=task_registry,
        max_attempts=settings.provided.JOB_MAX_ATTEMPTS,
        poll_interval=settings.provided.JOB_POLL_INTERVAL_SECONDS,
    )


container = Container()
