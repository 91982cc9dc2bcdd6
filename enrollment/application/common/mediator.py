"""
Mediator with an explicit routing table.

Every request type is mapped to a handler factory at composition time;
nothing is discovered by reflection.

Example:
    mediator = Mediator()
    mediator.register(CreateUserCommand, container.create_user_handler)
    result = await mediator.send(CreateUserCommand(...))
"""

from collections.abc import Callable
from typing import Any

import structlog

from .command import Command, CommandHandler
from .query import Query, QueryHandler

logger = structlog.get_logger(__name__)

Request = Command | Query
HandlerFactory = Callable[[], CommandHandler[Any, Any] | QueryHandler[Any, Any]]


class HandlerNotFoundError(LookupError):
    """Raised when no route exists for a request type."""

    def __init__(self, request_type: type) -> None:
        self.request_type = request_type
        super().__init__(f"No handler registered for {request_type.__name__}")


class HandlerAlreadyRegisteredError(ValueError):
    """Raised when a request type is routed twice."""

    def __init__(self, request_type: type) -> None:
        self.request_type = request_type
        super().__init__(f"A handler is already registered for {request_type.__name__}")


class Mediator:
    """Routes commands and queries to their single handler."""

    def __init__(self) -> None:
        self._routes: dict[type, HandlerFactory] = {}

    def register(self, request_type: type[Request], factory: HandlerFactory) -> None:
        """
        Route a request type to a handler factory.

        The factory is called once per request so handlers can hold
        request-scoped collaborators (sessions, units of work).
        """
        if request_type in self._routes:
            raise HandlerAlreadyRegisteredError(request_type)
        self._routes[request_type] = factory

    def routes(self) -> list[type]:
        return list(self._routes)

    async def send(self, request: Request) -> Any:  # noqa: ANN401
        """Dispatch a request to its handler and await the outcome."""
        factory = self._routes.get(type(request))
        if factory is None:
            raise HandlerNotFoundError(type(request))
        handler = factory()
        logger.debug(
            "mediator_dispatch",
            request=type(request).__name__,
            handler=type(handler).__name__,
        )
        return await handler.handle(request)
