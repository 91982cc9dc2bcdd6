"""
Application common module.

Contains base classes for application layer:
- Command: Base class for write operations
- Query: Base class for read operations
- CommandHandler / QueryHandler: Handle a single request type
- Result: Result type for use case outcomes
- UnitOfWork: Transaction boundary port
- Mediator: Explicit request-to-handler routing
"""

from .command import Command, CommandHandler
from .mediator import HandlerAlreadyRegisteredError, HandlerNotFoundError, Mediator
from .query import Query, QueryHandler
from .result import Failure, Result, Success
from .unit_of_work import UnitOfWork

__all__ = [
    "Command",
    "CommandHandler",
    "Failure",
    "HandlerAlreadyRegisteredError",
    "HandlerNotFoundError",
    "Mediator",
    "Query",
    "QueryHandler",
    "Result",
    "Success",
    "UnitOfWork",
]
