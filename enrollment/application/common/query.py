"""
Query and QueryHandler base classes.

Queries represent requests for information without side effects.
They are named descriptively: DoesUserExist, GetUser, etc.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

# Input type (the query)
TQuery = TypeVar("TQuery", bound="Query")
# Output type (the result of the query)
TResult = TypeVar("TResult")


@dataclass(frozen=True)
class Query:
    """
    Base class for Queries.

    Queries are immutable and read-only; they never modify state.
    """


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """
    Base class for Query Handlers.

    Each query should have exactly one handler.
    Query handlers don't need a Unit of Work since they don't modify state.
    """

    @abstractmethod
    async def handle(self, query: TQuery) -> TResult:
        """Handle the query and return the result."""
        raise NotImplementedError
