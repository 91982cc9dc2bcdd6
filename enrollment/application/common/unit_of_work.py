"""
Unit of Work interface.

The Unit of Work pattern maintains a list of objects affected by a business
transaction and coordinates the writing out of changes.

Example:
    async with self._uow:
        self._users.add(user)
        await self._uow.commit()
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self


class UnitOfWork(ABC):
    """
    Unit of Work interface (Port).

    The Unit of Work:
    - Buffers staged changes until commit
    - Commits atomically: either everything staged becomes durable or nothing does
    - Can be used as an async context manager

    Infrastructure layer provides concrete implementations
    (SqlAlchemyUnitOfWork, InMemoryUnitOfWork).
    """

    @abstractmethod
    async def commit(self) -> None:
        """
        Commit the current transaction.

        Raises:
            UserPersistenceError: If the store cannot persist the changes
            EmailAlreadyExistsError: If a unique email constraint rejects them
        """
        raise NotImplementedError

    @abstractmethod
    async def rollback(self) -> None:
        """Discard all changes staged since the last commit."""
        raise NotImplementedError

    async def close(self) -> None:  # noqa: B027
        """Release whatever the unit of work holds open. Safe to call repeatedly."""

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """
        Exit the unit of work context.

        If an exception occurred (cancellation included), rollback.
        Otherwise, do nothing (commit must be called explicitly).
        """
        if exc_type is not None:
            await self.rollback()
