"""In-memory adapters for the identity ports, used for wiring without a database."""

from .store import InMemoryUserStore
from .unit_of_work import InMemoryUnitOfWork, InMemoryUserWriteScope
from .user_lookup import InMemoryUserLookup
from .user_repository import InMemoryUserRepository

__all__ = [
    "InMemoryUnitOfWork",
    "InMemoryUserLookup",
    "InMemoryUserRepository",
    "InMemoryUserStore",
    "InMemoryUserWriteScope",
]
