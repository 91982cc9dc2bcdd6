from .unit_of_work import SqlAlchemyUnitOfWork
from .user_lookup import SqlAlchemyUserLookup
from .user_mapper import UserMapper
from .user_repository import SqlAlchemyUserRepository, SqlAlchemyUserWriteScope

__all__ = [
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyUserLookup",
    "SqlAlchemyUserRepository",
    "SqlAlchemyUserWriteScope",
    "UserMapper",
]
