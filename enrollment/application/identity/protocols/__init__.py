from .job_client import JobClientProtocol, TaskDescriptor
from .uniqueness_checker import UniquenessCheckerProtocol
from .user_lookup import UserLookupProtocol
from .user_repository import UserRepositoryProtocol

__all__ = [
    "JobClientProtocol",
    "TaskDescriptor",
    "UniquenessCheckerProtocol",
    "UserLookupProtocol",
    "UserRepositoryProtocol",
]
