"""At-least-once background jobs: queues, task registry and worker."""

from .job import Job, JobStatus
from .memory_queue import InMemoryJobQueue
from .registry import TaskRegistry, UnknownTaskError
from .sqlalchemy_queue import SqlAlchemyJobQueue
from .worker import JobQueueProtocol, JobWorker

__all__ = [
    "InMemoryJobQueue",
    "Job",
    "JobQueueProtocol",
    "JobStatus",
    "JobWorker",
    "SqlAlchemyJobQueue",
    "TaskRegistry",
    "UnknownTaskError",
]
