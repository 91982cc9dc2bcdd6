from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from enrollment.application.identity.protocols.job_client import TaskDescriptor


class JobStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Job:
    """Snapshot of a queued job as seen by the worker."""

    id: UUID
    task: TaskDescriptor
    status: JobStatus
    attempts: int = 0
    last_error: str | None = None
