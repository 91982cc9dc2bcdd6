"""In-process job queue with the same delivery contract as the SQLAlchemy one."""

import asyncio
from collections import deque
from dataclasses import replace
from uuid import UUID, uuid4

import structlog

from enrollment.application.identity.protocols.job_client import TaskDescriptor
from enrollment.domain.identity.exceptions import DispatchError
from enrollment.infrastructure.jobs.job import Job, JobStatus

logger = structlog.get_logger(__name__)


class InMemoryJobQueue:
    """
    FIFO job queue held in memory.

    Delivery is at-least-once within the process: a failed job that is
    retried goes to the back of the queue. Nothing survives a restart.
    Set ``accepting`` to False to simulate a queue that rejects new work.
    """

    def __init__(self) -> None:
        self.accepting = True
        self._jobs: dict[UUID, Job] = {}
        self._pending: deque[UUID] = deque()

    async def enqueue(self, task: TaskDescriptor) -> UUID:
        await asyncio.sleep(0)
        if not self.accepting:
            raise DispatchError(task.name, "queue is not accepting jobs")
        job = Job(
            id=uuid4(),
            task=TaskDescriptor(name=task.name, payload=dict(task.payload)),
            status=JobStatus.PENDING,
        )
        self._jobs[job.id] = job
        self._pending.append(job.id)
        logger.debug("job_enqueued", job_id=str(job.id), task=task.name)
        return job.id

    async def claim_next(self) -> Job | None:
        if not self._pending:
            return None
        job_id = self._pending.popleft()
        job = replace(
            self._jobs[job_id], status=JobStatus.RUNNING, attempts=self._jobs[job_id].attempts + 1
        )
        self._jobs[job_id] = job
        return job

    async def mark_succeeded(self, job_id: UUID) -> None:
        self._jobs[job_id] = replace(self._jobs[job_id], status=JobStatus.SUCCEEDED)

    async def mark_failed(self, job_id: UUID, error: str, *, retry: bool) -> None:
        status = JobStatus.PENDING if retry else JobStatus.FAILED
        self._jobs[job_id] = replace(self._jobs[job_id], status=status, last_error=error)
        if retry:
            self._pending.append(job_id)

    async def get(self, job_id: UUID) -> Job | None:
        return self._jobs.get(job_id)

    @property
    def jobs(self) -> list[Job]:
        return list(self._jobs.values())

    def jobs_for(self, task_name: str) -> list[Job]:
        return [job for job in self._jobs.values() if job.task.name == task_name]
