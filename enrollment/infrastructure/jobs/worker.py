"""Worker that drains a job queue and runs registered tasks."""

import asyncio
import contextlib
from typing import Protocol
from uuid import UUID

import structlog

from enrollment.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from enrollment.infrastructure.jobs.job import Job
from enrollment.infrastructure.jobs.registry import TaskRegistry, UnknownTaskError

logger = structlog.get_logger(__name__)

# Retrying cannot change the outcome of these
PERMANENT_ERRORS = (UnknownTaskError, BusinessRuleViolationError, ValidationError)


class JobQueueProtocol(Protocol):
    async def claim_next(self) -> Job | None: ...

    async def mark_succeeded(self, job_id: UUID) -> None: ...

    async def mark_failed(self, job_id: UUID, error: str, *, retry: bool) -> None: ...


class JobWorker:
    """
    Runs queued jobs one at a time.

    A job is marked succeeded only after its task returns. Broken business
    rules, invalid payloads and unknown task names fail the job permanently;
    any other exception, store failures included, is retried until
    ``max_attempts`` is reached.
    """

    def __init__(
        self,
        queue: JobQueueProtocol,
        registry: TaskRegistry,
        *,
        max_attempts: int = 5,
        poll_interval: float = 1.0,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.queue = queue
        self.registry = registry
        self.max_attempts = max_attempts
        self.poll_interval = poll_interval

    async def run_once(self) -> bool:
        """Claim and run a single job. Returns False when the queue was empty."""
        job = await self.queue.claim_next()
        if job is None:
            return False

        log = logger.bind(job_id=str(job.id), task=job.task.name, attempt=job.attempts)
        try:
            task = self.registry.get(job.task.name)
            await task(job.task.payload)
        except PERMANENT_ERRORS as e:
            log.error("job_failed_permanently", error=str(e))
            await self.queue.mark_failed(job.id, str(e), retry=False)
        except Exception as e:  # noqa: BLE001
            retry = job.attempts < self.max_attempts
            log.warning("job_failed", error=repr(e), retry=retry)
            await self.queue.mark_failed(job.id, repr(e), retry=retry)
        else:
            log.info("job_succeeded")
            await self.queue.mark_succeeded(job.id)
        return True

    async def drain(self, limit: int | None = None) -> int:
        """Run jobs until the queue is empty (or ``limit`` jobs ran)."""
        processed = 0
        while limit is None or processed < limit:
            if not await self.run_once():
                break
            processed += 1
        return processed

    async def run(self, stop: asyncio.Event) -> None:
        """Poll the queue until ``stop`` is set."""
        logger.info("job_worker_started", tasks=self.registry.names())
        while not stop.is_set():
            if await self.run_once():
                continue
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(stop.wait(), timeout=self.poll_interval)
        logger.info("job_worker_stopped")
