"""Durable job queue stored in the background_jobs table."""

import asyncio
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import structlog
from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from enrollment.application.identity.protocols.job_client import TaskDescriptor
from enrollment.domain.identity.exceptions import DispatchError
from enrollment.infrastructure.jobs.job import Job, JobStatus
from enrollment.infrastructure.models import BackgroundJob

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqlAlchemyJobQueue:
    """
    At-least-once job queue backed by a database table.

    A job is claimed by moving it to RUNNING. If the worker dies before
    reporting back, the claim expires after ``lease_seconds`` and the job
    is handed out again, so tasks must be idempotent.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        retry_delay_seconds: float = 30.0,
        lease_seconds: float = 300.0,
    ) -> None:
        self.session_factory = session_factory
        self.retry_delay = timedelta(seconds=retry_delay_seconds)
        self.lease = timedelta(seconds=lease_seconds)

    async def enqueue(self, task: TaskDescriptor) -> UUID:
        """
        Persist a new pending job.

        Raises:
            DispatchError: If the job could not be stored
        """
        try:
            return await asyncio.to_thread(self._enqueue, task)
        except SQLAlchemyError as e:
            logger.error("job_enqueue_failed", task=task.name, error=str(e))
            raise DispatchError(task.name, str(e)) from e

    async def claim_next(self) -> Job | None:
        return await asyncio.to_thread(self._claim_next)

    async def mark_succeeded(self, job_id: UUID) -> None:
        await asyncio.to_thread(self._update, job_id, JobStatus.SUCCEEDED, None, None)

    async def mark_failed(self, job_id: UUID, error: str, *, retry: bool) -> None:
        if retry:
            await asyncio.to_thread(
                self._update, job_id, JobStatus.PENDING, error, _utcnow() + self.retry_delay
            )
        else:
            await asyncio.to_thread(self._update, job_id, JobStatus.FAILED, error, None)

    async def get(self, job_id: UUID) -> Job | None:
        return await asyncio.to_thread(self._get, job_id)

    def _enqueue(self, task: TaskDescriptor) -> UUID:
        job_id = uuid4()
        with self.session_factory() as db:
            db.add(
                BackgroundJob(
                    id=job_id,
                    task_name=task.name,
                    payload=dict(task.payload),
                    status=JobStatus.PENDING.value,
                    attempts=0,
                    available_at=_utcnow(),
                )
            )
            db.commit()
        logger.debug("job_enqueued", job_id=str(job_id), task=task.name)
        return job_id

    def _claim_next(self) -> Job | None:
        now = _utcnow()
        with self.session_factory() as db:
            stmt = (
                select(BackgroundJob)
                .where(
                    or_(
                        and_(
                            BackgroundJob.status == JobStatus.PENDING.value,
                            BackgroundJob.available_at <= now,
                        ),
                        and_(
                            BackgroundJob.status == JobStatus.RUNNING.value,
                            BackgroundJob.available_at <= now - self.lease,
                        ),
                    )
                )
                .order_by(BackgroundJob.available_at, BackgroundJob.created_at)
                .limit(1)
                .with_for_update(skip_locked=True)
            )
            row = db.execute(stmt).scalar_one_or_none()
            if row is None:
                return None
            if row.status == JobStatus.RUNNING.value:
                logger.warning("job_lease_expired", job_id=str(row.id), task=row.task_name)
            row.status = JobStatus.RUNNING.value
            row.attempts += 1
            # While running, available_at marks when the lease was taken
            row.available_at = now
            db.commit()
            return self._to_job(row)

    def _update(
        self,
        job_id: UUID,
        status: JobStatus,
        error: str | None,
        available_at: datetime | None,
    ) -> None:
        with self.session_factory() as db:
            row = db.get(BackgroundJob, job_id)
            if row is None:
                raise ValueError(f"Job {job_id} not found")
            row.status = status.value
            if error is not None:
                row.last_error = error
            if available_at is not None:
                row.available_at = available_at
            db.commit()

    def _get(self, job_id: UUID) -> Job | None:
        with self.session_factory() as db:
            row = db.get(BackgroundJob, job_id)
            return self._to_job(row) if row else None

    @staticmethod
    def _to_job(row: BackgroundJob) -> Job:
        return Job(
            id=row.id,
            task=TaskDescriptor(name=row.task_name, payload=dict(row.payload)),
            status=JobStatus(row.status),
            attempts=row.attempts,
            last_error=row.last_error,
        )
