"""Tests for JobWorker over the in-memory queue."""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any
from uuid import uuid4

import pytest

from enrollment.application.identity.mappers.create_user_mapper import CreateUserMapper
from enrollment.application.identity.protocols.job_client import TaskDescriptor
from enrollment.application.identity.tasks.create_user_task import CREATE_USER_TASK, CreateUserTask
from enrollment.domain.identity.entities.user import User
from enrollment.domain.identity.exceptions import (
    DispatchError,
    EmailAlreadyExistsError,
    UserPersistenceError,
)
from enrollment.infrastructure.jobs import InMemoryJobQueue, JobStatus, JobWorker, TaskRegistry
from enrollment.infrastructure.memory import InMemoryUserStore, InMemoryUserWriteScope
from tests.factories import FailingStore


class FlakyTask:
    """Raises ``failures`` times, then succeeds."""

    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.calls = 0

    async def __call__(self, payload: Mapping[str, Any]) -> None:
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError(f"transient failure {self.calls}")


class RecoveringStore(InMemoryUserStore):
    """Fails the first ``failures`` commits with an infrastructure error."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures

    def apply(self, users: Iterable[User]) -> None:
        if self.failures > 0:
            self.failures -= 1
            raise UserPersistenceError("store unavailable")
        super().apply(users)


def make_worker(
    queue: InMemoryJobQueue, tasks: dict[str, Any], max_attempts: int = 3
) -> JobWorker:
    registry = TaskRegistry()
    for name, fn in tasks.items():
        registry.register(name, fn)
    return JobWorker(queue, registry, max_attempts=max_attempts, poll_interval=0.01)


class TestJobWorker:
    @pytest.mark.asyncio
    async def test_runs_task_with_payload(self, job_queue: InMemoryJobQueue) -> None:
        seen: list[Mapping[str, Any]] = []

        async def record(payload: Mapping[str, Any]) -> None:
            seen.append(payload)

        worker = make_worker(job_queue, {"demo": record})
        job_id = await job_queue.enqueue(TaskDescriptor("demo", {"n": 1}))

        assert await worker.run_once() is True
        assert await worker.run_once() is False
        assert seen == [{"n": 1}]
        job = await job_queue.get(job_id)
        assert job is not None
        assert job.status == JobStatus.SUCCEEDED
        assert job.attempts == 1

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(self, job_queue: InMemoryJobQueue) -> None:
        task = FlakyTask(failures=2)
        worker = make_worker(job_queue, {"flaky": task}, max_attempts=3)
        job_id = await job_queue.enqueue(TaskDescriptor("flaky"))

        assert await worker.drain() == 3

        job = await job_queue.get(job_id)
        assert job is not None
        assert job.status == JobStatus.SUCCEEDED
        assert job.attempts == 3
        assert "transient failure 2" in (job.last_error or "")

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, job_queue: InMemoryJobQueue) -> None:
        task = FlakyTask(failures=10)
        worker = make_worker(job_queue, {"flaky": task}, max_attempts=2)
        job_id = await job_queue.enqueue(TaskDescriptor("flaky"))

        assert await worker.drain() == 2

        job = await job_queue.get(job_id)
        assert job is not None
        assert job.status == JobStatus.FAILED
        assert task.calls == 2

    @pytest.mark.asyncio
    async def test_domain_error_is_not_retried(self, job_queue: InMemoryJobQueue) -> None:
        async def conflict(payload: Mapping[str, Any]) -> None:
            raise EmailAlreadyExistsError("ada@example.com")

        worker = make_worker(job_queue, {"conflict": conflict})
        job_id = await job_queue.enqueue(TaskDescriptor("conflict"))

        assert await worker.drain() == 1

        job = await job_queue.get(job_id)
        assert job is not None
        assert job.status == JobStatus.FAILED
        assert job.attempts == 1

    @pytest.mark.asyncio
    async def test_store_outage_in_create_task_is_retried(
        self, job_queue: InMemoryJobQueue
    ) -> None:
        store = FailingStore()
        task = CreateUserTask(lambda: InMemoryUserWriteScope(store))
        worker = make_worker(job_queue, {CREATE_USER_TASK: task}, max_attempts=3)
        user = User.create("Ada", "Lovelace", "ada@example.com")
        job_id = await job_queue.enqueue(
            TaskDescriptor(CREATE_USER_TASK, CreateUserMapper().to_task_payload(user))
        )

        assert await worker.drain() == 3

        job = await job_queue.get(job_id)
        assert job is not None
        assert job.status == JobStatus.FAILED
        assert job.attempts == 3
        assert "store unavailable" in (job.last_error or "")

    @pytest.mark.asyncio
    async def test_create_task_succeeds_once_store_recovers(
        self, job_queue: InMemoryJobQueue
    ) -> None:
        store = RecoveringStore(failures=1)
        task = CreateUserTask(lambda: InMemoryUserWriteScope(store))
        worker = make_worker(job_queue, {CREATE_USER_TASK: task}, max_attempts=3)
        user = User.create("Ada", "Lovelace", "ada@example.com")
        job_id = await job_queue.enqueue(
            TaskDescriptor(CREATE_USER_TASK, CreateUserMapper().to_task_payload(user))
        )

        assert await worker.drain() == 2

        job = await job_queue.get(job_id)
        assert job is not None
        assert job.status == JobStatus.SUCCEEDED
        assert store.get(user.id) is not None

    @pytest.mark.asyncio
    async def test_invalid_payload_is_not_retried(self, job_queue: InMemoryJobQueue) -> None:
        task = CreateUserTask(lambda: InMemoryUserWriteScope(InMemoryUserStore()))
        worker = make_worker(job_queue, {CREATE_USER_TASK: task})
        payload = {"id": str(uuid4()), "first_name": "", "last_name": "L", "email": "a@b.com"}
        job_id = await job_queue.enqueue(TaskDescriptor(CREATE_USER_TASK, payload))

        assert await worker.drain() == 1

        job = await job_queue.get(job_id)
        assert job is not None
        assert job.status == JobStatus.FAILED
        assert job.attempts == 1

    @pytest.mark.asyncio
    async def test_unknown_task_fails_permanently(self, job_queue: InMemoryJobQueue) -> None:
        worker = make_worker(job_queue, {})
        job_id = await job_queue.enqueue(TaskDescriptor("missing"))

        await worker.drain()

        job = await job_queue.get(job_id)
        assert job is not None
        assert job.status == JobStatus.FAILED
        assert "missing" in (job.last_error or "")

    @pytest.mark.asyncio
    async def test_drain_respects_limit(self, job_queue: InMemoryJobQueue) -> None:
        async def noop(payload: Mapping[str, Any]) -> None:
            return None

        worker = make_worker(job_queue, {"noop": noop})
        for _ in range(3):
            await job_queue.enqueue(TaskDescriptor("noop"))

        assert await worker.drain(limit=2) == 2
        assert await worker.drain() == 1

    @pytest.mark.asyncio
    async def test_run_stops_when_signalled(self, job_queue: InMemoryJobQueue) -> None:
        stop = asyncio.Event()

        async def finish(payload: Mapping[str, Any]) -> None:
            stop.set()

        worker = make_worker(job_queue, {"finish": finish})
        running = asyncio.create_task(worker.run(stop))
        await asyncio.sleep(0.02)
        job_id = await job_queue.enqueue(TaskDescriptor("finish"))

        await asyncio.wait_for(running, timeout=1.0)

        job = await job_queue.get(job_id)
        assert job is not None
        assert job.status == JobStatus.SUCCEEDED

    def test_max_attempts_must_be_positive(self, job_queue: InMemoryJobQueue) -> None:
        with pytest.raises(ValueError):
            JobWorker(job_queue, TaskRegistry(), max_attempts=0)


class TestTaskRegistry:
    def test_duplicate_name_is_rejected(self) -> None:
        async def noop(payload: Mapping[str, Any]) -> None:
            return None

        registry = TaskRegistry()
        registry.register("noop", noop)
        with pytest.raises(ValueError):
            registry.register("noop", noop)
        assert registry.names() == ["noop"]


class TestInMemoryJobQueue:
    @pytest.mark.asyncio
    async def test_rejects_when_not_accepting(self, job_queue: InMemoryJobQueue) -> None:
        job_queue.accepting = False
        with pytest.raises(DispatchError):
            await job_queue.enqueue(TaskDescriptor("demo"))
        assert job_queue.jobs == []

    @pytest.mark.asyncio
    async def test_payload_is_copied(self, job_queue: InMemoryJobQueue) -> None:
        payload = {"id": "1"}
        await job_queue.enqueue(TaskDescriptor("demo", payload))
        payload["id"] = "2"
        assert job_queue.jobs_for("demo")[0].task.payload == {"id": "1"}
