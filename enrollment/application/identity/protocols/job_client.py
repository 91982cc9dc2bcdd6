"""Port for the at-least-once background job queue."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TaskDescriptor:
    """
    Everything a worker needs to run a deferred task.

    Attributes:
        name: Registered task name, e.g. "identity.create_user"
        payload: JSON-serializable arguments for the task
    """

    name: str
    payload: Mapping[str, Any] = field(default_factory=dict)


class JobClientProtocol(Protocol):
    async def enqueue(self, task: TaskDescriptor) -> UUID:
        """
        Accept a task for deferred execution and return its job id.

        Raises:
            DispatchError: If the queue did not accept the task
        """
        ...
