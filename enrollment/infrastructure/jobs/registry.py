"""Explicit table of task names to task callables."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

TaskFn = Callable[[Mapping[str, Any]], Awaitable[None]]


class UnknownTaskError(KeyError):
    """Raised when a job names a task nobody registered."""

    def __init__(self, task_name: str) -> None:
        self.task_name = task_name
        super().__init__(f"No task registered under {task_name!r}")


class TaskRegistry:
    def __init__(self) -> None:
        self._tasks: dict[str, TaskFn] = {}

    def register(self, name: str, fn: TaskFn) -> None:
        if name in self._tasks:
            raise ValueError(f"Task {name!r} is already registered")
        self._tasks[name] = fn

    def get(self, name: str) -> TaskFn:
        try:
            return self._tasks[name]
        except KeyError:
            raise UnknownTaskError(name) from None

    def names(self) -> list[str]:
        return sorted(self._tasks)
