"""
Success/Failure outcome returned by handlers.

Expected failures (invalid input, duplicate email, a store that refuses the
commit) are values, not exceptions, so callers branch on the outcome:

    outcome = await mediator.send(CreateUserCommand(...))
    if outcome.is_failure:
        log.info("rejected", error=outcome.unwrap_error())
    else:
        user_id = outcome.unwrap().id
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_error(self) -> None:
        """
        Raises:
            ValueError: Always; a success carries no error
        """
        raise ValueError("Success has no error to unwrap")

    def value_or(self, default: T) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Success[U]":
        return Success(fn(self.value))

    def flat_map(self, fn: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        return fn(self.value)

    def map_error(self, fn: Callable[[E], U]) -> "Success[T]":
        return self

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True)
class Failure(Generic[E]):
    error: E

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> None:
        """
        Raises:
            ValueError: Always; a failure carries no value
        """
        raise ValueError("Failure has no value to unwrap")

    def unwrap_error(self) -> E:
        return self.error

    def value_or(self, default: T) -> T:
        return default

    # Chaining stops at the first failure
    def map(self, fn: Callable[[T], U]) -> "Failure[E]":
        return self

    def flat_map(self, fn: Callable[[T], "Result[U, E]"]) -> "Failure[E]":
        return self

    def map_error(self, fn: Callable[[E], U]) -> "Failure[U]":
        return Failure(fn(self.error))

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


Result = Success[T] | Failure[E]
