"""Committed user state shared by the in-memory adapters."""

from collections.abc import Iterable

from enrollment.domain.identity.entities.user import User, UserId
from enrollment.domain.identity.exceptions import EmailAlreadyExistsError, UserPersistenceError


class InMemoryUserStore:
    """
    Durable side of the in-memory adapters.

    ``apply`` is all-or-nothing: every constraint is checked before any
    user is written. With ``enforce_unique_email`` off the store behaves
    like a table without a unique index on email.
    """

    def __init__(self, *, enforce_unique_email: bool = True) -> None:
        self.enforce_unique_email = enforce_unique_email
        self._users: dict[UserId, User] = {}

    def apply(self, users: Iterable[User]) -> None:
        """
        Atomically insert a batch of users.

        Raises:
            UserPersistenceError: If an id is already taken
            EmailAlreadyExistsError: If an email is taken and uniqueness is enforced
        """
        batch = list(users)
        seen_emails = {user.email for user in self._users.values()}
        for user in batch:
            if user.id in self._users:
                raise UserPersistenceError(f"Duplicate primary key {user.id}")
            if self.enforce_unique_email:
                if user.email in seen_emails:
                    raise EmailAlreadyExistsError(user.email, late=True)
                seen_emails.add(user.email)
        for user in batch:
            self._users[user.id] = user

    def get(self, user_id: UserId) -> User | None:
        return self._users.get(user_id)

    def email_exists(self, email: str) -> bool:
        return any(user.email == email for user in self._users.values())

    def all(self) -> list[User]:
        return list(self._users.values())

    def count_by_email(self, email: str) -> int:
        return sum(1 for user in self._users.values() if user.email == email)
