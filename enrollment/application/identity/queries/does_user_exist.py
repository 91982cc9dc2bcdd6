"""Query answering whether a user with a given email is already registered."""

from dataclasses import dataclass

import structlog

from enrollment.application.common.query import Query, QueryHandler
from enrollment.application.identity.protocols.user_lookup import UserLookupProtocol

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DoesUserExistQuery(Query):
    email: str


class DoesUserExistHandler(QueryHandler[DoesUserExistQuery, bool]):
    """
    Uniqueness checker for the create-user pipeline.

    Reads committed state without locking, so two concurrent callers can
    both observe False for the same email.
    """

    def __init__(self, user_lookup: UserLookupProtocol) -> None:
        self.user_lookup = user_lookup

    async def handle(self, query: DoesUserExistQuery) -> bool:
        exists = await self.user_lookup.email_exists(query.email)
        logger.debug("user_exists_checked", email=query.email, exists=exists)
        return exists

    async def exists(self, email: str) -> bool:
        return await self.handle(DoesUserExistQuery(email=email))
