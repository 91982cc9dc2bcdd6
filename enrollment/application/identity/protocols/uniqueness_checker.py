from typing import Protocol


class UniquenessCheckerProtocol(Protocol):
    async def exists(self, email: str) -> bool: ...
