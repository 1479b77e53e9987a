"""Transaction boundary interface. One commit covers the amendment write and its audit row."""

from typing import Protocol


class UnitOfWork(Protocol):
    """Commits or discards everything the repositories staged during one operation."""

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
