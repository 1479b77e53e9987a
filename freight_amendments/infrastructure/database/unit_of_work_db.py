"""UnitOfWork over the request's AsyncSession. Repositories on the same session only flush."""

from sqlalchemy.ext.asyncio import AsyncSession


class DbUnitOfWork:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
