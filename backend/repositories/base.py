from __future__ import annotations

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common CRUD helpers.

    No commits are performed here - commit responsibility is left to the
    request-scoped session (see core.database.DatabaseManager.session).
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with an async session."""
        self.session = session

    async def add(self, entity: T) -> T:
        """Add an entity and flush so defaults (ids, timestamps) are populated."""
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def get_by_id(self, model: Type[T], id_value: str | int) -> Optional[T]:
        """Get an entity by its primary key."""
        return await self.session.get(model, id_value)

    async def count(self, model: Type[T], *criteria) -> int:
        stmt = select(func.count()).select_from(model).where(*criteria)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def delete(self, entity: T) -> None:
        """Delete an entity from the session (not committed)."""
        await self.session.delete(entity)
        await self.session.flush()
