from __future__ import annotations

from typing import Dict, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entities."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_external_id(self, external_id: str) -> Optional[User]:
        """Get the local mirror row for an identity-provider user id."""
        stmt = select(User).where(User.external_id == external_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, ids: Iterable[str]) -> Dict[str, User]:
        """Map of id -> User for the given ids (missing ids are skipped)."""
        id_list = list({i for i in ids if i})
        if not id_list:
            return {}
        stmt = select(User).where(User.id.in_(id_list))
        result = await self.session.execute(stmt)
        return {u.id: u for u in result.scalars().all()}
