from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.availability import AvailabilityOverride, MentorAvailability, WeeklySlot
from .base import BaseRepository


class AvailabilityRepository(BaseRepository[MentorAvailability]):
    """Repository for a mentor's weekly template and date overrides."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_mentor(self, mentor_id: str) -> Optional[MentorAvailability]:
        stmt = select(MentorAvailability).where(MentorAvailability.mentor_id == mentor_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_weekly_slots(self, availability_id: str) -> List[WeeklySlot]:
        stmt = (
            select(WeeklySlot)
            .where(WeeklySlot.availability_id == availability_id)
            .order_by(WeeklySlot.day, WeeklySlot.start_time)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_overrides(self, availability_id: str) -> List[AvailabilityOverride]:
        stmt = (
            select(AvailabilityOverride)
            .where(AvailabilityOverride.availability_id == availability_id)
            .order_by(AvailabilityOverride.on_date)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def clear_template(self, availability_id: str) -> None:
        """Delete all weekly slots and overrides of an availability row (not committed)."""
        await self.session.execute(
            delete(WeeklySlot).where(WeeklySlot.availability_id == availability_id)
        )
        await self.session.execute(
            delete(AvailabilityOverride).where(AvailabilityOverride.availability_id == availability_id)
        )
