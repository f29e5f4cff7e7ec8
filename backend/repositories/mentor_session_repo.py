from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.mentor_session import MENTEE_ID_PREFIX, MentorSession
from .base import BaseRepository


class MentorSessionRepository(BaseRepository[MentorSession]):
    """Repository for MentorSession entities."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_id(self, id: str) -> Optional[MentorSession]:
        """Get session by ID."""
        return await super().get_by_id(MentorSession, id)

    async def get_for_mentor(self, id: str, mentor_id: str) -> Optional[MentorSession]:
        """Get session by ID only if it belongs to the mentor."""
        stmt = (
            select(MentorSession)
            .where(MentorSession.id == id)
            .where(MentorSession.mentor_id == mentor_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_student(self, id: str, student_id: str) -> Optional[MentorSession]:
        stmt = (
            select(MentorSession)
            .where(MentorSession.id == id)
            .where(MentorSession.student_id == student_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_for_mentor(self, mentor_id: str) -> int:
        return await self.count(MentorSession, MentorSession.mentor_id == mentor_id)

    async def list_for_mentor(
        self,
        mentor_id: str,
        start_from: Optional[datetime] = None,
        end_before: Optional[datetime] = None,
        newest_first: bool = False,
    ) -> List[MentorSession]:
        """List a mentor's sessions ordered by start time (uses index)."""
        stmt = select(MentorSession).where(MentorSession.mentor_id == mentor_id)
        return await self._list(stmt, start_from, end_before, newest_first)

    async def list_for_student(
        self,
        student_id: str,
        start_from: Optional[datetime] = None,
        end_before: Optional[datetime] = None,
    ) -> List[MentorSession]:
        stmt = select(MentorSession).where(MentorSession.student_id == student_id)
        return await self._list(stmt, start_from, end_before, False)

    async def list_for_mentee(self, mentor_id: str, mentee_key: str) -> List[MentorSession]:
        """Sessions whose student id equals the key or whose student name contains it.

        Roster ids of mentees without a student id are ``mentee-<name>``; the
        prefix is dropped before the name match.
        """
        name_key = mentee_key.removeprefix(MENTEE_ID_PREFIX)
        pattern = f"%{name_key.lower()}%"
        stmt = (
            select(MentorSession)
            .where(MentorSession.mentor_id == mentor_id)
            .where(
                or_(
                    MentorSession.student_id == mentee_key,
                    func.lower(MentorSession.student_name).like(pattern),
                )
            )
            .order_by(MentorSession.start_time.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_overlapping(
        self, mentor_id: str, start: datetime, end: datetime
    ) -> Optional[MentorSession]:
        """First non-cancelled session of the mentor overlapping [start, end)."""
        stmt = (
            select(MentorSession)
            .where(MentorSession.mentor_id == mentor_id)
            .where(MentorSession.status != "cancelled")
            .where(MentorSession.start_time < end)
            .where(MentorSession.end_time > start)
            .order_by(MentorSession.start_time)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _list(self, stmt, start_from, end_before, newest_first) -> List[MentorSession]:
        if start_from is not None:
            stmt = stmt.where(MentorSession.start_time >= start_from)
        if end_before is not None:
            stmt = stmt.where(MentorSession.end_time < end_before)
        order = MentorSession.start_time.desc() if newest_first else MentorSession.start_time
        result = await self.session.execute(stmt.order_by(order))
        return list(result.scalars().all())
