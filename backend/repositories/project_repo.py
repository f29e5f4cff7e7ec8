from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.project import Project, ProjectParticipant
from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entities and their participant rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_id(self, id: str) -> Optional[Project]:
        return await super().get_by_id(Project, id)

    async def list_open(self, difficulty: Optional[str] = None) -> List[Project]:
        """Active projects with status Open, ordered by start date."""
        stmt = (
            select(Project)
            .where(Project.is_active.is_(True))
            .where(Project.status == "Open")
        )
        if difficulty:
            stmt = stmt.where(Project.difficulty == difficulty)
        stmt = stmt.order_by(Project.start_date, Project.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_user(self, user_id: str) -> List[Project]:
        """Projects the user participates in or mentors, newest start first."""
        member_of = select(ProjectParticipant.project_id).where(ProjectParticipant.user_id == user_id)
        stmt = (
            select(Project)
            .where(or_(Project.id.in_(member_of), Project.mentor_id == user_id))
            .order_by(Project.start_date.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def participant_ids(self, project_id: str) -> List[str]:
        stmt = (
            select(ProjectParticipant.user_id)
            .where(ProjectParticipant.project_id == project_id)
            .order_by(ProjectParticipant.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def participant_ids_by_project(self, project_ids: List[str]) -> Dict[str, List[str]]:
        out: Dict[str, List[str]] = {pid: [] for pid in project_ids}
        if not project_ids:
            return out
        stmt = (
            select(ProjectParticipant.project_id, ProjectParticipant.user_id)
            .where(ProjectParticipant.project_id.in_(project_ids))
            .order_by(ProjectParticipant.id)
        )
        result = await self.session.execute(stmt)
        for project_id, user_id in result.all():
            out[project_id].append(user_id)
        return out

    async def add_participant(self, project_id: str, user_id: str) -> ProjectParticipant:
        row = ProjectParticipant(project_id=project_id, user_id=user_id)
        self.session.add(row)
        await self.session.flush()
        return row
