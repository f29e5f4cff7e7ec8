from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from models.project import Project
from models.user import User
from repositories.project_repo import ProjectRepository
from repositories.user_repo import UserRepository
from services.errors import InvalidRequestError, NotFoundError
from services.serializers import project_to_dict

logger = logging.getLogger(__name__)


async def _populate(session: AsyncSession, projects: Sequence[Project]) -> List[Dict[str, Any]]:
    repo = ProjectRepository(session)
    members = await repo.participant_ids_by_project([p.id for p in projects])
    user_ids = [p.mentor_id for p in projects if p.mentor_id]
    user_ids += [uid for ids in members.values() for uid in ids]
    users = await UserRepository(session).get_many(user_ids)
    return [
        project_to_dict(
            p,
            users.get(p.mentor_id) if p.mentor_id else None,
            [users.get(uid) for uid in members.get(p.id, [])],
        )
        for p in projects
    ]


async def get_projects(
    session: AsyncSession,
    page: int = 1,
    limit: int = 10,
    difficulty: Optional[str] = None,
    technologies: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Open projects, optionally filtered, one page at a time."""
    page = max(page, 1)
    limit = max(limit, 1)
    projects = await ProjectRepository(session).list_open(difficulty=difficulty)
    if technologies:
        wanted = set(technologies)
        projects = [p for p in projects if wanted.intersection(p.technologies or [])]

    total = len(projects)
    offset = (page - 1) * limit
    return {
        "projects": await _populate(session, projects[offset : offset + limit]),
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        },
    }


async def get_project_by_id(session: AsyncSession, project_id: str) -> Dict[str, Any]:
    project = await ProjectRepository(session).get_by_id(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return (await _populate(session, [project]))[0]


async def _require_user(session: AsyncSession, external_id: str) -> User:
    user = await UserRepository(session).get_by_external_id(external_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def join_project(session: AsyncSession, external_id: str, project_id: str) -> Dict[str, Any]:
    """Add the user to the project; the project closes when it reaches capacity."""
    user = await _require_user(session, external_id)
    repo = ProjectRepository(session)
    project = await repo.get_by_id(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    if project.status != "Open":
        raise InvalidRequestError("Project is not open for new participants")

    participants = await repo.participant_ids(project.id)
    if len(participants) >= project.max_participants:
        raise InvalidRequestError("Project is full")
    if user.id in participants:
        raise InvalidRequestError("You are already a participant in this project")

    await repo.add_participant(project.id, user.id)
    if len(participants) + 1 >= project.max_participants:
        project.status = "In Progress"
        logger.info("Project %s reached capacity", project.id)
    await session.flush()
    return (await _populate(session, [project]))[0]


async def get_user_projects(session: AsyncSession, external_id: str) -> List[Dict[str, Any]]:
    user = await _require_user(session, external_id)
    projects = await ProjectRepository(session).list_for_user(user.id)
    return await _populate(session, projects)
