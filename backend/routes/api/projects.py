"""/api/projects: browse and join real-time projects."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import require_auth
from core.dependencies import get_db_session
from services import project_service
from services.identity import AuthContext

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("")
async def get_projects(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    difficulty: Optional[str] = None,
    technologies: Optional[List[str]] = Query(None),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await project_service.get_projects(
        session, page=page, limit=limit, difficulty=difficulty, technologies=technologies
    )


@router.get("/me", summary="Projects the caller participates in or mentors")
async def get_my_projects(
    auth: AuthContext = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return {"projects": await project_service.get_user_projects(session, auth.user_id)}


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await project_service.get_project_by_id(session, project_id)


@router.post("/{project_id}/join")
async def post_join_project(
    project_id: str,
    auth: AuthContext = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await project_service.join_project(session, auth.user_id, project_id)
